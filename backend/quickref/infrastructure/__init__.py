"""Infrastructure — database session management and structured logging."""
