"""Route Modules — one file per cheat sheet section.

Invariants:
    - Each module defines its own APIRouter with prefix and tags
    - Routers never import each other; sections share no state

Design Decisions:
    - Explicit registration in main.py over auto-discovery
"""
