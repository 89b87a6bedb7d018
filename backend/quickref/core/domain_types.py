"""Domain Types — enums shared by route signatures and the cheat sheet content.

Invariants:
    - str-valued enums so FastAPI renders them as string choices in OpenAPI
"""

from enum import Enum


class ModelName(str, Enum):
    """Allowed values for the enum path parameter in the Routing section."""
    ALEXNET = "alexnet"
    RESNET = "resnet"
    LENET = "lenet"


class Section(str, Enum):
    """Cheat sheet sections; every one is required in the shipped document."""
    ROUTING = "Routing"
    MODELS = "Request/Response Models"
    VALIDATION = "Validation"
    DEPENDENCIES = "Dependencies"
    SECURITY = "Security"
    UPLOADS = "File Upload & Forms"
    COOKIES_HEADERS = "Cookies & Headers"
    BACKGROUND = "Background Tasks"
    MIDDLEWARE = "Middleware & Events"
    DATABASE = "Database Example"
    TESTING = "Testing"
    DOCS_CORS = "Docs & CORS"


class LintSeverity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
