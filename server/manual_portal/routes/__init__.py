from .admin import router as admin_router
from .auth import router as auth_router
from .categories import router as categories_router
from .manuals import router as manuals_router
from .requests import router as requests_router
from .viewer_auth import router as viewer_auth_router

__all__ = [
    "admin_router",
    "auth_router",
    "categories_router",
    "manuals_router",
    "requests_router",
    "viewer_auth_router",
]
