"""ReviewHub API package."""

from reviewhub.api.errors import register_error_handlers
from reviewhub.api.routes import admin_router, auth_router, category_router, review_router, user_router

ROUTERS = [category_router, auth_router, review_router, user_router, admin_router]

__all__ = [
    "ROUTERS",
    "admin_router",
    "auth_router",
    "category_router",
    "register_error_handlers",
    "review_router",
    "user_router",
]
