"""API Routes for AccountHub."""

from accounthub.infrastructure.api.routes.accounts_router import router as accounts_router
from .metrics_router import router as metrics_router
from .users_router import router as users_router

__all__ = [
    "accounts_router",
    "metrics_router",
    "users_router",
]
