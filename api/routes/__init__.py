"""
api/routes/__init__.py
───────────────────────
Routers de la API, uno por recurso.
"""

from .auth import router as auth_router
from .categories import router as categories_router
from .reports import router as reports_router
from .transactions import router as transactions_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "users_router",
    "categories_router",
    "transactions_router",
    "reports_router",
]
