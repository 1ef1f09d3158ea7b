"""
api/dependencies.py
────────────────────
Arma los servicios con sus repositorios (inyección por constructor)
y los expone como dependencias de FastAPI.

En tests se reemplazan con app.dependency_overrides.
"""

from functools import lru_cache

from config import DEFAULT_CURRENCY
from database.client import get_client
from database.repositories import CategoryRepo, TransactionRepo, UserRepo
from services import CategoryService, ReportService, TransactionService, UserService


@lru_cache
def _repos() -> tuple[UserRepo, CategoryRepo, TransactionRepo]:
    client = get_client()
    return UserRepo(client), CategoryRepo(client), TransactionRepo(client)


def get_user_service() -> UserService:
    users, _, _ = _repos()
    return UserService(users, default_currency=DEFAULT_CURRENCY)


def get_category_service() -> CategoryService:
    return CategoryService(*_repos())


def get_transaction_service() -> TransactionService:
    return TransactionService(*_repos())


def get_report_service() -> ReportService:
    users, _, transactions = _repos()
    return ReportService(users, transactions)
