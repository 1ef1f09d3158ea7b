"""
services/__init__.py
─────────────────────
Expone los servicios de negocio del proyecto.
"""

from .category_service import CategoryService
from .report_service import ReportService
from .transaction_service import TransactionService
from .user_service import UserService

__all__ = ["UserService", "CategoryService", "TransactionService", "ReportService"]
