"""
database/__init__.py
────────────────────
Expone los modelos y las utilidades de cifrado.
Los repositorios y el cliente no se importan aquí porque
necesitan la configuración de Supabase cargada.
"""

from .encryption import decrypt, encrypt
from .models import Category, Transaction, TransactionType, User

__all__ = ["encrypt", "decrypt", "User", "Category", "Transaction", "TransactionType"]
