"""
database/repositories.py
─────────────────────────
Capa de acceso a datos (Repository Pattern).
Cada clase encapsula las consultas de una tabla de Supabase.
Toda consulta sobre categorías o transacciones filtra por user_id.

Uso:
    from database.client import get_client
    from database.repositories import UserRepo, TransactionRepo

    db = get_client()
    user = UserRepo(db).get_by_email("ana@example.com")
    txs  = TransactionRepo(db).list_by_user(user.id)
"""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from postgrest.exceptions import APIError
from supabase import Client

from database.encryption import decrypt_optional, encrypt_optional
from database.models import Category, Transaction, User

# Código SQLSTATE de Postgres para unique_violation
UNIQUE_VIOLATION = "23505"


class UniqueViolation(Exception):
    """La base rechazó un insert/update por una restricción UNIQUE."""

    def __init__(self, table: str, detail: Optional[str] = None):
        self.table = table
        self.detail = detail
        super().__init__(f"Violación de unicidad en '{table}': {detail}")


class BaseRepo:
    TABLE = ""

    def __init__(self, client: Client):
        self.client = client

    def _table(self):
        return self.client.table(self.TABLE)

    def _execute_write(self, query) -> Any:
        """Ejecuta un insert/update traduciendo el 23505 a UniqueViolation."""
        try:
            return query.execute()
        except APIError as exc:
            if exc.code == UNIQUE_VIOLATION:
                raise UniqueViolation(self.TABLE, exc.details or exc.message) from exc
            raise

    @staticmethod
    def _maybe_one(result) -> Optional[dict]:
        if result is None or result.data is None:
            return None
        return result.data


# ─────────────────────────────────────────────
#  UserRepo
# ─────────────────────────────────────────────

class UserRepo(BaseRepo):
    TABLE = "users"

    def get_by_id(self, user_id: int) -> Optional[User]:
        result = (
            self._table()
            .select("*")
            .eq("id", user_id)
            .maybe_single()
            .execute()
        )
        row = self._maybe_one(result)
        return User.from_dict(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        result = (
            self._table()
            .select("*")
            .eq("email", email)
            .maybe_single()
            .execute()
        )
        row = self._maybe_one(result)
        return User.from_dict(row) if row else None

    def exists(self, user_id: int) -> bool:
        result = self._table().select("id").eq("id", user_id).execute()
        return len(result.data) > 0

    def exists_by_email(self, email: str) -> bool:
        result = self._table().select("id").eq("email", email).execute()
        return len(result.data) > 0

    def create(self, user: User) -> User:
        result = self._execute_write(self._table().insert(user.to_dict()))
        return User.from_dict(result.data[0])

    def update(self, user_id: int, fields: dict[str, Any]) -> Optional[User]:
        """Actualiza columnas sueltas. Retorna None si el usuario no existe."""
        result = self._execute_write(
            self._table().update(fields).eq("id", user_id)
        )
        if not result.data:
            return None
        return User.from_dict(result.data[0])


# ─────────────────────────────────────────────
#  CategoryRepo
# ─────────────────────────────────────────────

class CategoryRepo(BaseRepo):
    TABLE = "categories"

    def list_by_user(self, user_id: int) -> list[Category]:
        result = (
            self._table()
            .select("*")
            .eq("user_id", user_id)
            .order("name")
            .execute()
        )
        return [Category.from_dict(row) for row in result.data]

    def get_for_user(self, category_id: int, user_id: int) -> Optional[Category]:
        result = (
            self._table()
            .select("*")
            .eq("id", category_id)
            .eq("user_id", user_id)
            .maybe_single()
            .execute()
        )
        row = self._maybe_one(result)
        return Category.from_dict(row) if row else None

    def exists_by_name(self, user_id: int, name: str) -> bool:
        result = (
            self._table()
            .select("id")
            .eq("user_id", user_id)
            .eq("name", name)
            .execute()
        )
        return len(result.data) > 0

    def find_by_name_ignore_case(self, user_id: int, name: str) -> list[Category]:
        """Categorías del usuario cuyo nombre coincide sin distinguir mayúsculas."""
        result = (
            self._table()
            .select("*")
            .eq("user_id", user_id)
            .ilike("name", _escape_like(name))
            .execute()
        )
        wanted = name.casefold()
        return [
            Category.from_dict(row)
            for row in result.data
            if row["name"].casefold() == wanted
        ]

    def create(self, category: Category) -> Category:
        result = self._execute_write(self._table().insert(category.to_dict()))
        return Category.from_dict(result.data[0])

    def rename(self, category_id: int, user_id: int, name: str) -> Optional[Category]:
        result = self._execute_write(
            self._table()
            .update({"name": name})
            .eq("id", category_id)
            .eq("user_id", user_id)
        )
        if not result.data:
            return None
        return Category.from_dict(result.data[0])

    def delete(self, category_id: int, user_id: int) -> bool:
        result = (
            self._table()
            .delete()
            .eq("id", category_id)
            .eq("user_id", user_id)
            .execute()
        )
        return len(result.data) > 0


# ─────────────────────────────────────────────
#  TransactionRepo
# ─────────────────────────────────────────────

class TransactionRepo(BaseRepo):
    TABLE = "transactions"
    # Trae el nombre de la categoría en la misma consulta
    SELECT = "*, categories(name)"

    def create(self, tx: Transaction) -> Transaction:
        payload = tx.to_dict()
        # Encriptamos la descripción antes de guardar
        payload["description"] = encrypt_optional(payload["description"])
        result = self._execute_write(self._table().insert(payload))
        return Transaction.from_dict(_decrypt_tx(result.data[0]))

    def list_by_user(self, user_id: int) -> list[Transaction]:
        result = (
            self._table()
            .select(self.SELECT)
            .eq("user_id", user_id)
            .order("date", desc=True)
            .execute()
        )
        return [Transaction.from_dict(_decrypt_tx(row)) for row in result.data]

    def list_by_user_between(self, user_id: int, start: date, end: date) -> list[Transaction]:
        """Transacciones con fecha en [start, end], más recientes primero."""
        result = (
            self._table()
            .select(self.SELECT)
            .eq("user_id", user_id)
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("date", desc=True)
            .execute()
        )
        return [Transaction.from_dict(_decrypt_tx(row)) for row in result.data]

    def list_by_type_between(
        self, user_id: int, tx_type: str, start: date, end: date
    ) -> list[Transaction]:
        """Transacciones de un tipo con fecha en [start, end] (ambos inclusive)."""
        result = (
            self._table()
            .select(self.SELECT)
            .eq("user_id", user_id)
            .eq("type", tx_type)
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("id")
            .execute()
        )
        return [Transaction.from_dict(_decrypt_tx(row)) for row in result.data]

    def get_for_user(self, transaction_id: int, user_id: int) -> Optional[Transaction]:
        result = (
            self._table()
            .select(self.SELECT)
            .eq("id", transaction_id)
            .eq("user_id", user_id)
            .maybe_single()
            .execute()
        )
        row = self._maybe_one(result)
        return Transaction.from_dict(_decrypt_tx(row)) if row else None

    def update(self, transaction_id: int, user_id: int, tx: Transaction) -> Optional[Transaction]:
        payload = tx.to_dict()
        payload.pop("user_id")
        payload["description"] = encrypt_optional(payload["description"])
        result = self._execute_write(
            self._table()
            .update(payload)
            .eq("id", transaction_id)
            .eq("user_id", user_id)
        )
        if not result.data:
            return None
        return Transaction.from_dict(_decrypt_tx(result.data[0]))

    def delete(self, transaction_id: int, user_id: int) -> bool:
        result = (
            self._table()
            .delete()
            .eq("id", transaction_id)
            .eq("user_id", user_id)
            .execute()
        )
        return len(result.data) > 0

    def count_by_category(self, category_id: int, user_id: int) -> int:
        result = (
            self._table()
            .select("id")
            .eq("category_id", category_id)
            .eq("user_id", user_id)
            .execute()
        )
        return len(result.data)


# ─────────────────────────────────────────────
#  Helpers privados
# ─────────────────────────────────────────────

def _decrypt_tx(row: dict) -> dict:
    """Desencripta descripción de una fila de transacciones."""
    row["description"] = decrypt_optional(row.get("description"))
    return row


def _escape_like(value: str) -> str:
    """Escapa los comodines de LIKE para buscar el texto literal."""
    return (
        value.replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("_", "\\_")
    )
