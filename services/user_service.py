"""
services/user_service.py
─────────────────────────
Registro, login y perfil de usuarios.
"""

from __future__ import annotations

import logging
from typing import Optional

from database.models import User, UserProfile
from database.repositories import UniqueViolation, UserRepo
from services.exceptions import ConflictError, NotFoundError, ValidationError
from services.security import hash_password, verify_password

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _clean_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("User name must not be blank.")
    return cleaned


def normalize_currency(value: Optional[str], default: str) -> str:
    """Código ISO 4217 de 3 letras en mayúsculas; vacío → default."""
    if not value or not value.strip():
        return default
    normalized = value.strip().upper()
    if len(normalized) != 3 or not normalized.isalpha():
        raise ValidationError("Currency must be a 3-letter ISO 4217 code.")
    return normalized


class UserService:
    """Gestiona el ciclo de vida de los usuarios."""

    def __init__(self, users: UserRepo, default_currency: str = "USD"):
        self.users = users
        self.default_currency = default_currency

    # ── Registro / login ──────────────────────────────────

    def register(
        self,
        name: str,
        email: str,
        password: str,
        currency: Optional[str] = None,
    ) -> UserProfile:
        """
        Crea un usuario nuevo con la contraseña hasheada.

        Raises:
            ConflictError: si el email ya está registrado.
            ValidationError: si el nombre queda vacío o la moneda es inválida.
        """
        name = _clean_name(name)
        email = normalize_email(email)
        if self.users.exists_by_email(email):
            raise ConflictError("Email address already in use.")

        user = User(
            name=name,
            email=email,
            password_hash=hash_password(password),
            preferred_currency=normalize_currency(currency, self.default_currency),
        )
        try:
            saved = self.users.create(user)
        except UniqueViolation as exc:
            # Otro request registró el mismo email entre el chequeo y el insert
            raise ConflictError("Email address already in use.") from exc

        logger.info("Usuario registrado id=%s", saved.id)
        return saved.profile()

    def login(self, email: str, password: str) -> Optional[UserProfile]:
        """
        Retorna el perfil si las credenciales son correctas, None si no.
        Un login fallido es un resultado esperado, no un error.
        """
        user = self.users.get_by_email(normalize_email(email))
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Login fallido (usuario inexistente o contraseña incorrecta)")
            return None
        return user.profile()

    # ── Perfil ────────────────────────────────────────────

    def get_by_id(self, user_id: int) -> UserProfile:
        user = self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User", "id", user_id)
        return user.profile()

    def update_profile(
        self, user_id: int, name: str, currency: Optional[str] = None
    ) -> UserProfile:
        """Solo nombre y moneda son editables; email y contraseña no."""
        name = _clean_name(name)
        current = self.users.get_by_id(user_id)
        if current is None:
            raise NotFoundError("User", "id", user_id)

        fields = {
            "name": name,
            "preferred_currency": normalize_currency(
                currency, current.preferred_currency or self.default_currency
            ),
        }
        updated = self.users.update(user_id, fields)
        if updated is None:
            raise NotFoundError("User", "id", user_id)

        logger.info("Perfil actualizado id=%s", user_id)
        return updated.profile()
