"""
services/exceptions.py
───────────────────────
Errores de negocio que levantan los servicios.
La capa HTTP (api/app.py) los traduce a códigos de estado.
"""


class FinanceError(Exception):
    """Base de todos los errores de dominio."""


class NotFoundError(FinanceError):
    """El recurso no existe o no pertenece al usuario (404)."""

    def __init__(self, resource: str, field: str, value: object):
        self.resource = resource
        self.field = field
        self.value = value
        super().__init__(f"{resource} not found with {field}: '{value}'")


class ConflictError(FinanceError):
    """Email o nombre de categoría duplicado (409)."""


class ValidationError(FinanceError):
    """Datos de entrada inválidos (400)."""
