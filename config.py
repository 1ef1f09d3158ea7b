"""
config.py
─────────
Carga y valida todas las variables de entorno del proyecto.
Centraliza la configuración para que ningún otro módulo
acceda directamente a os.environ.
"""

import os
from dotenv import load_dotenv

# Carga .env si existe (útil en desarrollo)
load_dotenv()


def _require(key: str) -> str:
    """Retorna el valor de una variable de entorno obligatoria."""
    value = os.getenv(key)
    if not value:
        raise EnvironmentError(
            f"Variable de entorno requerida no encontrada: '{key}'. "
            f"Revisa tu archivo .env"
        )
    return value


def _split_csv(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


# ── Supabase ──────────────────────────────────────────────
SUPABASE_URL: str = _require("SUPABASE_URL")
SUPABASE_SERVICE_KEY: str = _require("SUPABASE_SERVICE_KEY")

# ── Encriptación ──────────────────────────────────────────
ENCRYPTION_KEY: str = _require("ENCRYPTION_KEY")

# ── API HTTP ──────────────────────────────────────────────
API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", "8000"))
CORS_ORIGINS: list[str] = _split_csv(os.getenv("CORS_ORIGINS", "*"))

# ── Dominio ───────────────────────────────────────────────
DEFAULT_CURRENCY: str = os.getenv("DEFAULT_CURRENCY", "USD").strip().upper()

# ── General ───────────────────────────────────────────────
ENV: str = os.getenv("ENV", "development")
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
