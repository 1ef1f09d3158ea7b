"""
services/security.py
─────────────────────
Hash y verificación de contraseñas con bcrypt.
Las contraseñas nunca se guardan ni se comparan en texto plano.
"""

import bcrypt


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Retorna False también si el hash guardado está corrupto."""
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False
