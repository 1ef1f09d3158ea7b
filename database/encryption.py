"""
database/encryption.py
──────────────────────
Cifrado de las descripciones de transacciones antes de guardarlas,
usando Fernet (AES-128-CBC + HMAC-SHA256).

Uso:
    from database.encryption import encrypt, decrypt

    cifrado  = encrypt("Alquiler de marzo")
    original = decrypt(cifrado)
"""

import logging
from typing import Optional

from cryptography.fernet import Fernet, InvalidToken
from config import ENCRYPTION_KEY

logger = logging.getLogger(__name__)

# Instancia única del motor de cifrado
_fernet = Fernet(ENCRYPTION_KEY.encode())


def encrypt(plain_text: str) -> str:
    """
    Encripta un texto plano y devuelve el resultado como string.

    Raises:
        TypeError: si no recibe un string.
    """
    if not isinstance(plain_text, str):
        raise TypeError("encrypt() espera un string")
    return _fernet.encrypt(plain_text.encode()).decode()


def decrypt(cipher_text: str) -> str:
    """
    Desencripta un texto previamente cifrado con encrypt().

    Raises:
        TypeError: si no recibe un string.
        cryptography.fernet.InvalidToken: si el token es inválido o fue alterado.
    """
    if not isinstance(cipher_text, str):
        raise TypeError("decrypt() espera un string")
    return _fernet.decrypt(cipher_text.encode()).decode()


def encrypt_optional(plain_text: Optional[str]) -> Optional[str]:
    """La descripción es opcional: None y "" se guardan tal cual."""
    if not plain_text:
        return plain_text
    return encrypt(plain_text)


def decrypt_optional(cipher_text: Optional[str]) -> Optional[str]:
    """
    Versión tolerante de decrypt() para leer filas.
    Filas cargadas antes de activar el cifrado se devuelven sin tocar.
    """
    if not cipher_text:
        return cipher_text
    try:
        return decrypt(cipher_text)
    except InvalidToken:
        logger.debug("Descripción sin cifrar (dato legacy), se devuelve tal cual")
        return cipher_text
