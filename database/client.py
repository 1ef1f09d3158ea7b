"""
database/client.py
──────────────────
Singleton del cliente Supabase.
Los repositorios reciben este cliente en su constructor;
solo el armado de la app (api/dependencies.py) lo obtiene desde aquí.

Uso:
    from database.client import get_client

    db = get_client()
    result = db.table("users").select("*").execute()
"""

from config import SUPABASE_SERVICE_KEY, SUPABASE_URL
from supabase import Client, create_client

_client: Client | None = None


def get_client() -> Client:
    """
    Retorna la instancia única del cliente Supabase (patrón singleton).
    Usa la service_role key: el aislamiento entre usuarios lo hacen
    los repositorios filtrando siempre por user_id.
    """
    global _client
    if _client is None:
        _client = create_client(SUPABASE_URL, SUPABASE_SERVICE_KEY)
    return _client
