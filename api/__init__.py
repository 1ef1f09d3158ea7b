"""
api/__init__.py
────────────────
Capa HTTP (FastAPI). La aplicación se construye con api.app.create_app().
"""
