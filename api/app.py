"""
api/app.py
───────────
Construye la aplicación FastAPI: CORS, routers y traducción de
los errores de negocio a códigos HTTP.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routes import (
    auth_router,
    categories_router,
    reports_router,
    transactions_router,
    users_router,
)
from config import CORS_ORIGINS
from services.exceptions import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})


async def validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Body o parámetros mal formados → 400 en vez del 422 por defecto."""
    logger.debug("Request inválido en %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def create_app() -> FastAPI:
    """
    Crea y configura la aplicación HTTP.

    Returns:
        FastAPI lista para servir con uvicorn.
    """
    app = FastAPI(title="Finance Manager API", version="1.0.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials="*" not in CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(ConflictError, conflict_handler)
    app.add_exception_handler(ValidationError, validation_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    for router in (
        auth_router,
        users_router,
        categories_router,
        transactions_router,
        reports_router,
    ):
        app.include_router(router, prefix=API_PREFIX)

    @app.get("/health")
    def health():
        return {"status": "ok"}

    logger.info("API creada con %d rutas", len(app.routes))
    return app
