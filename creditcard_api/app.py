from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from creditcard_api.core.config import get_settings
from creditcard_api.core.logging_config import configure_logging
from creditcard_api.db.create_tables import create_all
from creditcard_api.repositories.errors import PersonConflictError, StorageUnavailableError
from creditcard_api.routers import cards as cards_router
from creditcard_api.services.card_service import CardService, ValidationError

SERVICE_NAME = "creditcard-api"

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers on every JSON response."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        response.headers.setdefault("Cache-Control", "no-store")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def _validation_error(request: Request, exc: ValidationError):
        return _error(exc.message, 400)

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg") if errors else "Requisicao invalida."
        return _error(str(message), 400)

    @app.exception_handler(PersonConflictError)
    async def _conflict(request: Request, exc: PersonConflictError):
        logger.warning("Unresolved registration conflict for %s", exc.email)
        return _error("Conflito ao registrar o email, tente novamente.", 409)

    @app.exception_handler(StorageUnavailableError)
    async def _storage_unavailable(request: Request, exc: StorageUnavailableError):
        logger.error("Storage error on %s %s: %s", request.method, request.url.path, exc, exc_info=exc.__cause__)
        return _error("Servico de armazenamento indisponivel.", 503)


def create_app(card_service: CardService | None = None) -> FastAPI:
    """Build the API; compatible with uvicorn/gunicorn factories."""
    settings = get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if settings.auto_create_tables:
            create_all()
        logger.info("%s started (env=%s)", SERVICE_NAME, settings.app_env)
        yield

    app = FastAPI(title="Credit Card API", version="1.0.0", lifespan=lifespan)

    allowed_cors = {settings.public_base_url, *settings.cors_origins}
    if settings.app_env != "prod":
        allowed_cors.update(
            {
                "http://localhost:8000",
                "http://127.0.0.1:8000",
                "http://localhost:3000",
            }
        )
    allowed_cors = {origin for origin in allowed_cors if origin}
    if allowed_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=sorted(allowed_cors),
            allow_credentials=False,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["*"],
            expose_headers=["Location"],
        )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")

    app.state.card_service = card_service or CardService()
    _register_error_handlers(app)
    app.include_router(cards_router.router)

    @app.get("/health")
    def health():
        return {"status": "healthy", "service": SERVICE_NAME}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("creditcard_api.app:create_app", factory=True, host="0.0.0.0", port=8000)
