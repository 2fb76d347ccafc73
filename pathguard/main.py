"""FastAPI entrypoint for the path guard service."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from pathguard.allowlist import PathAllowlist
from pathguard.config import load_config
from pathguard.errors import AccessDenied, ErrorResponse, GuardError, error_response
from pathguard.routes import register_guard_handlers

SERVICE_TOKEN_HEADER = "X-Pathguard-Service-Token"
AUTH_EXEMPT_PATHS = {"/health"}

_log = logging.getLogger(__name__)


def create_app() -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        config = load_config()
        app.state.config = config
        app.state.allowlist = PathAllowlist.from_config(config)
        _log.info(
            "path guard starting in %s mode", app.state.allowlist.mode.value
        )
        yield
        _log.info("path guard shutting down")

    app = FastAPI(lifespan=lifespan)

    @app.middleware("http")
    async def enforce_service_token(request: Request, call_next):
        if request.url.path in AUTH_EXEMPT_PATHS:
            return await call_next(request)

        config = getattr(request.app.state, "config", None)
        service_token = getattr(config, "service_token", None)
        if service_token:
            supplied_token = request.headers.get(SERVICE_TOKEN_HEADER)
            if supplied_token != service_token:
                error = ErrorResponse(
                    code="AUTH_FORBIDDEN",
                    message="Invalid service token.",
                    details={"header": SERVICE_TOKEN_HEADER},
                )
                return JSONResponse(
                    status_code=403, content=error_response(error)
                )

        return await call_next(request)

    @app.exception_handler(AccessDenied)
    def handle_access_denied(request: Request, exc: AccessDenied) -> JSONResponse:
        return JSONResponse(status_code=403, content=error_response(exc.error))

    @app.exception_handler(GuardError)
    def handle_guard_error(request: Request, exc: GuardError) -> JSONResponse:
        return JSONResponse(status_code=400, content=error_response(exc.error))

    @app.get("/health", status_code=200)
    def health() -> dict[str, str]:
        return {"status": "ok"}

    register_guard_handlers(app)
    return app


app = create_app()
