"""Gateway FastAPI application entry point."""

from __future__ import annotations

import uuid
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from erp_gateway import __version__
from erp_gateway.auth.admin import AdminKeyGate
from erp_gateway.config import AuthConfig, get_settings
from erp_gateway.db import close_db, init_db
from erp_gateway.errors import GatewayError
from erp_gateway.services.secret_store import SecretStore

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events.

    Security objects are built before anything else so that a missing admin
    key or a malformed master key stops the gateway from starting.
    """
    settings = get_settings()

    try:
        auth_config = AuthConfig.from_settings(settings)
        app.state.auth_config = auth_config
        app.state.secret_store = SecretStore(auth_config.master_key)
        app.state.admin_gate = AdminKeyGate(auth_config.admin_key)
    except GatewayError as exc:
        logger.critical("gateway.startup.config_invalid", error=exc.message)
        raise

    logger.info(
        "gateway.startup",
        version=__version__,
        signature_ttl_seconds=auth_config.signature_ttl_seconds,
        reject_future_timestamps=auth_config.reject_future_timestamps,
    )
    await init_db()

    yield

    logger.info("gateway.shutdown")
    await close_db()


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="ERP Gateway",
        description="GraphQL access to ERP business entities",
        version=__version__,
        lifespan=lifespan,
    )

    # Request ID middleware
    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        """Add request ID to all requests."""
        request_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-Id"] = request_id
        return response

    # Error handler
    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        """Handle gateway errors with consistent format."""
        request_id = getattr(request.state, "request_id", None)
        if exc.status_code >= 500:
            logger.error("gateway.error", code=exc.code, error=exc.message, request_id=request_id)
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(request_id),
        )

    # Health check
    @app.get("/health")
    async def health() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "version": __version__}

    from erp_gateway.graphql import create_graphql_router

    app.include_router(
        create_graphql_router(graphiql=settings.graphql.graphiql),
        prefix=settings.graphql.path,
    )

    return app


# Create default app instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "erp_gateway.main:app",
        host=settings.server.host,
        port=settings.server.port,
    )
