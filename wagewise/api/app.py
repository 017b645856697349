"""FastAPI application factory."""

import base64
import logging
import secrets
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from config.settings import settings
from wagewise.api.routes import router
from wagewise.calculators.salary_finder import load_solver_config
from wagewise.calculators.tax_data import TAX_YEARS, validate_table

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup: configure logging, check tax tables, load solver config."""
    logging.basicConfig(level=settings.log_level)
    logger.info("Starting up with default tax year %s", settings.default_tax_year)

    for key, table in TAX_YEARS.items():
        for problem in validate_table(table):
            logger.warning("Tax year %s: %s", key, problem)
    app.state.solver_config = load_solver_config()

    yield

    logger.info("Shutting down...")


UNAUTHORIZED = Response(
    content="Unauthorized",
    status_code=401,
    headers={"WWW-Authenticate": "Basic"},
)


AUTH_USERNAME = settings.auth_username.encode()
AUTH_PASSWORD = settings.auth_password.encode()


class BasicAuthMiddleware(BaseHTTPMiddleware):
    """Enforce HTTP Basic Auth on all requests."""

    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        auth = request.headers.get("Authorization")
        if auth and auth.startswith("Basic "):
            try:
                decoded = base64.b64decode(auth[6:]).decode()
                username, password = decoded.split(":", 1)
            except ValueError:
                return UNAUTHORIZED
            if secrets.compare_digest(username.encode(), AUTH_USERNAME) and secrets.compare_digest(
                password.encode(), AUTH_PASSWORD
            ):
                return await call_next(request)
        return UNAUTHORIZED


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(title="WageWise UK", lifespan=lifespan)
    if settings.auth_enabled:
        app.add_middleware(BasicAuthMiddleware)
    else:
        logger.info("AUTH_USERNAME/AUTH_PASSWORD not set, running without basic auth")
    app.include_router(router)
    return app
