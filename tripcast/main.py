"""FastAPI application factory. No business logic; only wiring, lifespan and error rendering."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tripcast.api.v1 import router as v1_router
from tripcast.core.config import Settings, get_settings
from tripcast.core.database import create_db_engine, create_session_factory, init_db
from tripcast.core.errors import TripcastError, Unauthenticated
from tripcast.core.policies import AdminPolicy, get_admin_policy
from tripcast.core.sessions import InMemorySessionStore, SessionStore
from tripcast.services.weather import WeatherGateway

logger = logging.getLogger(__name__)


async def tripcast_error_handler(_request: Request, exc: TripcastError) -> JSONResponse:
    """Render domain errors as {"detail": message} with the error's status code."""
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers,
    )


def create_app(
    settings: Settings | None = None,
    *,
    admin_policy: AdminPolicy | None = None,
    session_store: SessionStore | None = None,
    weather_gateway: WeatherGateway | None = None,
) -> FastAPI:
    """
    Build the application and its collaborators.

    The storage engine, session store, admin policy and weather gateway are created here
    (or injected) and kept on app.state; dependencies read them from the request.
    """
    settings = settings or get_settings()
    engine = create_db_engine(settings.DATABASE_URL, echo=settings.DEBUG)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if settings.DB_AUTO_CREATE:
            init_db(engine)
        logger.info(
            "Tripcast started",
            extra={"environment": settings.APP_ENV, "database": engine.dialect.name},
        )
        try:
            yield
        finally:
            engine.dispose()
            logger.info("Tripcast stopped")

    app = FastAPI(
        title="Tripcast API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.session_store = session_store or InMemorySessionStore(
        ttl=timedelta(minutes=settings.SESSION_EXPIRE_MINUTES)
    )
    app.state.admin_policy = admin_policy or get_admin_policy(settings.ADMIN_POLICY)
    app.state.weather_gateway = weather_gateway or WeatherGateway.from_settings(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(TripcastError, tripcast_error_handler)

    app.include_router(v1_router, prefix=settings.API_V1_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Tripcast API"}

    return app
