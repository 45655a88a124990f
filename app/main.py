from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.middleware.cors import CORSMiddleware

from app.apps.inventory.routers import (
    asset_category_router,
    asset_router,
    room_router,
)
from app.core.config import app_logger, settings
from app.core.db import dispose_db
from app.core.dependencies import DBSession
from app.core.exceptions.handlers import exception_schema, register_exception_handlers
from app.core.exceptions.types import AppException
from app.core.routers import user_router
from app.core.services import BrevoService, EmailManagerService, Renderer


@asynccontextmanager
async def lifespan(app: FastAPI):
    app_logger.info(f"Starting {settings.APP_NAME} ({settings.ENVIRONMENT})...")

    await BrevoService.init(
        api_key=settings.BREVO_API_KEY,
        sender_email=settings.BREVO_SENDER_EMAIL,
        sender_name=settings.BREVO_SENDER_NAME,
    )
    Renderer.initialize(settings.TEMPLATES_DIR)
    EmailManagerService.init()
    app_logger.info("Email delivery ready (Brevo, templates, email manager)")

    try:
        yield
    finally:
        app_logger.info("Shutting down...")
        await BrevoService.aclose()
        await dispose_db()
        app_logger.info("Brevo client closed and database engine disposed")


app = FastAPI(
    lifespan=lifespan,
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description=settings.APP_DESCRIPTION,
    debug=settings.DEBUG,
    docs_url="/docs",
    redoc_url="/redoc",
    responses=exception_schema,
    root_path_in_servers=False,
    servers=[{"url": settings.API_DOMAIN}],
)

register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(user_router, prefix="/api/user", tags=["User"])
for router, tag in (
    (room_router, "Rooms"),
    (asset_router, "Assets"),
    (asset_category_router, "Assets"),
):
    app.include_router(router, prefix="/api", tags=[tag])


@app.get("/", include_in_schema=False)
async def root(request: Request):
    base_url = str(request.base_url).rstrip("/")
    return {
        "message": f"Welcome to {settings.APP_NAME} API",
        "documentations": {
            "swagger": f"{base_url}/docs",
            "redoc": f"{base_url}/redoc",
        },
        "version": settings.APP_VERSION,
    }


async def _database_ok(session: AsyncSession) -> bool:
    try:
        async with session.begin():
            return (await session.execute(text("SELECT 1"))).scalar() == 1
    except (SQLAlchemyError, OSError) as e:
        app_logger.error(f"Database health check failed: {e}")
        return False


@app.head("/health", include_in_schema=False)
@app.get("/health")
async def health_check(session: DBSession):
    """
    Report whether the API can serve requests.

    Only the database check can fail the request (503). The email entry shows
    whether the email manager was started and is informational.
    """
    database_ok = await _database_ok(session)
    report = {
        "status": "ok" if database_ok else "degraded",
        "message": f"{settings.APP_NAME} API is running.",
        "checks": {
            "database": "ok" if database_ok else "unhealthy",
            "email": "ok" if EmailManagerService.is_initialized() else "not_initialized",
        },
    }
    if not database_ok:
        raise AppException(
            "One or more health checks failed.",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            details=report,
        )
    return report
