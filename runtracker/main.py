import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from runtracker.api.router import api_router
from runtracker.core.config import get_settings
from runtracker.core.database import SessionFactory, init_models
from runtracker.core.logging_config import configure_logging
from runtracker.repositories.user_repository import UserRepository
from runtracker.services.auth_service import AuthService

settings = get_settings()
logger = logging.getLogger(__name__)


async def seed_default_admin() -> None:
    async with SessionFactory() as session:
        service = AuthService(UserRepository(session))
        if await service.ensure_user(settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD):
            await session.commit()


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    await init_models()
    await seed_default_admin()
    logger.info("%s %s ready (%s)", settings.APP_NAME, settings.APP_VERSION, settings.APP_ENV)
    yield


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# ── CORS ──────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ───────────────────────────────────
app.include_router(api_router)


# ── Health probe ──────────────────────────────
@app.get("/health", tags=["System"], summary="Liveness probe")
async def health():
    return {"status": "ok", "version": settings.APP_VERSION}
