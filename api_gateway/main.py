# API Gateway (Centralized Entry Point).
# - /api/subscriptions/*  -> backend (BACKEND_URL)
# - /api/trips/*          -> backend (BACKEND_URL), create/delete admin only
# Every /api route requires a valid session; nothing unauthenticated reaches the backend.

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import routes_subscriptions, routes_trips
from config.settings import settings
from core.exception_handlers import register_exception_handlers
from core.logging import configure_logging, request_logging_middleware
from core.response import ok

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    logger.info("Gateway starting; backend=%s", settings.BACKEND_URL)
    if settings.SESSION_SECRET == "change_me_to_a_long_random_session_secret":
        logger.warning("SESSION_SECRET is the development default; set it in the environment")
    yield
    logger.info("Gateway shutting down")


app = FastAPI(title=settings.API_TITLE, version=settings.API_VERSION, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)

register_exception_handlers(app)

# Adds X-Request-ID header and logs every request
app.middleware("http")(request_logging_middleware)

app.include_router(routes_subscriptions.router, prefix="/api", tags=["subscriptions"])
app.include_router(routes_trips.router, prefix="/api", tags=["trips"])


@app.get("/health")
async def health():
    return ok({"service": "gateway", "status": "ok"})
