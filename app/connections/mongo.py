import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import certifi
from fastapi import FastAPI
from mongoengine import connect, disconnect

from app.services.seed import seed_admin, seed_roles
from app.utils.config import Settings

logger = logging.getLogger(__name__)


def init_mongo(settings: Settings) -> None:
    """Connect the default mongoengine alias with bounded timeouts."""
    options = {
        "tz_aware": True,
        "serverSelectionTimeoutMS": settings.mongo_timeout_ms,
        "connectTimeoutMS": settings.mongo_timeout_ms,
        "socketTimeoutMS": settings.mongo_timeout_ms,
    }
    if settings.mongo_tls:
        options["tlsCAFile"] = certifi.where()
    connect(host=settings.mongo_uri, alias="default", **options)
    logger.info("Mongo connection configured for database %s", settings.mongo_db)


def close_mongo() -> None:
    disconnect(alias="default")


@asynccontextmanager
async def mongo_lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: Settings = app.state.settings
    init_mongo(settings)
    try:
        # Roles and the bootstrap admin must exist before the first request
        seed_roles()
        seed_admin(settings)
        yield
    finally:
        close_mongo()
