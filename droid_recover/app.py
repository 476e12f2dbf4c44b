"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from .api.router import api_router
from .services.system_inspector import inspect_adb
from .utils.adb import adb_client

# Configure logging for our modules
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(name)s: %(message)s")
logging.getLogger("droid_recover").setLevel(logging.DEBUG)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    info = await inspect_adb(adb_client)
    if info.available:
        logger.info(f"{info.detail} ({info.version})")
    else:
        logger.warning(info.detail)
    yield


def create_app() -> FastAPI:
    app = FastAPI(
        title="droid-recover",
        version="0.1.0",
        description="Android deleted file recovery over adb",
        lifespan=lifespan,
    )
    app.include_router(api_router, prefix="/api")
    return app
