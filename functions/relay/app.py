"""
FastAPI application entry point for the relay backend.
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from relay import dependencies
from relay.config import Settings, get_settings
from relay.routes import router

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # Keep HTTP client internals (and their auth headers) out of the logs.
    for name in ("urllib3", "requests"):
        logging.getLogger(name).setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Clients are process-lifetime singletons; Firebase connects on first use.
    dependencies.warm_up()
    logger.info(
        "Clients initialized (in-memory backends: %s)",
        app.state.settings.use_in_memory_backends,
    )
    yield


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title="Chat & Push Relay", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router, prefix=settings.api_prefix)

    if os.path.isdir(settings.static_dir):
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
    else:
        logger.warning("Static directory %r not found; not serving files", settings.static_dir)
    return app


def main() -> None:
    settings = get_settings()
    configure_logging(settings)
    logger.info("Server running on http://%s:%s", settings.host, settings.port)
    logger.info("OpenAI API key configured: %s", "yes" if settings.openai_api_key else "no")
    logger.info("OneSignal configured: %s", "yes" if settings.onesignal_api_key else "no")
    uvicorn.run(create_app(), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
