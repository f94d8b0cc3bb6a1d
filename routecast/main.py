"""
Route Precipitation Risk API - Entry Point

Run with ``python -m routecast.main`` or
``uvicorn routecast.main:create_app --factory``.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Config, ConfigurationError, load_config
from .processing.pipeline import RoutePipeline
from .api.routes import router, set_pipeline

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the pipeline on startup, close its HTTP clients on shutdown."""
    config: Config = app.state.config

    pipeline = RoutePipeline(config)
    set_pipeline(pipeline)
    app.state.pipeline = pipeline

    # Unreachable providers are reported, not fatal: requests surface them as 502
    for api, ok in (await pipeline.test_all_apis()).items():
        if ok:
            logger.info(f"{api}: OK")
        else:
            logger.error(f"{api}: not responding, check the API key and network")

    logger.info(f"Server ready on {config.backend_host}:{config.backend_port}")

    try:
        yield
    finally:
        await pipeline.close()
        logger.info("Shutdown complete")


def create_app(config: Optional[Config] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Raises:
        ConfigurationError: required environment variables are missing
    """
    if config is None:
        config = load_config()

    app = FastAPI(
        title="Route Precipitation Risk API",
        description="Precipitation risk along drawn driving routes",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.config = config

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router, prefix="/api")

    return app


if __name__ == "__main__":
    import uvicorn

    try:
        app = create_app()
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e} (see .env.example)")
        sys.exit(1)

    uvicorn.run(
        app,
        host=app.state.config.backend_host,
        port=app.state.config.backend_port,
    )
