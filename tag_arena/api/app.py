"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tag_arena.api.dependencies import set_engine_manager
from tag_arena.api.engine_manager import EngineManager
from tag_arena.api.routes import api_router
from tag_arena.config import SimulationConfig
from tag_arena.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: SimulationConfig | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = SimulationConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        manager = EngineManager(_config)
        set_engine_manager(manager)
        manager.start()
        logger.info("API server started, match loop idle until a match starts.")
        yield
        manager.stop()
        set_engine_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="Tag Arena",
        description=(
            "Real-time tag game simulation: state polling and match control.\n\n"
            "## API Groups\n\n"
            "- **State** - Live match snapshot, event feed and engine stats\n"
            "- **Control** - Start a match, pause/resume/quit/freeze, directional input\n"
            "- **Config** - Read-only match configuration\n"
        ),
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "State", "description": "Live match state polled by the presentation layer once per frame."},
            {"name": "Control", "description": "Match lifecycle triggers and the human agent's held directional input."},
            {"name": "Config", "description": "Read-only match parameters (field size, durations, cooldowns)."},
        ],
    )

    # CORS: any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app
