from __future__ import annotations

import asyncio
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dotenv import load_dotenv

from groupconf.aliases import AliasGroup, Aliases
from groupconf.config_group import ConfigGroup, ConfigGroupOptions
from groupconf.settings import get_settings

logger = logging.getLogger(__name__)


def create_app(aliases: Aliases | None = None) -> FastAPI:
    load_dotenv("local.env")

    from endpoints.alias_endpoints import router as alias_router

    if aliases is None:
        settings = get_settings()
        options = ConfigGroupOptions(filename=settings.alias_filename, default_group=AliasGroup.ORGS.value)
        aliases = Aliases(ConfigGroup(options))
    logger.debug("ALIAS FILE: %s", aliases.config.path)

    app = FastAPI()
    app.state.aliases = aliases
    app.state.aliases_lock = asyncio.Lock()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/healthz")
    async def healthz():
        return {"ok": True}

    app.include_router(alias_router)

    return app


app = create_app()
