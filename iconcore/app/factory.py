# iconcore/app/factory.py
from __future__ import annotations
import logging
from collections.abc import Sequence

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from iconcore.app.context import PROCESS_REGISTRY
from iconcore.app.globals import config
from iconcore.iconpacks.manager import IconPackManager

__all__ = ["createApp"]



def createApp(
    *,
    manager: IconPackManager | None = None,
    extraRouters: Sequence[APIRouter] = (),
    configureLogs: bool = True,
) -> FastAPI:
    if configureLogs:
        from iconcore.core.logger import configureLogging
        configureLogging()
    
    logger = logging.getLogger(__name__)

    if manager is None:
        manager = IconPackManager.fromSettings()
    PROCESS_REGISTRY.register("iconPacks.manager", manager, overwrite=True)
    
    app = FastAPI(title="iconcore")
    
    # ----- CORS -----
    corsOrigins = config("http.cors.allowOrigins", [])
    if not isinstance(corsOrigins, list):
        corsOrigins = []

    app.add_middleware(
        CORSMiddleware,
        allow_origins=corsOrigins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    from iconcore.app.web import router as webRouter
    from iconcore.channel.router import router as iconPackRouter

    app.include_router(webRouter)
    app.include_router(iconPackRouter)

    for router in extraRouters:
        app.include_router(router)

    logger.info("Icon pack service initialized with %d extra router(s)", len(extraRouters))
    return app
