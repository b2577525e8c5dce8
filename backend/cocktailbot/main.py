# cocktailbot/main.py

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cocktailbot.core.config import Settings, get_settings
from cocktailbot.core.container import build_container
from cocktailbot.core.errors import CocktailBotError
from cocktailbot.core.logging import setup_logging
from cocktailbot.hardware.drivers import LightingDriver, PumpDriver

from cocktailbot.api.v1 import cocktails as cocktails_router
from cocktailbot.api.v1 import control as control_router
from cocktailbot.api.v1 import ingredients as ingredients_router
from cocktailbot.api.v1 import lighting as lighting_router
from cocktailbot.api.v1 import pumps as pumps_router
from cocktailbot.api.v1 import stats as stats_router

from cocktailbot.api import ws as ws_router
from cocktailbot.api import admin_page as admin_page_router

from cocktailbot.ws.bus import ws_bus

log = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    pump_driver: Optional[PumpDriver] = None,
    lighting_driver: Optional[LightingDriver] = None,
) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)
    app = FastAPI(title=settings.APP_NAME)

    container = build_container(
        settings,
        pump_driver=pump_driver,
        lighting_driver=lighting_driver,
        events=ws_bus.emit,
        controller_events=ws_bus.forward,
    )
    app.state.container = container

    origins = [
        origin.strip()
        for origin in settings.BACKEND_CORS_ORIGINS.split(",")
        if origin.strip()
    ]
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.exception_handler(CocktailBotError)
    async def machine_error_handler(request: Request, exc: CocktailBotError):
        if exc.status_code >= 500:
            log.error("[API] %s %s -> %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    # REST API
    app.include_router(cocktails_router.router, prefix="/api/v1")
    app.include_router(control_router.router, prefix="/api/v1")
    app.include_router(ingredients_router.router, prefix="/api/v1")
    app.include_router(pumps_router.router, prefix="/api/v1")
    app.include_router(stats_router.router, prefix="/api/v1")
    app.include_router(lighting_router.router, prefix="/api/v1")

    # live machine events + monitor page
    app.include_router(ws_router.router)
    app.include_router(admin_page_router.router)

    @app.get("/health")
    def health():
        return {"status": "ok", "state": container.machine.status().state}

    @app.on_event("startup")
    async def on_startup():
        ws_bus.set_loop(asyncio.get_running_loop())
        app.state.ws_task = asyncio.create_task(ws_bus.run())

        if container.mqtt_client is not None:
            container.mqtt_client.start()

        # levels for configured pumps + strip back to idle
        container.levels.get_levels()
        await container.lighting.signal("idle")

    @app.on_event("shutdown")
    async def on_shutdown():
        task = getattr(app.state, "ws_task", None)
        if task is not None:
            task.cancel()
        if container.mqtt_client is not None:
            container.mqtt_client.stop()

    return app


def run() -> None:
    import uvicorn

    uvicorn.run("cocktailbot.main:app", host="0.0.0.0", port=8000)


app = create_app()
