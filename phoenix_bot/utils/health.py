"""Minimal health HTTP endpoints for Phoenix.

Provides `/health` and `/ready` endpoints using aiohttp. The server runs in
the bot's event loop when started from `PhoenixBot.setup_hook`.
"""
from typing import Callable, Optional
import asyncio

from aiohttp import web

from phoenix_bot.utils.logger import get_logger

logger = get_logger("phoenix.health")

ReadyProbe = Callable[[], bool]
READY_PROBE = web.AppKey("ready_probe", object)


async def _health(request: web.Request) -> web.Response:
    return web.json_response({"status": "ok"})


async def _ready(request: web.Request) -> web.Response:
    probe: Optional[ReadyProbe] = request.app.get(READY_PROBE)
    ready = bool(probe()) if probe is not None else True
    return web.json_response({"ready": ready}, status=200 if ready else 503)


def make_app(ready_probe: Optional[ReadyProbe] = None) -> web.Application:
    app = web.Application()
    app[READY_PROBE] = ready_probe
    app.router.add_get("/health", _health)
    app.router.add_get("/ready", _ready)
    return app


async def start_health_server(host: str = "0.0.0.0", port: int = 8080,
                              ready_probe: Optional[ReadyProbe] = None) -> None:
    """Start an aiohttp server exposing /health and /ready.

    Meant to be wrapped in `asyncio.create_task()`; the server lives until the
    task is cancelled.
    """
    runner = web.AppRunner(make_app(ready_probe))
    await runner.setup()
    site = web.TCPSite(runner, host, port)
    await site.start()
    logger.info("Health server started at http://%s:%s (endpoints: /health /ready)", host, port)

    try:
        await asyncio.Event().wait()
    finally:
        await runner.cleanup()
