"""
aiohttp application factory.
"""
from pathlib import Path
from typing import Optional

import structlog
from aiohttp import web

from core.engine import ArbitrageService
from api.handlers import SERVICE_KEY, register_handlers
from api.middlewares import cors_middleware

logger = structlog.get_logger()


def create_app(service: ArbitrageService, static_dir: Optional[str] = None) -> web.Application:
    """
    Build the web application around an arbitrage service.

    Args:
        service: Service answering opportunity and history reads
        static_dir: Directory served at / when it exists
    """
    app = web.Application(middlewares=[cors_middleware])
    app[SERVICE_KEY] = service

    register_handlers(app)

    if static_dir:
        path = Path(static_dir)
        if path.is_dir():
            index = path / "index.html"
            if index.is_file():
                async def serve_index(request: web.Request) -> web.FileResponse:
                    return web.FileResponse(index)
                app.router.add_get("/", serve_index)
            app.router.add_static("/", path, name="static")
            logger.info("Serving static files", directory=str(path.resolve()))
        else:
            logger.info("Static directory not found, skipping", directory=static_dir)

    async def on_startup(app: web.Application):
        await app[SERVICE_KEY].initialize()

    async def on_cleanup(app: web.Application):
        await app[SERVICE_KEY].close()

    app.on_startup.append(on_startup)
    app.on_cleanup.append(on_cleanup)

    return app
