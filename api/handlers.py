"""
HTTP handlers.
"""
import orjson
import structlog
from aiohttp import web

from core.engine import ArbitrageService

logger = structlog.get_logger()

SERVICE_KEY = web.AppKey("service", ArbitrageService)

GENERIC_ERROR = {"error": "Erro no backend"}


def _json(data, status: int = 200) -> web.Response:
    return web.json_response(
        data,
        status=status,
        dumps=lambda obj: orjson.dumps(obj).decode()
    )


async def get_opportunities(request: web.Request) -> web.Response:
    """Current opportunities, highest net profit first."""
    service = request.app[SERVICE_KEY]
    try:
        opportunities = await service.get_opportunities()
    except Exception:
        logger.exception("Failed to compute opportunities", path=request.path)
        return _json(GENERIC_ERROR, status=500)

    return _json([opp.to_json() for opp in opportunities])


async def get_history(request: web.Request) -> web.Response:
    """History of reported opportunities, newest first."""
    service = request.app[SERVICE_KEY]
    return _json([opp.to_json() for opp in service.get_history()])


async def get_status(request: web.Request) -> web.Response:
    """Service statistics."""
    service = request.app[SERVICE_KEY]
    return _json(service.get_stats())


def register_handlers(app: web.Application):
    """
    Register all API routes.

    Args:
        app: Application holding the service under SERVICE_KEY
    """
    app.router.add_get("/arbitragem", get_opportunities)
    app.router.add_get("/historico", get_history)
    app.router.add_get("/status", get_status)
