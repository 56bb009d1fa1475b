"""
HTTP middlewares.
"""
from aiohttp import web

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "*",
}


@web.middleware
async def cors_middleware(request: web.Request, handler):
    """Allow any origin; answer preflight requests directly."""
    if request.method == "OPTIONS":
        return web.Response(status=204, headers=CORS_HEADERS)

    try:
        response = await handler(request)
    except web.HTTPException as e:
        e.headers.update(CORS_HEADERS)
        raise

    response.headers.update(CORS_HEADERS)
    return response
