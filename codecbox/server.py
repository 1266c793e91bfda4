import logging

from aiohttp import web

from .converter import convert
from .errors import CodecError


DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8081

CONVERT_PATH = "/api/conversion-service/convert"


@web.middleware
async def cors_middleware(request: web.Request, handler):
    if request.method == "OPTIONS":
        response = web.Response(status=204)
    else:
        response = await handler(request)

    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    return response


async def health(request: web.Request) -> web.Response:
    return web.json_response({"status": "ok"})


async def handle_convert(request: web.Request) -> web.Response:
    try:
        body = await request.json()
    except ValueError:
        return web.json_response({"error": "request body must be a JSON object"}, status=400)

    if not isinstance(body, dict):
        return web.json_response({"error": "request body must be a JSON object"}, status=400)

    text = body.get("input", "")
    method = body.get("method", "")
    config = body.get("config") or {}

    if not isinstance(text, str) or not isinstance(method, str) or not isinstance(config, dict):
        return web.json_response({"error": "invalid request fields"}, status=400)

    try:
        result = convert(text, method, config)
    except CodecError as e:
        logging.info("Conversion with %s failed: %s", method, e)
        return web.json_response({"error": str(e)}, status=400)

    return web.json_response({"data": result})


def create_app() -> web.Application:
    app = web.Application(middlewares=[cors_middleware])
    app.router.add_get("/health", health)
    app.router.add_post(CONVERT_PATH, handle_convert)
    return app


def run(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT):
    logging.info("Serving on %s:%d", host, port)
    web.run_app(create_app(), host=host, port=port)
