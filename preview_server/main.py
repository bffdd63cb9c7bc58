# preview_server/main.py
"""Application factory for the preview server.

`/public/*` goes to the API router; every other GET falls through to the
static responder. One middleware is the outermost boundary: it disables
caching on every response and turns any unhandled error into a generic 500.

There is no module-level app; run `uvicorn --factory
preview_server.main:create_app` or the `preview-server` CLI.
"""
from fastapi import FastAPI, Request
from typing import Optional

from .api.routes import router as api_router
from .config import Settings, load_settings
from .exceptions import NotFoundError
from .responses import apply_no_cache, json_response, text_response
from .static import serve_static
from .utils import configure_logging, logger


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)
    app = FastAPI(title="Listing Preview Server", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.settings = settings

    @app.middleware("http")
    async def no_cache_boundary(request: Request, call_next):
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("Unhandled error for %s %s", request.method, request.url.path)
            response = text_response("Server error", 500)
        logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
        return apply_no_cache(response)

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError):
        return json_response({"error": exc.message}, status_code=404)

    app.include_router(api_router)

    @app.get("/{file_path:path}", include_in_schema=False)
    def static_files(file_path: str, request: Request):
        # the path convertor hands over the percent-decoded path without its leading slash
        return serve_static(request.app.state.settings.root_dir, "/" + file_path)

    return app
