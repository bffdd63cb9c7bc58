# preview_server/responses.py
"""Response helpers shared by the API routes and the static responder."""
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from .utils import logger

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}

JSON_TYPE = "application/json; charset=utf-8"


def apply_no_cache(response: Response) -> Response:
    for name, value in NO_CACHE_HEADERS.items():
        response.headers[name] = value
    return response


def json_response(payload, status_code: int = 200) -> Response:
    """Serialize `payload` to JSON; a str payload is assumed to be JSON already."""
    try:
        if isinstance(payload, str):
            return Response(payload, status_code=status_code, media_type=JSON_TYPE)
        return JSONResponse(payload, status_code=status_code, media_type=JSON_TYPE)
    except (TypeError, ValueError) as e:
        logger.error("Could not serialize response payload: %s", e)
        return JSONResponse({"error": "json_serialize_failed"}, status_code=500, media_type=JSON_TYPE)


def text_response(text: str, status_code: int) -> Response:
    return PlainTextResponse(text, status_code=status_code)
