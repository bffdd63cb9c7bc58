# preview_server/static.py
"""Static file responder for every path the API router does not claim."""
from pathlib import Path
from fastapi.responses import Response

from .exceptions import PathEscapeError
from .responses import text_response
from .utils import logger

INDEX_FILE = "index.html"
DEFAULT_CONTENT_TYPE = "application/octet-stream"

CONTENT_TYPES = {
    ".html": "text/html; charset=utf-8",
    ".css": "text/css; charset=utf-8",
    ".js": "application/javascript; charset=utf-8",
    ".json": "application/json; charset=utf-8",
    ".svg": "image/svg+xml",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".ico": "image/x-icon",
    ".webp": "image/webp",
}


def content_type_for(path: Path) -> str:
    return CONTENT_TYPES.get(path.suffix.lower(), DEFAULT_CONTENT_TYPE)


def _inside(root: Path, url_path: str) -> Path:
    if "\x00" in url_path:
        raise PathEscapeError("null byte in path")
    try:
        candidate = (root / url_path.lstrip("/")).resolve()
    except (OSError, ValueError) as e:
        raise PathEscapeError(f"unresolvable path {url_path!r}") from e
    if not candidate.is_relative_to(root):
        raise PathEscapeError(f"{url_path!r} resolves outside the serving root")
    return candidate


def resolve_static_path(root: Path, url_path: str) -> Path:
    """Map an already-decoded request path to a file path under `root`.

    `..` segments and symlinks are resolved before the containment check, and a
    directory (or a path ending in `/`) maps to its `index.html`, which is
    checked again. Raises PathEscapeError for anything outside `root`.
    """
    root = Path(root).resolve()
    if url_path.endswith("/"):
        url_path += INDEX_FILE
    target = _inside(root, url_path)
    if target.is_dir():
        target = _inside(root, str(target.relative_to(root) / INDEX_FILE))
    return target


def serve_static(root: Path, url_path: str) -> Response:
    try:
        target = resolve_static_path(root, url_path)
    except PathEscapeError as e:
        logger.warning("Rejected static path: %s", e)
        return text_response("Bad request", 400)
    if not target.is_file():
        return text_response("Not found", 404)
    try:
        body = target.read_bytes()
    except OSError as e:
        logger.error("Failed reading %s: %s", url_path, e)
        return text_response("Server error", 500)
    return Response(body, media_type=content_type_for(target))
