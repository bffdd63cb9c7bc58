# preview_server/snapshots.py
"""Backend snapshot reader and request dependencies.

The backend directory holds one JSON file per resource collection. Files are
owned by whatever seeds the preview, so they are re-read on every call and any
read or parse failure is treated as an empty data set.
"""
import json
from pathlib import Path
from fastapi import Request

from .config import Settings
from .utils import logger

REVIEWS = "reviews.json"
LISTINGS = "listings.json"
TAGS = "tags.json"
BLOGS = "blogs.json"
CATEGORIES = "categories.json"
MODELS = "models.json"


def _reject_constant(token):
    raise ValueError(f"{token} is not valid JSON")


class SnapshotReader:
    def __init__(self, backend_dir: Path):
        self.backend_dir = Path(backend_dir)

    def read(self, name: str, fallback=None):
        """Return the parsed contents of `name`, or `fallback` (default `[]`)."""
        if fallback is None:
            fallback = []
        path = self.backend_dir / name
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("Snapshot %s missing, using fallback", name)
            return fallback
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Could not read snapshot %s: %s", name, e)
            return fallback
        try:
            return json.loads(raw or "[]", parse_constant=_reject_constant)
        except ValueError as e:
            logger.warning("Snapshot %s is not valid JSON: %s", name, e)
            return fallback


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_snapshots(request: Request) -> SnapshotReader:
    return SnapshotReader(get_settings(request).backend_dir)
