# preview_server/config.py
"""Process-wide configuration.

`load_settings()` is called once at startup; the resulting `Settings` object is
handed to `create_app()` and reaches the routes through a dependency.
"""
import os
from pathlib import Path
from dotenv import load_dotenv
from pydantic import BaseModel

from .exceptions import ConfigurationError

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 5502
BACKEND_DIR_NAME = "backend"

# Seed-data coupling for the by-tag endpoint: the clearance-sale tag is both
# the fallback when no tag resolves and an always-included match.
CLEARANCE_TAG_SLUG = "clearance-sale"
CLEARANCE_TAG_NAME = "clearance sale"
CLEARANCE_TAG_ID = 109


class Settings(BaseModel):
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    root_dir: Path
    backend_dir_name: str = BACKEND_DIR_NAME
    log_level: str = "INFO"
    fallback_tag_slug: str = CLEARANCE_TAG_SLUG
    fallback_tag_name: str = CLEARANCE_TAG_NAME
    fallback_tag_id: int = CLEARANCE_TAG_ID

    @property
    def backend_dir(self) -> Path:
        return self.root_dir / self.backend_dir_name

    @property
    def fallback_tag_names(self):
        """Both spellings a listing's `tags` may use for the fallback tag."""
        return {self.fallback_tag_name.lower(), self.fallback_tag_slug.lower()}


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")


def load_settings(**overrides) -> Settings:
    """Build settings from the environment (and `.env`), then apply overrides.

    Overrides set to None are ignored so CLI flags can be passed straight through.
    """
    load_dotenv()
    overrides = {k: v for k, v in overrides.items() if v is not None}
    values = {
        "host": os.getenv("PREVIEW_HOST", DEFAULT_HOST),
        "root_dir": os.getenv("PREVIEW_ROOT") or Path.cwd(),
        "backend_dir_name": os.getenv("PREVIEW_BACKEND_DIR", BACKEND_DIR_NAME),
        "log_level": os.getenv("LOG_LEVEL", "INFO").upper(),
    }
    # an explicit override means a broken env value is never parsed
    if "port" not in overrides:
        values["port"] = _int_env("PORT", DEFAULT_PORT)
    if "fallback_tag_id" not in overrides:
        values["fallback_tag_id"] = _int_env("PREVIEW_FALLBACK_TAG_ID", CLEARANCE_TAG_ID)
    values.update(overrides)
    values["root_dir"] = Path(values["root_dir"]).resolve()
    return Settings(**values)
