# preview_server/utils.py
"""Logging setup shared by the app and the CLI.

The format is installed on first import; `configure_logging` applies the
level from `Settings` once they are loaded, so the env value and the
configured one cannot drift apart.
"""
import os
import logging
from dotenv import load_dotenv

load_dotenv()

LOG_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def get_logger(name=__name__):
    logging.basicConfig(format=LOG_FORMAT, level=_level(os.getenv("LOG_LEVEL", "INFO")))
    return logging.getLogger(name)


def configure_logging(level: str) -> None:
    logging.getLogger().setLevel(_level(level))


logger = get_logger("preview-server")
