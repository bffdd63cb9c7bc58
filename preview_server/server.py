# preview_server/server.py
"""Command-line entry point: `preview-server [--port N] [--host H] [--root DIR]`."""
import argparse

import uvicorn

from .config import load_settings
from .main import create_app
from .utils import logger


def _parse_args(argv=None):
    p = argparse.ArgumentParser(description="Serve static files and mock /public JSON endpoints")
    p.add_argument("--port", type=int, default=None, help="Port to listen on (default $PORT or 5502)")
    p.add_argument("--host", default=None, help="Bind address (default localhost)")
    p.add_argument("--root", default=None, help="Directory to serve (default current directory)")
    return p.parse_args(argv)


def run(argv=None):
    args = _parse_args(argv)
    settings = load_settings(port=args.port, host=args.host, root_dir=args.root)
    app = create_app(settings)
    logger.info("Preview server running at http://%s:%s/", settings.host, settings.port)
    logger.info("Serving %s (backend data in %s)", settings.root_dir, settings.backend_dir)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
