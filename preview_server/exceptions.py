# preview_server/exceptions.py
"""Exceptions raised inside the preview server.

Each one maps to a single response shape in `main.py`; anything else that
escapes a handler becomes a generic 500.
"""


class PreviewServerError(Exception):
    """Base exception for the preview server."""
    pass


class ConfigurationError(PreviewServerError):
    """Raised when an environment value cannot be turned into a setting."""
    pass


class NotFoundError(PreviewServerError):
    """An id lookup matched no publicly visible record."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PathEscapeError(PreviewServerError):
    """A static request resolved to a location outside the serving root."""
    pass
