"""Error types raised by mdserve"""

from pathlib import Path


class MdServeError(Exception):
    """Base class for mdserve errors"""


class DocumentNotFoundError(MdServeError):
    """No document matches a URL path.

    The message only carries the URL path so it is safe to surface to clients.
    """

    def __init__(self, url_path: str):
        self.url_path = url_path
        super().__init__(f"No document found matching path: {url_path}")


class DocumentReadError(MdServeError):
    """A resolved document could not be read (permissions, concurrent deletion, encoding)"""

    def __init__(self, path: Path, reason: str = ""):
        self.path = path
        message = f"Cannot read document: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class InvalidPathError(MdServeError):
    """A URL path cannot be mapped to a file under the root directory"""
