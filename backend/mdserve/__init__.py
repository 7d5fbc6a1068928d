"""mdserve - resolve URL paths to Markdown documents and serve them"""

__version__ = "0.1.0"

from .exceptions import DocumentNotFoundError, DocumentReadError, InvalidPathError, MdServeError
from .resolver import ResolverOptions, resolve
from .models import MarkdownFile
from .document import MarkdownOptions, render_markdown
from .document.parser import parse
from .server import MarkdownServer

__all__ = [
    "__version__",
    "DocumentNotFoundError",
    "DocumentReadError",
    "InvalidPathError",
    "MdServeError",
    "ResolverOptions",
    "resolve",
    "MarkdownFile",
    "MarkdownOptions",
    "render_markdown",
    "parse",
    "MarkdownServer",
]
