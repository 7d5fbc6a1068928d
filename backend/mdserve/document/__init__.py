"""Document module - Markdown rendering, parsing and writing

``parse`` lives in ``mdserve.document.parser``; it depends on ``mdserve.models``,
which itself builds on the rendering and writing helpers exported here.
"""

from .renderer import DEFAULT_MARKDOWN_OPTIONS, MarkdownOptions, render_markdown
from .writer import target_path, write_document

__all__ = [
    "DEFAULT_MARKDOWN_OPTIONS",
    "MarkdownOptions",
    "render_markdown",
    "target_path",
    "write_document",
]
