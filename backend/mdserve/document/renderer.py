"""Markdown → HTML conversion.

Every call builds its own converter from an immutable MarkdownOptions, so
concurrent renders never share converter state.
"""

import copy
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

import markdown
from markdown.extensions.codehilite import CodeHiliteExtension


@dataclass(frozen=True)
class MarkdownOptions:
    """Converter configuration carried by each parse/render call"""

    extensions: tuple[str, ...] = ("fenced_code", "tables")
    # Copied on construction and exposed read-only
    extension_configs: Mapping[str, dict] = field(default_factory=dict)
    highlight: bool = True  # Pygments highlighting of fenced code blocks
    output_format: str = "html"

    def __post_init__(self):
        configs = MappingProxyType(copy.deepcopy(dict(self.extension_configs)))
        object.__setattr__(self, "extension_configs", configs)


DEFAULT_MARKDOWN_OPTIONS = MarkdownOptions()


def render_markdown(source: str, options: MarkdownOptions | None = None) -> str:
    """Convert Markdown source to HTML using the given options"""
    opts = options or DEFAULT_MARKDOWN_OPTIONS

    extensions: list = list(opts.extensions)
    if opts.highlight:
        extensions.append(CodeHiliteExtension(css_class="highlight", guess_lang=False))

    md = markdown.Markdown(
        extensions=extensions,
        extension_configs=copy.deepcopy(dict(opts.extension_configs)),
        output_format=opts.output_format,
    )
    return md.convert(source)
