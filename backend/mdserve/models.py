"""Data models for mdserve"""

from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path

from .document.renderer import MarkdownOptions, render_markdown
from .document.writer import write_document


@dataclass
class MarkdownFile:
    """Represents a Markdown document: YAML front matter plus raw Markdown body"""
    path: Path
    meta: dict | None = None
    raw_content: str | None = None
    markdown_options: MarkdownOptions | None = None
    checksum: str | None = None     # sha1 of the file text
    size: int | None = None
    created: datetime | None = None
    modified: datetime | None = None

    @property
    def title(self) -> str:
        if self.meta and self.meta.get("title"):
            return str(self.meta["title"])
        return self.path.stem

    def parse_content(self) -> str:
        """Convert raw_content to HTML"""
        if not self.raw_content:
            raise ValueError("No raw content to parse")
        return render_markdown(self.raw_content, self.markdown_options)

    def save_changes(self) -> None:
        """Write meta and raw_content back to path, overwriting any existing file"""
        write_document(self.path, self.raw_content, self.meta)

    def to_dict(self, include_html: bool = False) -> dict:
        """
        JSON-safe view of the document.

        Never includes the filesystem path.
        """
        data = {
            "title": self.title,
            "meta": _normalise(self.meta) if self.meta else None,
            "raw_content": self.raw_content,
            "checksum": self.checksum,
            "size": self.size,
            "created": self.created.isoformat() if self.created else None,
            "modified": self.modified.isoformat() if self.modified else None,
        }
        if include_html:
            data["parsed_content"] = self.parse_content() if self.raw_content else ""
        return data


def _normalise(value):
    """Recursively convert YAML dates to ISO strings."""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, list):
        return [_normalise(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _normalise(v) for k, v in value.items()}
    return value
