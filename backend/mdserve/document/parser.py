"""Markdown parser with front matter extraction"""

import hashlib
import logging
import os
import re
from datetime import datetime
from pathlib import Path

import frontmatter
import yaml

from ..exceptions import DocumentReadError
from ..models import MarkdownFile
from .renderer import MarkdownOptions

logger = logging.getLogger("mdserve.parser")

# YAML block ended by the first "---" line, without an opening delimiter
_BARE_FRONTMATTER_RE = re.compile(r"\A(?P<meta>.*?)^-{3}[ \t]*\r?$\n?", re.DOTALL | re.MULTILINE)


def parse(path: str | os.PathLike, options: MarkdownOptions | None = None) -> MarkdownFile:
    """
    Load a Markdown file.

    Args:
        path: Full path to the file, usually as returned by resolve()
        options: Markdown conversion options kept on the result for parse_content()

    Returns:
        MarkdownFile with meta, raw_content and file statistics

    Raises:
        DocumentReadError: If the file cannot be read or is not valid UTF-8
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
        st = path.stat()
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentReadError(path, str(e)) from e

    meta, body = split_front_matter(text)

    return MarkdownFile(
        path=path,
        meta=meta,
        raw_content=body.lstrip("\r\n"),
        markdown_options=options,
        checksum=hashlib.sha1(text.encode("utf-8")).hexdigest(),
        size=st.st_size,
        created=datetime.fromtimestamp(st.st_ctime),
        modified=datetime.fromtimestamp(st.st_mtime),
    )


def split_front_matter(text: str) -> tuple[dict | None, str]:
    """
    Split YAML front matter from the Markdown body.

    Accepts the Jekyll layout ("---" / yaml / "---" / body) and the bare
    layout (yaml / "---" / body). A "---" line is also a Markdown horizontal
    rule, so a block that is not a YAML mapping is treated as body text.

    Returns:
        (meta, body); meta is None when the text has no front matter
    """
    text = text.lstrip("\ufeff")

    if frontmatter.checks(text):
        try:
            post = frontmatter.loads(text)
        except yaml.YAMLError:
            logger.debug("Ignoring malformed front matter")
            return None, text
        if isinstance(post.metadata, dict) and post.metadata:
            return dict(post.metadata), post.content
        return None, text

    m = _BARE_FRONTMATTER_RE.match(text)
    if m is None or not m.group("meta").strip():
        return None, text

    try:
        data = yaml.safe_load(m.group("meta"))
    except yaml.YAMLError:
        logger.debug("Ignoring malformed front matter")
        return None, text

    if not isinstance(data, dict) or not data:
        return None, text
    return data, text[m.end():]
