"""Target path computation and document writing"""

import os
from pathlib import Path
from urllib.parse import unquote

import frontmatter

from ..exceptions import InvalidPathError
from ..resolver import DEFAULT_OPTIONS, ResolverOptions


def target_path(
    url_path: str,
    root_directory: str | os.PathLike,
    options: ResolverOptions | None = None,
) -> Path:
    """
    Compute where a document for url_path lives, whether or not it exists yet.

    Uses the resolver's naming conventions but performs no fallback search:
    "/a/b" maps to <root>/a/b.md and "/a/" to <root>/a/index.md.

    Raises:
        InvalidPathError: If url_path lacks a leading slash or escapes the root
    """
    if not isinstance(url_path, str) or not url_path.startswith("/"):
        raise InvalidPathError(f"URL path must start with '/': {url_path!r}")

    opts = options or DEFAULT_OPTIONS
    root = Path(os.path.abspath(root_directory))

    path = unquote(url_path)[1:]
    if "\x00" in path:
        raise InvalidPathError(f"URL path contains a NUL byte: {url_path!r}")

    if path == "" or path.endswith("/"):
        path += opts.default_page_name
    if not (opts.use_extension_in_url and path.endswith(opts.file_extension)):
        path += opts.file_extension

    target = Path(os.path.normpath(os.path.join(root, path)))
    if root not in target.parents:
        raise InvalidPathError(f"URL path escapes the root directory: {url_path}")
    return target


def write_document(path: Path, raw_content: str | None, meta: dict | None = None) -> None:
    """
    Write a document, creating intermediate directories.

    With meta, the file starts with a "---" delimited YAML block followed by
    the body; otherwise only the body is written.
    """
    if not raw_content:
        raise ValueError("raw_content is required")

    if meta:
        post = frontmatter.Post(raw_content)
        post.metadata.update(meta)
        text = frontmatter.dumps(post) + "\n"
    else:
        text = raw_content

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
