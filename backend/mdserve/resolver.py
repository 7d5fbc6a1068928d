"""URL path → Markdown file resolution.

Maps a URL path such as ``/space-in-name/sub/more-spaces`` onto a file under a
root directory, tolerating folders and files whose names contain spaces while
the URL uses dashes.
"""

import errno
import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator
from urllib.parse import unquote

logger = logging.getLogger("mdserve.resolver")

# Probe failures meaning "nothing there" rather than an environment problem
_ABSENT_ERRNOS = frozenset({errno.ENOENT, errno.ENOTDIR, errno.ENAMETOOLONG, errno.ELOOP})


@dataclass(frozen=True)
class ResolverOptions:
    """Naming conventions used to map URL paths onto files"""

    default_page_name: str = "index"
    file_extension: str = "md"
    use_extension_in_url: bool = False

    def __post_init__(self):
        if not self.file_extension.startswith("."):
            object.__setattr__(self, "file_extension", f".{self.file_extension}")


DEFAULT_OPTIONS = ResolverOptions()


def resolve(
    url_path: str | None,
    root_directory: str | os.PathLike,
    options: ResolverOptions | None = None,
) -> Path | None:
    """
    Resolve a URL path to an existing Markdown file under root_directory.

    Resolution order, first hit wins:
    1. "/" maps to the default page at the root and nothing else
    2. with use_extension_in_url, a path already ending in the extension is checked as-is
    3. <path><ext> verbatim
    4. <path><ext> with every dash turned into a space
    5. segment by segment, literal name first, then the de-dashed name

    Args:
        url_path: URL path, must start with "/"; may be percent-encoded
        root_directory: Directory holding the documents
        options: Naming conventions, defaults to ResolverOptions()

    Returns:
        Absolute path to the matching file, or None when nothing matches
    """
    if not isinstance(url_path, str) or not url_path.startswith("/"):
        return None

    opts = options or DEFAULT_OPTIONS
    ext = opts.file_extension
    root = Path(os.path.abspath(root_directory))

    if url_path == "/":
        return _accept(root, _join(root, opts.default_page_name + ext))

    path = unquote(url_path)[1:]
    if "\x00" in path:
        return None

    if path.endswith("/"):
        path += opts.default_page_name

    if opts.use_extension_in_url and path.endswith(ext):
        return _log_result(url_path, _accept(root, _join(root, path)))

    found = _accept(root, _join(root, path + ext))
    if found is None:
        found = _accept(root, _join(root, path.replace("-", " ") + ext))
    if found is None:
        found = _walk(root, path.split("/"), ext)

    return _log_result(url_path, found)


def _walk(root: Path, segments: list[str], ext: str) -> Path | None:
    """Descend one segment at a time; an unmatched segment ends the walk."""
    current = root
    last = len(segments) - 1

    for i, segment in enumerate(segments):
        if i == last:
            segment += ext

        for name in _segment_variants(segment):
            candidate = _join(current, name)
            if _within(root, candidate) and _probe(candidate) is not None:
                current = candidate
                break
        else:
            logger.debug("Segment %r has no match under %s", segment, current)
            return None

    if not current.name.endswith(ext):
        return None
    return _accept(root, current)


def _segment_variants(segment: str) -> Iterator[str]:
    """Literal name first, then the slug form with dashes read as spaces."""
    yield segment
    spaced = segment.replace("-", " ")
    if spaced != segment:
        yield spaced


def _join(base: Path, relative: str) -> Path:
    return Path(os.path.normpath(os.path.join(base, relative)))


def _within(root: Path, candidate: Path) -> bool:
    return candidate == root or root in candidate.parents


def _probe(path: Path) -> os.stat_result | None:
    """stat() a path, None when it does not exist. Other OS errors propagate."""
    try:
        return os.stat(path)
    except OSError as e:
        if e.errno in _ABSENT_ERRNOS:
            return None
        raise


def _accept(root: Path, candidate: Path) -> Path | None:
    """Return candidate if it is a regular file inside root."""
    if not _within(root, candidate):
        return None
    st = _probe(candidate)
    if st is None or not stat.S_ISREG(st.st_mode):
        return None
    return candidate


def _log_result(url_path: str, found: Path | None) -> Path | None:
    if found is None:
        logger.debug("No document for %s", url_path)
    else:
        logger.debug("Resolved %s -> %s", url_path, found)
    return found
