"""Markdown server - resolves URL paths to documents and saves them back"""

import logging
import os
from pathlib import Path

from .document import MarkdownOptions, target_path, write_document
from .document.parser import parse
from .exceptions import DocumentNotFoundError
from .models import MarkdownFile
from .resolver import ResolverOptions, resolve

logger = logging.getLogger("mdserve.server")


class MarkdownServer:
    """Serves Markdown documents stored under a root directory"""

    def __init__(
        self,
        root_directory: str | os.PathLike | None,
        markdown_options: MarkdownOptions | None = None,
        resolver_options: ResolverOptions | None = None,
    ):
        if not root_directory or not Path(root_directory).is_dir():
            raise ValueError('"root_directory" not specified or is invalid')

        self.root_directory = Path(os.path.abspath(root_directory))
        self.markdown_options = markdown_options
        self.resolver_options = resolver_options or ResolverOptions()

    def resolve(self, url_path: str) -> Path | None:
        """Resolve a URL path against the root directory"""
        return resolve(url_path, self.root_directory, self.resolver_options)

    def get(self, url_path: str) -> MarkdownFile:
        """
        Load the document matching url_path.

        Raises:
            DocumentNotFoundError: If no file matches
            DocumentReadError: If the matching file cannot be read
        """
        file_path = self.resolve(url_path)
        if file_path is None:
            raise DocumentNotFoundError(url_path)
        return parse(file_path, self.markdown_options)

    def save(self, url_path: str, raw_content: str | None, meta: dict | None = None) -> MarkdownFile:
        """
        Create or overwrite the document for url_path.

        An existing document matching url_path is overwritten in place;
        otherwise a new file is created at the conventional location
        (e.g. "/new/blah/" -> new/blah/index.md).

        Returns:
            The saved document, re-read from disk
        """
        if not raw_content:
            raise ValueError("raw_content is required")

        file_path = self.resolve(url_path)
        if file_path is None:
            file_path = target_path(url_path, self.root_directory, self.resolver_options)
            logger.info("Creating document %s", url_path)
        else:
            logger.info("Updating document %s", url_path)

        write_document(file_path, raw_content, meta)
        return parse(file_path, self.markdown_options)
