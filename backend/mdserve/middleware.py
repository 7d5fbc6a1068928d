"""HTTP middleware: document serving and request observability"""

import inspect
import logging
import os
import time
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable
from urllib.parse import quote

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from fastapi.templating import Jinja2Templates
from starlette.concurrency import run_in_threadpool
from starlette.middleware.base import BaseHTTPMiddleware

from .document import MarkdownOptions
from .exceptions import DocumentNotFoundError, DocumentReadError
from .models import MarkdownFile
from .resolver import ResolverOptions
from .server import MarkdownServer

logger = logging.getLogger("mdserve.api")


# === Pre-parse modes ===

@dataclass(frozen=True)
class DefaultPreParse:
    """Views receive the document and convert its content themselves"""


@dataclass(frozen=True)
class EagerPreParse:
    """Views also receive the converted HTML as parsed_content"""


@dataclass(frozen=True)
class CustomPreParse:
    """Views receive whatever transform returns for the document"""
    transform: Callable[[MarkdownFile], dict]


PreParseMode = DefaultPreParse | EagerPreParse | CustomPreParse

# (document, request) -> Response, or an awaitable of one
DocumentHandler = Callable[[MarkdownFile, Request], Any]


@dataclass
class MiddlewareOptions:
    """Configuration of MarkdownMiddleware"""
    root_directory: str | os.PathLike | None
    view: str | None = None
    templates_dir: str | os.PathLike | None = None
    pre_parse: PreParseMode = field(default_factory=DefaultPreParse)
    handler: DocumentHandler | None = None
    markdown_options: MarkdownOptions | None = None
    resolver_options: ResolverOptions | None = None
    # Paths under these prefixes are never looked up as documents
    exclude_prefixes: tuple[str, ...] = ()


def request_path(request: Request) -> str:
    """Request path as sent by the client, percent escapes intact"""
    raw_path = request.scope.get("raw_path")
    if raw_path is None:
        return quote(request.scope["path"])
    return raw_path.decode("latin-1").split("?", 1)[0]


class MarkdownMiddleware(BaseHTTPMiddleware):
    """
    Serves Markdown documents for GET requests whose path resolves to a file.

    Requests that do not resolve, non-GET requests and requests under one of
    the excluded prefixes are passed on to the application unchanged. A
    matching document is answered with, in order of precedence:
    - the configured handler's response
    - the configured view rendered with the pre-parse view model
    - a JSON representation including parsed_content

    Conversion, view models and sync handlers run in the thread pool.
    """

    def __init__(self, app, options: MiddlewareOptions | None = None):
        super().__init__(app)
        if options is None:
            raise ValueError('"options" are required')

        self.options = options
        self.server = MarkdownServer(
            options.root_directory,
            markdown_options=options.markdown_options,
            resolver_options=options.resolver_options,
        )

        self.templates: Jinja2Templates | None = None
        if options.view:
            if options.templates_dir is None:
                raise ValueError('"templates_dir" is required when "view" is set')
            self.templates = Jinja2Templates(directory=str(options.templates_dir))

    def is_excluded(self, path: str) -> bool:
        return any(
            path == prefix or path.startswith(prefix.rstrip("/") + "/")
            for prefix in self.options.exclude_prefixes
        )

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.method != "GET" or self.is_excluded(request.scope["path"]):
            return await call_next(request)

        url_path = request_path(request)
        try:
            document = await run_in_threadpool(self.server.get, url_path)
        except DocumentNotFoundError:
            return await call_next(request)
        except DocumentReadError as e:
            request.state.served_by = "document"
            logger.error(f"{url_path}: {e}")
            return JSONResponse(status_code=500, content={"detail": "Document could not be read"})

        request.state.served_by = "document"

        handler = self.options.handler
        if handler is not None:
            if inspect.iscoroutinefunction(handler):
                return await handler(document, request)
            response = await run_in_threadpool(handler, document, request)
            if inspect.isawaitable(response):
                response = await response
            return response

        if self.templates is None:
            content = await run_in_threadpool(document.to_dict, include_html=True)
            return JSONResponse(content)

        return await run_in_threadpool(self.render_view, document, request)

    def render_view(self, document: MarkdownFile, request: Request) -> Response:
        return self.templates.TemplateResponse(
            request,
            _template_name(self.options.view),
            build_view_model(document, self.options.pre_parse),
        )


def build_view_model(document: MarkdownFile, mode: PreParseMode) -> dict:
    """Build the template context for a document according to the pre-parse mode"""
    if isinstance(mode, CustomPreParse):
        return mode.transform(document)

    model = {"markdown_file": document}
    if isinstance(mode, EagerPreParse):
        model["parsed_content"] = document.parse_content() if document.raw_content else ""
    return model


def _template_name(view: str) -> str:
    return view if Path(view).suffix else f"{view}.html"


class ObservabilityMiddleware(BaseHTTPMiddleware):
    """
    Logs one line per request and tags the response with X-Request-ID.

    The line reads "[request_id] METHOD path -> status served_by (latency)",
    where served_by is "document" when MarkdownMiddleware answered from the
    document root and "passthrough" when the application did. The path is
    logged as sent, percent escapes intact.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())[:8]
        request.state.request_id = request_id
        start_time = time.perf_counter()

        error = None
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
        except Exception as e:
            error = str(e)
            raise
        finally:
            served_by = getattr(request.state, "served_by", "passthrough")
            latency_ms = (time.perf_counter() - start_time) * 1000
            summary = (
                f"[{request_id}] {request.method} {request_path(request)} "
                f"-> {status_code} {served_by} ({latency_ms:.2f}ms)"
            )
            if error:
                logger.error(f"{summary} ERROR: {error}")
            else:
                logger.log(_log_level(status_code), summary)

        response.headers["X-Request-ID"] = request_id
        return response


def _log_level(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


def setup_logging(log_level: str = "INFO") -> None:
    """Configure log format"""
    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
