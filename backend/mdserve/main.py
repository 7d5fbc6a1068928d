"""FastAPI application entry point"""

from fastapi import FastAPI

from . import __version__
from .api import router
from .config import Settings, get_settings
from .document import MarkdownOptions
from .middleware import (
    DefaultPreParse,
    EagerPreParse,
    MarkdownMiddleware,
    MiddlewareOptions,
    ObservabilityMiddleware,
    setup_logging,
)
from .server import MarkdownServer


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure FastAPI application"""
    settings = settings or get_settings()

    setup_logging(log_level=settings.log_level)

    app = FastAPI(
        title="mdserve",
        description="Serve Markdown documents by URL path",
        version=__version__,
    )

    markdown_options = MarkdownOptions(highlight=settings.highlight)
    resolver_options = settings.resolver_options()

    app.state.markdown_server = MarkdownServer(
        settings.root_directory,
        markdown_options=markdown_options,
        resolver_options=resolver_options,
    )

    # Documents are served ahead of the application routes, API paths excluded
    app.add_middleware(
        MarkdownMiddleware,
        options=MiddlewareOptions(
            root_directory=settings.root_directory,
            view=settings.view,
            templates_dir=settings.templates_dir,
            pre_parse=EagerPreParse() if settings.pre_parse == "eager" else DefaultPreParse(),
            markdown_options=markdown_options,
            resolver_options=resolver_options,
            exclude_prefixes=(router.prefix,),
        ),
    )

    # Outermost, records every request
    app.add_middleware(ObservabilityMiddleware)

    app.include_router(router)

    return app


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "mdserve.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=True,
    )
