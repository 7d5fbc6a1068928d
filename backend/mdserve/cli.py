"""CLI tool for mdserve"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.table import Table

from .config import get_settings
from .resolver import ResolverOptions, resolve as resolve_path

app = typer.Typer(
    name="mdserve",
    help="mdserve - serve Markdown documents by URL path",
)
console = Console()


def _resolver_options(
    ext: Optional[str],
    default_page: Optional[str],
    use_extension_in_url: Optional[bool],
) -> ResolverOptions:
    """Settings-based options, overridden by whatever was given on the command line"""
    base = get_settings().resolver_options()
    return ResolverOptions(
        default_page_name=default_page or base.default_page_name,
        file_extension=ext or base.file_extension,
        use_extension_in_url=base.use_extension_in_url if use_extension_in_url is None else use_extension_in_url,
    )


@app.command()
def resolve(
    url_path: str = typer.Argument(..., help="URL path, e.g. /guides/getting-started"),
    root: Optional[Path] = typer.Option(None, "--root", "-r", help="Documents directory"),
    ext: Optional[str] = typer.Option(None, "--ext", help="File extension"),
    default_page: Optional[str] = typer.Option(None, "--default-page", help="Default page name"),
    use_extension_in_url: Optional[bool] = typer.Option(
        None, "--use-extension-in-url/--no-extension-in-url", help="Address files by their full name"
    ),
):
    """Print the file a URL path resolves to"""
    root_directory = root or get_settings().root_directory
    found = resolve_path(url_path, root_directory, _resolver_options(ext, default_page, use_extension_in_url))

    if found is None:
        console.print(f"No document found for {url_path}", style="red", markup=False)
        raise typer.Exit(code=1)

    console.print(str(found), highlight=False, markup=False, soft_wrap=True)


@app.command()
def show(
    url_path: str = typer.Argument(..., help="URL path of the document"),
    root: Optional[Path] = typer.Option(None, "--root", "-r", help="Documents directory"),
    html: bool = typer.Option(False, "--html", help="Print converted HTML instead of Markdown"),
):
    """Show a document's front matter and content"""
    from .exceptions import DocumentNotFoundError, DocumentReadError
    from .server import MarkdownServer

    settings = get_settings()
    try:
        server = MarkdownServer(root or settings.root_directory, resolver_options=settings.resolver_options())
        document = server.get(url_path)
    except (ValueError, DocumentNotFoundError, DocumentReadError) as e:
        console.print(str(e), style="red", markup=False)
        raise typer.Exit(code=1)

    console.print(f"\n[bold]{document.title}[/bold]\n")

    if document.meta:
        table = Table(show_header=True)
        table.add_column("Key", style="cyan")
        table.add_column("Value")
        for key, value in document.meta.items():
            table.add_row(str(key), str(value))
        console.print(table)

    if html:
        console.print(document.parse_content() if document.raw_content else "", highlight=False, markup=False)
    elif document.raw_content:
        console.print(Markdown(document.raw_content))


@app.command()
def doctor():
    """Run environment self-checks"""
    settings = get_settings()
    options = settings.resolver_options()

    console.print("\n[bold]mdserve Doctor[/bold]\n")

    table = Table(show_header=True)
    table.add_column("Check", style="cyan")
    table.add_column("Status")
    table.add_column("Details")

    all_passed = True

    # 1. Root directory
    root_ok = settings.root_directory.is_dir()
    table.add_row(
        "Root Directory",
        "[green]✓[/green]" if root_ok else "[red]✗[/red]",
        str(settings.root_directory),
    )
    if not root_ok:
        all_passed = False

    # 2. Default page
    home = resolve_path("/", settings.root_directory, options) if root_ok else None
    table.add_row(
        "Default Page",
        "[green]✓[/green]" if home else "[yellow]?[/yellow]",
        f"{options.default_page_name}{options.file_extension}" if home else "Not found",
    )

    # 3. Documents
    doc_count = len(list(settings.root_directory.rglob(f"*{options.file_extension}"))) if root_ok else 0
    table.add_row(
        "Documents",
        "[green]✓[/green]" if doc_count else "[yellow]?[/yellow]",
        f"{doc_count} files",
    )

    # 4. Templates
    if settings.view:
        templates_ok = settings.templates_dir is not None and settings.templates_dir.is_dir()
        table.add_row(
            "Templates",
            "[green]✓[/green]" if templates_ok else "[red]✗[/red]",
            str(settings.templates_dir),
        )
        if not templates_ok:
            all_passed = False

    console.print(table)

    if all_passed:
        console.print("\n[green]✓ All checks passed![/green]\n")
    else:
        console.print("\n[red]✗ Some checks failed.[/red]\n")
        raise typer.Exit(code=1)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", "-h"),
    port: Optional[int] = typer.Option(None, "--port", "-p"),
    reload: bool = typer.Option(False, "--reload"),
):
    """Start the document server"""
    import uvicorn

    settings = get_settings()
    host = host or settings.host
    port = port or settings.port

    console.print(f"\n[bold]Starting mdserve[/bold]")
    console.print(f"  Root: {settings.root_directory}")
    console.print(f"  URL: http://{host}:{port}\n")

    uvicorn.run(
        "mdserve.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


if __name__ == "__main__":
    app()
