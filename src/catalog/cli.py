"""Command-line interface for running and maintaining the book catalog."""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from src.catalog.runtime.context import get_config

console = Console()

app = typer.Typer(
    name="catalog",
    help="Book catalog CLI - serve the API and manage its database",
    rich_markup_mode="rich",
    no_args_is_help=True,
)


@app.command()
def serve(
    host: str | None = typer.Option(None, help="Host to bind (default: config)"),
    port: int | None = typer.Option(None, help="Port to bind (default: config)"),
    backend: str | None = typer.Option(
        None, help="Book store backend: database or memory (default: config)"
    ),
) -> None:
    """
    🚀 Start the catalog API server.
    """
    import uvicorn

    from src.catalog.api.http.app import create_app

    config = get_config()
    host = host or config.app.host
    port = port or config.app.port

    try:
        application = create_app(store_backend=backend)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1) from e

    console.print(
        Panel.fit(
            f"[bold green]Serving {config.app.title} on http://{host}:{port}[/bold green]",
            border_style="green",
        )
    )
    uvicorn.run(application, host=host, port=port, access_log=False)


@app.command("init-db")
def init_db_command(
    drop: bool = typer.Option(
        False, "--drop", help="Drop existing catalog tables before creating them"
    ),
) -> None:
    """
    🗄️ Create the catalog tables in the configured database.
    """
    from src.catalog.runtime.init_db import init_db

    if drop:
        console.print("[yellow]⚠️  Dropping existing catalog tables[/yellow]")
    init_db(drop=drop)
    console.print(
        f"[green]✅ Database ready at {get_config().database.url}[/green]"
    )


@app.command()
def openapi(
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the document to this file"
    ),
    backend: str | None = typer.Option(
        None, help="Document the routes of this store backend"
    ),
) -> None:
    """
    📄 Print the OpenAPI document of the catalog API.
    """
    from src.catalog.api.http.app import create_app

    document = json.dumps(create_app(store_backend=backend).openapi(), indent=2)
    if output is None:
        typer.echo(document)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(document + "\n", encoding="utf-8")
    console.print(f"[green]✅ OpenAPI document written to {output}[/green]")


if __name__ == "__main__":
    app()
