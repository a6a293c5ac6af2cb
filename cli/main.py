"""CLI entry point — Typer app for docstore commands.

Usage:
    docstore serve --port 8000
    docstore chunk faq.md --strategy recursive --size 500 --overlap 50
    docstore status
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

app = typer.Typer(
    name="docstore",
    help="Support document store — serve the API, inspect chunking.",
    no_args_is_help=True,
)

console = Console()

_CHUNK_PATH = typer.Argument(..., help="Path to the document to chunk")


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", help="Bind address"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port"),
    import_dir: Path | None = typer.Option(
        None, "--import-dir", "-i", help="Directory to auto-import at startup",
    ),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    from docstore.api.app import create_app
    from docstore.config import load_settings
    from docstore.logging_config import configure_logging

    settings = load_settings()
    if host:
        settings.server.host = host
    if port:
        settings.server.port = port
    if import_dir:
        settings.ingestion.auto_import_dir = str(import_dir)

    configure_logging(settings.log_level)
    console.print(
        f"\n[bold green]Serving[/] on http://{settings.server.host}:{settings.server.port} "
        f"[dim](embeddings: {settings.embedding.provider}, "
        f"llm: {settings.llm.provider or 'none'})[/]\n",
    )
    uvicorn.run(create_app(settings), host=settings.server.host, port=settings.server.port)


@app.command()
def chunk(
    path: Annotated[Path, _CHUNK_PATH],
    strategy: str = typer.Option(
        "fixed", "--strategy", "-s", help="Chunking strategy (fixed, recursive)",
    ),
    size: int = typer.Option(1000, "--size", help="Chunk size in characters"),
    overlap: int = typer.Option(200, "--overlap", help="Overlap in characters"),
) -> None:
    """Chunk a local file and show the result (no embedding)."""
    from docstore.chunking.document import chunk_bytes
    from docstore.chunking.factory import get_chunker
    from docstore.errors import DocStoreError

    if not path.is_file():
        console.print(f"[red]Not a file:[/] {path}")
        raise typer.Exit(code=1)

    try:
        chunker = get_chunker(strategy, chunk_size=size, chunk_overlap=overlap)
        drafts = chunk_bytes(path.read_bytes(), path.name, chunker=chunker)
    except (DocStoreError, ValueError) as exc:
        console.print(f"[red]Error:[/] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc

    table = Table(title=f"{path.name} — {len(drafts)} chunks ({strategy})")
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Chars", justify="right")
    table.add_column("Preview")

    for d in drafts:
        preview = escape(d.content[:60].replace("\n", " "))
        table.add_row(str(d.chunk_index), str(len(d.content)), preview)

    console.print(table)
    console.print(f"[dim]Total chars in chunks: {sum(len(d.content) for d in drafts)}[/]")


@app.command()
def status() -> None:
    """Show system status (available components, effective settings)."""
    from docstore.chunking.factory import available_chunkers
    from docstore.config import load_settings
    from docstore.embeddings.factory import available_providers as emb_providers
    from docstore.llm.factory import available_providers as llm_providers

    settings = load_settings()

    console.print("\n[bold green]support-docstore[/] v0.1.0\n")

    table = Table(title="Available Components")
    table.add_column("Layer", style="cyan")
    table.add_column("Available")

    table.add_row("Chunkers", ", ".join(available_chunkers()))
    table.add_row("Embedding Providers", ", ".join(emb_providers()))
    table.add_row("LLM Providers", ", ".join(llm_providers()))

    console.print(table)

    config = Table(title="Effective Settings")
    config.add_column("Setting", style="cyan")
    config.add_column("Value")

    config.add_row("embedding.provider", settings.embedding.provider)
    config.add_row("embedding.model", settings.embedding.model or "(provider default)")
    config.add_row("chunking", (
        f"{settings.chunking.strategy} "
        f"({settings.chunking.chunk_size}/{settings.chunking.chunk_overlap})"
    ))
    config.add_row("ingestion.max_file_size_bytes", str(settings.ingestion.max_file_size_bytes))
    config.add_row("ingestion.auto_import_dir", settings.ingestion.auto_import_dir or "-")
    config.add_row("retrieval", (
        f"top_k={settings.retrieval.top_k}, min_score={settings.retrieval.min_score}"
    ))
    config.add_row("llm.provider", settings.llm.provider or "-")
    config.add_row("server", f"{settings.server.host}:{settings.server.port}")

    console.print(config)


if __name__ == "__main__":
    app()
