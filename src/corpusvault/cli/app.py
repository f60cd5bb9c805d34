# src/corpusvault/cli/app.py
"""Command-line interface for corpusvault.

This module provides a thin Typer wrapper around the commands layer.
Each command:
1. Parses args (via Typer)
2. Calls commands module functions
3. Renders results with Rich
"""

from __future__ import annotations

try:
    import typer
    from rich.console import Console
    from rich.markdown import Markdown
    from rich.panel import Panel
    from rich.table import Table
except ImportError as e:
    raise SystemExit(
        "CLI requires additional dependencies.\nInstall with: pip install corpusvault[cli]"
    ) from e

from corpusvault import __version__
from corpusvault.commands import JobInfo, ingest, query, status
from corpusvault.config import load_env_file
from corpusvault.logger import setup_logger

app = typer.Typer(
    name="corpusvault",
    help="corpusvault - Encrypted, relevance-guarded knowledge corpora.",
    no_args_is_help=True,
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"corpusvault {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        help="Log level for library output on stderr.",
    ),
) -> None:
    """corpusvault - Encrypted, relevance-guarded knowledge corpora."""
    load_env_file()
    setup_logger(level=log_level.upper())


def _print_job(job: JobInfo, plain: bool) -> None:
    if job.status == "completed":
        message = (
            f"Ingested {job.file_name}: {job.records_added} records added "
            f"({job.total_records} total)"
        )
        console.print(message if plain else f"[green]{message}[/green]")
    else:
        message = f"Failed {job.file_name}: {job.error or job.status}"
        console.print(message if plain else f"[red]{message}[/red]")


@app.command(name="ingest")
def ingest_cmd(
    corpus_id: str = typer.Argument(..., help="Corpus to add the files to"),
    files: list[str] = typer.Argument(..., help="Files to ingest"),
    contributor: str = typer.Option(
        None,
        "--contributor",
        help="Contributor identity recorded with the upload",
    ),
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """Queue files for ingestion into a corpus and wait for the results."""
    result = ingest.ingest(
        corpus_id,
        files,
        data_dir=data_dir,
        config_path=config_file,
        contributor=contributor,
        on_job_complete=lambda job: _print_job(job, plain),
    )

    if not result.jobs and result.error:
        console.print(f"[red]Error: {result.error}[/red]")
        raise typer.Exit(1)

    summary = f"{result.completed} of {len(result.jobs)} files ingested into {corpus_id}"
    console.print(summary if plain else f"[bold]{summary}[/bold]")

    if not result.success:
        raise typer.Exit(1)


@app.command(name="query")
def query_cmd(
    corpus_id: str = typer.Argument(..., help="Corpus to search"),
    question: str = typer.Argument(..., help="Question to ask"),
    top_k: int = typer.Option(
        None,
        "--top-k",
        "-k",
        help="Number of chunks to retrieve",
    ),
    min_similarity: float = typer.Option(
        None,
        "--min-similarity",
        help="Minimum similarity for a chunk to be used (0 to 1)",
    ),
    caller: str = typer.Option(
        "cli",
        "--caller",
        help="Identity the query is accounted to",
    ),
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """Answer a question from a corpus."""
    result = query.query(
        corpus_id,
        question,
        caller=caller,
        data_dir=data_dir,
        config_path=config_file,
        top_k=top_k,
        min_similarity=min_similarity,
    )

    if not result.success:
        console.print(f"[red]Error: {result.error}[/red]")
        raise typer.Exit(1)

    answer = result.answer or ""
    if plain:
        console.print(f"Answer: {answer}")
    else:
        console.print(Panel(Markdown(answer), title="Answer", border_style="green"))

    if result.sources:
        console.print()
        console.print("Sources:" if plain else "[bold]Sources:[/bold]")
        for i, s in enumerate(result.sources, 1):
            preview = s.content[:100].replace("\n", " ")
            if len(s.content) > 100:
                preview += "..."
            if plain:
                console.print(f"  [{i}] {s.source_file_name} (similarity: {s.similarity:.3f})")
                console.print(f"      {preview}")
            else:
                console.print(
                    f"  [{i}] [cyan]{s.source_file_name}[/cyan] "
                    f"[dim](similarity: {s.similarity:.3f})[/dim]"
                )
                console.print(f"      [dim]{preview}[/dim]")

    usage = (
        f"{result.model_used} | {result.input_tokens} in / {result.output_tokens} out tokens "
        f"| {result.processing_time_ms} ms"
    )
    console.print(usage if plain else f"\n[dim]{usage}[/dim]")


@app.command(name="status")
def status_cmd(
    corpus_id: str = typer.Argument(..., help="Corpus to inspect"),
    data_dir: str = typer.Option(
        None,
        "--data-dir",
        "-d",
        help="Data directory (default: from settings)",
    ),
    config_file: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
    plain: bool = typer.Option(
        False,
        "--plain",
        help="Plain output (no colors/formatting)",
    ),
) -> None:
    """Show statistics for a corpus."""
    result = status.status(corpus_id, data_dir=data_dir, config_path=config_file)

    if not result.success:
        console.print(f"[red]Error: {result.error}[/red]")
        raise typer.Exit(1)

    if result.total_records == 0:
        message = f"Corpus {corpus_id} is empty."
        console.print(message if plain else f"[dim]{message} Run 'corpusvault ingest' first.[/dim]")
        raise typer.Exit(0)

    rows = [
        ("Records", str(result.total_records)),
        ("Files", str(len(result.files))),
        ("Vector dimension", str(result.vector_dimension)),
        ("Snapshot CID", result.snapshot_cid or "-"),
        ("Snapshot corpus", result.snapshot_uuid or "-"),
        ("Last updated", result.last_updated.isoformat() if result.last_updated else "-"),
    ]

    if plain:
        console.print(f"Corpus {corpus_id}:")
        for name, value in rows:
            console.print(f"  {name}: {value}")
        for file_name in result.files:
            console.print(f"  - {file_name}")
    else:
        table = Table(title=f"Corpus {corpus_id}")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="green", justify="right")
        for name, value in rows:
            table.add_row(name, value)
        console.print(table)

        if result.files:
            files_table = Table(title="Files")
            files_table.add_column("Source", style="cyan")
            for file_name in result.files:
                files_table.add_row(file_name)
            console.print(files_table)

    if result.error:
        console.print(f"[yellow]{result.error}[/yellow]")
