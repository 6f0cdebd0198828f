"""
Command-Line Interface

CLI commands for pii-resolver operations.

Commands:
    pii-resolver scan     - Scan a file or directory for PII
    pii-resolver resolve  - Resolve a saved corpus into groups and conflicts
    pii-resolver stats    - Display corpus statistics

Usage:
    # Scan a directory
    pii-resolver scan ./documents --output ./data --pattern "*.txt"

    # Resolve only the uncertain findings
    pii-resolver resolve data/pii-extraction-results-1700000000000.json --ambiguous-only

    # Resolution defaults from a config file
    pii-resolver resolve data/pii-extraction-results-1700000000000.json --config pii_resolver.toml

    # Show stats
    pii-resolver stats data/pii-extraction-results-1700000000000.json
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn
from rich.table import Table

from pii_resolver import __version__
from pii_resolver.errors import PIIResolverError

__all__ = ["main", "app"]

app = typer.Typer(
    name="pii-resolver",
    help="Find PII in documents and reconcile it across a corpus",
    no_args_is_help=True,
)
console = Console()

_SEVERITY_STYLE = {"high": "red", "medium": "yellow", "low": "dim"}


def _load_config(config_file: Optional[Path], **overrides):
    """Build a ResolverConfig from an optional TOML file plus CLI overrides."""
    from pii_resolver.config import ResolverConfig

    config = ResolverConfig.from_file(config_file) if config_file else ResolverConfig()
    return config.with_overrides(**overrides) if overrides else config


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"pii-resolver {__version__}")
        raise typer.Exit()


@app.callback()
def _main(
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable debug logging",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Find PII in documents and reconcile it across a corpus."""
    load_dotenv()
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.command()
def scan(
    path: Path = typer.Argument(
        ...,
        help="File or directory to scan",
        exists=True,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output", "-o",
        help="Directory for the results JSON (default: config output_dir)",
    ),
    pattern: Optional[str] = typer.Option(
        None,
        "--pattern", "-p",
        help="Glob pattern for directory scans",
    ),
    chunk_size: Optional[int] = typer.Option(
        None,
        "--chunk-size",
        help="Characters per chunk",
    ),
    overlap: Optional[float] = typer.Option(
        None,
        "--overlap",
        help="Overlap percentage between chunks",
    ),
    concurrency: Optional[int] = typer.Option(
        None,
        "--concurrency", "-c",
        help="Max concurrent oracle calls per document",
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        help="TOML configuration file",
        exists=True,
        dir_okay=False,
    ),
) -> None:
    """Scan documents for PII and save the results."""
    from pii_resolver.api.scanner import PIIScanner, build_extraction_results
    from pii_resolver.storage import save_extraction_results

    overrides = {
        key: value
        for key, value in {
            "chunk_size": chunk_size,
            "overlap_percentage": overlap,
            "extraction_concurrency": concurrency,
            "file_pattern": pattern,
        }.items()
        if value is not None
    }
    config = _load_config(config_file, **overrides)
    scanner = PIIScanner(config)

    async def _run():
        if path.is_file():
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=console,
            ) as progress:
                task = progress.add_task(f"Scanning {path.name}...")
                document = await scanner.scan_file(path)
                progress.update(task, completed=True)

            if document.errors:
                console.print("[yellow]Warnings:[/]")
                for error in document.errors:
                    console.print(f"  - {error}")

            return build_extraction_results([document.to_record()])

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            console=console,
        ) as progress:
            task = progress.add_task("Scanning...", total=None)

            def on_progress(file_name: str, current: int, total: int) -> None:
                progress.update(
                    task,
                    description=f"Scanning {file_name}",
                    completed=current - 1,
                    total=total,
                )

            results = await scanner.scan_directory(path, on_progress=on_progress)
            progress.update(task, completed=results.total_files_processed)
        return results

    try:
        results = asyncio.run(_run())
    except (PIIResolverError, OSError) as e:
        console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(code=1)

    output_path = save_extraction_results(results, output or config.output_dir)

    console.print()
    console.print(Panel(
        f"[green]Scanned {results.total_files_processed} files[/]\n\n"
        f"  PII candidates: {results.total_pii_found}\n"
        f"  Results: {output_path}",
        title="Scan Complete",
    ))


@app.command()
def resolve(
    results_file: Path = typer.Argument(
        ...,
        help="Extraction results JSON",
        exists=True,
        dir_okay=False,
    ),
    ambiguous_only: Optional[bool] = typer.Option(
        None,
        "--ambiguous-only/--all-confidences",
        help="Only resolve medium/low confidence candidates (default: config)",
    ),
    min_confidence: Optional[str] = typer.Option(
        None,
        "--min-confidence",
        help="Drop candidates below this level: low, medium, high (default: config)",
    ),
    normalize: Optional[bool] = typer.Option(
        None,
        "--normalize/--no-normalize",
        help="Trim and lowercase values before grouping (default: config)",
    ),
    transitive: Optional[bool] = typer.Option(
        None,
        "--transitive/--one-hop",
        help="Merge type labels across multi-hop chains (default: config)",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the full resolution result as JSON",
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        help="TOML configuration file with [resolution] defaults",
        exists=True,
        dir_okay=False,
    ),
) -> None:
    """Group, merge and flag PII across a saved corpus."""
    from pydantic import ValidationError

    from pii_resolver.api.convenience import resolve_file

    overrides = {
        key: value
        for key, value in {
            "ambiguous_only": ambiguous_only,
            "min_confidence": min_confidence,
            "normalize_values": normalize,
            "transitive_canonical": transitive,
        }.items()
        if value is not None
    }
    try:
        options = _load_config(config_file).resolution_options(**overrides)
    except ValidationError as e:
        console.print(f"[red]Error:[/] invalid resolution options: {e.errors()[0]['msg']}")
        raise typer.Exit(code=2)

    try:
        result = resolve_file(results_file, options)
    except PIIResolverError as e:
        console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(result.model_dump_json(indent=2))
        return

    summary = result.summary
    console.print(Panel(
        f"  Occurrences: {summary.total_ambiguous_candidates}\n"
        f"  Value groups: {summary.total_value_groups}\n"
        f"  Type groups: {summary.total_type_groups}\n"
        f"  Canonical types: {summary.total_canonical_types}\n"
        f"  Identity groups: {summary.total_identity_groups}\n"
        f"  Conflicts: {summary.total_conflicts}",
        title="Resolution Summary",
    ))

    schema = Table(title="Canonical Schema")
    schema.add_column("Type", style="cyan")
    schema.add_column("Also Seen As")
    schema.add_column("Occurrences", justify="right", style="green")
    schema.add_column("Values", justify="right")
    for entry in sorted(result.canonical_schema.values(), key=lambda c: -c.total_occurrences):
        others = [t for t in entry.all_type_names if t != entry.canonical_type]
        schema.add_row(
            entry.canonical_type,
            ", ".join(others),
            str(entry.total_occurrences),
            str(entry.unique_values_count),
        )
    console.print(schema)

    for conflict_type, title in (
        ("value_type_mismatch", "Value Conflicts (same value, different types)"),
        ("type_value_mismatch", "Type Conflicts (same type, different values)"),
    ):
        conflicts = result.conflicts_of(conflict_type)
        if not conflicts:
            continue
        table = Table(title=title)
        table.add_column("Severity")
        table.add_column("Description")
        table.add_column("Files", style="dim")
        for conflict in conflicts:
            style = _SEVERITY_STYLE[conflict.severity]
            table.add_row(
                f"[{style}]{conflict.severity}[/]",
                conflict.description,
                ", ".join(conflict.files),
            )
        console.print(table)

    low = result.conflicts_of("confidence_issue")
    if low:
        console.print(f"[dim]{len(low)} low-confidence findings[/]")

    shared = result.identity_groups.shared()
    if shared:
        table = Table(title="Shared Identities")
        table.add_column("Field", style="cyan")
        table.add_column("Value")
        table.add_column("Files", justify="right", style="green")
        for group in shared:
            table.add_row(group.field, group.value, str(group.count))
        console.print(table)


@app.command()
def stats(
    results_file: Path = typer.Argument(
        ...,
        help="Extraction results JSON",
        exists=True,
        dir_okay=False,
    ),
) -> None:
    """Display corpus statistics."""
    from pii_resolver.storage import ExtractionReader

    reader = ExtractionReader()
    try:
        reader.load_from_file(results_file)
    except PIIResolverError as e:
        console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(code=1)

    corpus = reader.get_statistics()

    table = Table(title=f"Corpus: {results_file.name}")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", justify="right", style="green")
    table.add_row("Files", str(corpus.total_files))
    table.add_row("PII candidates", str(corpus.total_pii_candidates))
    table.add_row("High confidence", str(corpus.pii_by_confidence.high))
    table.add_row("Medium confidence", str(corpus.pii_by_confidence.medium))
    table.add_row("Low confidence", str(corpus.pii_by_confidence.low))
    console.print(table)

    by_type = Table(title="PII Types")
    by_type.add_column("Type", style="cyan")
    by_type.add_column("Count", justify="right", style="green")
    for pii_type, count in sorted(corpus.pii_by_type.items(), key=lambda kv: -kv[1]):
        by_type.add_row(pii_type, str(count))
    console.print(by_type)


def main() -> None:
    """Entry point for the CLI."""
    app()
