"""
tabstats CLI — analyse CSV text and manage stored analyses.

Commands
--------
- ``analyze`` — print statistics for a file without storing it.
- ``ingest`` — analyse a file and store the result.
- ``show`` / ``profile`` / ``delete`` — work on a stored analysis by id.
- ``list`` — stored analyses.

Usage::

    tabstats analyze drivers.csv --profile
    tabstats --db ./stats.db ingest drivers.csv
    tabstats --db ./stats.db profile 1
    cat drivers.csv | tabstats --json ingest -

Exit codes: ``2`` for rejected input, ``1`` for an unknown analysis id.
"""

from __future__ import annotations

import contextlib
import json
import logging
import sys
from collections.abc import Iterator
from typing import Any

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tabstats.analysis import analyze_basic, analyze_profile
from tabstats.api import AnalysisService, init_service
from tabstats.config import TabstatsConfig
from tabstats.errors import AnalysisNotFoundError, InvalidInputError
from tabstats.models.stats import ColumnProfile, DatasetSummary
from tabstats.validation import default_validators, run_validators

console = Console()
err_console = Console(stderr=True)

EXIT_NOT_FOUND = 1
EXIT_INVALID_INPUT = 2


# ── Helpers ──────────────────────────────────────────────────────────

def _read_text(source: str, encoding: str) -> str:
    """Read *source* (a path or ``-``) without newline translation."""
    try:
        if source == "-":
            return click.get_binary_stream("stdin").read().decode(encoding)
        with open(source, encoding=encoding, newline="") as f:
            return f.read()
    except UnicodeDecodeError as exc:
        raise InvalidInputError(
            f"Input is not valid {encoding} text"
        ) from exc


@contextlib.contextmanager
def _handle_errors() -> Iterator[None]:
    try:
        yield
    except InvalidInputError as exc:
        err_console.print(f"[bold red]Rejected:[/] {escape(str(exc))}")
        sys.exit(EXIT_INVALID_INPUT)
    except AnalysisNotFoundError as exc:
        err_console.print(f"[bold red]Not found:[/] {escape(str(exc))}")
        sys.exit(EXIT_NOT_FOUND)


def _service(ctx: click.Context) -> AnalysisService:
    obj = ctx.obj
    if obj.get("service") is None:
        service = init_service(obj["db_path"], obj["config"])
        ctx.call_on_close(service.store.close)
        obj["service"] = service
    return obj["service"]


def _emit_json(payload: Any) -> None:
    click.echo(json.dumps(payload, indent=2))


def _print_summary(summary: DatasetSummary) -> None:
    title = "Analysis" if summary.analysis_id is None else f"Analysis #{summary.analysis_id}"
    console.print(
        f"[bold blue]{title}[/]  rows={summary.number_of_rows}"
        f"  columns={summary.number_of_columns}"
        f"  characters={summary.total_characters}"
        f"  created={summary.created_at.isoformat()}"
    )

    table = Table(title="Column statistics")
    table.add_column("#", style="dim")
    table.add_column("Column")
    table.add_column("Nulls", justify="right")
    table.add_column("Unique", justify="right")
    for i, stats in enumerate(summary.column_statistics, 1):
        table.add_row(str(i), escape(stats.column_name), str(stats.null_count), str(stats.unique_count))
    console.print(table)


def _fmt(value: float | None) -> str:
    return "-" if value is None else f"{value:g}"


def _print_profiles(profiles: list[ColumnProfile]) -> None:
    table = Table(title="Column profiles")
    table.add_column("#", style="dim")
    table.add_column("Column")
    table.add_column("Type")
    table.add_column("Nulls", justify="right")
    table.add_column("Unique", justify="right")
    table.add_column("Min", justify="right")
    table.add_column("Max", justify="right")
    table.add_column("Mean", justify="right")
    for i, p in enumerate(profiles, 1):
        table.add_row(
            str(i), escape(p.column_name), p.inferred_type.value,
            str(p.null_count), str(p.unique_count),
            _fmt(p.min), _fmt(p.max), _fmt(p.mean),
        )
    console.print(table)


# ── Group ────────────────────────────────────────────────────────────

@click.group()
@click.version_option(package_name="tabstats")
@click.option("--db", "db_path", default=None, help="DuckDB file (default: $TABSTATS_DB_PATH or tabstats.db).")
@click.option("--json", "as_json", is_flag=True, help="Emit JSON instead of tables.")
@click.option("-v", "--verbose", is_flag=True, help="Log at INFO level.")
@click.pass_context
def main(ctx: click.Context, db_path: str | None, as_json: bool, verbose: bool) -> None:
    """tabstats — CSV statistics and column profiling."""
    load_dotenv()
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s — %(message)s",
        datefmt="%H:%M:%S",
    )
    config = TabstatsConfig.from_env()
    ctx.obj = {
        "config": config,
        "db_path": db_path or config.duckdb_path,
        "as_json": as_json,
        "service": None,
    }


# ── analyze ──────────────────────────────────────────────────────────

@main.command("analyze")
@click.argument("source", type=click.Path(exists=True, dir_okay=False, allow_dash=True))
@click.option("--profile", "with_profile", is_flag=True, help="Also infer column types and numeric summaries.")
@click.option("--encoding", default="utf-8", show_default=True)
@click.pass_context
def analyze(ctx: click.Context, source: str, with_profile: bool, encoding: str) -> None:
    """Analyse SOURCE (a file or '-') without storing it."""
    config: TabstatsConfig = ctx.obj["config"]
    with _handle_errors():
        raw_text = _read_text(source, encoding)
        run_validators(raw_text, default_validators(config))
        summary = analyze_basic(raw_text, delimiter=config.delimiter)
        profiles = None
        if with_profile:
            profiles = analyze_profile(
                raw_text,
                delimiter=config.delimiter,
                max_workers=config.profile_max_workers,
            )

    if ctx.obj["as_json"]:
        payload = summary.to_dict()
        if profiles is not None:
            payload["column_profiles"] = [p.to_dict() for p in profiles]
        _emit_json(payload)
        return

    _print_summary(summary)
    if profiles is not None:
        _print_profiles(profiles)


# ── ingest ───────────────────────────────────────────────────────────

@main.command("ingest")
@click.argument("source", type=click.Path(exists=True, dir_okay=False, allow_dash=True))
@click.option("--encoding", default="utf-8", show_default=True)
@click.pass_context
def ingest(ctx: click.Context, source: str, encoding: str) -> None:
    """Analyse SOURCE (a file or '-') and store the result."""
    with _handle_errors():
        raw_text = _read_text(source, encoding)
        summary = _service(ctx).ingest(raw_text)

    if ctx.obj["as_json"]:
        _emit_json(summary.to_dict())
    else:
        _print_summary(summary)


# ── show / profile / delete ──────────────────────────────────────────

@main.command("show")
@click.argument("analysis_id", type=int)
@click.pass_context
def show(ctx: click.Context, analysis_id: int) -> None:
    """Show the stored statistics of ANALYSIS_ID."""
    with _handle_errors():
        summary = _service(ctx).get_analysis(analysis_id)

    if ctx.obj["as_json"]:
        _emit_json(summary.to_dict())
    else:
        _print_summary(summary)


@main.command("profile")
@click.argument("analysis_id", type=int)
@click.pass_context
def profile(ctx: click.Context, analysis_id: int) -> None:
    """Infer column types and numeric summaries for ANALYSIS_ID."""
    with _handle_errors():
        profiles = _service(ctx).get_column_profiles(analysis_id)

    if ctx.obj["as_json"]:
        _emit_json([p.to_dict() for p in profiles])
    else:
        _print_profiles(profiles)


@main.command("delete")
@click.argument("analysis_id", type=int)
@click.pass_context
def delete(ctx: click.Context, analysis_id: int) -> None:
    """Delete ANALYSIS_ID and its column statistics."""
    with _handle_errors():
        _service(ctx).delete_analysis(analysis_id)

    if ctx.obj["as_json"]:
        _emit_json({"deleted": analysis_id})
    else:
        console.print(f"[bold green]✓[/] Deleted analysis {analysis_id}")


# ── list ─────────────────────────────────────────────────────────────

@main.command("list")
@click.pass_context
def list_analyses(ctx: click.Context) -> None:
    """List stored analyses."""
    summaries = _service(ctx).list_analyses()

    if ctx.obj["as_json"]:
        _emit_json([s.to_dict() for s in summaries])
        return

    table = Table(title="Stored analyses")
    table.add_column("ID", justify="right")
    table.add_column("Rows", justify="right")
    table.add_column("Columns", justify="right")
    table.add_column("Characters", justify="right")
    table.add_column("Created")
    for s in summaries:
        table.add_row(
            str(s.analysis_id), str(s.number_of_rows), str(s.number_of_columns),
            str(s.total_characters), s.created_at.isoformat(),
        )
    console.print(table)
    console.print(f"{len(summaries)} analysis(es)")


if __name__ == "__main__":
    main()
