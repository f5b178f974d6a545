"""Typer CLI for timing marked scripts from the command line."""

from __future__ import annotations

import logging
import runpy
import sys
from pathlib import Path

import typer
from pydantic import ValidationError

from . import clear, get_tracker, stats
from .report import load_snapshot, render_report

logger = logging.getLogger("time_stats.cli")

app = typer.Typer(help="Collect and display timings for code instrumented with time_stats.mark().")


@app.command(context_settings={"allow_extra_args": True, "ignore_unknown_options": True})
def run(
    ctx: typer.Context,
    script: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="Python script to execute; remaining arguments are passed to it.",
    ),
    json_out: Path | None = typer.Option(
        None,
        "--json-out",
        "-o",
        help="Also write the timing snapshot as JSON to this path.",
    ),
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level for time_stats loggers."),
) -> None:
    """Run SCRIPT as __main__ and print the accumulated timings to stderr."""

    level = log_level.upper()
    if level not in logging.getLevelNamesMapping():
        raise typer.BadParameter(f"Unknown log level {log_level!r}.", param_hint="--log-level")
    logging.basicConfig(level=level)

    clear()
    # An uncaught error in the script still gets its report before propagating.
    exit_code = 1
    try:
        exit_code = _run_script(script, list(ctx.args))
    finally:
        _report_timings(script, exit_code, json_out)

    if exit_code:
        raise typer.Exit(code=exit_code)


@app.command()
def show(
    snapshot_path: Path = typer.Argument(..., help="Snapshot JSON written by `run --json-out`."),
) -> None:
    """Print a saved snapshot in the same format as stats()."""

    try:
        snapshot = load_snapshot(snapshot_path)
    except OSError as exc:
        raise typer.BadParameter(f"Cannot read snapshot: {exc}") from exc
    except ValidationError as exc:
        raise typer.BadParameter(f"Invalid snapshot payload: {exc}") from exc

    if snapshot.is_empty:
        typer.echo("No intervals recorded.", err=True)
        return

    typer.echo("\n".join(render_report(snapshot)))


def _report_timings(script: Path, exit_code: int, json_out: Path | None) -> None:
    stats()

    snapshot = get_tracker().snapshot()
    logger.info(
        "script=%s files=%d intervals=%d exit_code=%d",
        script,
        len(snapshot.sources),
        sum(len(source.intervals) for source in snapshot.sources),
        exit_code,
    )

    if json_out is not None:
        json_out.parent.mkdir(parents=True, exist_ok=True)
        json_out.write_text(snapshot.model_dump_json(indent=2), encoding="utf-8")
        typer.echo(f"Wrote timing snapshot → {json_out}", err=True)


def _run_script(script: Path, args: list[str]) -> int:
    saved_argv = sys.argv
    sys.argv = [str(script), *args]
    try:
        runpy.run_path(str(script), run_name="__main__")
    except SystemExit as exc:
        return _exit_code(exc.code)
    finally:
        sys.argv = saved_argv
    return 0


def _exit_code(code: object) -> int:
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    typer.echo(str(code), err=True)
    return 1


if __name__ == "__main__":
    app()
