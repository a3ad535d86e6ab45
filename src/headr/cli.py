"""Root command for headr: argument resolution and dispatch to HeadService."""

from __future__ import annotations

import click
import structlog

from headr import __version__
from headr._command import HeadrCommand
from headr.config.logging import configure_logging
from headr.config.settings import HeadrSettings
from headr.domain.limits import (
    STDIN_NAME,
    HeadRequest,
    LimitConflictError,
    ensure_single_mode,
    resolve_limit,
)
from headr.services.head import HeadService


@click.command(
    name="headr",
    cls=HeadrCommand,
    examples="""\
  headr notes.txt
  headr -n 2 ten.txt
  headr -c 5 ten.txt
  headr a.txt b.txt
  cat log.txt | headr -n 3 -""",
)
@click.version_option(version=__version__, prog_name="headr")
@click.argument("files", nargs=-1, metavar="[FILE]...")
@click.option(
    "-n",
    "--lines",
    type=click.IntRange(min=1),
    default=None,
    metavar="LINES",
    help="Number of lines [default: 10].",
)
@click.option(
    "-c",
    "--bytes",
    "bytes_",
    type=click.IntRange(min=1),
    default=None,
    metavar="BYTES",
    help="Number of bytes (conflicts with --lines).",
)
@click.option("--verbose", is_flag=True, help="Debug logging to stderr.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--config", "config_path", default=None, help="Path to a headr.toml file.")
@click.pass_context
def cli(
    ctx: click.Context,
    files: tuple[str, ...],
    lines: int | None,
    bytes_: int | None,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """Print the first lines or bytes of each FILE.

    With no FILE, or when FILE is -, read standard input.
    """
    # Usage errors win over config errors.
    try:
        ensure_single_mode(lines, bytes_)
    except LimitConflictError as exc:
        raise click.UsageError(str(exc), ctx=ctx) from exc

    flags = {"verbose": verbose, "log_json": log_json}
    settings = HeadrSettings.from_cli(
        config_path=config_path,
        **{key: value for key, value in flags.items() if value},
    )
    configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    limit = resolve_limit(lines, bytes_, default_lines=settings.lines)
    request = HeadRequest(files=files or (STDIN_NAME,), limit=limit)
    report = HeadService(request).run()

    structlog.get_logger("headr.cli").debug(
        "run_complete",
        mode=report.mode,
        sources=len(report.sources),
        failed=report.failed,
        ok=report.ok,
    )
