"""``secern`` — sift STDIN into sink files.

Loads and validates the sink configuration, opens every output file, then
routes STDIN line by line.  ``--validate-only`` stops after compiling the
patterns and prints a summary; ``--gen-template`` writes an example
configuration and exits.

Exit status: 0 on a clean end of input, 1 on any configuration, pattern or
output error, and 128 + signal number when interrupted (after all sink
files have been flushed and closed).
"""

from __future__ import annotations

import logging
import os
import sys
from contextlib import ExitStack
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console

from secern import __version__
from secern.cli._logging import configure_logging
from secern.cli.summary import build_config_table, build_stats_table
from secern.config import RuntimeSettings
from secern.core.driver import StreamDriver, open_input_stream, open_output_stream
from secern.core.shutdown import CancellationToken, install_signal_handlers
from secern.errors import OutputWriteError, SecernError
from secern.loader import load_config
from secern.models.routing import RunStats
from secern.routing.router import build_router, compile_pattern_sets
from secern.template import write_template

logger = logging.getLogger(__name__)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"secern {__version__}")
        raise typer.Exit()


def _abort_run(exc: OutputWriteError) -> NoReturn:
    """End the process at once after a failed write.

    Buffered sink files and stdout are abandoned as they are: ``os._exit``
    skips finalizers, so nothing is flushed after the failure.
    """
    logger.error("%s", exc)
    sys.stderr.flush()
    os._exit(1)


def _validate(config_path: Path, console: Console) -> None:
    router_config = load_config(config_path)
    pattern_sets = compile_pattern_sets(router_config)
    console.print(build_config_table(router_config, pattern_sets))
    logger.info("Configuration is valid: %d sinks", len(router_config.sinks))


def _run(
    config_path: Path,
    settings: RuntimeSettings,
    passthrough: bool,
    token: CancellationToken,
) -> RunStats:
    router_config = load_config(config_path)

    with ExitStack() as stack:
        stdout = (
            stack.enter_context(open_output_stream(settings.encoding))
            if passthrough
            else None
        )
        router = build_router(
            router_config,
            passthrough=stdout,
            buffer_size=settings.buffer_size,
            encoding=settings.encoding,
        )
        stdin = stack.enter_context(open_input_stream(settings.encoding))
        stack.enter_context(install_signal_handlers(token))

        logger.info("Starting data processing.")
        try:
            return StreamDriver(router, token).run(stdin)
        except OutputWriteError as exc:
            _abort_run(exc)


def sift_cmd(
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        metavar="FILE",
        help="Specifies the YAML config file.",
    ),
    gen_template: Optional[Path] = typer.Option(
        None,
        "--gen-template",
        "-g",
        metavar="FILE",
        help="Generates an example YAML config file and exits.",
    ),
    validate_only: bool = typer.Option(
        False,
        "--validate-only",
        "-v",
        help="Validate that the config file specified by -c is correctly formed.",
    ),
    no_stdout: bool = typer.Option(
        False,
        "--no-stdout",
        "-n",
        help="Disables emitting unmatched data on STDOUT.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Disables info level log events (version, run time, etc) on STDERR.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Sift STDIN into output files using the sinks in a YAML config."""
    settings = RuntimeSettings()
    if quiet:
        settings = settings.model_copy(update={"quiet": True})
    configure_logging(settings.effective_log_level)
    console = Console(stderr=True, quiet=settings.quiet)

    logger.info("secern %s", __version__)

    try:
        if gen_template is not None:
            write_template(gen_template)
            raise typer.Exit(0)

        if config is None:
            logger.error("Please specify the configuration file!")
            raise typer.Exit(1)

        logger.info("Loading configuration file: %s", config)

        if validate_only:
            _validate(config, console)
            raise typer.Exit(0)

        token = CancellationToken()
        stats = _run(
            config,
            settings,
            passthrough=not (no_stdout or settings.no_stdout),
            token=token,
        )
    except SecernError as exc:
        logger.error("%s", exc)
        raise typer.Exit(1) from exc

    logger.info("Ending data processing. Time elapsed was: %.3fs", stats.elapsed_seconds)
    console.print(build_stats_table(stats))

    if stats.interrupted:
        raise typer.Exit(token.exit_code)
