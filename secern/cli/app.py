"""Main Typer application.

Entry point: ``secern`` (configured via pyproject.toml console_scripts).
"""

from __future__ import annotations

import typer

from secern.cli.commands.sift import sift_cmd

app = typer.Typer(
    name="secern",
    help="Sift lines from STDIN into output files using regex sinks.",
    rich_markup_mode="rich",
    add_completion=False,
)

app.command(
    name="sift",
    help=(
        "Route each line of STDIN to the first sink whose patterns match it. "
        "Unmatched lines are written to STDOUT unless --no-stdout is given."
    ),
)(sift_cmd)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
