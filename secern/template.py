"""Example configuration generator (``secern --gen-template``)."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from secern.errors import OutputOpenError
from secern.models.config import RouterConfig, SinkDefinition

logger = logging.getLogger(__name__)

TEMPLATE_HEADER = """\
# secern configuration
#
# Sinks are evaluated top to bottom and the first sink that matches a line
# claims it.  Lines no sink claims are written to STDOUT unless secern is
# run with --no-stdout.
#
#   name:       identifier used in log messages, must be unique
#   file_name:  output file, or null to throw matching lines away
#   patterns:   regular expressions; a line matches if ANY of them match
#   invert:     optional, true to match lines that match NONE of them
"""

TEMPLATE_SINKS: tuple[SinkDefinition, ...] = (
    SinkDefinition(
        name="first_sink",
        file_name="first_output.txt",
        patterns=("^[a-zA-Z0-9]+$",),
    ),
    SinkDefinition(
        name="second_sink",
        file_name="second_output.txt",
        patterns=("😎*",),
    ),
)


def render_template() -> str:
    """Return the example configuration as YAML text."""
    config = RouterConfig(sinks=TEMPLATE_SINKS)
    document = config.model_dump(mode="json")
    body = yaml.safe_dump(
        document, sort_keys=False, allow_unicode=True, default_flow_style=False
    )
    return f"---\n{TEMPLATE_HEADER}\n{body}"


def write_template(path: str | Path) -> Path:
    """Write the example configuration to *path*, replacing any existing file.

    Raises
    ------
    OutputOpenError
        If the file cannot be written.
    """
    path = Path(path)
    try:
        path.write_text(render_template(), encoding="utf-8")
    except OSError as exc:
        raise OutputOpenError("template", path, exc) from exc
    logger.info("Wrote example configuration to %s", path)
    return path
