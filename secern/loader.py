"""Configuration loading — YAML text in, validated ``RouterConfig`` out.

``parse_config`` is a pure function over already-decoded data and is what
the tests exercise directly.  ``load_config`` adds the file read and YAML
decode.  Both raise ``ConfigurationError`` and nothing else.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from secern.errors import ConfigurationError
from secern.models.config import RouterConfig

logger = logging.getLogger(__name__)


def _describe(exc: ValidationError) -> str:
    """Flatten a pydantic ValidationError into one line per problem."""
    problems: list[str] = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"])
        problems.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(problems)


def parse_config(raw: Any, source: str | Path | None = None) -> RouterConfig:
    """Validate decoded configuration data into a ``RouterConfig``.

    Parameters
    ----------
    raw:
        The decoded document, expected to be a mapping with a ``sinks`` list.
    source:
        Optional file name used to prefix error messages.

    Raises
    ------
    ConfigurationError
        If the document is not a mapping, or any sink fails validation.
    """
    if not isinstance(raw, dict):
        raise ConfigurationError(
            "configuration must be a mapping with a 'sinks' list", source
        )
    try:
        return RouterConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(_describe(exc), source) from exc


def load_config(path: str | Path) -> RouterConfig:
    """Read and validate a YAML configuration file."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(
            f"unable to open configuration file: {exc}", path
        ) from exc

    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"invalid YAML: {exc}", path) from exc

    config = parse_config(raw, source=path)
    logger.debug("Loaded %d sinks from %s", len(config.sinks), path)
    return config
