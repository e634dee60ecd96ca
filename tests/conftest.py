"""Shared test fixtures for secern."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
import yaml

from secern.models.config import RouterConfig, SinkDefinition


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Provide a temporary directory for test output files."""
    return tmp_path


# ---------------------------------------------------------------------------
# Configuration factories — shared across test modules
# ---------------------------------------------------------------------------


@pytest.fixture
def make_sink() -> Callable[..., SinkDefinition]:
    """Factory fixture: build a SinkDefinition with sensible defaults."""

    def _factory(
        name: str = "sink",
        patterns: tuple[str, ...] | list[str] = ("x",),
        file_name: str | None = None,
        **overrides: Any,
    ) -> SinkDefinition:
        defaults: dict[str, Any] = {
            "name": name,
            "file_name": file_name,
            "patterns": tuple(patterns),
        }
        defaults.update(overrides)
        return SinkDefinition(**defaults)

    return _factory


@pytest.fixture
def tld_config(tmp_dir: Path) -> RouterConfig:
    """Two file sinks: ``net`` for ``.net`` names, ``com`` for ``.com`` names."""
    return RouterConfig(
        sinks=[
            SinkDefinition(
                name="net", file_name=str(tmp_dir / "net.txt"), patterns=[r"\.net$"]
            ),
            SinkDefinition(
                name="com", file_name=str(tmp_dir / "com.txt"), patterns=[r"\.com$"]
            ),
        ]
    )


@pytest.fixture
def write_config(tmp_dir: Path) -> Callable[..., Path]:
    """Factory fixture: dump a ``sinks`` list to a YAML file and return its path."""

    def _factory(sinks: list[dict[str, Any]], name: str = "config.yaml") -> Path:
        path = tmp_dir / name
        path.write_text(
            yaml.safe_dump({"sinks": sinks}, sort_keys=False, allow_unicode=True),
            encoding="utf-8",
        )
        return path

    return _factory


def read_lines(path: Path) -> list[str]:
    """Read an output file back as a list of lines without terminators."""
    return path.read_text(encoding="utf-8").splitlines()


@pytest.fixture
def read_output() -> Callable[[Path], list[str]]:
    """Expose ``read_lines`` to tests as a fixture."""
    return read_lines
