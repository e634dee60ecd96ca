"""Discard writer — the destination of sinks whose ``file_name`` is null."""

from __future__ import annotations


class DiscardWriter:
    """Accepts lines and drops them.  Never fails."""

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def writer_name(self) -> str:
        return self._name

    def write(self, line: str) -> None:
        pass

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"DiscardWriter({self._name!r})"
