"""Error taxonomy for secern.

Every fatal condition the router can hit is a ``SecernError``.  The core
raises these with enough context (sink name, path, underlying cause) for a
human-readable message and never prints; the CLI is the single place that
turns them into log lines and exit codes.

None of these errors are recoverable.  A partially-written split is worse
than no split, so callers must not catch one and carry on routing.
"""

from __future__ import annotations

from pathlib import Path


class SecernError(RuntimeError):
    """Base class for every fatal secern error."""


class ConfigurationError(SecernError):
    """Raised when the sink configuration is missing, malformed or inconsistent."""

    def __init__(self, message: str, source: str | Path | None = None) -> None:
        self.source = str(source) if source is not None else None
        if self.source:
            message = f"{self.source}: {message}"
        super().__init__(message)


class PatternCompileError(SecernError):
    """Raised when a sink's pattern is not a valid regular expression."""

    def __init__(self, sink_name: str, pattern: str, reason: str) -> None:
        self.sink_name = sink_name
        self.pattern = pattern
        super().__init__(
            f"Error parsing regex pattern {pattern!r} in sink named "
            f"'{sink_name}': {reason}"
        )


class OutputOpenError(SecernError):
    """Raised when an output destination cannot be created or opened."""

    def __init__(self, sink_name: str, path: str | Path, cause: OSError) -> None:
        self.sink_name = sink_name
        self.path = str(path)
        super().__init__(
            f"Unable to create output file '{self.path}' for sink named "
            f"'{sink_name}': {cause}"
        )


class OutputWriteError(SecernError):
    """Raised when a write or flush to an opened destination fails.

    ``path`` is ``None`` for stream destinations such as stdout.
    """

    def __init__(
        self, sink_name: str, path: str | Path | None, cause: OSError
    ) -> None:
        self.sink_name = sink_name
        self.path = str(path) if path is not None else None
        target = f"output file '{self.path}'" if self.path else "output stream"
        super().__init__(
            f"Unable to write to {target} for sink named '{sink_name}': {cause}"
        )
