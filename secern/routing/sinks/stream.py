"""Stream writer — lines onto an already-open text stream (the passthrough).

The stream belongs to the caller, typically the process stdout, so
``close`` only flushes it.
"""

from __future__ import annotations

from typing import TextIO

from secern.errors import OutputWriteError

PASSTHROUGH_NAME = "stdout"


class StreamWriter:
    """Writes lines to a caller-owned text stream.

    Parameters
    ----------
    stream:
        Open text stream.  Never closed by this writer.
    name:
        Name used in error messages.  Defaults to ``"stdout"``.
    """

    def __init__(self, stream: TextIO, name: str = PASSTHROUGH_NAME) -> None:
        self._stream = stream
        self._name = name

    @property
    def writer_name(self) -> str:
        return self._name

    def write(self, line: str) -> None:
        # BrokenPipeError (e.g. piped into ``head``) is an OSError and is
        # fatal like any other write failure.
        try:
            self._stream.write(line)
            self._stream.write("\n")
        except OSError as exc:
            raise OutputWriteError(self._name, None, exc) from exc

    def flush(self) -> None:
        try:
            self._stream.flush()
        except OSError as exc:
            raise OutputWriteError(self._name, None, exc) from exc

    def close(self) -> None:
        self.flush()

    def __repr__(self) -> str:
        return f"StreamWriter({self._name!r})"
