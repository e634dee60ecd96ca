"""Output writer protocol for secern routing.

All destinations implement the ``OutputWriter`` protocol: a
``writer_name`` property plus ``write``/``flush``/``close``.  The router
hands each claimed line to exactly one writer.  Writers wrap every
``OSError`` as ``OutputWriteError``; they never swallow a failure.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class OutputWriter(Protocol):
    """Protocol that every secern destination must implement.

    Attributes
    ----------
    writer_name : str
        The sink name this writer belongs to (``"stdout"`` for the
        passthrough channel).  Used in error messages.
    """

    @property
    def writer_name(self) -> str:
        """Return the owning sink's name."""
        ...

    def write(self, line: str) -> None:
        """Write one line (without terminator); the writer appends ``\\n``.

        Raises
        ------
        OutputWriteError
            On any I/O failure.  The caller must treat this as fatal.
        """
        ...

    def flush(self) -> None:
        """Push buffered data to the destination."""
        ...

    def close(self) -> None:
        """Flush and release the destination.  Idempotent."""
        ...
