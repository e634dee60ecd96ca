"""File writer — buffered line output to one sink's file.

The file is opened eagerly, at construction, so a bad path fails before
any input is read even if the sink would never match.  An existing file is
truncated.  Text is encoded with ``surrogateescape`` so bytes that were not
valid in the input encoding come back out unchanged.
"""

from __future__ import annotations

import logging
from pathlib import Path

from secern.errors import OutputOpenError, OutputWriteError

logger = logging.getLogger(__name__)

DEFAULT_BUFFER_SIZE = 64 * 1024


class FileWriter:
    """Writes lines for one sink to a local file.

    Parameters
    ----------
    name:
        Owning sink name, used in error messages.
    path:
        Output file.  The parent directory must already exist.
    buffer_size:
        Size in bytes of the write buffer.
    encoding:
        Text encoding for the output file.

    Raises
    ------
    OutputOpenError
        If the file cannot be created.
    """

    def __init__(
        self,
        name: str,
        path: Path | str,
        buffer_size: int = DEFAULT_BUFFER_SIZE,
        encoding: str = "utf-8",
    ) -> None:
        self._name = name
        self._path = Path(path)
        try:
            self._fh = open(  # noqa: SIM115
                self._path,
                "w",
                buffering=buffer_size,
                encoding=encoding,
                errors="surrogateescape",
                newline="\n",
            )
        except OSError as exc:
            raise OutputOpenError(name, self._path, exc) from exc
        self._closed = False
        logger.debug("FileWriter: opened %s for sink '%s'", self._path, name)

    @property
    def writer_name(self) -> str:
        return self._name

    @property
    def path(self) -> Path:
        return self._path

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, line: str) -> None:
        # Two writes are cheaper than building line + "\n".
        try:
            self._fh.write(line)
            self._fh.write("\n")
        except OSError as exc:
            raise OutputWriteError(self._name, self._path, exc) from exc

    def flush(self) -> None:
        try:
            self._fh.flush()
        except OSError as exc:
            raise OutputWriteError(self._name, self._path, exc) from exc

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._fh.close()
        except OSError as exc:
            raise OutputWriteError(self._name, self._path, exc) from exc

    def __repr__(self) -> str:
        return f"FileWriter({self._name!r}, {str(self._path)!r})"
