"""Stream driver — feeds lines to the router and owns the run lifecycle.

Lines are processed strictly one at a time in arrival order, so each
sink's output preserves the relative input order.  On end of input or on
cancellation every writer is flushed and closed.  An ``OutputWriteError``
propagates at once and nothing else is flushed: the run is already
incomplete and must be reported as a failure.  The CLI ends the process
at that point without unwinding, so buffered sink and stdout data is
never written after the failure.
"""

from __future__ import annotations

import io
import logging
import signal
import sys
import time
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import TextIO

from secern.core.shutdown import CancellationToken
from secern.models.routing import PASSTHROUGH, RunStats
from secern.routing.router import Router

logger = logging.getLogger(__name__)


def strip_terminator(raw: str) -> str:
    """Remove one trailing ``\\n`` or ``\\r\\n``."""
    if raw[-1:] == "\n":
        return raw[:-2] if raw[-2:-1] == "\r" else raw[:-1]
    return raw


class StreamDriver:
    """Runs a ``Router`` over a line source.

    Parameters
    ----------
    router:
        Fully built router.  The driver closes it when the run ends cleanly
        or is cancelled.
    token:
        Checked between lines.  A fresh token is created if not provided.
    """

    def __init__(self, router: Router, token: CancellationToken | None = None) -> None:
        self._router = router
        self._token = token or CancellationToken()

    @property
    def token(self) -> CancellationToken:
        return self._token

    def run(self, lines: Iterable[str]) -> RunStats:
        """Route every line from *lines* and return advisory counters.

        Raises
        ------
        OutputWriteError
            On the first failed write to any destination.
        """
        token = self._token
        route = self._router.route
        sink_counts = {sink.name: 0 for sink in self._router.sinks}
        total = passthrough = suppressed = 0

        start = time.perf_counter()
        try:
            for raw in lines:
                if token.cancelled:
                    break
                outcome = route(strip_terminator(raw))
                total += 1
                if outcome.sink_name is not None:
                    sink_counts[outcome.sink_name] += 1
                elif outcome is PASSTHROUGH:
                    passthrough += 1
                else:
                    suppressed += 1
        except KeyboardInterrupt:
            token.cancel(signal.SIGINT)

        self._router.close()
        elapsed = time.perf_counter() - start

        if token.cancelled:
            logger.warning("Processing interrupted after %d lines", total)

        return RunStats(
            lines=total,
            sink_counts=sink_counts,
            passthrough=passthrough,
            suppressed=suppressed,
            elapsed_seconds=elapsed,
            interrupted=token.cancelled,
            signum=token.signum,
        )


# ---------------------------------------------------------------------------
# Process streams
# ---------------------------------------------------------------------------


@contextmanager
def open_input_stream(encoding: str = "utf-8") -> Iterator[TextIO]:
    """Wrap the process stdin as text split on ``\\n`` only.

    A lone ``\\r`` stays part of its line, and line endings are not
    translated.  Undecodable bytes become surrogates and are written back
    out unchanged.  The underlying binary buffer stays open afterwards.
    """
    wrapper = io.TextIOWrapper(
        sys.stdin.buffer, encoding=encoding, errors="surrogateescape", newline="\n"
    )
    try:
        yield wrapper
    finally:
        wrapper.detach()


@contextmanager
def open_output_stream(encoding: str = "utf-8") -> Iterator[TextIO]:
    """Wrap the process stdout as buffered text for the passthrough channel.

    On a clean exit pending text is pushed to the underlying buffer.  The
    underlying binary buffer stays open afterwards.
    """
    wrapper = io.TextIOWrapper(
        sys.stdout.buffer,
        encoding=encoding,
        errors="surrogateescape",
        newline="\n",
        write_through=False,
    )
    try:
        yield wrapper
    except BaseException:
        # Write failures end the process inside this block, so only startup
        # errors get here.  detach() flushes, which fails on a broken stdout.
        try:
            wrapper.detach()
        except (OSError, ValueError) as exc:
            logger.debug("Discarding unflushed stdout data: %s", exc)
        raise
    else:
        wrapper.detach()
