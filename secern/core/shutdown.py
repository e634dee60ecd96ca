"""Cancellation token and signal wiring for clean shutdown.

Signal handlers do nothing but set the token.  The stream driver checks it
between lines, then flushes and closes every writer before returning, so an
interrupted run still leaves complete lines in every sink file.  A second
signal while the token is already set restores the previous handler and
re-delivers the signal, for a driver stuck waiting on input.
"""

from __future__ import annotations

import logging
import signal
from collections.abc import Iterator
from contextlib import contextmanager
from types import FrameType
from typing import Any

logger = logging.getLogger(__name__)

SHUTDOWN_SIGNALS: list[signal.Signals] = [signal.SIGINT, signal.SIGTERM]
if hasattr(signal, "SIGHUP"):
    SHUTDOWN_SIGNALS.append(signal.SIGHUP)


class CancellationToken:
    """Set once when the run should stop; never reset."""

    __slots__ = ("_signum",)

    def __init__(self) -> None:
        self._signum: int | None = None

    def cancel(self, signum: int = signal.SIGINT) -> None:
        if self._signum is None:
            self._signum = int(signum)

    @property
    def cancelled(self) -> bool:
        return self._signum is not None

    @property
    def signum(self) -> int | None:
        """The signal that cancelled the run, if any."""
        return self._signum

    @property
    def exit_code(self) -> int:
        """Conventional shell status for a signal-terminated process."""
        return 128 + (self._signum or signal.SIGINT)


@contextmanager
def install_signal_handlers(
    token: CancellationToken, signals: list[signal.Signals] | None = None
) -> Iterator[CancellationToken]:
    """Route shutdown signals onto *token* for the duration of the block.

    Previous handlers are restored on exit.  Signals that cannot be set in
    this context (e.g. outside the main thread) are skipped.
    """
    originals: dict[int, Any] = {}

    def _handler(signum: int, frame: FrameType | None) -> None:
        if token.cancelled:
            signal.signal(signum, originals.get(signum) or signal.SIG_DFL)
            signal.raise_signal(signum)
            return
        logger.warning("Received %s, finishing current line", signal.Signals(signum).name)
        token.cancel(signum)

    for sig in signals if signals is not None else SHUTDOWN_SIGNALS:
        try:
            originals[sig] = signal.signal(sig, _handler)
        except (OSError, ValueError):
            logger.debug("Cannot install handler for %s", sig)

    try:
        yield token
    finally:
        for sig, original in originals.items():
            try:
                signal.signal(sig, original if original is not None else signal.SIG_DFL)
            except (OSError, ValueError):
                logger.debug("Cannot restore handler for %s", sig)
