"""Router — first-match-wins assignment of each line to at most one sink.

Sinks are evaluated in declared order.  The first sink whose effective
match condition holds receives the line and evaluation stops.  A line no
sink claims goes to the passthrough writer if there is one, and is
otherwise dropped.  The router keeps no per-line state: the outcome for a
line depends only on the sink list and the line itself.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from secern.core.pattern_set import PatternSet
from secern.errors import SecernError
from secern.models.config import RouterConfig
from secern.models.routing import PASSTHROUGH, SUPPRESSED, RoutingOutcome
from secern.routing.sink import Destination, Sink
from secern.routing.sinks import OutputWriter
from secern.routing.sinks.discard import DiscardWriter
from secern.routing.sinks.file_writer import DEFAULT_BUFFER_SIZE, FileWriter
from secern.routing.sinks.stream import StreamWriter

logger = logging.getLogger(__name__)


class Router:
    """Routes lines to sinks.

    Parameters
    ----------
    sinks:
        Sinks in priority order.
    passthrough:
        Writer for unclaimed lines, or ``None`` to suppress them.

    Usage
    -----
    >>> router = build_router(config, passthrough=sys.stdout)
    >>> router.route("a.net")
    RoutingOutcome(kind=<OutcomeKind.WRITTEN: 'written'>, sink_name='net')
    >>> router.close()
    """

    def __init__(
        self, sinks: Sequence[Sink], passthrough: OutputWriter | None = None
    ) -> None:
        self._sinks: tuple[Sink, ...] = tuple(sinks)
        self._passthrough = passthrough
        self._closed = False

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def sinks(self) -> tuple[Sink, ...]:
        return self._sinks

    @property
    def passthrough_enabled(self) -> bool:
        return self._passthrough is not None

    @property
    def writers(self) -> list[OutputWriter]:
        """Every writer the router delivers to, passthrough last."""
        writers = [s.writer for s in self._sinks]
        if self._passthrough is not None:
            writers.append(self._passthrough)
        return writers

    # ------------------------------------------------------------------
    # Routing
    # ------------------------------------------------------------------

    def route(self, line: str) -> RoutingOutcome:
        """Route one line (terminator already stripped).

        Raises
        ------
        OutputWriteError
            If the chosen destination cannot be written.  Fatal for the run.
        """
        for sink in self._sinks:
            if sink.evaluate(line):
                sink.deliver(line)
                return sink.outcome

        if self._passthrough is not None:
            self._passthrough.write(line)
            return PASSTHROUGH
        return SUPPRESSED

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Flush and close every writer.  Stops at the first failure."""
        if self._closed:
            return
        self._closed = True
        for writer in self.writers:
            writer.close()

    def __repr__(self) -> str:
        return (
            f"Router(sinks={[s.name for s in self._sinks]}, "
            f"passthrough={self.passthrough_enabled})"
        )


def compile_pattern_sets(config: RouterConfig) -> list[PatternSet]:
    """Compile every sink's patterns.  No files are touched.

    Raises
    ------
    PatternCompileError
        On the first invalid pattern, in declaration order.
    """
    return [PatternSet(d.patterns, sink_name=d.name) for d in config.sinks]


def build_router(
    config: RouterConfig,
    passthrough: OutputWriter | None = None,
    buffer_size: int = DEFAULT_BUFFER_SIZE,
    encoding: str = "utf-8",
) -> Router:
    """Build a ``Router`` from a validated configuration.

    All patterns are compiled before any output file is opened, and every
    file destination is opened eagerly so a bad path fails here rather
    than on first match.  If opening fails, files already opened are
    closed before the error propagates.

    Parameters
    ----------
    config:
        Validated sink configuration.
    passthrough:
        Writer for unclaimed lines; a plain text stream is wrapped in a
        ``StreamWriter``.  ``None`` disables passthrough.
    buffer_size:
        Write buffer size for each sink file.
    encoding:
        Text encoding for sink files.

    Raises
    ------
    PatternCompileError, OutputOpenError
    """
    pattern_sets = compile_pattern_sets(config)

    if passthrough is not None and not isinstance(passthrough, OutputWriter):
        passthrough = StreamWriter(passthrough)

    sinks: list[Sink] = []
    try:
        for definition, pattern_set in zip(config.sinks, pattern_sets):
            path = definition.output_path
            if path is None:
                writer: OutputWriter = DiscardWriter(definition.name)
                destination = Destination.DISCARD
            else:
                writer = FileWriter(
                    definition.name, path, buffer_size=buffer_size, encoding=encoding
                )
                destination = Destination.FILE
            sinks.append(
                Sink(
                    definition.name,
                    pattern_set,
                    writer,
                    invert=definition.invert,
                    destination=destination,
                )
            )
            logger.debug("Prepared %r", sinks[-1])
    except SecernError:
        for sink in sinks:
            sink.writer.close()
        raise

    return Router(sinks, passthrough=passthrough)
