"""Sink — a named routing target: pattern set, invert flag, and writer."""

from __future__ import annotations

from enum import Enum

from secern.core.pattern_set import PatternSet
from secern.models.routing import OutcomeKind, RoutingOutcome
from secern.routing.sinks import OutputWriter


class Destination(str, Enum):
    """What a sink does with the lines it claims."""

    FILE = "file"
    DISCARD = "discard"


class Sink:
    """A sink claims a line when ``matches(line) XOR invert`` is true.

    Parameters
    ----------
    name:
        Sink name, unique within a configuration.
    pattern_set:
        Compiled patterns for this sink.
    writer:
        Where claimed lines go.  Owned by the sink for the whole run.
    invert:
        Claim lines that match *none* of the patterns instead.
    destination:
        ``Destination.DISCARD`` if ``writer`` drops lines.
    """

    __slots__ = ("name", "pattern_set", "invert", "writer", "destination", "outcome")

    def __init__(
        self,
        name: str,
        pattern_set: PatternSet,
        writer: OutputWriter,
        invert: bool = False,
        destination: Destination = Destination.FILE,
    ) -> None:
        self.name = name
        self.pattern_set = pattern_set
        self.invert = invert
        self.writer = writer
        self.destination = destination
        kind = (
            OutcomeKind.DISCARDED
            if destination is Destination.DISCARD
            else OutcomeKind.WRITTEN
        )
        self.outcome = RoutingOutcome(kind=kind, sink_name=name)

    def evaluate(self, line: str) -> bool:
        """The sink's effective match condition for *line*."""
        return self.pattern_set.matches(line) != self.invert

    def deliver(self, line: str) -> None:
        """Commit *line* to this sink's destination."""
        self.writer.write(line)

    def __repr__(self) -> str:
        return (
            f"Sink(name={self.name!r}, patterns={len(self.pattern_set)}, "
            f"invert={self.invert}, destination={self.destination.value})"
        )
