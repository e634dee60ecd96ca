"""Routing outcome and run statistics models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class OutcomeKind(str, Enum):
    """Where a single line ended up."""

    WRITTEN = "written"
    DISCARDED = "discarded"
    PASSTHROUGH = "passthrough"
    SUPPRESSED = "suppressed"


class RoutingOutcome(BaseModel):
    """Result of routing one line.

    ``sink_name`` is set for ``WRITTEN`` and ``DISCARDED`` and ``None``
    otherwise.  Instances are immutable, so the router builds one per sink
    up front and hands the same object back for every line.
    """

    model_config = ConfigDict(frozen=True)

    kind: OutcomeKind
    sink_name: str | None = None

    @property
    def claimed(self) -> bool:
        """Whether a sink consumed the line."""
        return self.kind in (OutcomeKind.WRITTEN, OutcomeKind.DISCARDED)


PASSTHROUGH = RoutingOutcome(kind=OutcomeKind.PASSTHROUGH)
SUPPRESSED = RoutingOutcome(kind=OutcomeKind.SUPPRESSED)


class RunStats(BaseModel):
    """Advisory counters for one pass over the input stream."""

    model_config = ConfigDict(frozen=True)

    lines: int = 0
    sink_counts: dict[str, int] = Field(default_factory=dict)
    passthrough: int = 0
    suppressed: int = 0
    elapsed_seconds: float = 0.0
    interrupted: bool = False
    signum: int | None = None

    @property
    def claimed(self) -> int:
        return sum(self.sink_counts.values())
