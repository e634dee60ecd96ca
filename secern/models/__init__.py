"""Secern data models — all Pydantic v2, all frozen (immutable)."""

from secern.models.config import DISCARD_MARKERS, RouterConfig, SinkDefinition
from secern.models.routing import (
    PASSTHROUGH,
    SUPPRESSED,
    OutcomeKind,
    RoutingOutcome,
    RunStats,
)

__all__ = [
    # config
    "DISCARD_MARKERS",
    "SinkDefinition",
    "RouterConfig",
    # routing
    "OutcomeKind",
    "RoutingOutcome",
    "PASSTHROUGH",
    "SUPPRESSED",
    "RunStats",
]
