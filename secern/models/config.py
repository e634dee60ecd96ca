"""Sink configuration models — validated, frozen, built before any line is read."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# ``file_name`` values that mean "throw matching lines away".
DISCARD_MARKERS: frozenset[str] = frozenset({"", "null"})


class SinkDefinition(BaseModel):
    """One routing rule as declared in the configuration file.

    A line matches the sink when any of ``patterns`` matches it, or, with
    ``invert`` set, when none of them do.  Matching lines go to
    ``file_name``; a null, empty or ``"null"`` file name discards them.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    file_name: str | None
    patterns: tuple[str, ...] = Field(min_length=1)
    invert: bool = False

    @field_validator("invert", mode="before")
    @classmethod
    def null_invert_is_false(cls, v: object) -> object:
        return False if v is None else v

    @property
    def discard(self) -> bool:
        """Whether matches for this sink are dropped instead of written."""
        return self.file_name is None or self.file_name.strip() in DISCARD_MARKERS

    @property
    def output_path(self) -> Path | None:
        """Destination path, or ``None`` for a discard sink."""
        if self.discard:
            return None
        return Path(self.file_name)


class RouterConfig(BaseModel):
    """The ordered sink list.  Declaration order is routing priority."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    sinks: tuple[SinkDefinition, ...] = Field(min_length=1)

    @model_validator(mode="after")
    def check_unique_names_and_outputs(self) -> RouterConfig:
        seen_names: set[str] = set()
        seen_paths: dict[Path, str] = {}
        for sink in self.sinks:
            if sink.name in seen_names:
                raise ValueError(f"duplicate sink name '{sink.name}'")
            seen_names.add(sink.name)

            path = sink.output_path
            if path is None:
                continue
            key = path.absolute()
            if key in seen_paths:
                raise ValueError(
                    f"sinks '{seen_paths[key]}' and '{sink.name}' both write to "
                    f"'{sink.file_name}'"
                )
            seen_paths[key] = sink.name
        return self

    @property
    def sink_names(self) -> list[str]:
        return [s.name for s in self.sinks]
