"""Pattern Set — one sink's regular expressions compiled into a single matcher.

Every input line is tested against every sink until one claims it, so the
cost of "does any of these N patterns match" is paid hundreds of millions of
times on large datasets.  The set therefore compiles its patterns once and
answers that question through a ``Matcher`` backend:

- ``CombinedMatcher`` joins all patterns into one alternation, so a line is
  searched once regardless of N.
- ``ScanMatcher`` searches each pattern in turn.  It is used when the
  patterns cannot be joined without changing their meaning (global inline
  flags, numbered back-references or conditionals, clashing group names).

Match existence never depends on pattern order.  Order only decides which
index ``first_matching_index`` reports.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from secern.errors import PatternCompileError

logger = logging.getLogger(__name__)

# Numbered group references (back-references and conditionals) would point
# at the wrong group once patterns are joined, since groups get renumbered.
_NUMBERED_GROUP_REF = re.compile(r"\\[1-9]|\(\?\(\d")


# ---------------------------------------------------------------------------
# Matcher backends
# ---------------------------------------------------------------------------


@runtime_checkable
class Matcher(Protocol):
    """Answers "does any pattern match this line" in one call."""

    backend: str

    def is_match(self, line: str) -> bool:
        ...


class ScanMatcher:
    """Any-of-N search over individually compiled patterns."""

    backend = "scan"

    def __init__(self, compiled: Sequence[re.Pattern[str]]) -> None:
        self._searches = tuple(p.search for p in compiled)

    def is_match(self, line: str) -> bool:
        for search in self._searches:
            if search(line) is not None:
                return True
        return False


class CombinedMatcher:
    """Single alternation over all patterns, searched once per line."""

    backend = "combined"

    def __init__(self, combined: re.Pattern[str]) -> None:
        self._search = combined.search

    def is_match(self, line: str) -> bool:
        return self._search(line) is not None

    @classmethod
    def try_build(cls, patterns: Sequence[str]) -> CombinedMatcher | None:
        """Return a combined matcher, or ``None`` if the patterns can't be joined."""
        if len(patterns) == 1:
            return cls(re.compile(patterns[0]))
        if any(_NUMBERED_GROUP_REF.search(p) for p in patterns):
            return None
        try:
            combined = re.compile("|".join(f"(?:{p})" for p in patterns))
        except re.error:
            return None
        return cls(combined)


# ---------------------------------------------------------------------------
# Pattern Set
# ---------------------------------------------------------------------------


class PatternSet:
    """Immutable compiled form of one sink's pattern list.

    Parameters
    ----------
    patterns:
        Non-empty sequence of regular expressions.  A pattern matches a line
        if it matches anywhere in it (search, not fullmatch).
    sink_name:
        Owning sink, used only in error messages.

    Raises
    ------
    PatternCompileError
        If the list is empty or any pattern is not a valid regular expression.
    """

    __slots__ = ("_patterns", "_compiled", "_matcher", "_is_match")

    def __init__(self, patterns: Sequence[str], sink_name: str = "") -> None:
        if not patterns:
            raise PatternCompileError(sink_name, "", "pattern list is empty")

        compiled: list[re.Pattern[str]] = []
        for pattern in patterns:
            try:
                compiled.append(re.compile(pattern))
            except re.error as exc:
                raise PatternCompileError(sink_name, pattern, str(exc)) from exc

        self._patterns: tuple[str, ...] = tuple(patterns)
        self._compiled: tuple[re.Pattern[str], ...] = tuple(compiled)
        self._matcher: Matcher = CombinedMatcher.try_build(self._patterns) or ScanMatcher(
            self._compiled
        )
        self._is_match = self._matcher.is_match

        logger.debug(
            "Compiled %d patterns for sink '%s' (%s backend)",
            len(self._patterns),
            sink_name,
            self._matcher.backend,
        )

    @property
    def patterns(self) -> tuple[str, ...]:
        return self._patterns

    @property
    def backend(self) -> str:
        """Name of the matcher backend in use (``combined`` or ``scan``)."""
        return self._matcher.backend

    def matches(self, line: str) -> bool:
        """Whether any pattern matches *line*."""
        return self._is_match(line)

    def first_matching_index(self, line: str) -> int | None:
        """Index of the lowest-declared pattern that matches, or ``None``."""
        for index, pattern in enumerate(self._compiled):
            if pattern.search(line) is not None:
                return index
        return None

    def __len__(self) -> int:
        return len(self._patterns)

    def __repr__(self) -> str:
        return f"PatternSet(patterns={list(self._patterns)!r}, backend={self.backend!r})"
