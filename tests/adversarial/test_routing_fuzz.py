"""Adversarial tests — routing invariants under randomized configurations.

These tests verify that:
1. Every line reaches exactly one destination (sink, passthrough, or nowhere)
2. The lowest-indexed matching sink always claims the line
3. Inverted sinks claim exactly the lines none of their patterns match
4. Reordering patterns inside a sink never changes the routing outcome
5. Routing a line does not depend on lines routed before it
6. A sink that fails after N writes stops the run at that line
"""

from __future__ import annotations

import random
import re

import pytest

from secern.core.driver import StreamDriver
from secern.core.pattern_set import PatternSet
from secern.errors import OutputWriteError
from secern.models.routing import OutcomeKind
from secern.routing.router import Router
from secern.routing.sink import Sink

SEED = 20240229
ALPHABET = "abcde.-"

# ---------------------------------------------------------------------------
# Test writers
# ---------------------------------------------------------------------------


class CollectingWriter:
    """Collects every line it is given."""

    def __init__(self, name: str) -> None:
        self._name = name
        self.lines: list[str] = []

    @property
    def writer_name(self) -> str:
        return self._name

    def write(self, line: str) -> None:
        self.lines.append(line)

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass


class SlowExplodingWriter(CollectingWriter):
    """Succeeds N times, then fails on every write."""

    def __init__(self, name: str, fail_after: int) -> None:
        super().__init__(name)
        self._fail_after = fail_after

    def write(self, line: str) -> None:
        if len(self.lines) >= self._fail_after:
            raise OutputWriteError(self._name, None, OSError(5, "Input/output error"))
        super().write(line)


# ---------------------------------------------------------------------------
# Generators
# ---------------------------------------------------------------------------


def _random_line(rng: random.Random) -> str:
    return "".join(rng.choice(ALPHABET) for _ in range(rng.randint(0, 12)))


def _random_pattern(rng: random.Random) -> str:
    choice = rng.random()
    literal = "".join(rng.choice("abcde") for _ in range(rng.randint(1, 3)))
    if choice < 0.25:
        return f"^{literal}"
    if choice < 0.5:
        return f"{literal}$"
    if choice < 0.6:
        return rf"{literal}\.{rng.choice('abcde')}"
    return literal


def _random_router(rng: random.Random) -> tuple[Router, list[CollectingWriter], CollectingWriter]:
    writers: list[CollectingWriter] = []
    sinks: list[Sink] = []
    for i in range(rng.randint(1, 5)):
        name = f"s{i}"
        patterns = [_random_pattern(rng) for _ in range(rng.randint(1, 4))]
        writer = CollectingWriter(name)
        writers.append(writer)
        sinks.append(Sink(name, PatternSet(patterns, name), writer, invert=rng.random() < 0.3))
    passthrough = CollectingWriter("stdout")
    return Router(sinks, passthrough=passthrough), writers, passthrough


def _expected_index(router: Router, line: str) -> int | None:
    """Reference implementation: compile each pattern alone, scan in order."""
    for index, sink in enumerate(router.sinks):
        hit = any(re.search(p, line) for p in sink.pattern_set.patterns)
        if hit != sink.invert:
            return index
    return None


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


class TestRoutingInvariants:
    @pytest.mark.parametrize("case", range(40))
    def test_first_match_wins_and_single_delivery(self, case: int):
        rng = random.Random(SEED + case)
        router, writers, passthrough = _random_router(rng)
        lines = [_random_line(rng) for _ in range(60)]

        for line in lines:
            expected = _expected_index(router, line)
            outcome = router.route(line)
            if expected is None:
                assert outcome.kind is OutcomeKind.PASSTHROUGH
            else:
                assert outcome.sink_name == router.sinks[expected].name

        delivered = sum(len(w.lines) for w in writers) + len(passthrough.lines)
        assert delivered == len(lines)

    @pytest.mark.parametrize("case", range(20))
    def test_passthrough_is_exactly_the_unclaimed_lines_in_order(self, case: int):
        rng = random.Random(SEED * 3 + case)
        router, _, passthrough = _random_router(rng)
        lines = [_random_line(rng) for _ in range(80)]

        StreamDriver(router).run(line + "\n" for line in lines)

        unclaimed = [line for line in lines if _expected_index(router, line) is None]
        assert passthrough.lines == unclaimed

    @pytest.mark.parametrize("case", range(20))
    def test_invert_matches_iff_no_pattern_matches(self, case: int):
        rng = random.Random(SEED * 5 + case)
        patterns = [_random_pattern(rng) for _ in range(rng.randint(1, 4))]
        plain = Sink("plain", PatternSet(patterns), CollectingWriter("plain"))
        inverted = Sink("inv", PatternSet(patterns), CollectingWriter("inv"), invert=True)

        for _ in range(50):
            line = _random_line(rng)
            assert inverted.evaluate(line) is (not plain.evaluate(line))

    @pytest.mark.parametrize("case", range(20))
    def test_pattern_order_does_not_change_match(self, case: int):
        rng = random.Random(SEED * 7 + case)
        patterns = [_random_pattern(rng) for _ in range(rng.randint(2, 5))]
        shuffled = patterns[:]
        rng.shuffle(shuffled)
        a, b = PatternSet(patterns), PatternSet(shuffled)

        for _ in range(50):
            line = _random_line(rng)
            assert a.matches(line) == b.matches(line)

    def test_outcome_independent_of_history(self):
        rng = random.Random(SEED)
        router, _, _ = _random_router(rng)
        probe = [_random_line(rng) for _ in range(30)]
        before = [router.route(line) for line in probe]

        for _ in range(200):
            router.route(_random_line(rng))

        after = [router.route(line) for line in probe]
        assert before == after


class TestFailFast:
    @pytest.mark.parametrize("fail_after", [0, 1, 5])
    def test_run_stops_at_failing_line(self, fail_after: int):
        bad = SlowExplodingWriter("bad", fail_after=fail_after)
        other = CollectingWriter("other")
        router = Router(
            [Sink("bad", PatternSet(["^x"]), bad), Sink("other", PatternSet(["^y"]), other)]
        )
        lines = [("x" if i % 2 == 0 else "y") + str(i) for i in range(20)]

        with pytest.raises(OutputWriteError):
            StreamDriver(router).run(line + "\n" for line in lines)

        assert len(bad.lines) == fail_after
        # "other" only saw lines before the one that failed.
        failing_index = 2 * fail_after
        assert other.lines == [ln for ln in lines[:failing_index] if ln.startswith("y")]

    def test_failure_in_any_sink_aborts_everything(self):
        sinks = [
            Sink(f"s{i}", PatternSet([f"^{i}"]), CollectingWriter(f"s{i}")) for i in range(4)
        ]
        sinks[2] = Sink("s2", PatternSet(["^2"]), SlowExplodingWriter("s2", fail_after=0))
        router = Router(sinks, passthrough=CollectingWriter("stdout"))

        with pytest.raises(OutputWriteError, match="s2"):
            StreamDriver(router).run(["0a\n", "1a\n", "2a\n", "3a\n", "zz\n"])

        assert sinks[3].writer.lines == []
        assert router.writers[-1].lines == []
