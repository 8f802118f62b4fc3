"""Fit a required ending onto the shortest path to a target position."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from backend.engine.forgesolver.reachability import ReachabilityTable


def assemble(
    table: ReachabilityTable,
    target: int,
    ending: Sequence[int],
) -> list[int] | None:
    """Return a shortest delta list to *target* that finishes with *ending*.

    If the last ``len(ending)`` moves of ``table[target]`` are the ending in
    some order, they are reordered in place.  Otherwise the last ending
    move is peeled off and the search retries one move earlier, at
    ``target - move``, with the remaining ending.  Recursion depth is bounded
    by the ending length.

    Returns ``None`` when no reachable position along the way accepts what
    is left of the ending.  The result is not range-checked.
    """
    return _assemble(table, target, tuple(ending), ())


def _assemble(
    table: ReachabilityTable,
    target: int,
    ending: tuple[int, ...],
    peeled: tuple[int, ...],
) -> list[int] | None:
    steps = table.get(target)
    if steps is None:
        return None

    n = len(ending)
    if n == 0:
        return steps + list(reversed(peeled))

    if len(steps) >= n and Counter(steps[-n:]) == Counter(ending):
        return steps[:-n] + list(ending) + list(reversed(peeled))

    *rest, last = ending
    return _assemble(table, target - last, tuple(rest), peeled + (last,))
