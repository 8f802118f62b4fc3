"""Shortest move sequences from a start position to every other position."""

from __future__ import annotations

from collections.abc import Sequence

from backend.models.move import MAX_PROGRESS, MIN_PROGRESS

ReachabilityTable = dict[int, list[int]]


def solve(
    deltas: Sequence[int],
    start: int,
    mandatory_first: bool = False,
    lo: int = MIN_PROGRESS,
    hi: int = MAX_PROGRESS,
) -> ReachabilityTable:
    """Map every position reachable from *start* to a shortest delta list.

    Every edge costs one move, so this is a plain shortest-path problem over
    the positions ``lo..hi``.  It is solved by relaxing edges until a full
    pass changes nothing.  Moves are visited in the order given, and target
    positions in ascending order.  Only strictly shorter paths replace an
    existing one, so ties always resolve the same way.

    With *mandatory_first* the start itself is not seeded.  Instead every
    in-range first move is, so ``table[start]`` (if present) is a loop of at
    least one move that comes back to the start.

    Positions that cannot be reached are absent from the result.
    """
    table: ReachabilityTable = {}

    if mandatory_first:
        for v in deltas:
            j = start + v
            if lo <= j <= hi and j not in table:
                table[j] = [v]
    else:
        table[start] = []

    changed = True
    while changed:
        changed = False
        for v in deltas:
            for j in range(max(v + lo, lo), hi + 1):
                i = j - v
                if not lo <= i <= hi:
                    continue
                via = table.get(i)
                if via is None:
                    continue
                best = table.get(j)
                if best is None or len(via) + 1 < len(best):
                    table[j] = via + [v]
                    changed = True

    return table


def replay(start: int, deltas: Sequence[int]) -> list[int]:
    """Return every position visited while applying *deltas* from *start*."""
    positions = [start]
    for v in deltas:
        positions.append(positions[-1] + v)
    return positions


def stays_in_range(
    start: int,
    deltas: Sequence[int],
    lo: int = MIN_PROGRESS,
    hi: int = MAX_PROGRESS,
) -> bool:
    return all(lo <= p <= hi for p in replay(start, deltas))
