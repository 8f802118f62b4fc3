"""Turn up to three rules into the concrete move endings that satisfy them."""

from __future__ import annotations

import itertools
import logging
from collections.abc import Sequence

from backend.models.move import HIT_VARIANTS, PALETTE_DELTAS, Move
from backend.models.rule import SLOT_COUNT, AtSlot, NotLast, Rule

logger = logging.getLogger(__name__)

Ending = tuple[int, ...]

# Marks an ending position that any move may fill.
WILDCARD = None

_HIT_DELTAS: tuple[int, ...] = tuple(m.delta for m in HIT_VARIANTS)

# Three slots with at most eight choices each stay far below this; hitting it
# means the expansion itself is broken.
MAX_EXPANSIONS = 10_000


def _fits(window: Sequence[Rule | None]) -> bool:
    """Check a chronological arrangement (index 2 = last) against each rule."""
    last = len(window) - 1
    for idx, rule in enumerate(window):
        if rule is None:
            continue
        if isinstance(rule.position, NotLast) and idx == last:
            return False
        if isinstance(rule.position, AtSlot) and last - rule.position.index != idx:
            return False
    return True


def _to_pattern(window: Sequence[Rule | None]) -> list[int | None]:
    pattern = [WILDCARD if r is None else r.move.delta for r in window]
    # A leading free position demands nothing, and shorter endings are
    # cheaper to satisfy, so drop them.
    while pattern and pattern[0] is WILDCARD:
        pattern.pop(0)
    return pattern


def _expand(patterns: list[list[int | None]]) -> list[Ending]:
    """Replace generic hits and wildcards with every concrete delta.

    Depth-first, left to right, so results keep the order of *patterns*.
    A generic hit (delta 0) is resolved before any wildcard in the same
    pattern.
    """
    stack = list(reversed(patterns))
    endings: list[Ending] = []
    steps = 0

    while stack:
        steps += 1
        if steps > MAX_EXPANSIONS:
            logger.warning("Ending expansion stopped after %d steps", MAX_EXPANSIONS)
            break

        pattern = stack.pop()
        if Move.HIT.delta in pattern:
            idx, choices = pattern.index(Move.HIT.delta), _HIT_DELTAS
        elif WILDCARD in pattern:
            idx, choices = pattern.index(WILDCARD), PALETTE_DELTAS
        else:
            endings.append(tuple(pattern))  # type: ignore[arg-type]
            continue

        for delta in reversed(choices):
            branch = pattern.copy()
            branch[idx] = delta
            stack.append(branch)

    return endings


def enumerate_endings(rules: Sequence[Rule | None]) -> list[Ending]:
    """Return every concrete ending (length 0-3) that satisfies *rules*.

    *rules* is indexed by slot: ``rules[0]`` is the "Last" slot.  A rule's
    own position constraint, not the slot it sits in, decides where it may
    go, so every ordering of the three slots is tried.

    An empty list means the rules contradict each other.  With no rules the
    result is the single empty ending.
    """
    padded = list(rules[:SLOT_COUNT]) + [None] * (SLOT_COUNT - len(rules))
    # Chronological order: third-last first, last at the end.
    window = padded[::-1]

    patterns = [
        _to_pattern(arrangement)
        for arrangement in itertools.permutations(window)
        if _fits(arrangement)
    ]

    # dict.fromkeys keeps first occurrences in order.
    endings = list(dict.fromkeys(_expand(patterns)))
    logger.debug(
        "%d of 6 arrangements fit; %d distinct endings", len(patterns), len(endings)
    )
    return endings
