"""Plan the shortest rule-satisfying move sequence from start to target."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from backend.engine.forgesolver.assembler import assemble
from backend.engine.forgesolver.endings import enumerate_endings
from backend.engine.forgesolver.reachability import solve, stays_in_range
from backend.models.move import MAX_PROGRESS, MIN_PROGRESS, PALETTE_DELTAS, Move
from backend.models.rule import Rule

logger = logging.getLogger(__name__)


class Planner:
    """Stateless planner — all methods are static."""

    @staticmethod
    def plan(
        start: int,
        target: int,
        rules: Sequence[Rule | None],
        history_valid: bool,
    ) -> list[Move] | None:
        """Return a hint stack taking *start* to *target*, or ``None``.

        The stack is consumed from the end: ``stack[-1]`` is the next move to
        perform.  An empty stack means the work is already done (on target,
        rules met).

        If the slider already sits on the target but the performed moves do
        not satisfy the rules, at least one move is required, so the search
        must leave the start and come back.
        """
        if target == start and history_valid:
            return []

        mandatory_first = target == start
        sequence = Planner.best_sequence(start, target, rules, mandatory_first)
        if sequence is None:
            return None
        return [Move.from_delta(d) for d in reversed(sequence)]

    @staticmethod
    def best_sequence(
        start: int,
        target: int,
        rules: Sequence[Rule | None],
        mandatory_first: bool = False,
    ) -> list[int] | None:
        """Return the shortest valid delta list in performing order."""
        table = solve(PALETTE_DELTAS, start, mandatory_first)
        endings = enumerate_endings(rules)

        best: list[int] | None = None
        for ending in endings:
            candidate = assemble(table, target, ending)
            if candidate is None:
                continue
            if not stays_in_range(start, candidate, MIN_PROGRESS, MAX_PROGRESS):
                continue
            # Strict comparison keeps the first ending found on ties.
            if best is None or len(candidate) < len(best):
                best = candidate

        logger.debug(
            "plan %d -> %d (mandatory_first=%s): %d endings, best=%s",
            start, target, mandatory_first, len(endings), best,
        )
        return best
