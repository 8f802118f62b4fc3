"""Core forging logic — applies moves, edits rules and keeps hints fresh."""

from __future__ import annotations

import logging

from backend.engine.forgesolver import Planner, ValidationReport, validate
from backend.engine.forgestate import ForgeState
from backend.models.move import Move, clamp, in_range
from backend.models.recipe import ForgeSnapshot
from backend.models.rule import Rule

logger = logging.getLogger(__name__)


class ForgeSession:
    """Orchestrates a single forging session."""

    def __init__(self, start: int = 0, target: int = 0) -> None:
        self.state = ForgeState(clamp(start), clamp(target))
        self.refresh_hints()

    @classmethod
    def from_snapshot(cls, snapshot: ForgeSnapshot) -> "ForgeSession":
        """Create a session from saved rules and slider positions."""
        obj = cls()
        obj.load_snapshot(snapshot)
        return obj

    # -- performing moves -----------------------------------------------------

    def perform(self, move: Move) -> bool:
        """Apply *move* to the start slider.

        Returns False if the move pushed the slider out of range, in which
        case the piece is considered ruined: the history is cleared and the
        start slider returns to 0.
        """
        if move is Move.HIT:
            raise ValueError("The generic hit cannot be performed; pick a strength.")

        state = self.state
        state.start += move.delta
        state.history.append(move)

        if not in_range(state.start):
            logger.info("%s left the range at %d; resetting", move.label, state.start)
            state.start = 0
            state.history = []
            self.refresh_hints()
            return False

        hints = state.hints
        if not hints:
            self.refresh_hints()
        elif hints.pop() is not move:
            self.refresh_hints()
        return True

    # -- sliders --------------------------------------------------------------

    def set_start(self, progress: int) -> None:
        self.state.start = clamp(progress)
        self.refresh_hints()

    def set_target(self, progress: int) -> None:
        self.state.target = clamp(progress)
        self.refresh_hints()

    # -- rules ----------------------------------------------------------------

    def cycle_rule_move(self, slot: int) -> Rule:
        rules = self.state.rules
        current = rules[slot]
        rules[slot] = Rule.default(slot) if current is None else current.with_next_move()
        self.refresh_hints()
        return rules[slot]

    def cycle_rule_position(self, slot: int) -> Rule:
        rules = self.state.rules
        current = rules[slot]
        rules[slot] = Rule.default(slot) if current is None else current.with_next_position()
        self.refresh_hints()
        return rules[slot]

    def set_rule(self, slot: int, rule: Rule | None) -> None:
        self.state.rules[slot] = rule
        self.refresh_hints()

    def clear_rule(self, slot: int) -> None:
        self.set_rule(slot, None)

    def set_history(self, moves: list[Move]) -> None:
        """Record *moves* as already performed, oldest first.

        Unlike ``perform`` this leaves the start slider alone: the sliders
        already show where those moves left the piece.
        """
        if Move.HIT in moves:
            raise ValueError("The generic hit cannot be performed; pick a strength.")
        self.state.history = list(moves)
        self.refresh_hints()

    def clear_history(self) -> None:
        self.state.history = []
        self.refresh_hints()

    # -- snapshots ------------------------------------------------------------

    def snapshot(self) -> ForgeSnapshot:
        return self.state.snapshot()

    def load_snapshot(self, snapshot: ForgeSnapshot) -> None:
        self.state.restore(snapshot)
        self.refresh_hints()

    # -- queries --------------------------------------------------------------

    @property
    def report(self) -> ValidationReport:
        return validate(self.state.history, self.state.rules)

    @property
    def hints(self) -> list[Move] | None:
        return self.state.hints

    @property
    def next_hint(self) -> Move | None:
        hints = self.state.hints
        return hints[-1] if hints else None

    @property
    def is_done(self) -> bool:
        """On target with every rule satisfied."""
        return self.state.start == self.state.target and self.report.valid

    # -- helpers --------------------------------------------------------------

    def refresh_hints(self) -> None:
        state = self.state
        state.hints = Planner.plan(
            state.start, state.target, state.rules, self.report.valid
        )
