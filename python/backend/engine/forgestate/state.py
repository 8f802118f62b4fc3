"""Tracks the mutable state of a forging session in progress."""

from __future__ import annotations

from backend.models.move import Move
from backend.models.recipe import ForgeSnapshot
from backend.models.rule import SLOT_COUNT, Rule, Rules


class ForgeState:
    """Holds both sliders, the performed moves, the rules and current hints."""

    def __init__(self, start: int = 0, target: int = 0) -> None:
        self.start = start
        self.target = target
        self.history: list[Move] = []
        self.rules: list[Rule | None] = [None] * SLOT_COUNT
        # Next move to perform is last; ``None`` means no plan exists.
        self.hints: list[Move] | None = []

    # -- snapshots ------------------------------------------------------------

    @property
    def rule_tuple(self) -> Rules:
        return (self.rules[0], self.rules[1], self.rules[2])

    def snapshot(self) -> ForgeSnapshot:
        return ForgeSnapshot(
            rules=self.rule_tuple,
            start_progress=self.start,
            target_progress=self.target,
        )

    def restore(self, snapshot: ForgeSnapshot) -> None:
        self.rules = list(snapshot.rules)
        self.start = snapshot.start_progress
        self.target = snapshot.target_progress
        self.history = []

    # -- history --------------------------------------------------------------

    @property
    def recent(self) -> list[Move]:
        """The last three performed moves, most recent first."""
        return list(reversed(self.history[-SLOT_COUNT:]))
