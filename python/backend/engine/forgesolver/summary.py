"""Readable summaries of a hint stack."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from itertools import groupby

from backend.models.move import Move, clamp


@dataclass(frozen=True)
class StepGroup:
    """A run of identical consecutive moves, e.g. ``3 x Punch``."""

    move: Move
    count: int
    progress_before: int
    progress_after: int

    @property
    def total(self) -> int:
        return self.move.delta * self.count

    @property
    def text(self) -> str:
        name = f"{self.count} x {self.move.label}" if self.count > 1 else self.move.label
        return f"{name} ({self.total:+d})"


def summarize(start: int, hints: Sequence[Move]) -> list[StepGroup]:
    """Group a hint stack (next move last) into runs in performing order."""
    groups: list[StepGroup] = []
    progress = start
    for move, run in groupby(reversed(hints)):
        count = len(list(run))
        after = clamp(progress + move.delta * count)
        groups.append(StepGroup(move, count, progress, after))
        progress = after
    return groups


def format_steps(hints: Sequence[Move]) -> str:
    """Comma-separated move names in performing order."""
    return ", ".join(m.label for m in reversed(hints))
