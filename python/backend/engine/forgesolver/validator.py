"""Check the moves already performed against the forging rules."""

from __future__ import annotations

import itertools
from collections.abc import Sequence
from dataclasses import dataclass

from backend.models.move import Move
from backend.models.rule import SLOT_COUNT, Rule


@dataclass(frozen=True)
class SlotReport:
    valid: bool
    indicators: tuple[bool, bool, bool]
    label: str


@dataclass(frozen=True)
class ValidationReport:
    """Per-slot results; ``None`` marks a slot with no rule."""

    valid: bool
    slots: tuple[SlotReport | None, ...]


def _candidates(rule: Rule, recent: Sequence[Move]) -> list[int | None]:
    """Recency indices (0 = last) that *rule* could claim, then "none"."""
    found: list[int | None] = [
        j
        for j, move in enumerate(recent)
        if move.matches(rule.move) and rule.position.accepts(j)
    ]
    found.append(None)
    return found


def validate(history: Sequence[Move], rules: Sequence[Rule | None]) -> ValidationReport:
    """Validate the last three moves of *history* against *rules*.

    A performed move can satisfy one rule only.  Of all ways to hand the
    recent moves out to the rules, the one satisfying the most rules wins;
    ties go to earlier slots claiming more recent moves, which is what a
    slot-by-slot greedy scan finds whenever rules don't compete.
    """
    recent = list(reversed(history[-SLOT_COUNT:]))
    slot_rules = list(rules[:SLOT_COUNT]) + [None] * (SLOT_COUNT - len(rules))

    options = [
        _candidates(rule, recent) if rule is not None else [None]
        for rule in slot_rules
    ]

    best: tuple[int | None, ...] = tuple(None for _ in slot_rules)
    best_score = 0
    for claim in itertools.product(*options):
        taken = [j for j in claim if j is not None]
        if len(taken) != len(set(taken)):
            continue
        if len(taken) > best_score:
            best, best_score = claim, len(taken)

    slots: list[SlotReport | None] = []
    for rule, claimed in zip(slot_rules, best):
        if rule is None:
            slots.append(None)
            continue
        slots.append(
            SlotReport(
                valid=claimed is not None,
                indicators=rule.position.indicators,
                label=rule.label,
            )
        )

    valid = all(s.valid for s in slots if s is not None)
    return ValidationReport(valid=valid, slots=tuple(slots))
