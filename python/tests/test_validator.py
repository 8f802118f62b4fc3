"""Rule validator — performed moves against the rule slots."""

from __future__ import annotations

import pytest

from backend.engine.forgesolver.validator import validate
from backend.models.move import Move
from backend.models.rule import AnyPosition, AtSlot, NotLast, Rule


def _rule(move: Move, position) -> Rule:
    return Rule(move=move, position=position)


# -- tests --------------------------------------------------------------------


def test_no_rules_is_valid() -> None:
    report = validate([Move.PUNCH], [None, None, None])
    assert report.valid
    assert report.slots == (None, None, None)


def test_slot_report_fields() -> None:
    report = validate([Move.PUNCH], [_rule(Move.PUNCH, AtSlot(0)), None, None])
    assert report.valid
    slot = report.slots[0]
    assert slot is not None
    assert slot.valid
    assert slot.indicators == (True, False, False)
    assert slot.label == "Punch Last"
    assert report.slots[1:] == (None, None)


def test_empty_history_fails_defined_rule() -> None:
    report = validate([], [None, _rule(Move.BEND, AnyPosition()), None])
    assert not report.valid
    assert report.slots[1] is not None and not report.slots[1].valid


@pytest.mark.parametrize("performed", [Move.HARD_HIT, Move.MEDIUM_HIT, Move.LIGHT_HIT])
def test_generic_hit_matches_every_strength(performed: Move) -> None:
    assert validate([performed], [_rule(Move.HIT, AtSlot(0)), None, None]).valid


def test_generic_hit_does_not_match_other_moves() -> None:
    assert not validate([Move.PUNCH], [_rule(Move.HIT, AtSlot(0)), None, None]).valid


@pytest.mark.parametrize(
    ("history", "expected"),
    [
        ([Move.PUNCH, Move.LIGHT_HIT], True),
        ([Move.PUNCH, Move.BEND, Move.LIGHT_HIT], True),
        ([Move.LIGHT_HIT, Move.PUNCH], False),
    ],
)
def test_not_last(history: list[Move], expected: bool) -> None:
    rules = [_rule(Move.PUNCH, NotLast()), None, None]
    report = validate(history, rules)
    assert report.valid is expected
    assert report.slots[0] is not None
    assert report.slots[0].indicators == (False, True, True)


def test_third_last() -> None:
    rules = [None, None, _rule(Move.BEND, AtSlot(2))]
    assert validate([Move.BEND, Move.PUNCH, Move.PUNCH], rules).valid
    assert not validate([Move.PUNCH, Move.BEND, Move.PUNCH], rules).valid


def test_only_last_three_moves_count() -> None:
    rules = [_rule(Move.BEND, AnyPosition()), None, None]
    assert not validate([Move.BEND, Move.PUNCH, Move.PUNCH, Move.PUNCH], rules).valid
    assert validate([Move.PUNCH, Move.BEND, Move.PUNCH, Move.PUNCH], rules).valid


def test_each_move_satisfies_one_rule() -> None:
    rules = [_rule(Move.PUNCH, AnyPosition()), _rule(Move.PUNCH, AnyPosition()), None]
    assert not validate([Move.BEND, Move.PUNCH], rules).valid
    assert validate([Move.PUNCH, Move.PUNCH], rules).valid


def test_competing_rules_find_a_full_assignment() -> None:
    # "a hit anywhere" must leave the last move to "a hit last".
    rules = [_rule(Move.HIT, AnyPosition()), _rule(Move.HIT, AtSlot(0)), None]
    report = validate([Move.HARD_HIT, Move.LIGHT_HIT], rules)
    assert report.valid
    assert all(s is not None and s.valid for s in report.slots[:2])


def test_conflicting_rules_report_per_slot() -> None:
    rules = [_rule(Move.PUNCH, AtSlot(0)), _rule(Move.BEND, AtSlot(0)), None]
    report = validate([Move.PUNCH], rules)
    assert not report.valid
    assert report.slots[0] is not None and report.slots[0].valid
    assert report.slots[1] is not None and not report.slots[1].valid


def test_validate_is_deterministic() -> None:
    rules = [_rule(Move.HIT, AnyPosition()), _rule(Move.DRAW, NotLast()), None]
    history = [Move.DRAW, Move.HARD_HIT, Move.PUNCH]
    assert validate(history, rules) == validate(history, rules)
