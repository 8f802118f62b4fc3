"""Moves, rules, snapshots and the recipe store."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from backend.engine.forgesolver import format_steps, summarize
from backend.models.move import PALETTE, Move
from backend.models.recipe import ForgeSnapshot, Recipe, RecipeManager
from backend.models.rule import AnyPosition, AtSlot, NotLast, Rule


# -- moves --------------------------------------------------------------------


def test_palette_deltas() -> None:
    assert [m.delta for m in PALETTE] == [-15, -9, -6, -3, 2, 7, 13, 16]
    assert Move.HIT.delta == 0
    assert Move.from_delta(13) is Move.UPSET


def test_move_labels_and_matching() -> None:
    assert Move.MEDIUM_HIT.label == "Medium Hit"
    assert Move.MEDIUM_HIT.matches(Move.HIT)
    assert Move.MEDIUM_HIT.is_hit
    assert not Move.PUNCH.matches(Move.HIT)
    assert Move.PUNCH.matches(Move.PUNCH)


def test_unknown_delta() -> None:
    with pytest.raises(ValueError):
        Move.from_delta(5)


# -- rules --------------------------------------------------------------------


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("punch:last", Rule(Move.PUNCH, AtSlot(0))),
        ("punch", Rule(Move.PUNCH, AtSlot(0))),
        ("Bend:Second-Last", Rule(Move.BEND, AtSlot(1))),
        ("hit:third-last", Rule(Move.HIT, AtSlot(2))),
        ("draw:not-last", Rule(Move.DRAW, NotLast())),
        ("shrink:any", Rule(Move.SHRINK, AnyPosition())),
    ],
)
def test_parse_rule(text: str, expected: Rule) -> None:
    assert Rule.parse(text) == expected


@pytest.mark.parametrize("text", ["hard-hit:last", "kick:last", "punch:first", ""])
def test_parse_rule_rejects(text: str) -> None:
    with pytest.raises(ValueError):
        Rule.parse(text)


def test_slot_index_is_bounded() -> None:
    with pytest.raises(ValueError):
        AtSlot(3)


def test_rule_labels() -> None:
    assert Rule(Move.HIT, NotLast()).label == "Hit Not Last"
    assert Rule(Move.UPSET, AtSlot(2)).label == "Upset Third Last"


# -- snapshots ----------------------------------------------------------------


def test_snapshot_round_trips_through_json() -> None:
    snap = ForgeSnapshot(
        rules=(Rule(Move.PUNCH, AtSlot(0)), None, Rule(Move.HIT, AnyPosition())),
        start_progress=17,
        target_progress=103,
    )
    assert ForgeSnapshot.from_dict(json.loads(json.dumps(snap.to_dict()))) == snap


def test_snapshot_pads_missing_rules() -> None:
    snap = ForgeSnapshot.from_dict(
        {"rules": [{"move": "bend", "position": "any"}], "start_progress": 1, "target_progress": 2}
    )
    assert snap.rules == (Rule(Move.BEND, AnyPosition()), None, None)


@pytest.mark.parametrize(
    "data",
    [
        {"rules": [], "start_progress": 1},
        {"rules": [], "start_progress": 1, "target_progress": 151},
        {"rules": [{"move": "punch"}], "start_progress": 1, "target_progress": 2},
        {"rules": [None, None, None, None], "start_progress": 1, "target_progress": 2},
        "not a snapshot",
    ],
    ids=["missing-target", "out-of-range", "rule-without-position", "four-rules", "string"],
)
def test_snapshot_rejects_malformed(data) -> None:
    with pytest.raises(ValueError):
        ForgeSnapshot.from_dict(data)


# -- recipes ------------------------------------------------------------------


def _recipe(name: str, start: int = 0) -> Recipe:
    return Recipe(name=name, snapshot=ForgeSnapshot(start_progress=start, target_progress=99))


def test_recipes_persist(tmp_path: Path) -> None:
    path = tmp_path / "data" / "recipes.json"
    manager = RecipeManager(path)
    manager.save_recipe(_recipe("pick", 5))
    manager.save_recipe(_recipe("axe", 7))

    reloaded = RecipeManager(path)
    assert reloaded.names() == ["pick", "axe"]
    assert reloaded.get_recipe("axe").snapshot.start_progress == 7


def test_duplicate_name_needs_overwrite(tmp_path: Path) -> None:
    manager = RecipeManager(tmp_path / "recipes.json")
    manager.save_recipe(_recipe("pick", 5))
    with pytest.raises(ValueError):
        manager.save_recipe(_recipe("pick", 6))
    manager.save_recipe(_recipe("pick", 6), overwrite=True)
    assert manager.get_recipe("pick").snapshot.start_progress == 6


def test_rename_keeps_order(tmp_path: Path) -> None:
    manager = RecipeManager(tmp_path / "recipes.json")
    for name in ("a", "b", "c"):
        manager.save_recipe(_recipe(name))
    manager.rename_recipe("b", "bee")
    assert manager.names() == ["a", "bee", "c"]
    assert manager.get_recipe("bee").name == "bee"

    with pytest.raises(KeyError):
        manager.rename_recipe("missing", "x")
    with pytest.raises(ValueError):
        manager.rename_recipe("a", "c")


def test_delete_recipe(tmp_path: Path) -> None:
    manager = RecipeManager(tmp_path / "recipes.json")
    manager.save_recipe(_recipe("a"))
    manager.delete_recipe("a")
    manager.delete_recipe("never-existed")
    assert manager.names() == []
    with pytest.raises(KeyError):
        manager.get_recipe("a")


# -- hint summary -------------------------------------------------------------


def test_summarize_groups_runs_in_performing_order() -> None:
    hints = [Move.DRAW, Move.PUNCH, Move.PUNCH]  # punch is next
    groups = summarize(20, hints)
    assert [(g.move, g.count) for g in groups] == [(Move.PUNCH, 2), (Move.DRAW, 1)]
    assert [(g.progress_before, g.progress_after) for g in groups] == [(20, 24), (24, 9)]
    assert [g.text for g in groups] == ["2 x Punch (+4)", "Draw (-15)"]
    assert format_steps(hints) == "Punch, Punch, Draw"


def test_summarize_empty() -> None:
    assert summarize(10, []) == []
    assert format_steps([]) == ""
