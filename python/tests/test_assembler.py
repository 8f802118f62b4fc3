"""Suffix-matching assembler on hand-built reachability tables."""

from __future__ import annotations

import copy

from backend.engine.forgesolver.assembler import assemble


_TABLE: dict[int, list[int]] = {
    0: [],
    2: [7, -5],
    7: [3, 4],
    8: [4, 4],
    10: [1, 4, 5],
    12: [5, 5, 2],
}


# -- tests --------------------------------------------------------------------


def test_trailing_moves_already_match() -> None:
    assert assemble(_TABLE, 12, (2,)) == [5, 5, 2]


def test_trailing_moves_are_reordered() -> None:
    assert assemble(_TABLE, 10, (5, 4)) == [1, 5, 4]
    assert assemble(_TABLE, 12, (2, 5)) == [5, 2, 5]


def test_peels_back_one_move() -> None:
    # 10 doesn't end with 2; reach 8 first and finish with 2.
    assert assemble(_TABLE, 10, (2,)) == [4, 4, 2]


def test_peels_back_two_moves() -> None:
    # (1, 2) at 10: peel 2 -> 8 needs (1,); peel 1 -> 7 needs nothing.
    assert assemble(_TABLE, 10, (1, 2)) == [3, 4, 1, 2]


def test_zero_move_entry_is_reachable() -> None:
    assert assemble(_TABLE, 2, (2,)) == [2]


def test_empty_ending_returns_path_copy() -> None:
    result = assemble(_TABLE, 10, ())
    assert result == _TABLE[10]
    assert result is not _TABLE[10]


def test_unreachable_target_fails() -> None:
    assert assemble(_TABLE, 11, ()) is None
    assert assemble(_TABLE, 11, (2,)) is None


def test_peeling_into_unreachable_position_fails() -> None:
    # 8 ends 4, 4; peeling 3 looks at 5, which is absent.
    assert assemble(_TABLE, 8, (3,)) is None


def test_table_is_not_mutated() -> None:
    before = copy.deepcopy(_TABLE)
    assemble(_TABLE, 10, (1, 2))
    assemble(_TABLE, 10, (5, 4))
    assert _TABLE == before
