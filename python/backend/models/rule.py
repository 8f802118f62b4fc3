"""Forging rules: which move must appear where among the last three."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from backend.models.move import Move

SLOT_COUNT = 3

# Order in which clicking a rule's icon cycles its move class.  Specific hit
# strengths are absent: a rule can only ask for "some hit".
RULE_MOVES: tuple[Move, ...] = (
    Move.HIT,
    Move.DRAW,
    Move.PUNCH,
    Move.BEND,
    Move.UPSET,
    Move.SHRINK,
)

_SLOT_NAMES = ("Last", "Second Last", "Third Last")
_SLOT_KEYS = ("last", "second-last", "third-last")


# -- position constraints -----------------------------------------------------


@dataclass(frozen=True)
class AtSlot:
    """The move must be the *index*-th most recent (0 = last)."""

    index: int

    def __post_init__(self) -> None:
        if not 0 <= self.index < SLOT_COUNT:
            raise ValueError(f"Slot index must be 0-2, got {self.index}.")

    def accepts(self, recency: int) -> bool:
        return recency == self.index

    @property
    def indicators(self) -> tuple[bool, bool, bool]:
        flags = [False] * SLOT_COUNT
        flags[self.index] = True
        return (flags[0], flags[1], flags[2])

    @property
    def label(self) -> str:
        return _SLOT_NAMES[self.index]

    @property
    def key(self) -> str:
        return _SLOT_KEYS[self.index]


@dataclass(frozen=True)
class NotLast:
    def accepts(self, recency: int) -> bool:
        return recency != 0

    @property
    def indicators(self) -> tuple[bool, bool, bool]:
        return (False, True, True)

    @property
    def label(self) -> str:
        return "Not Last"

    @property
    def key(self) -> str:
        return "not-last"


@dataclass(frozen=True)
class AnyPosition:
    def accepts(self, recency: int) -> bool:
        return True

    @property
    def indicators(self) -> tuple[bool, bool, bool]:
        return (True, True, True)

    @property
    def label(self) -> str:
        return "Any"

    @property
    def key(self) -> str:
        return "any"


PositionConstraint = Union[AtSlot, NotLast, AnyPosition]


def next_position(position: PositionConstraint) -> PositionConstraint:
    """Last -> Second Last -> Third Last -> Not Last -> Any -> Last."""
    if isinstance(position, AtSlot):
        if position.index < SLOT_COUNT - 1:
            return AtSlot(position.index + 1)
        return NotLast()
    if isinstance(position, NotLast):
        return AnyPosition()
    return AtSlot(0)


def parse_position(key: str) -> PositionConstraint:
    key = key.strip().lower()
    if key in _SLOT_KEYS:
        return AtSlot(_SLOT_KEYS.index(key))
    if key == "not-last":
        return NotLast()
    if key == "any":
        return AnyPosition()
    raise ValueError(
        f"Unknown rule position {key!r}; expected one of "
        f"{', '.join(_SLOT_KEYS)}, not-last, any."
    )


# -- rule ---------------------------------------------------------------------


@dataclass(frozen=True)
class Rule:
    """A move class pinned to a position among the last three moves."""

    move: Move
    position: PositionConstraint

    def __post_init__(self) -> None:
        if self.move not in RULE_MOVES:
            raise ValueError(
                f"{self.move.label!r} cannot be used in a rule; "
                f"use one of {', '.join(m.value for m in RULE_MOVES)}."
            )

    # -- construction helpers -------------------------------------------------

    @classmethod
    def default(cls, slot: int) -> Rule:
        """The rule a slot gets when first clicked: any hit, at that slot."""
        return cls(move=Move.HIT, position=AtSlot(slot))

    @classmethod
    def parse(cls, text: str) -> Rule:
        """Parse ``"<move>:<position>"``, e.g. ``"punch:last"``.

        The position defaults to ``last`` when omitted.
        """
        name, _, position = text.partition(":")
        try:
            move = Move(name.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown move {name.strip()!r} in rule {text!r}.") from None
        return cls(move=move, position=parse_position(position or "last"))

    # -- cycling --------------------------------------------------------------

    def with_next_move(self) -> Rule:
        idx = RULE_MOVES.index(self.move)
        return Rule(move=RULE_MOVES[(idx + 1) % len(RULE_MOVES)], position=self.position)

    def with_next_position(self) -> Rule:
        return Rule(move=self.move, position=next_position(self.position))

    # -- queries --------------------------------------------------------------

    @property
    def label(self) -> str:
        """Human-readable form, e.g. ``"Punch Not Last"``."""
        return f"{self.move.label} {self.position.label}"

    def to_dict(self) -> dict[str, str]:
        return {"move": self.move.value, "position": self.position.key}

    @classmethod
    def from_dict(cls, data: dict) -> Rule:
        try:
            return cls(move=Move(data["move"]), position=parse_position(data["position"]))
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Malformed rule record: {data!r}") from exc


Rules = tuple[Rule | None, Rule | None, Rule | None]

NO_RULES: Rules = (None, None, None)
