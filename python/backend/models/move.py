"""Anvil moves and the signed progress delta each one applies."""

from __future__ import annotations

from enum import StrEnum

MIN_PROGRESS = 0
MAX_PROGRESS = 150


class Move(StrEnum):
    DRAW = "draw"
    HARD_HIT = "hard-hit"
    MEDIUM_HIT = "medium-hit"
    LIGHT_HIT = "light-hit"
    PUNCH = "punch"
    BEND = "bend"
    UPSET = "upset"
    SHRINK = "shrink"
    # Rule-matching wildcard for "any hit strength"; never performed.
    HIT = "hit"

    # -- queries --------------------------------------------------------------

    @property
    def delta(self) -> int:
        return _DELTAS[self]

    @property
    def label(self) -> str:
        """Display name, e.g. ``"Hard Hit"``."""
        return self.value.replace("-", " ").title()

    @property
    def is_hit(self) -> bool:
        return self.value.endswith(Move.HIT.value)

    def matches(self, move_class: Move) -> bool:
        """Return True if performing *self* counts as *move_class*."""
        return self is move_class or self.value.endswith(move_class.value)

    @classmethod
    def from_delta(cls, delta: int) -> Move:
        try:
            return _BY_DELTA[delta]
        except KeyError:
            raise ValueError(f"No move applies a delta of {delta}.") from None


_DELTAS: dict[Move, int] = {
    Move.DRAW: -15,
    Move.HARD_HIT: -9,
    Move.MEDIUM_HIT: -6,
    Move.LIGHT_HIT: -3,
    Move.PUNCH: 2,
    Move.BEND: 7,
    Move.UPSET: 13,
    Move.SHRINK: 16,
    Move.HIT: 0,
}

_BY_DELTA: dict[int, Move] = {d: m for m, d in _DELTAS.items()}

# Moves a player can actually perform, in fixed palette order.  The solver
# iterates this order, so it also decides tie-breaks.
PALETTE: tuple[Move, ...] = (
    Move.DRAW,
    Move.HARD_HIT,
    Move.MEDIUM_HIT,
    Move.LIGHT_HIT,
    Move.PUNCH,
    Move.BEND,
    Move.UPSET,
    Move.SHRINK,
)

PALETTE_DELTAS: tuple[int, ...] = tuple(m.delta for m in PALETTE)

HIT_VARIANTS: tuple[Move, ...] = (Move.HARD_HIT, Move.MEDIUM_HIT, Move.LIGHT_HIT)


def in_range(progress: int) -> bool:
    return MIN_PROGRESS <= progress <= MAX_PROGRESS


def clamp(progress: int) -> int:
    return max(MIN_PROGRESS, min(MAX_PROGRESS, progress))
