from backend.models.move import MAX_PROGRESS, MIN_PROGRESS, PALETTE, Move
from backend.models.recipe import ForgeSnapshot, Recipe, RecipeManager
from backend.models.rule import AnyPosition, AtSlot, NotLast, Rule, Rules

__all__ = [
    "MAX_PROGRESS",
    "MIN_PROGRESS",
    "PALETTE",
    "AnyPosition",
    "AtSlot",
    "ForgeSnapshot",
    "Move",
    "NotLast",
    "Recipe",
    "RecipeManager",
    "Rule",
    "Rules",
]
