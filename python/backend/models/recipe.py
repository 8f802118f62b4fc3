"""Named forging setups ("recipes") persisted to a JSON file."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from backend.models.move import in_range
from backend.models.rule import NO_RULES, SLOT_COUNT, Rule, Rules

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ForgeSnapshot:
    """The part of a forging session worth saving: rules and both sliders."""

    rules: Rules = NO_RULES
    start_progress: int = 0
    target_progress: int = 0

    def to_dict(self) -> dict:
        return {
            "rules": [r.to_dict() if r else None for r in self.rules],
            "start_progress": self.start_progress,
            "target_progress": self.target_progress,
        }

    @classmethod
    def from_dict(cls, data: dict) -> ForgeSnapshot:
        try:
            raw_rules = list(data.get("rules") or [])
            start = int(data["start_progress"])
            target = int(data["target_progress"])
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Malformed forge snapshot: {data!r}") from exc

        if len(raw_rules) > SLOT_COUNT:
            raise ValueError(
                f"Expected at most {SLOT_COUNT} rules, got {len(raw_rules)}."
            )
        if not (in_range(start) and in_range(target)):
            raise ValueError(
                f"Progress out of range: start={start}, target={target}."
            )
        raw_rules += [None] * (SLOT_COUNT - len(raw_rules))
        rules = tuple(Rule.from_dict(r) if r else None for r in raw_rules)
        return cls(rules=rules, start_progress=start, target_progress=target)  # type: ignore[arg-type]


@dataclass
class Recipe:
    name: str
    snapshot: ForgeSnapshot = field(default_factory=ForgeSnapshot)


class RecipeManager:
    """Loads, saves, and queries recipes from a JSON file."""

    def __init__(self, filepath: Path) -> None:
        self.filepath = filepath
        self._recipes: dict[str, Recipe] = {}
        self._load()

    # -- persistence ----------------------------------------------------------

    def _load(self) -> None:
        if self.filepath.exists():
            data = json.loads(self.filepath.read_text())
            for entry in data:
                name = entry["name"]
                self._recipes[name] = Recipe(
                    name=name, snapshot=ForgeSnapshot.from_dict(entry)
                )
            logger.debug("Loaded %d recipes from %s", len(self._recipes), self.filepath)

    def save(self) -> None:
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        data = [
            {"name": r.name, **r.snapshot.to_dict()}
            for r in self._recipes.values()
        ]
        self.filepath.write_text(json.dumps(data, indent=2) + "\n")

    # -- mutations ------------------------------------------------------------

    def save_recipe(self, recipe: Recipe, overwrite: bool = False) -> None:
        name = recipe.name.strip()
        if not name:
            raise ValueError("Recipe name must not be blank.")
        if name in self._recipes and not overwrite:
            raise ValueError(f"Recipe {name!r} already exists.")
        self._recipes[name] = Recipe(name=name, snapshot=recipe.snapshot)
        self.save()

    def rename_recipe(self, old_name: str, new_name: str) -> None:
        new_name = new_name.strip()
        if old_name not in self._recipes:
            raise KeyError(f"Recipe {old_name!r} not found.")
        if not new_name:
            raise ValueError("Recipe name must not be blank.")
        if new_name in self._recipes:
            raise ValueError(f"Recipe {new_name!r} already exists.")
        # Rebuild to keep the renamed entry in its original slot.
        self._recipes = {
            (new_name if k == old_name else k): (
                Recipe(name=new_name, snapshot=v.snapshot) if k == old_name else v
            )
            for k, v in self._recipes.items()
        }
        self.save()

    def delete_recipe(self, name: str) -> None:
        if self._recipes.pop(name, None) is not None:
            self.save()

    # -- queries --------------------------------------------------------------

    def get_recipe(self, name: str) -> Recipe:
        try:
            return self._recipes[name]
        except KeyError:
            raise KeyError(f"Recipe {name!r} not found.") from None

    def names(self) -> list[str]:
        return list(self._recipes)
