"""Key dispatch shared by the terminal frontends.

Prompts differ per frontend and are handled there; the actions behind
them are plain session and recipe calls and live here.
"""

from __future__ import annotations

from collections.abc import Callable

from backend.engine.forgeplay import ForgeSession
from backend.models.move import PALETTE
from backend.models.recipe import RecipeManager

# "1".."8" perform the palette moves in order.
MOVE_KEYS: dict[str, int] = {str(i + 1): i for i in range(len(PALETTE))}

SLOT_NAMES = ("Last", "Second Last", "Third Last")


def handle_key(session: ForgeSession, key: str) -> str | None:
    """Apply *key* to *session* and return a status message, if any.

    Returns ``None`` for keys this dispatcher does not handle.
    """
    state = session.state

    if key in MOVE_KEYS:
        move = PALETTE[MOVE_KEYS[key]]
        if not session.perform(move):
            return f"{move.label} broke the piece; starting over from 0."
        if session.is_done:
            return "Done! On target with every rule met."
        return f"Performed {move.label} ({move.delta:+d})."

    if key == "left":
        session.set_start(state.start - 1)
    elif key == "right":
        session.set_start(state.start + 1)
    elif key == "up":
        session.set_target(state.target + 1)
    elif key == "down":
        session.set_target(state.target - 1)
    elif key.startswith("rule-move-"):
        slot = int(key.rsplit("-", 1)[1])
        rule = session.cycle_rule_move(slot)
        return f"{SLOT_NAMES[slot]} rule: {rule.label}"
    elif key.startswith("rule-pos-"):
        slot = int(key.rsplit("-", 1)[1])
        rule = session.cycle_rule_position(slot)
        return f"{SLOT_NAMES[slot]} rule: {rule.label}"
    elif key == "clear-rules":
        for slot in range(len(state.rules)):
            session.clear_rule(slot)
        return "Rules cleared."
    elif key == "clear-history":
        session.clear_history()
        return "History cleared."
    else:
        return None
    return ""


# -- recipe menu --------------------------------------------------------------

RECIPE_PROMPT = "  # to load, r# to rename, d# to delete: "


def recipe_choice(
    session: ForgeSession,
    manager: RecipeManager,
    choice: str,
    ask: Callable[[str], str],
) -> str:
    """Apply a recipe menu *choice* such as ``"2"``, ``"r2"`` or ``"d2"``.

    Numbers refer to ``manager.names()``.  *ask* prompts for a new name when
    renaming.  Returns a plain status message.
    """
    choice = choice.strip().lower()
    action, number = (choice[0], choice[1:]) if choice[:1] in ("r", "d") else ("", choice)
    names = manager.names()
    try:
        index = int(number) - 1
    except ValueError:
        return "Cancelled."
    if not 0 <= index < len(names):
        return "Cancelled."
    name = names[index]

    if action == "d":
        manager.delete_recipe(name)
        return f"Deleted recipe {name!r}."
    if action == "r":
        new_name = ask(f"  New name for {name!r}: ").strip()
        if not new_name:
            return "Cancelled."
        try:
            manager.rename_recipe(name, new_name)
        except ValueError as exc:
            return str(exc)
        return f"Renamed recipe {name!r} to {new_name!r}."

    session.load_snapshot(manager.get_recipe(name).snapshot)
    return f"Loaded recipe {name!r}."
