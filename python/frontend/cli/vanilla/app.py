"""Vanilla terminal frontend — no third-party dependencies.

Uses only stdlib (print, ANSI codes, tty/termios) for rendering and input.
"""

from __future__ import annotations

import sys
from pathlib import Path

from backend.engine.forgeplay import ForgeSession
from backend.engine.forgesolver import format_steps, summarize
from backend.models.move import MAX_PROGRESS, PALETTE, Move
from backend.models.recipe import Recipe, RecipeManager
from frontend.cli.controls import RECIPE_PROMPT, SLOT_NAMES, handle_key, recipe_choice
from frontend.cli.input_handler import get_key


# -- ANSI helpers -------------------------------------------------------------

_G = "\033[32;1m"    # bold green
_Y = "\033[33;1m"    # bold yellow
_C = "\033[36;1m"    # bold cyan
_RED = "\033[31;1m"  # bold red
_DIM = "\033[2m"     # dim
_BOLD = "\033[1m"    # bold
_REV = "\033[7m"     # reverse video
_R = "\033[0m"       # reset

_BAR_WIDTH = 50


def _clear() -> None:
    sys.stdout.write("\033[2J\033[H")
    sys.stdout.flush()


# -- rendering ----------------------------------------------------------------


def _render_bar(label: str, progress: int, color: str) -> str:
    filled = round(progress * _BAR_WIDTH / MAX_PROGRESS)
    return (
        f"  {label:>6} {color}{'#' * filled}{_R}"
        f"{_DIM}{'.' * (_BAR_WIDTH - filled)}{_R} {color}{progress:>3}{_R}"
    )


def _render_rules(session: ForgeSession) -> str:
    lines: list[str] = []
    recent = session.state.recent
    for i, (name, slot) in enumerate(zip(SLOT_NAMES, session.report.slots)):
        done = recent[i].label if i < len(recent) else "-"
        if slot is None:
            rule = f"{_DIM}(no rule){_R}"
        else:
            color = _G if slot.valid else _Y
            marks = "".join("*" if on else "." for on in slot.indicators)
            rule = f"{color}{slot.label} [{marks}]{_R}"
        lines.append(f"  {name:<12} {rule:<40} done: {done}")
    return "\n".join(lines)


def _render_plan(session: ForgeSession) -> str:
    hints = session.hints
    if hints is None:
        return f"  {_RED}No sequence reaches the target with these rules.{_R}"
    if not hints:
        return f"  {_G}Nothing left to do.{_R}"

    lines = [
        f"  {i:>2}. {group.text}  {_DIM}{group.progress_before} -> {group.progress_after}{_R}"
        for i, group in enumerate(summarize(session.state.start, hints), 1)
    ]
    lines.append(f"  {_DIM}{format_steps(hints)}{_R}")
    return "\n".join(lines)


def _palette_entry(key: int, move: Move, next_hint: Move | None) -> str:
    entry = f"{move.label}({move.delta:+d})"
    if move is next_hint:
        entry = f"{_BOLD}{_REV}{entry}{_R}"
    return f"{_C}{key}{_R}:{entry}"


def _show(session: ForgeSession, status: str = "") -> None:
    _clear()
    title_color = _G if session.is_done else _C
    print(f"  {title_color}=== Anvil Helper ==={_R}")
    print()
    print(_render_bar("Target", session.state.target, _RED))
    print(_render_bar("Start", session.state.start, _G))
    print()
    print(_render_rules(session))
    print()
    print(_render_plan(session))
    print()
    hint = session.next_hint
    print("  " + "  ".join(_palette_entry(i, m, hint) for i, m in enumerate(PALETTE, 1)))
    print(
        f"  {_C}Arrows{_R}: start/target  |  "
        f"{_C}E R T{_R}: rule move (Shift: position)  |  "
        f"{_C}X{_R}/{_C}C{_R}: clear rules/history  |  "
        f"{_C}P{_R}/{_C}L{_R}: save/recipes  |  "
        f"{_C}Q{_R}: quit"
    )
    if status:
        print(f"\n  {status}")


# -- recipes ------------------------------------------------------------------


def _save_recipe(session: ForgeSession, manager: RecipeManager) -> str:
    name = input("  Recipe name: ").strip()
    if not name:
        return "Save cancelled."
    overwrite = False
    if name in manager.names():
        if input(f"  Recipe {name!r} exists. Overwrite? [y/N] ").strip().lower() != "y":
            return "Save cancelled."
        overwrite = True
    manager.save_recipe(Recipe(name=name, snapshot=session.snapshot()), overwrite=overwrite)
    return f"{_G}Saved recipe {name!r}.{_R}"


def _recipe_menu(session: ForgeSession, manager: RecipeManager) -> str:
    names = manager.names()
    if not names:
        return f"{_Y}No recipes saved yet.{_R}"
    print()
    for i, name in enumerate(names, 1):
        print(f"  {i:>2}. {name}")
    message = recipe_choice(session, manager, input(RECIPE_PROMPT), input)
    return f"{_G}{message}{_R}"


# -- session loop -------------------------------------------------------------


def _session_loop(session: ForgeSession, manager: RecipeManager) -> None:
    status = ""
    while True:
        _show(session, status)
        status = ""
        key = get_key()

        if key == "quit":
            _clear()
            print("  Goodbye!\n")
            return
        elif key == "save":
            status = _save_recipe(session, manager)
        elif key == "load":
            status = _recipe_menu(session, manager)
        else:
            status = handle_key(session, key) or ""


# -- public entry point -------------------------------------------------------


def run(data_dir: Path, session: ForgeSession | None = None) -> None:
    """Launch the vanilla CLI on *session* (a fresh one by default)."""
    manager = RecipeManager(data_dir / "recipes.json")
    _session_loop(session or ForgeSession(), manager)
