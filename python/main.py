#!/usr/bin/env python3
"""Anvil Helper — plan forging moves for the TerraFirmaCraft anvil.

Usage::

    python main.py --start 0 --target 2 --rule punch:last   # print a plan
    python main.py --screenshot anvil.png --rule hit:any     # read sliders from an image
    python main.py -f rich                                   # interactive Rich terminal
    python main.py -f vanilla --recipe "copper pick"         # load a saved recipe
    python main.py --rename "copper pick" --to "pick"        # manage recipes
"""

import importlib
import logging
import sys
from enum import StrEnum
from pathlib import Path
from typing import List, Optional

import typer

ROOT = Path(__file__).resolve().parent  # python/
PROJECT_ROOT = ROOT.parent
DATA_DIR = PROJECT_ROOT / "data"

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.engine.forgeplay import ForgeSession  # noqa: E402
from backend.engine.forgesolver import format_steps, summarize  # noqa: E402
from backend.engine.screenshot import ScreenshotExtractor  # noqa: E402
from backend.models.move import MAX_PROGRESS, MIN_PROGRESS, Move  # noqa: E402
from backend.models.recipe import Recipe, RecipeManager  # noqa: E402
from backend.models.rule import SLOT_COUNT, Rule  # noqa: E402

logger = logging.getLogger(__name__)


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    vanilla = "vanilla"
    rich = "rich"


_RUNNERS = {
    Frontend.vanilla: "frontend.cli.vanilla.app",
    Frontend.rich: "frontend.cli.rich.app",
}


# -- helpers ------------------------------------------------------------------


def _parse_rules(values: List[str]) -> List[Optional[Rule]]:
    if len(values) > SLOT_COUNT:
        raise typer.BadParameter(f"At most {SLOT_COUNT} rules (Last, Second Last, Third Last).")
    rules: List[Optional[Rule]] = []
    for value in values:
        if value.strip().lower() in ("", "-", "none"):
            rules.append(None)
            continue
        try:
            rules.append(Rule.parse(value))
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc
    return rules


def _parse_history(values: List[str]) -> List[Move]:
    moves: List[Move] = []
    for value in values:
        try:
            move = Move(value.strip().lower())
        except ValueError:
            raise typer.BadParameter(f"Unknown move {value!r}.") from None
        if move is Move.HIT:
            raise typer.BadParameter("History needs a hit strength, not a generic 'hit'.")
        moves.append(move)
    return moves


def _print_plan(session: ForgeSession) -> None:
    state = session.state
    report = session.report

    print(f"\n  Start {state.start}  ->  Target {state.target}")
    for name, slot in zip(("Last", "Second Last", "Third Last"), report.slots):
        if slot is not None:
            mark = "ok" if slot.valid else "--"
            print(f"  [{mark}] {name:<12} {slot.label}")

    hints = session.hints
    if hints is None:
        print("\n  No solution: the target cannot be reached with these rules.\n")
        return
    if not hints:
        print("\n  Nothing left to do.\n")
        return

    print(f"\n  {len(hints)} moves:")
    for i, group in enumerate(summarize(state.start, hints), 1):
        print(f"  {i:>2}. {group.text:<24} {group.progress_before:>3} -> {group.progress_after:>3}")
    print(f"\n  {format_steps(hints)}\n")


def _build_session(
    start: Optional[int],
    target: Optional[int],
    rules: List[Optional[Rule]],
    history: List[Move],
    screenshot: Optional[Path],
    recipe: Optional[str],
    manager: RecipeManager,
) -> ForgeSession:
    if recipe is None:
        session = ForgeSession()
    else:
        try:
            session = ForgeSession.from_snapshot(manager.get_recipe(recipe).snapshot)
        except KeyError as exc:
            raise typer.BadParameter(str(exc.args[0]), param_hint="--recipe") from exc

    if screenshot is not None:
        extracted = ScreenshotExtractor.extract_file(screenshot)
        if extracted is None:
            raise typer.BadParameter(
                "Could not find both sliders in the image.", param_hint="--screenshot"
            )
        logger.info("Screenshot: start=%d target=%d", extracted.start, extracted.target)
        session.set_start(extracted.start)
        session.set_target(extracted.target)

    if start is not None:
        session.set_start(start)
    if target is not None:
        session.set_target(target)
    for slot, rule in enumerate(rules):
        session.set_rule(slot, rule)
    if history:
        session.set_history(history)
    return session


def _manage_recipes(
    manager: RecipeManager,
    rename: Optional[str],
    new_name: Optional[str],
    delete: Optional[str],
    list_recipes: bool,
) -> None:
    if rename is not None:
        if new_name is None:
            raise typer.BadParameter("Give the new name with --to.", param_hint="--rename")
        try:
            manager.rename_recipe(rename, new_name)
        except KeyError as exc:
            raise typer.BadParameter(str(exc.args[0]), param_hint="--rename") from exc
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--rename") from exc
        print(f"  Renamed recipe {rename!r} to {new_name.strip()!r}.")

    if delete is not None:
        if delete not in manager.names():
            raise typer.BadParameter(f"Recipe {delete!r} not found.", param_hint="--delete")
        manager.delete_recipe(delete)
        print(f"  Deleted recipe {delete!r}.")

    if list_recipes:
        names = manager.names()
        if not names:
            print("  No recipes saved yet.")
        for name in names:
            snap = manager.get_recipe(name).snapshot
            rules = ", ".join(r.label for r in snap.rules if r is not None) or "no rules"
            print(
                f"  {name}: {snap.start_progress} -> {snap.target_progress} ({rules})"
            )


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Optional[Frontend] = typer.Option(
        None, "-f", "--frontend",
        help="Interactive frontend to launch. Omit to print a plan and exit.",
    ),
    start: Optional[int] = typer.Option(
        None, "--start",
        min=MIN_PROGRESS, max=MAX_PROGRESS,
        help="Current progress (green slider).",
    ),
    target: Optional[int] = typer.Option(
        None, "--target",
        min=MIN_PROGRESS, max=MAX_PROGRESS,
        help="Target progress (red slider).",
    ),
    rule: List[str] = typer.Option(
        [], "--rule",
        help="Rule as MOVE:POSITION (e.g. punch:last, hit:not-last, bend:any). "
        "Repeat for the Last, Second Last and Third Last slots; '-' skips a slot.",
    ),
    history: List[str] = typer.Option(
        [], "--history",
        help="Moves already performed, oldest first (e.g. --history punch --history light-hit). "
        "They count towards the rules; the start slider stays where it is.",
    ),
    screenshot: Optional[Path] = typer.Option(
        None, "--screenshot",
        exists=True, dir_okay=False,
        help="Read start and target from a screenshot of the anvil screen.",
    ),
    recipe: Optional[str] = typer.Option(
        None, "--recipe",
        help="Load a saved recipe before applying the other options.",
    ),
    save: Optional[str] = typer.Option(
        None, "--save",
        help="Save the resulting rules and sliders as a recipe.",
    ),
    rename: Optional[str] = typer.Option(
        None, "--rename",
        help="Rename a saved recipe (give the new name with --to) and exit.",
    ),
    new_name: Optional[str] = typer.Option(
        None, "--to",
        help="New name for --rename.",
    ),
    delete: Optional[str] = typer.Option(
        None, "--delete",
        help="Delete a saved recipe and exit.",
    ),
    list_recipes: bool = typer.Option(
        False, "--list-recipes",
        help="List saved recipes and exit.",
    ),
    data_dir: Path = typer.Option(
        DATA_DIR, "--data-dir",
        envvar="ANVIL_DATA_DIR",
        help="Where recipes are stored.",
    ),
    log_level: str = typer.Option(
        "WARNING", "--log-level",
        envvar="ANVIL_LOG_LEVEL",
        help="Logging level (DEBUG, INFO, WARNING, ...).",
    ),
) -> None:
    """Anvil Helper."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    manager = RecipeManager(data_dir / "recipes.json")
    if rename is not None or delete is not None or list_recipes:
        _manage_recipes(manager, rename, new_name, delete, list_recipes)
        return

    session = _build_session(
        start, target, _parse_rules(rule), _parse_history(history), screenshot, recipe, manager,
    )

    if save is not None:
        try:
            manager.save_recipe(Recipe(name=save, snapshot=session.snapshot()), overwrite=True)
        except ValueError as exc:
            raise typer.BadParameter(str(exc), param_hint="--save") from exc
        print(f"  Saved recipe {save!r}.")

    if frontend is None:
        _print_plan(session)
        return

    mod = importlib.import_module(_RUNNERS[frontend])
    mod.run(data_dir=data_dir, session=session)


if __name__ == "__main__":
    app()
