"""Rich terminal frontend — tables, colours, and panels.

Uses the ``rich`` library for styled output while sharing the same input
handler, key dispatch and backend as the vanilla CLI.  Recipes can be
saved and loaded from inside the session.
"""

from __future__ import annotations

from pathlib import Path

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.engine.forgeplay import ForgeSession
from backend.engine.forgesolver import format_steps, summarize
from backend.models.move import MAX_PROGRESS, PALETTE
from backend.models.recipe import Recipe, RecipeManager
from frontend.cli.controls import RECIPE_PROMPT, SLOT_NAMES, handle_key, recipe_choice
from frontend.cli.input_handler import get_key

console = Console()

_BAR_WIDTH = 50


# -- rendering ----------------------------------------------------------------


def _render_bar(progress: int, style: str) -> Text:
    filled = round(progress * _BAR_WIDTH / MAX_PROGRESS)
    bar = Text()
    bar.append("█" * filled, style=style)
    bar.append("░" * (_BAR_WIDTH - filled), style="dim")
    bar.append(f" {progress:>3}", style=f"bold {style}")
    return bar


def _render_sliders(session: ForgeSession) -> Table:
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column(justify="right", style="dim")
    table.add_column()
    table.add_row("Target", _render_bar(session.state.target, "red"))
    table.add_row("Start", _render_bar(session.state.start, "green"))
    return table


def _render_rules(session: ForgeSession) -> Table:
    """One column per slot: rule, position indicators, performed move."""
    report = session.report
    recent = session.state.recent
    hints = list(reversed((session.hints or [])[-3:]))

    table = Table(box=rich.box.ROUNDED, border_style="bright_blue", show_lines=True)
    table.add_column("", style="dim")
    for name in SLOT_NAMES:
        table.add_column(name, justify="center", min_width=14)

    rule_cells: list[Text] = []
    ind_cells: list[Text] = []
    for slot in report.slots:
        if slot is None:
            rule_cells.append(Text("—", style="dim"))
            ind_cells.append(Text(""))
            continue
        style = "bold green" if slot.valid else "bold dark_orange"
        rule_cells.append(Text(slot.label, style=style))
        ind_cells.append(
            Text(" ".join("●" if on else "○" for on in slot.indicators), style=style)
        )

    table.add_row("Rule", *rule_cells)
    table.add_row("Where", *ind_cells)
    table.add_row(
        "Done",
        *(Text(recent[i].label if i < len(recent) else "", style="bold") for i in range(3)),
    )
    # Upcoming moves, next one first.
    table.add_row(
        "Next",
        *(Text(hints[i].label if i < len(hints) else "", style="cyan") for i in range(3)),
    )
    return table


def _render_plan(session: ForgeSession) -> Table | Text:
    hints = session.hints
    if hints is None:
        return Text("  No sequence reaches the target with these rules.", style="red")
    if not hints:
        return Text("  Nothing left to do.", style="green")

    table = Table(box=rich.box.SIMPLE, show_header=True, header_style="dim")
    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Step", style="bold")
    table.add_column("Progress", justify="right", style="yellow")
    for i, group in enumerate(summarize(session.state.start, hints), 1):
        table.add_row(
            str(i),
            group.text,
            f"{group.progress_before} → {group.progress_after}",
        )
    table.caption = format_steps(hints)
    table.caption_style = "dim"
    return table


def _render_palette(session: ForgeSession) -> Text:
    palette = Text()
    for i, move in enumerate(PALETTE, 1):
        palette.append(f" {i}", style="bold cyan")
        style = "red" if move.delta < 0 else "green"
        if move is session.next_hint:
            style = f"reverse bold {style}"
        palette.append(f" {move.label} ({move.delta:+d}) ", style=style)
    return palette


def _draw(session: ForgeSession, status: str = "") -> None:
    console.clear()

    controls = Text()
    controls.append("  ←→", style="bold cyan")
    controls.append(" start   ", style="dim")
    controls.append("↑↓", style="bold cyan")
    controls.append(" target   ", style="dim")
    controls.append("E R T", style="bold cyan")
    controls.append(" rule move (+Shift: position)   ", style="dim")
    controls.append("X", style="bold cyan")
    controls.append(" clear rules   ", style="dim")
    controls.append("C", style="bold cyan")
    controls.append(" clear history   ", style="dim")
    controls.append("P/L", style="bold cyan")
    controls.append(" save/recipes   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append(" quit", style="dim")

    body = Group(
        Align.center(_render_sliders(session)),
        Text(""),
        Align.center(_render_rules(session)),
        Text(""),
        Align.center(_render_plan(session)),
    )
    border = "bold green" if session.is_done else "bright_blue"
    panel = Panel(
        body,
        title="[bold]A N V I L   H E L P E R[/bold]",
        border_style=border,
        padding=(1, 2),
    )

    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(_render_palette(session)))
    if status:
        console.print(Align.center(Text.from_markup(f"  {status}")))
    console.print(Align.center(controls))


# -- recipes ------------------------------------------------------------------


def _save_recipe(session: ForgeSession, manager: RecipeManager) -> str:
    name = console.input("  Recipe name: ").strip()
    if not name:
        return "[dim]Save cancelled.[/dim]"
    overwrite = False
    if name in manager.names():
        answer = console.input(f"  Recipe [bold]{name}[/bold] exists. Overwrite? [y/N] ")
        if answer.strip().lower() != "y":
            return "[dim]Save cancelled.[/dim]"
        overwrite = True
    manager.save_recipe(Recipe(name=name, snapshot=session.snapshot()), overwrite=overwrite)
    return f"[green]Saved recipe[/green] [bold]{name}[/bold]"


def _recipe_menu(session: ForgeSession, manager: RecipeManager) -> str:
    names = manager.names()
    if not names:
        return "[yellow]No recipes saved yet.[/yellow]"

    table = Table(box=rich.box.ROUNDED, border_style="dim", title="Recipes")
    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Name", style="bold")
    for i, name in enumerate(names, 1):
        table.add_row(str(i), name)
    console.print(Align.center(table))

    message = recipe_choice(session, manager, console.input(RECIPE_PROMPT), console.input)
    return f"[green]{escape(message)}[/green]"


# -- session loop -------------------------------------------------------------


def _session_loop(session: ForgeSession, manager: RecipeManager) -> None:
    status = ""
    while True:
        _draw(session, status)
        status = ""
        key = get_key()

        if key == "quit":
            console.clear()
            console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
            return
        elif key == "save":
            status = _save_recipe(session, manager)
        elif key == "load":
            status = _recipe_menu(session, manager)
        else:
            message = handle_key(session, key)
            if message:
                status = f"[cyan]{message}[/cyan]"


# -- public entry point -------------------------------------------------------


def run(data_dir: Path, session: ForgeSession | None = None) -> None:
    """Launch the Rich CLI on *session* (a fresh one by default)."""
    manager = RecipeManager(data_dir / "recipes.json")
    _session_loop(session or ForgeSession(), manager)
