"""
Interactive input collection for the terminal session.

Setup: pick the number of players, then type each name.
In progress: pick a round and a pairing, then type its score.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from rich.prompt import Confirm, IntPrompt, Prompt

from rrkeeper.cli.display import console
from rrkeeper.config import Config
from rrkeeper.tournament.base import Tournament

MenuChoice = Literal["score", "schedule", "standings", "clear", "quit"]


@dataclass
class ScoreEdit:
    round_index: int
    pairing_index: int
    raw: str


def prompt_player_names(config: Config) -> list[str]:
    """Ask for the player count (within the configured range) and each name."""
    lo = config.tournament.min_players
    hi = config.tournament.max_players
    choices = [str(i) for i in range(lo, hi + 1)]

    console.print("\n[bold]New round-robin tournament[/]")
    count = IntPrompt.ask(
        f"  Number of players [dim]({lo}-{hi})[/]",
        choices=choices,
        show_choices=False,
        default=lo,
    )

    names: list[str] = []
    for i in range(count):
        names.append(Prompt.ask(f"  Player #{i + 1} name", default="", show_default=False))
    return names


def prompt_menu() -> MenuChoice:
    console.print(
        "[dim]  s = enter score   r = show rounds   t = show standings   "
        "c = clear tournament   q = quit[/]"
    )
    choice = Prompt.ask("  Action", choices=["s", "r", "t", "c", "q"], default="s")
    return {
        "s": "score",
        "r": "schedule",
        "t": "standings",
        "c": "clear",
        "q": "quit",
    }[choice]  # type: ignore[return-value]


def prompt_score_edit(tournament: Tournament) -> ScoreEdit:
    """Ask which pairing to score and the new value (blank clears it)."""
    round_num = IntPrompt.ask(
        "  Round",
        choices=[str(i) for i in range(1, len(tournament.rounds) + 1)],
        show_choices=False,
    )
    round_index = round_num - 1

    pairings = tournament.rounds[round_index]
    for i, pairing in enumerate(pairings, 1):
        console.print(f"    {i}. {tournament.pairing_label(pairing)}")
    pairing_num = IntPrompt.ask(
        "  Pair",
        choices=[str(i) for i in range(1, len(pairings) + 1)],
        show_choices=False,
    )

    raw = Prompt.ask("  Score [dim](blank to clear)[/]", default="", show_default=False)
    return ScoreEdit(round_index=round_index, pairing_index=pairing_num - 1, raw=raw)


def confirm_clear() -> bool:
    return Confirm.ask("  Clear all tournament data?", default=False)
