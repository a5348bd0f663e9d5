"""
Rich-based CLI consumer for session events.

This is the ONLY place where terminal output happens.  It renders the round
schedule (display names substituted for indices) and the ranked standings,
and translates SessionEvent objects into panels and one-line summaries.
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from rrkeeper.events import (
    ScoreRecordedEvent,
    SessionEvent,
    TournamentClearedEvent,
    TournamentRestoredEvent,
    TournamentStartedEvent,
)
from rrkeeper.tournament.base import StandingEntry, Tournament

console = Console(legacy_windows=False)


def display_session_event(event: SessionEvent) -> None:
    """Dispatch a SessionEvent to the appropriate display function."""
    match event:
        case TournamentStartedEvent():
            _tournament_started(event)
        case TournamentRestoredEvent():
            _tournament_restored(event)
        case ScoreRecordedEvent():
            _score_recorded(event)
        case TournamentClearedEvent():
            console.print("\n[yellow]Tournament cleared.[/]  Enter new players to start again.\n")


# --------------------------------------------------------------------------- #
# Tables                                                                       #
# --------------------------------------------------------------------------- #

def round_table(tournament: Tournament, round_index: int) -> Table:
    table = Table(
        title=f"Round {round_index + 1}",
        show_header=True,
        header_style="bold",
        border_style="dim",
        show_lines=False,
    )
    table.add_column("#", style="dim", width=3, justify="right")
    table.add_column("Pair", min_width=24)
    table.add_column("Score", justify="right", width=7)

    for i, pairing in enumerate(tournament.rounds[round_index], 1):
        label = tournament.pairing_label(pairing)
        if tournament.is_bye_pairing(pairing):
            label = f"{label} [dim](bye)[/]"
        score = "" if pairing.score is None else str(pairing.score)
        table.add_row(str(i), label, score)
    return table


def standings_table(standings: list[StandingEntry], title: str = "Standings") -> Table:
    table = Table(
        title=title,
        show_header=True,
        header_style="bold",
        border_style="dim",
        show_lines=False,
    )
    table.add_column("#", style="dim", width=3, justify="right")
    table.add_column("Name", min_width=20)
    table.add_column("Total", justify="right", width=7)

    for rank, entry in enumerate(standings, 1):
        style = "bold yellow" if rank == 1 and entry.total > 0 else ""
        table.add_row(str(rank), entry.name, str(entry.total), style=style)
    return table


def display_schedule(tournament: Tournament) -> None:
    for round_index in range(len(tournament.rounds)):
        console.print()
        console.print(round_table(tournament, round_index))


def display_standings(standings: list[StandingEntry]) -> None:
    console.print()
    console.print(standings_table(standings))
    console.print()


# --------------------------------------------------------------------------- #
# Event display functions                                                      #
# --------------------------------------------------------------------------- #

def _tournament_started(event: TournamentStartedEvent) -> None:
    names = "  •  ".join(event.participant_names)
    bye_note = "\n[dim]Odd field: one player sits out each round.[/]" if event.has_bye else ""
    console.print()
    console.print(
        Panel(
            f"[dim]Players ({len(event.participant_names)}):[/]\n{names}\n\n"
            f"[dim]Rounds: {event.total_rounds}  •  "
            f"{event.timestamp.strftime('%Y-%m-%d %H:%M:%S')}[/]{bye_note}",
            title="[bold green] Round Robin started [/]",
            border_style="green",
            expand=False,
        )
    )


def _tournament_restored(event: TournamentRestoredEvent) -> None:
    console.print()
    console.print(
        Panel(
            f"[dim]Players ({len(event.participant_names)}):[/]\n"
            f"{'  •  '.join(event.participant_names)}\n\n"
            f"[dim]Rounds: {event.total_rounds}  •  "
            f"created {event.created.strftime('%Y-%m-%d %H:%M:%S')}[/]",
            title="[bold blue] Resumed saved tournament [/]",
            border_style="blue",
            expand=False,
        )
    )


def _score_recorded(event: ScoreRecordedEvent) -> None:
    score = "blank" if event.score is None else str(event.score)
    console.print(
        f"\n  [green]✓[/] Round {event.round_num}: [bold]{event.pairing_label}[/] → {score}"
    )
    display_standings(event.standings)
