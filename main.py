"""
RoundRobinKeeper: terminal entry point.

Usage:
    python main.py

Wires together:  config → logging → session store → session → prompts → CLI display
"""

from __future__ import annotations

import sys

from rrkeeper.cli.display import (
    console,
    display_schedule,
    display_session_event,
    display_standings,
)
from rrkeeper.cli.prompts import (
    confirm_clear,
    prompt_menu,
    prompt_player_names,
    prompt_score_edit,
)
from rrkeeper.config import load_config
from rrkeeper.logs import setup_logging
from rrkeeper.session import Session, create_session
from rrkeeper.tournament.base import ValidationError


def _setup(session: Session) -> None:
    """Collect names until a tournament starts."""
    while not session.is_in_progress:
        names = prompt_player_names(session.config)
        try:
            event = session.start(names)
        except ValidationError as exc:
            console.print(f"  [red]{exc}[/]")
            continue
        display_session_event(event)
        display_schedule(session.tournament)
        display_standings(session.standings())


def _main() -> None:
    try:
        config = load_config("config.yaml")
    except ValueError as exc:
        console.print(f"[red]Config error:[/] {exc}")
        sys.exit(1)

    # File logging only; the console belongs to the prompts
    setup_logging(config, console=False)

    session = create_session(config, restore=False)
    restored = session.restore()
    if restored is not None:
        display_session_event(restored)
        display_schedule(session.tournament)
        display_standings(session.standings())

    while True:
        if not session.is_in_progress:
            _setup(session)

        match prompt_menu():
            case "score":
                edit = prompt_score_edit(session.tournament)
                event = session.record_score(edit.round_index, edit.pairing_index, edit.raw)
                display_session_event(event)
            case "schedule":
                display_schedule(session.tournament)
            case "standings":
                display_standings(session.standings())
            case "clear":
                if confirm_clear():
                    display_session_event(session.clear())
            case "quit":
                console.print("[dim]Progress is saved; run again within the session window to resume.[/]")
                return


def main() -> None:
    try:
        _main()
    except (KeyboardInterrupt, EOFError):
        console.print("\n[dim]Bye.[/]")


if __name__ == "__main__":
    main()
