"""
Session event dataclasses: the shared language between the session state
machine and any consumer (CLI, HTTP API, tests).

Every Session transition returns one of these.  All events are frozen and
dataclasses.asdict() serialises them to JSON-compatible dicts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal

from rrkeeper.tournament.base import StandingEntry

SessionState = Literal["setup", "in_progress"]


@dataclass(frozen=True)
class TournamentStartedEvent:
    """Fired when names are accepted and the schedule is fixed."""

    participant_names: list[str]
    total_rounds: int
    has_bye: bool
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class TournamentRestoredEvent:
    """Fired when a saved, unexpired tournament is loaded at startup."""

    participant_names: list[str]
    total_rounds: int
    created: datetime
    standings: list[StandingEntry]


@dataclass(frozen=True)
class ScoreRecordedEvent:
    """Fired after a score edit has been applied, totalled and saved."""

    round_num: int              # 1-based, for display
    pairing_index: int
    pairing_label: str          # "A and B", or "A" on a bye
    score: int | None           # None = blank
    affected: list[int]         # real competitor indices whose totals changed
    standings: list[StandingEntry]


@dataclass(frozen=True)
class TournamentClearedEvent:
    """Fired after the tournament and its saved copy are discarded."""

    timestamp: datetime = field(default_factory=datetime.now)


# Union type for type-safe pattern matching in consumers
SessionEvent = (
    TournamentStartedEvent
    | TournamentRestoredEvent
    | ScoreRecordedEvent
    | TournamentClearedEvent
)
