"""
Tournament package: data model, round-robin schedule and scoring.

The session (rrkeeper.session) is the only writer of a Tournament; everything
here is either plain data or a pure function over it.
"""

from __future__ import annotations

from rrkeeper.tournament.base import (
    Bye,
    Competitor,
    Pairing,
    RealCompetitor,
    Round,
    StandingEntry,
    Tournament,
    ValidationError,
    validate_names,
)
from rrkeeper.tournament.round_robin import (
    build_schedule,
    circle_rounds,
    generate_round_pairings,
    padded_count,
)
from rrkeeper.tournament.scoring import (
    compute_totals,
    parse_score,
    player_total,
    rank_standings,
    update_totals,
)

__all__ = [
    # Model
    "Bye",
    "Competitor",
    "Pairing",
    "RealCompetitor",
    "Round",
    "StandingEntry",
    "Tournament",
    "ValidationError",
    "validate_names",
    # Schedule
    "build_schedule",
    "circle_rounds",
    "generate_round_pairings",
    "padded_count",
    # Scoring
    "compute_totals",
    "parse_score",
    "player_total",
    "rank_standings",
    "update_totals",
]
