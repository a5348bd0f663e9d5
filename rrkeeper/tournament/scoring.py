"""
Score aggregation and ranking.

A competitor's total is never stored: it is the sum of every non-blank
pairing score the competitor takes part in, blank counting as 0.
"""

from __future__ import annotations

import re
from typing import Iterable

from rrkeeper.tournament.base import StandingEntry, Tournament

_INT_RE = re.compile(r"^\s*[+-]?\d+\s*$")


def parse_score(raw: object) -> int | None:
    """
    Turn raw score input into an int, or None for blank.

    Non-numeric input is treated as blank rather than rejected.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if raw.is_integer() else None
    if isinstance(raw, str) and _INT_RE.match(raw):
        try:
            return int(raw)
        except ValueError:  # past the interpreter's int digit limit
            return None
    return None


def player_total(tournament: Tournament, index: int, count_bye_scores: bool = True) -> int:
    total = 0
    for round_ in tournament.rounds:
        for pairing in round_:
            if not pairing.involves(index) or pairing.score is None:
                continue
            if not count_bye_scores and tournament.is_bye_pairing(pairing):
                continue
            total += pairing.score
    return total


def compute_totals(tournament: Tournament, count_bye_scores: bool = True) -> dict[int, int]:
    """Full recompute for every real competitor."""
    return {
        i: player_total(tournament, i, count_bye_scores)
        for i in range(len(tournament.players))
    }


def update_totals(
    totals: dict[int, int],
    tournament: Tournament,
    indices: Iterable[int],
    count_bye_scores: bool = True,
) -> dict[int, int]:
    """
    Re-derive totals only for the given competitors (the members of an
    edited pairing).  The bye index is skipped.  Mutates and returns totals.
    """
    for i in indices:
        if i == tournament.bye_index:
            continue
        totals[i] = player_total(tournament, i, count_bye_scores)
    return totals


def rank_standings(tournament: Tournament, totals: dict[int, int]) -> list[StandingEntry]:
    """
    Order competitors by total, highest first.

    sorted() is stable, so equal totals keep their input order.
    """
    entries = [
        StandingEntry(index=i, name=name, total=totals.get(i, 0))
        for i, name in enumerate(tournament.players)
    ]
    return sorted(entries, key=lambda e: -e.total)
