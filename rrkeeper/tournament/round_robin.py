"""
Round-robin schedule generation (circle method).

Rules:
- Every competitor meets every other competitor exactly once.
- N competitors (N even) play N - 1 rounds of N / 2 pairings.
- An odd field is padded with one bye index; whoever is paired with it
  sits out that round, so every real competitor gets exactly one bye.

Each round pairs the first half of the rotation against the reversed second
half (0 vs N-1, 1 vs N-2, …).  Between rounds position 0 stays put and the
rest of the ring turns one step: the last index moves into position 1.
"""

from __future__ import annotations

import logging

from rrkeeper.tournament.base import Pairing, Round

logger = logging.getLogger(__name__)


def padded_count(num_players: int) -> int:
    """Competitor count after adding the bye for an odd field."""
    return num_players + 1 if num_players % 2 == 1 else num_players


def generate_round_pairings(num_players: int) -> list[Round]:
    """
    Build the full schedule for num_players real competitors.

    Returns a list of rounds; each round is a list of Pairings with blank
    scores.  An odd num_players behaves as num_players + 1 where the extra
    index is the bye.
    """
    if num_players < 0:
        raise ValueError(f"num_players must be >= 0, got {num_players}")
    return circle_rounds(padded_count(num_players))


def circle_rounds(n: int) -> list[Round]:
    """
    The circle method over an already-padded field of n competitors.

    n = 0 or n = 1 yields no rounds; any other n must be even.
    """
    if n < 2:
        return []
    if n % 2 == 1:
        raise ValueError(f"circle_rounds needs an even field, got {n}; pad with a bye first")

    ring = list(range(n))
    half = n // 2
    rounds: list[Round] = []

    for _ in range(n - 1):
        first = ring[:half]
        second = ring[half:][::-1]
        rounds.append([Pairing(players=(a, b)) for a, b in zip(first, second)])
        ring = _rotate(ring)

    logger.debug("Generated %d rounds for %d competitors", len(rounds), n)
    return rounds


def build_schedule(names: list[str]) -> list[Round]:
    """Schedule for the given competitor names, bye-padded when odd."""
    return generate_round_pairings(len(names))


def _rotate(ring: list[int]) -> list[int]:
    """Keep position 0 fixed and turn positions 1..n-1 one step toward the end."""
    if len(ring) <= 2:
        return list(ring)
    return [ring[0], ring[-1], *ring[1:-1]]
