"""
Tournament data model: competitors, pairings, rounds and the tournament itself.

Competitors are addressed by a stable 0-based index assigned in input order.
When the number of real competitors is odd, a synthetic Bye competitor is
appended at index len(players); it is a distinct variant, never a reserved
name, so a real competitor can be called anything.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


class ValidationError(ValueError):
    """Raised when competitor names cannot start a tournament."""


@dataclass(frozen=True)
class RealCompetitor:
    index: int
    name: str

    @property
    def display_name(self) -> str:
        return self.name


@dataclass(frozen=True)
class Bye:
    """The placeholder opponent for whoever sits out a round."""

    index: int

    @property
    def display_name(self) -> str:
        return "BYE"


Competitor = RealCompetitor | Bye


@dataclass
class Pairing:
    """One scheduled matchup (or bye) within a round. score=None means blank."""

    players: tuple[int, int]
    score: int | None = None

    def involves(self, index: int) -> bool:
        return index in self.players


Round = list[Pairing]


@dataclass
class StandingEntry:
    """Derived total for one real competitor."""

    index: int
    name: str
    total: int = 0


@dataclass
class Tournament:
    players: list[str]
    rounds: list[Round]
    date: int  # epoch milliseconds of creation

    @classmethod
    def empty(cls, date: int) -> Tournament:
        return cls(players=[], rounds=[], date=date)

    @property
    def is_empty(self) -> bool:
        return not self.players or not self.rounds

    @property
    def bye_index(self) -> int | None:
        """Index of the synthetic bye competitor, or None for an even field."""
        if len(self.players) % 2 == 1:
            return len(self.players)
        return None

    @property
    def padded_count(self) -> int:
        return len(self.players) + (1 if self.bye_index is not None else 0)

    def competitor(self, index: int) -> Competitor:
        if index == self.bye_index:
            return Bye(index=index)
        if 0 <= index < len(self.players):
            return RealCompetitor(index=index, name=self.players[index])
        raise IndexError(f"No competitor with index {index}")

    def competitors(self) -> list[Competitor]:
        return [self.competitor(i) for i in range(self.padded_count)]

    def is_bye_pairing(self, pairing: Pairing) -> bool:
        return self.bye_index is not None and pairing.involves(self.bye_index)

    def active_players(self, pairing: Pairing) -> tuple[int, ...]:
        """Real competitor indices in a pairing (one for a bye pairing)."""
        return tuple(i for i in pairing.players if i != self.bye_index)

    def pairing_label(self, pairing: Pairing) -> str:
        """Both names joined by 'and', or the lone name on a bye round."""
        return " and ".join(self.players[i] for i in self.active_players(pairing))

    def pairing(self, round_index: int, pairing_index: int) -> Pairing:
        if not 0 <= round_index < len(self.rounds):
            raise IndexError(f"No round {round_index}")
        pairings = self.rounds[round_index]
        if not 0 <= pairing_index < len(pairings):
            raise IndexError(f"No pairing {pairing_index} in round {round_index}")
        return pairings[pairing_index]

    def find_pairing(self, round_index: int, player_index: int) -> int:
        """Return the position within a round of the pairing a competitor plays in."""
        if not 0 <= round_index < len(self.rounds):
            raise IndexError(f"No round {round_index}")
        for i, pairing in enumerate(self.rounds[round_index]):
            if pairing.involves(player_index):
                return i
        raise IndexError(f"Competitor {player_index} is not scheduled in round {round_index}")


def name_is_blank(name: str | None) -> bool:
    return not name or name.isspace()


def validate_names(
    names: Iterable[str | None],
    min_players: int = 0,
    max_players: int | None = None,
) -> list[str]:
    """
    Check competitor names before a tournament starts.

    Raises:
        ValidationError: a name is blank or repeated, or the count is out of range.
    """
    names = list(names)
    if len(names) < min_players or (max_players is not None and len(names) > max_players):
        upper = max_players if max_players is not None else "any"
        raise ValidationError(
            f"A tournament needs between {min_players} and {upper} players, got {len(names)}"
        )

    seen: set[str] = set()
    for name in names:
        if name_is_blank(name) or name in seen:
            raise ValidationError("Names must be unique and non-blank")
        seen.add(name)
    return names  # type: ignore[return-value]
