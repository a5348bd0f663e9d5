"""
Session persistence: saves the in-progress tournament as a JSON blob under a
single well-known key and restores it on the next start.

A stored tournament is only trusted if it decodes cleanly, has players,
rounds and a creation date, and is younger than the freshness window.
Anything else is discarded and reported as absent; callers never see an
error for a bad or stale save.

Blob format:
    {"players": ["A", "B", "C"],
     "rounds": [[{"players": [0, 3], "score": null}, ...], ...],
     "date": 1718000000000}          # epoch milliseconds
"""

from __future__ import annotations

import json
import logging
import math
import time
from abc import ABC, abstractmethod
from datetime import timedelta
from pathlib import Path
from typing import Callable

from rrkeeper.tournament.base import Pairing, Round, Tournament, ValidationError, validate_names

logger = logging.getLogger(__name__)

Clock = Callable[[], int]

DEFAULT_KEY = "gameData"
DEFAULT_FRESHNESS = timedelta(hours=2)


def now_ms() -> int:
    return int(time.time() * 1000)


class MalformedStateError(ValueError):
    """Raised when a stored blob is not well-formed tournament data."""


class ExpiredStateError(ValueError):
    """Raised when a stored tournament is older than the freshness window."""


# --------------------------------------------------------------------------- #
# Key-value backends                                                           #
# --------------------------------------------------------------------------- #

class KeyValueStore(ABC):
    """Minimal blob store: the only storage the session relies on."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        ...  # pragma: no cover

    @abstractmethod
    def set(self, key: str, blob: str) -> None:
        ...  # pragma: no cover

    @abstractmethod
    def remove(self, key: str) -> None:
        ...  # pragma: no cover


class MemoryStore(KeyValueStore):
    def __init__(self, data: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(data or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, blob: str) -> None:
        self.data[key] = blob

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class JsonFileStore(KeyValueStore):
    """
    Keeps all keys in one local JSON file.  A missing or unreadable file
    reads as empty; the file is rewritten whole on every change.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def get(self, key: str) -> str | None:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, blob: str) -> None:
        data = self._read()
        data[key] = blob
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def _read(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError, OSError):
            logger.warning("Ignoring unreadable session file %s", self.path)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")


# --------------------------------------------------------------------------- #
# Encoding                                                                     #
# --------------------------------------------------------------------------- #

def encode_tournament(tournament: Tournament) -> str:
    return json.dumps(
        {
            "players": list(tournament.players),
            "rounds": [
                [{"players": list(p.players), "score": p.score} for p in round_]
                for round_ in tournament.rounds
            ],
            "date": tournament.date,
        }
    )


def decode_tournament(blob: str) -> Tournament:
    """
    Parse a stored blob back into a Tournament.

    Raises:
        MalformedStateError: invalid JSON, wrong types, missing or empty
            players/rounds/date, a non-finite date, blank or repeated names,
            a round of the wrong size, or a pairing that names an unknown
            competitor.
    """
    try:
        raw = json.loads(blob)
    except (json.JSONDecodeError, TypeError) as exc:
        raise MalformedStateError(f"Saved tournament is not valid JSON: {exc}") from exc

    if not isinstance(raw, dict):
        raise MalformedStateError("Saved tournament is not an object")

    players = raw.get("players")
    rounds_raw = raw.get("rounds")
    date = raw.get("date")

    if not players or not rounds_raw or not date:
        raise MalformedStateError("Saved tournament is missing players, rounds or date")
    if not isinstance(players, list) or not all(isinstance(p, str) for p in players):
        raise MalformedStateError("players must be a list of names")
    if not isinstance(rounds_raw, list):
        raise MalformedStateError("rounds must be a list")
    if isinstance(date, bool) or not isinstance(date, (int, float)):
        raise MalformedStateError(f"date must be epoch milliseconds, got {date!r}")
    if isinstance(date, float) and not math.isfinite(date):
        raise MalformedStateError(f"date must be a finite number, got {date!r}")
    try:
        validate_names(players)
    except ValidationError as exc:
        raise MalformedStateError(str(exc)) from exc

    padded = len(players) + (len(players) % 2)
    rounds: list[Round] = [_decode_round(r, padded) for r in rounds_raw]
    return Tournament(players=players, rounds=rounds, date=int(date))


def _decode_round(raw: object, padded: int) -> Round:
    if not isinstance(raw, list):
        raise MalformedStateError("each round must be a list of pairings")
    if len(raw) != padded // 2:
        raise MalformedStateError(
            f"each round must have {padded // 2} pairings, got {len(raw)}"
        )
    return [_decode_pairing(p, padded) for p in raw]


def _decode_pairing(raw: object, padded: int) -> Pairing:
    if not isinstance(raw, dict):
        raise MalformedStateError("each pairing must be an object")
    indices = raw.get("players")
    if (
        not isinstance(indices, list)
        or len(indices) != 2
        or not all(isinstance(i, int) and not isinstance(i, bool) for i in indices)
        or not all(0 <= i < padded for i in indices)
        or indices[0] == indices[1]
    ):
        raise MalformedStateError(f"invalid pairing players: {indices!r}")

    score = raw.get("score")
    if score == "":
        score = None  # older saves stored blank as an empty string
    if score is not None and (isinstance(score, bool) or not isinstance(score, int)):
        raise MalformedStateError(f"invalid pairing score: {score!r}")
    return Pairing(players=(indices[0], indices[1]), score=score)


# --------------------------------------------------------------------------- #
# Session store                                                                #
# --------------------------------------------------------------------------- #

class SessionStore:
    """Saves, restores and discards the tournament under one key."""

    def __init__(
        self,
        backend: KeyValueStore,
        key: str = DEFAULT_KEY,
        freshness: timedelta = DEFAULT_FRESHNESS,
        clock: Clock = now_ms,
    ) -> None:
        self.backend = backend
        self.key = key
        self.freshness = freshness
        self.clock = clock

    @property
    def freshness_ms(self) -> int:
        return int(self.freshness.total_seconds() * 1000)

    def save(self, tournament: Tournament) -> None:
        self.backend.set(self.key, encode_tournament(tournament))

    def clear(self) -> None:
        self.backend.remove(self.key)

    def check_fresh(self, tournament: Tournament) -> None:
        """
        Raises:
            ExpiredStateError: the tournament was created a full freshness
                window ago or earlier.
        """
        age = self.clock() - tournament.date
        if age >= self.freshness_ms:
            raise ExpiredStateError(
                f"Saved tournament is {age} ms old (limit {self.freshness_ms} ms)"
            )

    def load(self) -> Tournament | None:
        """Return the saved tournament, or None if absent, malformed or expired."""
        blob = self.backend.get(self.key)
        if blob is None:
            return None
        try:
            tournament = decode_tournament(blob)
            self.check_fresh(tournament)
        except MalformedStateError as exc:
            logger.warning("Discarding saved tournament: %s", exc)
            self.clear()
            return None
        except ExpiredStateError as exc:
            logger.info("Discarding expired tournament: %s", exc)
            self.clear()
            return None
        return tournament
