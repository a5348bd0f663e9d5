"""
Tournament session: the single owner of the running tournament.

States:
    "setup"        names editable, no schedule
    "in_progress"  schedule fixed, names locked, scores editable

    setup --start(names)--> in_progress --clear()--> setup

restore() (called by create_session()) loads a saved tournament and, if one
is valid, moves straight to "in_progress".

Every transition runs to completion (state, totals, ranking and the saved
snapshot) before returning an event describing what happened.
"""

from __future__ import annotations

import logging
from datetime import datetime

from rrkeeper.config import Config
from rrkeeper.events import (
    ScoreRecordedEvent,
    SessionState,
    TournamentClearedEvent,
    TournamentRestoredEvent,
    TournamentStartedEvent,
)
from rrkeeper.store import JsonFileStore, KeyValueStore, SessionStore
from rrkeeper.tournament.base import StandingEntry, Tournament, validate_names
from rrkeeper.tournament.round_robin import build_schedule
from rrkeeper.tournament.scoring import (
    compute_totals,
    parse_score,
    rank_standings,
    update_totals,
)

logger = logging.getLogger(__name__)


class SessionStateError(RuntimeError):
    """Raised when an action is not allowed in the current session state."""


class Session:
    def __init__(self, store: SessionStore, config: Config | None = None) -> None:
        self.store = store
        self.config = config or Config()
        self._tournament = Tournament.empty(self.store.clock())
        self._totals: dict[int, int] = {}
        self._state: SessionState = "setup"

    # ------------------------------------------------------------------ #
    # Queries                                                              #
    # ------------------------------------------------------------------ #

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_in_progress(self) -> bool:
        return self._state == "in_progress"

    @property
    def tournament(self) -> Tournament:
        return self._tournament

    @property
    def totals(self) -> dict[int, int]:
        return dict(self._totals)

    def standings(self) -> list[StandingEntry]:
        """Current ranking, highest total first; ties keep input order."""
        return rank_standings(self._tournament, self._totals)

    # ------------------------------------------------------------------ #
    # Transitions                                                          #
    # ------------------------------------------------------------------ #

    def restore(self) -> TournamentRestoredEvent | None:
        """Load a saved tournament if one is valid; otherwise stay in setup."""
        tournament = self.store.load()
        if tournament is None:
            logger.info("No saved tournament to restore, starting in setup")
            return None

        self._tournament = tournament
        self._totals = self._compute_totals()
        self._state = "in_progress"
        logger.info(
            "Restored tournament with %d players, %d rounds",
            len(tournament.players),
            len(tournament.rounds),
        )
        return TournamentRestoredEvent(
            participant_names=list(tournament.players),
            total_rounds=len(tournament.rounds),
            created=datetime.fromtimestamp(tournament.date / 1000),
            standings=self.standings(),
        )

    def start(self, names: list[str]) -> TournamentStartedEvent:
        """
        Fix the schedule for the given competitors.

        Raises:
            SessionStateError: a tournament is already in progress.
            ValidationError:   a name is blank or repeated, or the player
                               count is outside the configured range.
        """
        if self.is_in_progress:
            raise SessionStateError("A tournament is already in progress; clear it first.")

        names = validate_names(
            names,
            min_players=self.config.tournament.min_players,
            max_players=self.config.tournament.max_players,
        )

        self._tournament = Tournament(
            players=list(names),
            rounds=build_schedule(names),
            date=self.store.clock(),
        )
        self._totals = self._compute_totals()
        self._state = "in_progress"

        logger.info("Started tournament: %s", ", ".join(names))
        return TournamentStartedEvent(
            participant_names=list(names),
            total_rounds=len(self._tournament.rounds),
            has_bye=self._tournament.bye_index is not None,
        )

    def record_score(self, round_index: int, pairing_index: int, raw: object) -> ScoreRecordedEvent:
        """
        Set the score of one pairing, re-total its members and save.

        Non-numeric input is stored as blank.

        Raises:
            SessionStateError: no tournament is in progress.
            IndexError:        the round or pairing does not exist.
        """
        if not self.is_in_progress:
            raise SessionStateError("No tournament in progress.")

        tournament = self._tournament
        pairing = tournament.pairing(round_index, pairing_index)
        pairing.score = parse_score(raw)

        affected = list(tournament.active_players(pairing))
        update_totals(
            self._totals,
            tournament,
            affected,
            count_bye_scores=self.config.tournament.count_bye_scores,
        )
        standings = self.standings()
        self.store.save(tournament)

        label = tournament.pairing_label(pairing)
        logger.info("Round %d: %s scored %s", round_index + 1, label, pairing.score)
        return ScoreRecordedEvent(
            round_num=round_index + 1,
            pairing_index=pairing_index,
            pairing_label=label,
            score=pairing.score,
            affected=affected,
            standings=standings,
        )

    def record_player_score(self, round_index: int, player_index: int, raw: object) -> ScoreRecordedEvent:
        """Same as record_score, locating the pairing by one of its members."""
        if not self.is_in_progress:
            raise SessionStateError("No tournament in progress.")
        pairing_index = self._tournament.find_pairing(round_index, player_index)
        return self.record_score(round_index, pairing_index, raw)

    def clear(self) -> TournamentClearedEvent:
        """Discard the tournament and its saved copy.  Confirmation is the caller's job."""
        self.store.clear()
        self._tournament = Tournament.empty(self.store.clock())
        self._totals = {}
        self._state = "setup"
        logger.info("Tournament cleared")
        return TournamentClearedEvent()

    # ------------------------------------------------------------------ #
    # Internal helpers                                                     #
    # ------------------------------------------------------------------ #

    def _compute_totals(self) -> dict[int, int]:
        return compute_totals(
            self._tournament,
            count_bye_scores=self.config.tournament.count_bye_scores,
        )


def create_session(
    config: Config,
    backend: KeyValueStore | None = None,
    *,
    restore: bool = True,
) -> Session:
    """
    Build a Session over the configured store, restoring any saved tournament
    unless restore=False.

    Defaults to the JSON file named by session.store_path.
    """
    store = SessionStore(
        backend if backend is not None else JsonFileStore(config.store_path),
        key=config.session.storage_key,
        freshness=config.freshness,
    )
    session = Session(store, config)
    if restore:
        session.restore()
    return session
