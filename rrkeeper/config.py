"""
Configuration loading from config.yaml.

Uses typed dataclasses throughout so the rest of the app gets IDE
completion and type-checker support without touching raw dicts.
Every key has a default, so a missing config.yaml is not an error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import timedelta
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class TournamentConfig:
    min_players: int = 4
    max_players: int = 16
    count_bye_scores: bool = True  # False = scores entered on a bye round are ignored


@dataclass
class SessionConfig:
    freshness_hours: float = 2.0   # saved tournaments older than this are discarded
    store_path: str = "./.rrkeeper_session.json"
    storage_key: str = "gameData"


@dataclass
class LoggingConfig:
    level: str = "INFO"
    log_file: str = "./logs/rrkeeper.log"


@dataclass
class Config:
    tournament: TournamentConfig = field(default_factory=TournamentConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def freshness(self) -> timedelta:
        return timedelta(hours=self.session.freshness_hours)

    @property
    def store_path(self) -> Path:
        return Path(self.session.store_path)

    @property
    def log_path(self) -> Path:
        return Path(self.logging.log_file)


def load_config(path: str | Path = "config.yaml") -> Config:
    """
    Load and validate config.yaml.

    A missing file yields the defaults.

    Raises:
        ValueError: fields are present but invalid.
    """
    cfg_path = Path(path)
    if not cfg_path.exists():
        logger.debug("No config file at %s, using defaults", cfg_path.resolve())
        return Config()

    with cfg_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Invalid config.yaml structure: expected a mapping, got {type(raw).__name__}")

    try:
        tour_raw = raw.get("tournament") or {}
        tournament_cfg = TournamentConfig(
            min_players=int(tour_raw.get("min_players", 4)),
            max_players=int(tour_raw.get("max_players", 16)),
            count_bye_scores=_parse_bool(
                "tournament.count_bye_scores", tour_raw.get("count_bye_scores", True)
            ),
        )

        session_raw = raw.get("session") or {}
        session_cfg = SessionConfig(
            freshness_hours=float(session_raw.get("freshness_hours", 2.0)),
            store_path=str(session_raw.get("store_path", "./.rrkeeper_session.json")),
            storage_key=str(session_raw.get("storage_key", "gameData")),
        )

        log_raw = raw.get("logging") or {}
        logging_cfg = LoggingConfig(
            level=str(log_raw.get("level", "INFO")).upper(),
            log_file=str(log_raw.get("log_file", "./logs/rrkeeper.log")),
        )

        config = Config(tournament=tournament_cfg, session=session_cfg, logging=logging_cfg)
        _validate(config)
        return config

    except (AttributeError, TypeError) as exc:
        raise ValueError(f"Invalid config.yaml structure: {exc}") from exc


def _validate(config: Config) -> None:
    if config.tournament.min_players < 2:
        raise ValueError("tournament.min_players must be >= 2")
    if config.tournament.max_players < config.tournament.min_players:
        raise ValueError(
            f"tournament.max_players must be >= tournament.min_players "
            f"({config.tournament.min_players}), got {config.tournament.max_players}"
        )
    if config.session.freshness_hours <= 0:
        raise ValueError("session.freshness_hours must be > 0")
    if not config.session.storage_key:
        raise ValueError("session.storage_key must not be empty")
    if config.logging.level not in _LOG_LEVELS:
        raise ValueError(
            f"logging.level must be one of {_LOG_LEVELS}, got '{config.logging.level}'"
        )


def _parse_bool(key: str, value: object) -> bool:
    if isinstance(value, bool):
        return value
    raise ValueError(f"{key} must be true/false, got {value!r}")
