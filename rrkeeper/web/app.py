"""
FastAPI application: the HTTP backend for a browser front end.

Exposes:
  GET  /api/config             Player-count limits and freshness window
  GET  /api/tournament         Session state, schedule and standings
  POST /api/tournament/start   { players: [names] }
  POST /api/tournament/score   { round: int, pairing: int, score: int|str|null }
  POST /api/tournament/clear   Discard the tournament (client confirms first)

One Session is shared by the whole process; a lock keeps every action
running to completion before the next one starts.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
from datetime import date, datetime

from fastapi import FastAPI, HTTPException

from rrkeeper.config import load_config
from rrkeeper.logs import setup_logging
from rrkeeper.session import Session, SessionStateError, create_session
from rrkeeper.tournament.base import ValidationError

config = load_config()
setup_logging(config)
logger = logging.getLogger("rrkeeper.web")

session: Session = create_session(config)
_lock = threading.Lock()

app = FastAPI(title="RoundRobinKeeper")


# --------------------------------------------------------------------------- #
# Serialisation                                                                #
# --------------------------------------------------------------------------- #

def _to_json_dict(obj: object) -> object:
    """
    Convert an event dataclass to a JSON-safe dict, adding a "type" key with
    the class name at every level of dataclass nesting.
    """
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        result: dict[str, object] = {"type": type(obj).__name__}
        for f in dataclasses.fields(obj):
            result[f.name] = _to_json_dict(getattr(obj, f.name))
        return result
    if isinstance(obj, (list, tuple)):
        return [_to_json_dict(item) for item in obj]
    if isinstance(obj, dict):
        return {str(k): _to_json_dict(v) for k, v in obj.items()}
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    return obj


def _session_view(current: Session) -> dict:
    """The full picture a client needs to render the page."""
    tournament = current.tournament
    rounds = [
        [
            {
                "index": i,
                "players": list(pairing.players),
                "names": [tournament.players[p] for p in tournament.active_players(pairing)],
                "label": tournament.pairing_label(pairing),
                "bye": tournament.is_bye_pairing(pairing),
                "score": pairing.score,
            }
            for i, pairing in enumerate(round_)
        ]
        for round_ in tournament.rounds
    ]
    return {
        "state": current.state,
        "setup_enabled": not current.is_in_progress,
        "players": list(tournament.players),
        "date": tournament.date,
        "rounds": rounds,
        "standings": [
            {"name": e.name, "total": e.total} for e in current.standings()
        ],
    }


# --------------------------------------------------------------------------- #
# REST                                                                         #
# --------------------------------------------------------------------------- #

@app.get("/api/config")
def get_config():
    return {
        "min_players": config.tournament.min_players,
        "max_players": config.tournament.max_players,
        "freshness_hours": config.session.freshness_hours,
    }


@app.get("/api/tournament")
def get_tournament():
    with _lock:
        return _session_view(session)


@app.post("/api/tournament/start")
def start_tournament(payload: dict):
    names = payload.get("players")
    if not isinstance(names, list):
        raise HTTPException(status_code=400, detail="players must be a list of names")

    with _lock:
        try:
            event = session.start([str(n) if n is not None else "" for n in names])
        except ValidationError as exc:
            logger.info("Rejected tournament start: %s", exc)
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except SessionStateError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        return {"event": _to_json_dict(event), **_session_view(session)}


@app.post("/api/tournament/score")
def record_score(payload: dict):
    try:
        round_index = int(payload["round"])
        pairing_index = int(payload["pairing"])
    except (KeyError, TypeError, ValueError) as exc:
        raise HTTPException(status_code=400, detail="round and pairing must be integers") from exc

    with _lock:
        try:
            event = session.record_score(round_index, pairing_index, payload.get("score"))
        except SessionStateError as exc:
            raise HTTPException(status_code=409, detail=str(exc)) from exc
        except IndexError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return {"event": _to_json_dict(event), **_session_view(session)}


@app.post("/api/tournament/clear")
def clear_tournament():
    with _lock:
        event = session.clear()
        return {"event": _to_json_dict(event), **_session_view(session)}
