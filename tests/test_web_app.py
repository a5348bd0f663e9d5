"""
Tests for the HTTP API: start / score / clear flow against an in-memory
session, error status codes, and the event serialiser that tags every
nested dataclass with a "type" key.

Uses FastAPI's synchronous TestClient (no external server required).
"""

import dataclasses
import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient

from rrkeeper.events import ScoreRecordedEvent, TournamentStartedEvent
from rrkeeper.session import Session
from rrkeeper.store import MemoryStore, SessionStore
from rrkeeper.tournament import StandingEntry
from rrkeeper.web import app as web_app

NAMES = ["Ann", "Ben", "Cat", "Dan", "Eve"]


class ToJsonDictTests(unittest.TestCase):

    def test_adds_type_to_top_level(self):
        evt = TournamentStartedEvent(participant_names=["A", "B"], total_rounds=1, has_bye=False)
        result = web_app._to_json_dict(evt)
        self.assertEqual(result["type"], "TournamentStartedEvent")
        self.assertEqual(result["participant_names"], ["A", "B"])
        self.assertIsInstance(result["timestamp"], str)

    def test_nested_standings_get_type(self):
        evt = ScoreRecordedEvent(
            round_num=1,
            pairing_index=0,
            pairing_label="A and B",
            score=3,
            affected=[0, 1],
            standings=[StandingEntry(index=0, name="A", total=3)],
        )
        result = web_app._to_json_dict(evt)
        self.assertEqual(result["standings"][0]["type"], "StandingEntry")
        self.assertEqual(result["standings"][0]["total"], 3)
        self.assertEqual(result["affected"], [0, 1])

    def test_tuple_treated_as_list(self):
        @dataclasses.dataclass(frozen=True)
        class _T:
            pair: tuple
        result = web_app._to_json_dict(_T(pair=(1, 2)))
        self.assertEqual(result["pair"], [1, 2])


class TournamentApiTests(unittest.TestCase):

    def setUp(self):
        self.backend = MemoryStore()
        session = Session(SessionStore(self.backend), web_app.config)
        patcher = patch.object(web_app, "session", session)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.client = TestClient(web_app.app)

    def test_config_endpoint(self):
        data = self.client.get("/api/config").json()
        self.assertEqual(data["min_players"], web_app.config.tournament.min_players)
        self.assertEqual(data["max_players"], web_app.config.tournament.max_players)

    def test_initial_state_is_setup(self):
        data = self.client.get("/api/tournament").json()
        self.assertEqual(data["state"], "setup")
        self.assertTrue(data["setup_enabled"])
        self.assertEqual(data["rounds"], [])

    def test_start_then_score_then_clear(self):
        resp = self.client.post("/api/tournament/start", json={"players": NAMES})
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["event"]["type"], "TournamentStartedEvent")
        self.assertEqual(data["state"], "in_progress")
        self.assertFalse(data["setup_enabled"])
        self.assertEqual(len(data["rounds"]), 5)

        first = data["rounds"][0][0]
        self.assertTrue(first["bye"])
        self.assertEqual(first["label"], "Ann")
        self.assertEqual(first["names"], ["Ann"])

        resp = self.client.post("/api/tournament/score", json={"round": 0, "pairing": 1, "score": "4"})
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["event"]["type"], "ScoreRecordedEvent")
        self.assertEqual(data["rounds"][0][1]["score"], 4)
        self.assertEqual(data["standings"][0]["total"], 4)
        self.assertIn("gameData", self.backend.data)

        resp = self.client.post("/api/tournament/clear")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["state"], "setup")
        self.assertNotIn("gameData", self.backend.data)

    def test_invalid_names_rejected(self):
        resp = self.client.post("/api/tournament/start", json={"players": ["Ann", "Ann", "Cat", "Dan"]})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("unique", resp.json()["detail"])
        self.assertEqual(self.client.get("/api/tournament").json()["state"], "setup")

    def test_players_must_be_a_list(self):
        resp = self.client.post("/api/tournament/start", json={"players": "Ann"})
        self.assertEqual(resp.status_code, 400)

    def test_second_start_conflicts(self):
        self.client.post("/api/tournament/start", json={"players": NAMES})
        resp = self.client.post("/api/tournament/start", json={"players": NAMES})
        self.assertEqual(resp.status_code, 409)

    def test_score_before_start_conflicts(self):
        resp = self.client.post("/api/tournament/score", json={"round": 0, "pairing": 0, "score": 1})
        self.assertEqual(resp.status_code, 409)

    def test_score_unknown_pairing(self):
        self.client.post("/api/tournament/start", json={"players": NAMES})
        resp = self.client.post("/api/tournament/score", json={"round": 9, "pairing": 0, "score": 1})
        self.assertEqual(resp.status_code, 404)

    def test_score_bad_indices(self):
        resp = self.client.post("/api/tournament/score", json={"round": "x", "pairing": 0})
        self.assertEqual(resp.status_code, 400)

    def test_non_numeric_score_is_blank(self):
        self.client.post("/api/tournament/start", json={"players": NAMES})
        resp = self.client.post("/api/tournament/score", json={"round": 0, "pairing": 1, "score": "n/a"})
        self.assertEqual(resp.status_code, 200)
        self.assertIsNone(resp.json()["rounds"][0][1]["score"])
