"""
Tests for score parsing, totals (full and incremental) and ranking order.
"""

from __future__ import annotations

import unittest

from rrkeeper.tournament import (
    Tournament,
    build_schedule,
    compute_totals,
    parse_score,
    player_total,
    rank_standings,
    update_totals,
)


def make_tournament(names: list[str]) -> Tournament:
    return Tournament(players=list(names), rounds=build_schedule(names), date=0)


class ParseScoreTests(unittest.TestCase):
    def test_integers_and_signed_strings(self):
        self.assertEqual(parse_score("7"), 7)
        self.assertEqual(parse_score(" 12 "), 12)
        self.assertEqual(parse_score("-3"), -3)
        self.assertEqual(parse_score("+4"), 4)
        self.assertEqual(parse_score(5), 5)
        self.assertEqual(parse_score(6.0), 6)

    def test_blank_and_non_numeric_become_blank(self):
        for raw in ("", "   ", "abc", "3.5", "1e3", "9" * 5000, None, True, 2.5, [], {}):
            with self.subTest(raw=raw):
                self.assertIsNone(parse_score(raw))


class TotalsTests(unittest.TestCase):
    def test_odd_field_example(self):
        # [A, B, C] pads to [A, B, C, bye]; round 1 is {A, bye}, {B, C}.
        t = make_tournament(["A", "B", "C"])
        self.assertEqual([p.players for p in t.rounds[0]], [(0, 3), (1, 2)])

        # B and C each get the pairing score
        t.rounds[0][1].score = 3
        self.assertEqual(compute_totals(t), {0: 0, 1: 3, 2: 3})

    def test_odd_field_ranking(self):
        # B sits out round 2 and C sits out round 3; each scores on their own.
        t = make_tournament(["A", "B", "C"])
        self.assertEqual(t.rounds[1][1].players, (3, 1))
        self.assertEqual(t.rounds[2][1].players, (2, 3))
        t.rounds[1][1].score = 3
        t.rounds[2][1].score = 5

        totals = compute_totals(t)
        self.assertEqual(totals, {0: 0, 1: 3, 2: 5})
        ranked = [e.name for e in rank_standings(t, totals)]
        self.assertEqual(ranked, ["C", "B", "A"])

    def test_blank_counts_as_zero(self):
        t = make_tournament(["A", "B", "C", "D"])
        t.rounds[0][0].score = None
        t.rounds[1][0].score = 4
        self.assertEqual(player_total(t, 0), 4)

    def test_bye_scores_can_be_ignored(self):
        t = make_tournament(["A", "B", "C"])
        t.rounds[0][0].score = 9  # A's bye round
        self.assertEqual(player_total(t, 0), 9)
        self.assertEqual(player_total(t, 0, count_bye_scores=False), 0)
        self.assertEqual(compute_totals(t, count_bye_scores=False)[0], 0)

    def test_recompute_is_idempotent(self):
        t = make_tournament(["A", "B", "C", "D", "E", "F"])
        for i, r in enumerate(t.rounds):
            r[0].score = i + 1
        self.assertEqual(compute_totals(t), compute_totals(t))

    def test_incremental_update_matches_full_recompute(self):
        t = make_tournament(["A", "B", "C", "D", "E"])
        totals = compute_totals(t)

        pairing = t.rounds[2][1]
        pairing.score = 8
        update_totals(totals, t, pairing.players)

        self.assertEqual(totals, compute_totals(t))

    def test_incremental_update_skips_bye(self):
        t = make_tournament(["A", "B", "C"])
        totals = compute_totals(t)
        t.rounds[0][0].score = 2
        update_totals(totals, t, t.rounds[0][0].players)
        self.assertNotIn(3, totals)
        self.assertEqual(totals[0], 2)


class RankingTests(unittest.TestCase):
    def test_descending_by_total(self):
        t = make_tournament(["A", "B", "C", "D"])
        ranked = rank_standings(t, {0: 1, 1: 7, 2: 3, 3: 5})
        self.assertEqual([e.name for e in ranked], ["B", "D", "C", "A"])
        self.assertEqual([e.total for e in ranked], [7, 5, 3, 1])

    def test_ties_keep_input_order(self):
        t = make_tournament(["A", "B", "C", "D", "E"])
        ranked = rank_standings(t, {0: 2, 1: 5, 2: 2, 3: 5, 4: 2})
        self.assertEqual([e.name for e in ranked], ["B", "D", "A", "C", "E"])

    def test_all_zero_keeps_input_order(self):
        t = make_tournament(["Zed", "Amy", "Moe", "Bo"])
        ranked = rank_standings(t, compute_totals(t))
        self.assertEqual([e.name for e in ranked], ["Zed", "Amy", "Moe", "Bo"])

    def test_ranking_does_not_touch_pairings(self):
        t = make_tournament(["A", "B", "C", "D"])
        before = [[(p.players, p.score) for p in r] for r in t.rounds]
        rank_standings(t, {0: 3, 1: 1, 2: 2, 3: 0})
        self.assertEqual([[(p.players, p.score) for p in r] for r in t.rounds], before)
