"""Unit tests for game outcomes."""

import unittest

from pickem.core import DataError
from pickem.game import (
    TIE,
    GameStatus,
    find_outcome,
    make_outcome,
    outcomes_by_week,
    parse_status,
)


class TestParseStatus(unittest.TestCase):
    def test_values(self):
        self.assertEqual(parse_status("final"), GameStatus.FINAL)
        self.assertEqual(parse_status("STATUS_FINAL"), GameStatus.FINAL)
        self.assertEqual(parse_status("Final/OT"), GameStatus.FINAL)
        self.assertEqual(parse_status("in_progress"), GameStatus.IN_PROGRESS)
        self.assertEqual(parse_status("STATUS_HALFTIME"), GameStatus.IN_PROGRESS)
        self.assertEqual(parse_status("scheduled"), GameStatus.SCHEDULED)
        self.assertEqual(parse_status(GameStatus.FINAL), GameStatus.FINAL)

    def test_unknown(self):
        with self.assertRaises(DataError):
            parse_status("postponed-ish")
        with self.assertRaises(DataError):
            parse_status(None)


class TestMakeOutcome(unittest.TestCase):
    def test_normalizes_teams(self):
        outcome = make_outcome(1, "DEN", "LV Raiders", "final", "Broncos", 401)
        self.assertEqual(outcome.home_team, "Denver Broncos")
        self.assertEqual(outcome.away_team, "Las Vegas Raiders")
        self.assertEqual(outcome.winner, "Denver Broncos")
        self.assertEqual(outcome.loser, "Las Vegas Raiders")
        self.assertEqual(outcome.game_id, "401")
        self.assertEqual(outcome.key, "401")
        self.assertFalse(outcome.is_tie)

    def test_tie(self):
        outcome = make_outcome(1, "DEN", "LV", "final")
        self.assertTrue(outcome.is_tie)
        self.assertIsNone(outcome.loser)
        outcome = make_outcome(1, "DEN", "LV", "final", "tie")
        self.assertEqual(outcome.winner, TIE)
        self.assertTrue(outcome.is_tie)

    def test_not_final(self):
        outcome = make_outcome(1, "DEN", "LV", "in_progress")
        self.assertFalse(outcome.is_final)
        self.assertFalse(outcome.is_tie)
        self.assertEqual(outcome.key, "Las Vegas Raiders @ Denver Broncos")

    def test_winner_not_in_game(self):
        with self.assertRaises(DataError):
            make_outcome(1, "DEN", "LV", "final", "Dallas Cowboys")

    def test_winner_before_final(self):
        with self.assertRaises(DataError):
            make_outcome(1, "DEN", "LV", "scheduled", "Denver Broncos")

    def test_bad_week(self):
        with self.assertRaises(DataError):
            make_outcome(0, "DEN", "LV", "final", "DEN")
        with self.assertRaises(DataError):
            make_outcome(19, "DEN", "LV", "final", "DEN")

    def test_bad_matchup(self):
        with self.assertRaises(DataError):
            make_outcome(1, "DEN", "Denver Broncos", "final")


class TestFindOutcome(unittest.TestCase):
    def test_find(self):
        outcomes = [
            make_outcome(1, "DEN", "LV", "final", "DEN", "a"),
            make_outcome(1, "DAL", "NYG", "final", "DAL", "b"),
        ]
        self.assertEqual(find_outcome(outcomes, "New York Giants").game_id, "b")
        self.assertEqual(find_outcome(outcomes, "Dallas Cowboys", "b").game_id, "b")
        self.assertEqual(find_outcome(outcomes, "Dallas Cowboys", "zzz").game_id, "b")
        self.assertIsNone(find_outcome(outcomes, "Seattle Seahawks"))

    def test_by_week(self):
        outcomes = [make_outcome(1, "DEN", "LV", "final"), make_outcome(2, "DEN", "KC", "scheduled")]
        by_week = outcomes_by_week(outcomes)
        self.assertEqual(sorted(by_week), [1, 2])
        self.assertEqual(len(by_week[2]), 1)


if __name__ == "__main__":
    unittest.main()
