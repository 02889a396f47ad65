"""Unit tests for pool computation and reporting."""

import io
import unittest

from pickem.core import ConfigError, ImplementationError, LogicError
from pickem.game import make_outcome
from pickem.pick import make_pick
from pickem.rules import SurvivorRules
from pickem.survivor import EliminationReason
from pickem.pool import Pool


class FakeSource:
    def __init__(self, picks, outcomes):
        self.picks = picks
        self.outcomes = outcomes

    def get_members(self):
        return list(self.picks)

    def get_picks(self, participant_id):
        return self.picks[participant_id]

    def get_outcomes(self, week):
        return [o for o in self.outcomes if o.week == week]


class FakeStore:
    def __init__(self):
        self.verdicts = []
        self.scores = []

    def save_verdict(self, verdict):
        self.verdicts.append(verdict)

    def save_score(self, score):
        self.scores.append(score)


OUTCOMES = [
    make_outcome(1, "Denver Broncos", "Las Vegas Raiders", "final", "Denver Broncos", "g1"),
    make_outcome(1, "Dallas Cowboys", "New York Giants", "final", "New York Giants", "g2"),
    make_outcome(2, "Kansas City Chiefs", "Buffalo Bills", "final", None, "g3"),
    make_outcome(2, "Miami Dolphins", "New York Jets", "final", "Miami Dolphins", "g4"),
]

SURVIVOR_PICKS = {
    "alice": [make_pick("alice", 1, "Denver Broncos"), make_pick("alice", 2, "Buffalo Bills")],
    "bob":   [make_pick("bob", 1, "Dallas Cowboys"), make_pick("bob", 2, "Miami Dolphins")],
    "carol": [make_pick("carol", 1, "Denver Broncos")],
    "dave":  [],
}

CONFIDENCE_PICKS = {
    "alice": [make_pick("alice", 1, "Denver Broncos", 2), make_pick("alice", 1, "New York Giants", 1),
              make_pick("alice", 2, "Buffalo Bills", 1), make_pick("alice", 2, "New York Jets", 2)],
    "bob":   [make_pick("bob", 1, "Las Vegas Raiders", 2), make_pick("bob", 1, "New York Giants", 1),
              make_pick("bob", 2, "Kansas City Chiefs", 2), make_pick("bob", 2, "Miami Dolphins", 1)],
}


class TestSurvivorPool(unittest.TestCase):
    def setUp(self):
        self.pool = Pool("survivor-2025", FakeSource(SURVIVOR_PICKS, OUTCOMES))
        self.pool.run(2)

    def test_verdicts(self):
        verdicts = self.pool.verdicts
        self.assertTrue(verdicts["alice"].is_alive)
        self.assertEqual(verdicts["bob"].elimination_reason, EliminationReason.GAME_LOSS)
        self.assertEqual(verdicts["bob"].eliminated_week, 1)
        self.assertEqual(verdicts["carol"].elimination_reason, EliminationReason.NO_PICK)
        self.assertEqual(verdicts["carol"].eliminated_week, 2)
        self.assertEqual(verdicts["dave"].eliminated_week, 1)
        self.assertEqual(verdicts["dave"].participant_id, "dave")

    def test_standings_and_winner(self):
        standings = [part_id for part_id, _ in self.pool.get_standings()]
        self.assertEqual(standings, ["alice", "carol", "bob", "dave"])
        self.assertEqual(self.pool.get_winner(), ["alice"])

    def test_summary(self):
        summary = self.pool.get_summary()
        self.assertEqual(summary.alive, 1)
        self.assertEqual(summary.eliminated, 3)
        self.assertEqual(summary.by_week, {1: 2, 2: 1})

    def test_rerun_replaces_results(self):
        self.pool.run(1)
        self.assertTrue(self.pool.verdicts["carol"].is_alive)
        self.assertEqual(self.pool.through_week, 1)

    def test_rules_override(self):
        pool = Pool("survivor-2025", FakeSource(SURVIVOR_PICKS, OUTCOMES),
                    rules=SurvivorRules(no_pick_eliminates=False))
        pool.run(2)
        self.assertTrue(pool.verdicts["carol"].is_alive)
        self.assertTrue(pool.verdicts["dave"].is_alive)

    def test_save_results(self):
        store = FakeStore()
        self.pool.save_results(store)
        self.assertEqual(len(store.verdicts), 4)
        self.assertEqual(store.scores, [])

    def test_print_results(self):
        out = io.StringIO()
        self.pool.print_results(file=out)
        text = out.getvalue()
        self.assertIn("Leader: alice", text)
        self.assertIn("bob\tELIMINATED\t1\t", text)

        out = io.StringIO()
        self.pool.print_results_md(file=out)
        self.assertIn("## Leader ##", out.getvalue())


class TestConfidencePool(unittest.TestCase):
    def setUp(self):
        self.pool = Pool("confidence-2025", FakeSource(CONFIDENCE_PICKS, OUTCOMES))
        self.pool.run(2)

    def test_scores(self):
        # week 1: alice 2 + 1, bob 0 + 1; week 2 (tie in g3): alice 1 + 0, bob 2 + 1
        self.assertEqual(self.pool.week_scores[1]["alice"].total_points, 3)
        self.assertEqual(self.pool.week_scores[1]["bob"].total_points, 1)
        self.assertEqual(self.pool.week_scores[2]["alice"].total_points, 1)
        self.assertEqual(self.pool.week_scores[2]["bob"].total_points, 3)
        self.assertEqual(self.pool.tot_scores["alice"].total_points, 4)
        self.assertEqual(self.pool.tot_scores["bob"].total_points, 4)
        self.assertEqual(self.pool.week_scores[2]["bob"].participant_id, "bob")
        self.assertEqual(self.pool.week_scores[2]["bob"].week, 2)

    def test_winner_tie(self):
        self.assertEqual(self.pool.get_winner(), ["alice", "bob"])

    def test_save_results(self):
        store = FakeStore()
        self.pool.save_results(store)
        self.assertEqual(len(store.scores), 4)
        self.assertEqual(store.verdicts, [])

    def test_summary_not_available(self):
        with self.assertRaises(LogicError):
            self.pool.get_summary()

    def test_print_results(self):
        out = io.StringIO()
        self.pool.print_results_md(file=out)
        text = out.getvalue()
        self.assertIn("## Leaders ##", text)
        self.assertIn("Week 2", text)

    def test_report_accuracy_excludes_pending(self):
        outcomes = OUTCOMES[:3] + [make_outcome(2, "Miami Dolphins", "New York Jets", "in_progress")]
        pool = Pool("confidence-2025", FakeSource(CONFIDENCE_PICKS, outcomes))
        pool.run(2)
        out = io.StringIO()
        pool.print_results(file=out)
        text = out.getvalue()
        self.assertIn("alice\t3\t1\t4\t100%", text)
        self.assertIn("bob\t1\t2\t3\t67%", text)
        self.assertEqual(pool.tot_scores["alice"].accuracy, 100.0)


class TestPoolSetup(unittest.TestCase):
    def test_unknown_pool(self):
        with self.assertRaises(ConfigError):
            Pool("no-such-pool")

    def test_bad_source(self):
        with self.assertRaises(ImplementationError):
            Pool("survivor-2025", object())

    def test_not_computed(self):
        pool = Pool("survivor-2025")
        with self.assertRaises(LogicError):
            pool.get_standings()
        with self.assertRaises(LogicError):
            pool.run(1)


if __name__ == "__main__":
    unittest.main()
