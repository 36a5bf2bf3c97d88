"""
Test suite for user profile detection.

Tests cover:
- Behaviour metrics from a card collection
- Profile rules and their order
- Strategy priorities per profile
- Empty collections and zero credit limits
"""

import unittest

from cardwise_engine.cards.card import Card
from cardwise_engine.scoring.profile_detector import (
    PROFILE_PRIORITIES,
    ProfileType,
    calculate_behavior_metrics,
    detect_profile,
)
from cardwise_engine.scoring.strategies import Strategy


def make_card(card_id, balance=0.0, limit=10000.0):
    return Card(card_id, f"Card {card_id}", 25, 10, current_balance=balance, credit_limit=limit, apr=20.0)


class TestBehaviorMetrics(unittest.TestCase):
    """Test metric calculation."""

    def test_metrics(self):
        cards = [make_card("a", 6000), make_card("b", 0), make_card("c", 1500)]
        metrics = calculate_behavior_metrics(cards)
        self.assertEqual(metrics.total_cards, 3)
        self.assertEqual(metrics.cards_with_balance, 2)
        self.assertEqual(metrics.cards_without_balance, 1)
        self.assertAlmostEqual(metrics.total_debt, 7500.0)
        self.assertAlmostEqual(metrics.average_utilization, 0.25)
        self.assertEqual(metrics.high_utilization_cards, 1)
        self.assertAlmostEqual(metrics.balance_ratio, 2 / 3)

    def test_zero_limit_left_out_of_utilization(self):
        cards = [make_card("a", 100, limit=0), make_card("b", 2000)]
        metrics = calculate_behavior_metrics(cards)
        self.assertAlmostEqual(metrics.average_utilization, 0.2)


class TestDetectProfile(unittest.TestCase):
    """Test the profile rules."""

    def test_no_balances(self):
        profile = detect_profile([make_card("a"), make_card("b")])
        self.assertEqual(profile.profile, ProfileType.REWARDS_MAXIMIZER)
        self.assertEqual(profile.confidence, 1.0)
        self.assertEqual(profile.priorities, [Strategy.REWARDS, Strategy.GRACE_PERIOD, Strategy.APR])

    def test_low_average_utilization(self):
        profile = detect_profile([make_card("a", 500), make_card("b", 0)])
        self.assertEqual(profile.profile, ProfileType.REWARDS_MAXIMIZER)
        self.assertEqual(profile.confidence, 0.85)

    def test_one_maxed_card(self):
        profile = detect_profile([make_card("a", 6000), make_card("b", 0), make_card("c", 0)])
        self.assertEqual(profile.profile, ProfileType.APR_MINIMIZER)
        self.assertEqual(profile.priorities[0], Strategy.APR)

    def test_high_average_utilization(self):
        profile = detect_profile([make_card("a", 4000), make_card("b", 4000)])
        self.assertEqual(profile.profile, ProfileType.APR_MINIMIZER)
        self.assertEqual(profile.confidence, 0.9)

    def test_balanced(self):
        profile = detect_profile([make_card("a", 3000), make_card("b", 0)])
        self.assertEqual(profile.profile, ProfileType.BALANCED)
        self.assertEqual(profile.confidence, 0.7)
        self.assertEqual(profile.priorities, [Strategy.REWARDS, Strategy.APR, Strategy.GRACE_PERIOD])
        self.assertIn("in full", profile.advice)

    def test_empty_collection(self):
        profile = detect_profile([])
        self.assertEqual(profile.profile, ProfileType.REWARDS_MAXIMIZER)
        self.assertEqual(profile.confidence, 0.0)
        self.assertEqual(profile.description, "Add cards to get personalized recommendations")

    def test_zero_limit_wallet_with_balances(self):
        """Balances on cards without a credit limit add nothing to utilization."""
        profile = detect_profile([make_card("a", 800, limit=0), make_card("b", 1200, limit=0)])
        self.assertEqual(profile.metrics.cards_with_balance, 2)
        self.assertEqual(profile.metrics.average_utilization, 0.0)
        self.assertEqual(profile.profile, ProfileType.REWARDS_MAXIMIZER)
        self.assertEqual(profile.confidence, 0.85)

    def test_accepts_records(self):
        records = [{"id": "r", "statement_close_day": 25, "payment_due_day": 10,
                    "current_balance": "9000", "credit_limit": "10000"}]
        self.assertEqual(detect_profile(records).profile, ProfileType.APR_MINIMIZER)

    def test_priorities_are_copies(self):
        profile = detect_profile([make_card("a")])
        profile.priorities.reverse()
        self.assertEqual(
            PROFILE_PRIORITIES[ProfileType.REWARDS_MAXIMIZER],
            [Strategy.REWARDS, Strategy.GRACE_PERIOD, Strategy.APR],
        )

    def test_custom_thresholds(self):
        config = {"profile": {
            "low_average_utilization": 0.10,
            "high_card_utilization": 0.90,
            "high_average_utilization": 0.80,
        }}
        profile = detect_profile([make_card("a", 6000), make_card("b", 0)], config)
        self.assertEqual(profile.profile, ProfileType.BALANCED)


if __name__ == '__main__':
    unittest.main()
