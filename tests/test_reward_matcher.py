"""
Test suite for reward multiplier matching.

Tests cover:
- Descriptor parsing for bare numbers, detailed objects and rotating entries
- Resolution order: exact, rotating, alias/subcategory, parent, default, 1.0
- Multipliers used as given (zero, negative, very large)
- Malformed tables
- Reward summaries and explanations
"""

import unittest

from cardwise_engine.cards.card import Card
from cardwise_engine.categorisation.reward_matcher import (
    CategoryMatcher,
    DetailedReward,
    FlatReward,
    RewardTable,
    RotatingReward,
    find_multiplier,
    parse_descriptor,
)
from cardwise_engine.exceptions import RewardTableError

ROTATING_TABLE = {
    "rotating": {"active_categories": ["gas", "groceries"], "value": 5, "max_per_period": 1500},
    "default": 1,
}


class TestParseDescriptor(unittest.TestCase):
    """Test the three descriptor shapes."""

    def test_bare_number(self):
        self.assertEqual(parse_descriptor(4), FlatReward(4.0))
        self.assertEqual(parse_descriptor("1.5"), FlatReward(1.5))

    def test_detailed(self):
        descriptor = parse_descriptor({"value": 3, "subcategories": ["Airfare"], "note": "portal only"})
        self.assertEqual(descriptor, DetailedReward(3.0, ("airfare",), "portal only"))

    def test_rotating(self):
        descriptor = parse_descriptor(ROTATING_TABLE["rotating"])
        self.assertIsInstance(descriptor, RotatingReward)
        self.assertEqual(descriptor.active_categories, ("gas", "groceries"))
        self.assertEqual(descriptor.max_per_period, 1500.0)

    def test_malformed(self):
        for raw in (True, "four", None, {"note": "no value"}, {"value": "x"}, [4]):
            with self.assertRaises(RewardTableError):
                parse_descriptor(raw, "dining")

    def test_non_finite_values(self):
        """NaN and infinity are rejected in every descriptor shape."""
        for raw in (
            float("nan"), "nan", float("inf"), "-inf",
            {"value": float("nan")},
            {"active_categories": ["gas"], "value": "inf"},
            {"active_categories": ["gas"], "value": 5, "max_per_period": float("nan")},
        ):
            with self.assertRaises(RewardTableError):
                parse_descriptor(raw, "dining")

    def test_unusual_finite_values_accepted(self):
        self.assertEqual(parse_descriptor(0), FlatReward(0.0))
        self.assertEqual(parse_descriptor(-2), FlatReward(-2.0))
        self.assertEqual(parse_descriptor("1e6"), FlatReward(1000000.0))

    def test_table_must_be_a_mapping(self):
        with self.assertRaises(RewardTableError):
            RewardTable.from_mapping([("dining", 4)])
        self.assertEqual(len(RewardTable.from_mapping(None)), 0)

    def test_keys_are_normalized(self):
        table = RewardTable.from_mapping({"Travel-Airfare": 5, " Dining ": 3})
        self.assertIn("travel_airfare", table)
        self.assertIn("dining", table)


class TestFindMultiplier(unittest.TestCase):
    """Test the resolution order."""

    def setUp(self):
        self.matcher = CategoryMatcher()

    def test_exact_and_default(self):
        table = {"dining": 4, "default": 1}
        self.assertEqual(self.matcher.find_multiplier(table, "dining"), 4.0)
        self.assertEqual(self.matcher.find_multiplier(table, "travel"), 1.0)
        self.assertEqual(self.matcher.find_multiplier(table, "not_a_category"), 1.0)
        self.assertEqual(self.matcher.find_multiplier(table, None), 1.0)

    def test_hard_fallback(self):
        """A table without a default entry still resolves to 1.0."""
        self.assertEqual(self.matcher.find_multiplier({}, "dining"), 1.0)
        self.assertEqual(self.matcher.find_multiplier(None, "dining"), 1.0)
        self.assertEqual(self.matcher.match({"gas": 3}, "dining").method, "fallback")

    def test_default_entry_value(self):
        self.assertEqual(self.matcher.find_multiplier({"dining": 4, "default": 1.5}, "travel"), 1.5)

    def test_rotating_active(self):
        match = self.matcher.match(ROTATING_TABLE, "gas")
        self.assertEqual(match.multiplier, 5.0)
        self.assertEqual(match.method, "rotating")
        self.assertEqual(match.note, "rotating bonus capped at $1,500 per period")

    def test_rotating_inactive(self):
        self.assertEqual(self.matcher.find_multiplier(ROTATING_TABLE, "dining"), 1.0)

    def test_exact_rotating_key_requires_active_category(self):
        table = {"gas": {"active_categories": ["groceries"], "value": 5}, "default": 1.5}
        self.assertEqual(self.matcher.find_multiplier(table, "gas"), 1.5)
        self.assertEqual(self.matcher.find_multiplier(table, "groceries"), 5.0)

    def test_alias_key(self):
        match = self.matcher.match({"restaurants": 3, "default": 1}, "dining")
        self.assertEqual(match.multiplier, 3.0)
        self.assertEqual(match.method, "alias")
        self.assertEqual(match.matched_key, "restaurants")

    def test_category_entry_covers_subcategory(self):
        self.assertEqual(self.matcher.find_multiplier({"travel": 3, "default": 1}, "travel_airfare"), 3.0)

    def test_subcategory_entry_covers_category(self):
        self.assertEqual(self.matcher.find_multiplier({"travel_airfare": 5, "default": 1}, "travel"), 5.0)

    def test_subcategory_restriction(self):
        table = {"travel": {"value": 3, "subcategories": ["airfare"]}, "default": 1}
        self.assertEqual(self.matcher.find_multiplier(table, "travel_airfare"), 3.0)
        self.assertEqual(self.matcher.find_multiplier(table, "travel_hotel"), 1.0)

    def test_parent_fallback(self):
        """A card rewarding entertainment also rewards streaming."""
        match = self.matcher.match({"entertainment": 3, "default": 1}, "streaming")
        self.assertEqual(match.multiplier, 3.0)
        self.assertEqual(match.method, "parent")

    def test_child_does_not_cover_unrelated_category(self):
        self.assertEqual(self.matcher.find_multiplier({"streaming": 3, "default": 1}, "dining"), 1.0)

    def test_exact_beats_alias(self):
        table = {"dining": 2, "restaurants": 4, "default": 1}
        self.assertEqual(self.matcher.find_multiplier(table, "dining"), 2.0)

    def test_ties_take_highest_multiplier(self):
        table = {"restaurants": 2, "food": 4, "default": 1}
        match = self.matcher.match(table, "dining")
        self.assertEqual(match.multiplier, 4.0)
        self.assertEqual(match.matched_key, "food")

    def test_values_are_not_clamped(self):
        for value in (0, -2, 25):
            self.assertEqual(self.matcher.find_multiplier({"dining": value}, "dining"), float(value))

    def test_malformed_table_raises(self):
        with self.assertRaises(RewardTableError):
            self.matcher.find_multiplier({"dining": "lots"}, "dining")
        with self.assertRaises(RewardTableError):
            self.matcher.find_multiplier("4x dining", "dining")
        with self.assertRaises(RewardTableError):
            self.matcher.find_multiplier({"default": {"active_categories": ["gas"], "value": 2}}, "dining")

    def test_module_helper(self):
        self.assertEqual(find_multiplier({"dining": 4}, "dining"), 4.0)


class TestRewardSummaries(unittest.TestCase):
    """Test reward summaries and explanations."""

    def setUp(self):
        self.matcher = CategoryMatcher()

    def test_reward_categories(self):
        table = {"dining": 4, "groceries": 3, "gas": 1, **ROTATING_TABLE}
        self.assertEqual(
            self.matcher.reward_categories(table),
            [("groceries", 5.0), ("gas", 5.0), ("dining", 4.0)],
        )
        self.assertEqual(self.matcher.best_category(table), ("groceries", 5.0))
        self.assertIsNone(self.matcher.best_category({"default": 1}))

    def test_has_reward_for(self):
        table = {"dining": 4, "travel": 1.5}
        self.assertTrue(self.matcher.has_reward_for(table, "dining"))
        self.assertFalse(self.matcher.has_reward_for(table, "travel"))
        self.assertTrue(self.matcher.has_reward_for(table, "travel", min_multiplier=1.5))

    def test_explain(self):
        self.assertEqual(self.matcher.explain({"dining": 4}, "dining"), "Offers 4x rewards on dining")
        self.assertEqual(self.matcher.explain({"dining": 4}, "travel"), "No special rewards (1x default)")
        self.assertEqual(
            self.matcher.explain(ROTATING_TABLE, "gas"),
            "Offers 5x rewards on gas (active rotating category); "
            "rotating bonus capped at $1,500 per period",
        )
        self.assertEqual(
            self.matcher.explain({"entertainment": 3}, "streaming"),
            "Offers 3x rewards on streaming via entertainment",
        )

    def test_rank_cards(self):
        cards = [
            Card("flat", "Flat", 25, 10, reward_table={"default": 1.5}),
            Card("dining", "Dining", 25, 10, reward_table={"dining": 4}),
            Card("broken", "Broken", 25, 10, reward_table={"dining": "x"}),
        ]
        ranked = self.matcher.rank_cards(cards, "dining")
        self.assertEqual([r["card"].card_id for r in ranked], ["dining", "flat", "broken"])
        self.assertEqual(ranked[2]["multiplier"], 1.0)


if __name__ == '__main__':
    unittest.main()
