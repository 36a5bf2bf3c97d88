"""
Test suite for statement cycle date arithmetic.

Tests cover:
- Statement close dates (inclusive reference, short months, year rollover)
- Payment due direction rule and explicit close-date threading
- Grace period length and data-quality warnings
- Float days for purchases before, on and after the close day
- Payment reminders and display helpers
"""

import unittest
from datetime import date, datetime

from cardwise_engine.cards.card import Card
from cardwise_engine.cycles.cycle_calculator import (
    PaymentStatus,
    cycle_for_purchase,
    days_until_payment_due,
    describe_cycle,
    float_days,
    format_day_of_month,
    grace_period,
    grace_period_warning,
    is_in_current_cycle,
    next_statement_close,
    payment_due,
    payment_obligation,
    previous_statement_close,
    statement_close,
    upcoming_payments,
)
from cardwise_engine.exceptions import ContractViolation


def make_card(card_id="c1", close_day=25, due_day=10, balance=0.0, limit=10000.0):
    return Card(
        card_id=card_id,
        name=f"Card {card_id}",
        statement_close_day=close_day,
        payment_due_day=due_day,
        current_balance=balance,
        credit_limit=limit,
        apr=19.99,
    )


class TestStatementClose(unittest.TestCase):
    """Test most-recent statement close date."""

    def test_close_earlier_this_month(self):
        """Reference after the close day uses this month's close."""
        self.assertEqual(statement_close(25, date(2025, 10, 30)), date(2025, 10, 25))

    def test_close_on_reference_day(self):
        """A close on the reference day counts as the most recent close."""
        self.assertEqual(statement_close(25, date(2025, 10, 25)), date(2025, 10, 25))

    def test_close_later_this_month_uses_previous_month(self):
        """Reference before the close day uses last month's close."""
        self.assertEqual(statement_close(25, date(2025, 10, 20)), date(2025, 9, 25))

    def test_year_rollover(self):
        """January reference before the close day goes back to December."""
        self.assertEqual(statement_close(25, date(2025, 1, 10)), date(2024, 12, 25))

    def test_short_month_clamps_to_last_day(self):
        """Close day 31 in February clamps to the 28th."""
        self.assertEqual(statement_close(31, date(2025, 2, 28)), date(2025, 2, 28))
        self.assertEqual(statement_close(31, date(2025, 3, 15)), date(2025, 2, 28))

    def test_leap_year_clamp(self):
        """Close day 30 in a leap-year February clamps to the 29th."""
        self.assertEqual(statement_close(30, date(2024, 3, 1)), date(2024, 2, 29))

    def test_accepts_datetime(self):
        """Datetimes are normalized to dates."""
        self.assertEqual(statement_close(25, datetime(2025, 10, 30, 15, 45)), date(2025, 10, 25))

    def test_invalid_day_raises(self):
        """Days outside 1-31 or non-integers are contract violations."""
        for bad_day in (0, 32, -1, "15", 15.0, True, None):
            with self.assertRaises(ContractViolation):
                statement_close(bad_day, date(2025, 1, 1))

    def test_invalid_reference_raises(self):
        """A reference that is not a date is a contract violation."""
        with self.assertRaises(ContractViolation):
            statement_close(25, "2025-10-25")

    def test_next_and_previous_close(self):
        """Next close is on or after the reference; previous is one cycle back."""
        self.assertEqual(next_statement_close(25, date(2025, 10, 26)), date(2025, 11, 25))
        self.assertEqual(next_statement_close(25, date(2025, 10, 25)), date(2025, 10, 25))
        self.assertEqual(next_statement_close(25, date(2025, 12, 26)), date(2026, 1, 25))
        self.assertEqual(previous_statement_close(25, date(2025, 10, 30)), date(2025, 9, 25))


class TestPaymentDue(unittest.TestCase):
    """Test the payment due direction rule."""

    def test_due_day_before_close_day_is_next_month(self):
        """Close Oct 25 with due day 10 gives Nov 10, not Oct 10 or Dec 10."""
        self.assertEqual(payment_due(25, 10, date(2025, 10, 25)), date(2025, 11, 10))

    def test_due_day_after_close_day_is_same_month(self):
        """Close Mar 5 with due day 28 gives Mar 28."""
        self.assertEqual(payment_due(5, 28, date(2025, 3, 5)), date(2025, 3, 28))

    def test_equal_days_is_next_month(self):
        """Due day equal to close day falls in the following month."""
        self.assertEqual(payment_due(15, 15, date(2025, 12, 15)), date(2026, 1, 15))

    def test_year_rollover(self):
        """December close rolls the due date into January."""
        self.assertEqual(payment_due(25, 10, date(2025, 12, 25)), date(2026, 1, 10))

    def test_due_day_clamps_to_month_end(self):
        """Due day 31 after a January close clamps to Feb 28."""
        self.assertEqual(payment_due(31, 31, date(2025, 1, 31)), date(2025, 2, 28))

    def test_uses_given_close_date(self):
        """The passed close date is trusted, whatever month it is in."""
        self.assertEqual(payment_due(25, 10, date(2024, 6, 25)), date(2024, 7, 10))

    def test_due_never_before_close(self):
        """Due date is on or after the close date for every day combination."""
        for close_day in range(1, 32):
            for due_day in range(1, 32):
                closes = statement_close(close_day, date(2025, 5, 31))
                self.assertGreaterEqual(payment_due(close_day, due_day, closes), closes)

    def test_invalid_due_day_raises(self):
        with self.assertRaises(ContractViolation):
            payment_due(25, 0, date(2025, 10, 25))


class TestGracePeriod(unittest.TestCase):
    """Test grace period length and warnings."""

    def test_grace_period_days(self):
        self.assertEqual(grace_period(date(2025, 10, 25), date(2025, 11, 10)), 16)

    def test_plausible_grace_has_no_warning(self):
        self.assertIsNone(grace_period_warning(16))
        self.assertIsNone(grace_period_warning(15))
        self.assertIsNone(grace_period_warning(35))

    def test_implausible_grace_warns(self):
        """Grace outside 15-35 days is a data-quality warning, not an error."""
        self.assertIn("10", grace_period_warning(10))
        self.assertIsNotNone(grace_period_warning(40))

    def test_warning_range_is_configurable(self):
        config = {"grace_period": {"min_valid_days": 20, "max_valid_days": 30}}
        self.assertIsNotNone(grace_period_warning(16, config))


class TestFloatDays(unittest.TestCase):
    """Test float days from purchase to payment due."""

    def setUp(self):
        self.card = make_card(close_day=15, due_day=10)

    def test_purchase_before_close(self):
        """Jan 5 purchase posts to the Jan 15 statement, due Feb 10."""
        self.assertEqual(float_days(date(2025, 1, 5), self.card), 36)

    def test_purchase_on_close_day(self):
        """A purchase on the close day posts to that statement."""
        self.assertEqual(float_days(date(2025, 1, 15), self.card), 26)

    def test_purchase_after_close_rolls_to_next_cycle(self):
        """Jan 16 purchase posts to the Feb 15 statement, due Mar 10."""
        self.assertEqual(float_days(date(2025, 1, 16), self.card), 53)
        self.assertEqual(
            cycle_for_purchase(15, 10, date(2025, 1, 16)),
            (date(2025, 2, 15), date(2025, 3, 10)),
        )

    def test_float_days_positive_all_year(self):
        """Float is always positive for a normal cycle."""
        day = date(2025, 1, 1)
        while day.year == 2025:
            self.assertGreater(float_days(day, self.card), 0)
            day = date.fromordinal(day.toordinal() + 1)


class TestCycleHelpers(unittest.TestCase):
    """Test current-cycle checks, reminders and display helpers."""

    def test_is_in_current_cycle(self):
        self.assertTrue(is_in_current_cycle(25, date(2025, 10, 20), date(2025, 10, 10)))
        self.assertTrue(is_in_current_cycle(25, date(2025, 10, 25), date(2025, 10, 10)))
        self.assertFalse(is_in_current_cycle(25, date(2025, 10, 26), date(2025, 10, 10)))

    def test_days_until_payment_due(self):
        self.assertEqual(days_until_payment_due(25, 10, date(2025, 11, 5)), 5)
        self.assertEqual(days_until_payment_due(25, 10, date(2025, 11, 12)), -2)

    def test_format_day_of_month(self):
        expected = {
            1: "1st", 2: "2nd", 3: "3rd", 4: "4th", 11: "11th", 12: "12th",
            13: "13th", 21: "21st", 22: "22nd", 23: "23rd", 31: "31st",
        }
        for day, text in expected.items():
            self.assertEqual(format_day_of_month(day), text)

    def test_describe_cycle(self):
        card = make_card(close_day=25, due_day=10)
        self.assertEqual(
            describe_cycle(card, date(2025, 10, 30)),
            "Statement closes 25th, payment due 10th (16 days grace)",
        )

    def test_payment_obligation_status(self):
        card = make_card(balance=500.0)
        self.assertEqual(payment_obligation(card, date(2025, 11, 5)).status, PaymentStatus.DUE_SOON)
        self.assertEqual(payment_obligation(card, date(2025, 11, 12)).status, PaymentStatus.OVERDUE)
        self.assertEqual(payment_obligation(card, date(2025, 10, 26)).status, PaymentStatus.UPCOMING)

        overdue = payment_obligation(card, date(2025, 11, 12))
        self.assertEqual(overdue.days_until_due, -2)
        self.assertEqual(overdue.amount, 500.0)
        self.assertEqual(overdue.status_message(), "OVERDUE by 2 days")

    def test_upcoming_payments_order_and_window(self):
        """Overdue first, then soonest; cards without a balance owe nothing."""
        cards = [
            make_card("paid", balance=0.0),
            make_card("overdue", close_day=25, due_day=10, balance=100.0),
            make_card("later", close_day=1, due_day=28, balance=200.0),
            make_card("soon", close_day=20, due_day=15, balance=50.0),
        ]
        reference = date(2025, 11, 12)

        payments = upcoming_payments(cards, reference)
        self.assertEqual([p.card_id for p in payments], ["overdue", "soon", "later"])
        self.assertEqual(payments[2].days_until_due, 16)

        within_ten = upcoming_payments(cards, reference, days_ahead=10)
        self.assertEqual([p.card_id for p in within_ten], ["overdue", "soon"])


if __name__ == '__main__':
    unittest.main()
