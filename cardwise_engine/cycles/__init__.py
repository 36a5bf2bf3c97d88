"""
Statement Cycle Module for the Cardwise engine.

Pure date arithmetic over day-of-month card settings:
- Statement close and payment due dates
- Grace period length and float days
- Payment reminders (overdue, due soon, upcoming)
"""

from .cycle_calculator import (
    PaymentStatus,
    PaymentObligation,
    to_date,
    statement_close,
    next_statement_close,
    previous_statement_close,
    payment_due,
    grace_period,
    grace_period_warning,
    cycle_for_purchase,
    float_days,
    is_in_current_cycle,
    days_until_payment_due,
    payment_obligation,
    upcoming_payments,
    format_day_of_month,
    describe_cycle,
)

__all__ = [
    "PaymentStatus",
    "PaymentObligation",
    "to_date",
    "statement_close",
    "next_statement_close",
    "previous_statement_close",
    "payment_due",
    "grace_period",
    "grace_period_warning",
    "cycle_for_purchase",
    "float_days",
    "is_in_current_cycle",
    "days_until_payment_due",
    "payment_obligation",
    "upcoming_payments",
    "format_day_of_month",
    "describe_cycle",
]
