"""
Statement cycle date arithmetic.

Cards store day-of-month values (1-31) for statement close and payment due;
actual dates are computed from an explicit reference date. No function here
reads the current date, and ``payment_due`` never recomputes the statement
close date it is given.
"""

import calendar
import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from ..cards.card import Card, validate_day_of_month
from ..config.strategy_config import STRATEGY_CONFIG
from ..exceptions import ContractViolation

logger = logging.getLogger(__name__)


class PaymentStatus(Enum):
    """Urgency of a statement payment relative to the reference date."""
    OVERDUE = "overdue"
    DUE_SOON = "due_soon"
    UPCOMING = "upcoming"


@dataclass
class PaymentObligation:
    """Payment owed on one card's statement."""
    card_id: str
    card_name: str
    statement_close: date
    payment_due: date
    days_until_due: int
    amount: float
    status: PaymentStatus

    @property
    def is_overdue(self) -> bool:
        return self.status == PaymentStatus.OVERDUE

    def status_message(self) -> str:
        if self.status == PaymentStatus.OVERDUE:
            return f"OVERDUE by {abs(self.days_until_due)} days"
        if self.days_until_due == 0:
            return "Due today"
        plural = "" if self.days_until_due == 1 else "s"
        return f"Due in {self.days_until_due} day{plural}"


def to_date(value) -> date:
    """Normalize a date or datetime to a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    raise ContractViolation(f"expected a date, got {value!r}")


def _clamped_date(year: int, month: int, day: int) -> date:
    """Build a date, clamping the day to the last day of the month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day, last_day))


def _shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def statement_close(close_day: int, reference) -> date:
    """
    Most recent statement close date on or before the reference date.

    Args:
        close_day: Statement close day of month (1-31)
        reference: Reference date

    Returns:
        Statement close date, clamped to the month's last day

    Example:
        >>> statement_close(15, date(2025, 1, 20))
        datetime.date(2025, 1, 15)
        >>> statement_close(25, date(2025, 1, 20))
        datetime.date(2024, 12, 25)
    """
    close_day = validate_day_of_month(close_day, "close_day")
    ref = to_date(reference)

    candidate = _clamped_date(ref.year, ref.month, close_day)
    if candidate <= ref:
        return candidate

    year, month = _shift_month(ref.year, ref.month, -1)
    return _clamped_date(year, month, close_day)


def next_statement_close(close_day: int, reference) -> date:
    """Earliest statement close date on or after the reference date."""
    close_day = validate_day_of_month(close_day, "close_day")
    ref = to_date(reference)

    candidate = _clamped_date(ref.year, ref.month, close_day)
    if candidate >= ref:
        return candidate

    year, month = _shift_month(ref.year, ref.month, 1)
    return _clamped_date(year, month, close_day)


def previous_statement_close(close_day: int, reference) -> date:
    """Statement close date before the most recent one."""
    latest = statement_close(close_day, reference)
    return statement_close(close_day, latest - timedelta(days=1))


def payment_due(close_day: int, due_day: int, statement_close_date) -> date:
    """
    Payment due date for an already-computed statement close date.

    The due date falls in the month after the close unless ``due_day`` is
    later in the month than ``close_day``, in which case it falls in the same
    month as the close.

    Args:
        close_day: Statement close day of month (1-31)
        due_day: Payment due day of month (1-31)
        statement_close_date: The actual close date (not a reference date)

    Returns:
        Payment due date, clamped to the month's last day

    Example:
        >>> payment_due(25, 10, date(2025, 10, 25))
        datetime.date(2025, 11, 10)
    """
    close_day = validate_day_of_month(close_day, "close_day")
    due_day = validate_day_of_month(due_day, "due_day")
    closed = to_date(statement_close_date)

    if due_day > close_day:
        return _clamped_date(closed.year, closed.month, due_day)

    year, month = _shift_month(closed.year, closed.month, 1)
    return _clamped_date(year, month, due_day)


def grace_period(statement_close_date, payment_due_date) -> int:
    """Whole days between statement close and payment due."""
    return (to_date(payment_due_date) - to_date(statement_close_date)).days


def grace_period_warning(days: int, config: Optional[Dict] = None) -> Optional[str]:
    """
    Data-quality message for a grace period outside the valid range.

    Returns:
        Warning string, or None when the length is plausible
    """
    limits = (config or STRATEGY_CONFIG)["grace_period"]
    low, high = limits["min_valid_days"], limits["max_valid_days"]
    if low <= days <= high:
        return None
    return f"Grace period of {days} days is outside the expected {low}-{high} day range"


def cycle_for_purchase(close_day: int, due_day: int, purchase_date) -> Tuple[date, date]:
    """
    Statement close and payment due dates for the statement a purchase posts to.

    A purchase on the close day posts to that day's statement; later purchases
    roll into the next cycle.
    """
    closes = next_statement_close(close_day, purchase_date)
    return closes, payment_due(close_day, due_day, closes)


def float_days(purchase_date, card: Card) -> int:
    """
    Days between a purchase and the due date of the statement it posts to.

    Example:
        Purchase Jan 5, statement closes Jan 15, payment due Feb 10
        gives 36 days of float.
    """
    purchase = to_date(purchase_date)
    closes, due = cycle_for_purchase(card.statement_close_day, card.payment_due_day, purchase)
    days = max(0, (due - purchase).days)

    logger.debug(
        "Float for %s: purchase %s, statement closes %s, payment due %s, %d days",
        card.name, purchase, closes, due, days,
    )
    return days


def is_in_current_cycle(close_day: int, purchase_date, reference) -> bool:
    """True if the purchase posts to the same statement as the reference date."""
    return next_statement_close(close_day, purchase_date) == next_statement_close(close_day, reference)


def days_until_payment_due(close_day: int, due_day: int, reference) -> int:
    """
    Days from the reference date to the most recent statement's due date.

    Negative when that due date has already passed.
    """
    ref = to_date(reference)
    closes = statement_close(close_day, ref)
    return (payment_due(close_day, due_day, closes) - ref).days


def _status_for(days_until_due: int, config: Dict) -> PaymentStatus:
    if days_until_due < 0:
        return PaymentStatus.OVERDUE
    if days_until_due <= config["payments"]["due_soon_days"]:
        return PaymentStatus.DUE_SOON
    return PaymentStatus.UPCOMING


def _obligation_for(card: Card, closes: date, ref: date, config: Dict) -> PaymentObligation:
    due = payment_due(card.statement_close_day, card.payment_due_day, closes)
    days = (due - ref).days
    return PaymentObligation(
        card_id=card.card_id,
        card_name=card.name,
        statement_close=closes,
        payment_due=due,
        days_until_due=days,
        amount=card.current_balance,
        status=_status_for(days, config),
    )


def payment_obligation(card: Card, reference, config: Optional[Dict] = None) -> PaymentObligation:
    """Payment owed for the card's most recently closed statement."""
    config = config or STRATEGY_CONFIG
    ref = to_date(reference)
    return _obligation_for(card, statement_close(card.statement_close_day, ref), ref, config)


def upcoming_payments(
    cards: Iterable[Card],
    reference,
    days_ahead: Optional[int] = None,
    config: Optional[Dict] = None,
) -> List[PaymentObligation]:
    """
    Payments due within a window, overdue first then soonest.

    Only cards carrying a balance owe anything. When the most recent
    statement's due date is long past (stale), the next statement's due date
    is considered instead.

    Args:
        cards: Card collection
        reference: Reference date
        days_ahead: Window length (default from config)
        config: Optional strategy configuration

    Returns:
        List of PaymentObligation
    """
    config = config or STRATEGY_CONFIG
    ref = to_date(reference)
    window = config["payments"]["upcoming_window_days"] if days_ahead is None else days_ahead
    stale_after = config["payments"]["stale_after_days"]

    obligations = []
    for card in cards:
        if card.current_balance <= 0:
            continue

        obligation = payment_obligation(card, ref, config)
        if obligation.days_until_due < -stale_after:
            closes = next_statement_close(card.statement_close_day, ref + timedelta(days=1))
            obligation = _obligation_for(card, closes, ref, config)

        if obligation.days_until_due <= window:
            obligations.append(obligation)

    obligations.sort(key=lambda o: (not o.is_overdue, o.days_until_due))
    return obligations


def format_day_of_month(day: int) -> str:
    """Ordinal day of month, e.g. "1st", "22nd", "11th"."""
    day = validate_day_of_month(day)
    if 11 <= day % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def describe_cycle(card: Card, reference) -> str:
    """e.g. "Statement closes 25th, payment due 10th (16 days grace)"."""
    closes = statement_close(card.statement_close_day, reference)
    due = payment_due(card.statement_close_day, card.payment_due_day, closes)
    return (
        f"Statement closes {format_day_of_month(card.statement_close_day)}, "
        f"payment due {format_day_of_month(card.payment_due_day)} "
        f"({grace_period(closes, due)} days grace)"
    )
