"""
Card record used by every strategy.

Cards arrive from persistence in a loosely-typed shape (numeric strings,
JSON-encoded reward structures, alternate key names). ``Card.from_dict``
accepts that shape; the constructor itself validates the calling contract.
"""

import json
import logging
import numbers
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional

from ..exceptions import ContractViolation

logger = logging.getLogger(__name__)


def _is_real_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def validate_day_of_month(value: Any, field_name: str = "day") -> int:
    """
    Check a day-of-month value.

    Args:
        value: Candidate day
        field_name: Name used in the error message

    Returns:
        The day as an int

    Raises:
        ContractViolation: If the value is not an integer in 1..31
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise ContractViolation(f"{field_name} must be an integer day of month, got {value!r}")
    if not 1 <= value <= 31:
        raise ContractViolation(f"{field_name} must be between 1 and 31, got {value}")
    return int(value)


@dataclass
class Card:
    """A credit card in the user's wallet."""
    card_id: str
    name: str
    statement_close_day: int
    payment_due_day: int
    current_balance: float = 0.0
    credit_limit: float = 0.0
    apr: float = 0.0  # annual percentage rate, 0-100
    grace_period_days: Optional[int] = None  # as stored; derived value comes from the cycle dates
    reward_table: Any = field(default_factory=dict)  # raw mapping, parsed by the reward matcher

    def __post_init__(self):
        self.statement_close_day = validate_day_of_month(
            self.statement_close_day, "statement_close_day"
        )
        self.payment_due_day = validate_day_of_month(self.payment_due_day, "payment_due_day")

        if not _is_real_number(self.apr):
            raise ContractViolation(f"apr must be a number, got {self.apr!r}")
        if not 0 <= self.apr <= 100:
            raise ContractViolation(f"apr must be between 0 and 100, got {self.apr}")

        if not _is_real_number(self.current_balance):
            raise ContractViolation(f"current_balance must be a number, got {self.current_balance!r}")
        if not _is_real_number(self.credit_limit):
            raise ContractViolation(f"credit_limit must be a number, got {self.credit_limit!r}")
        if self.credit_limit < 0:
            raise ContractViolation(f"credit_limit cannot be negative, got {self.credit_limit}")

        if self.grace_period_days is not None and not _is_real_number(self.grace_period_days):
            raise ContractViolation(
                f"grace_period_days must be a number, got {self.grace_period_days!r}"
            )

        self.apr = float(self.apr)
        self.current_balance = float(self.current_balance)
        self.credit_limit = float(self.credit_limit)

    @property
    def has_grace_period(self) -> bool:
        """Grace period applies only when no balance is carried (a credit balance counts)."""
        return self.current_balance <= 0

    @property
    def utilization(self) -> Optional[float]:
        """Balance as a ratio of the credit limit, None when the limit is zero."""
        if self.credit_limit <= 0:
            return None
        return self.current_balance / self.credit_limit

    @property
    def available_credit(self) -> float:
        return max(self.credit_limit - self.current_balance, 0.0)

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> "Card":
        """
        Build a card from a persistence-shaped record.

        Accepts ``id``/``card_id``, ``card_name``/``nickname``/``name``,
        ``reward_structure``/``reward_table``, numeric strings for amounts and
        days, and a JSON-encoded reward structure. A reward structure that is
        not valid JSON is kept as-is; scoring reports it as a per-card warning.

        Raises:
            ContractViolation: If a required field is missing or malformed
        """
        card_id = record.get("card_id", record.get("id"))
        if card_id is None:
            raise ContractViolation("card record has no id")

        name = (
            record.get("card_name")
            or record.get("nickname")
            or record.get("name")
            or str(card_id)
        )

        reward_table = record.get("reward_structure", record.get("reward_table"))
        if reward_table is None:
            reward_table = {}
        elif isinstance(reward_table, str):
            try:
                reward_table = json.loads(reward_table)
            except json.JSONDecodeError:
                logger.warning("Card %s has a reward structure that is not valid JSON", card_id)

        grace = record.get("grace_period_days")

        return cls(
            card_id=str(card_id),
            name=str(name),
            statement_close_day=_coerce_int(record.get("statement_close_day"), "statement_close_day"),
            payment_due_day=_coerce_int(record.get("payment_due_day"), "payment_due_day"),
            current_balance=_coerce_number(record.get("current_balance", 0), "current_balance"),
            credit_limit=_coerce_number(record.get("credit_limit", 0), "credit_limit"),
            apr=_coerce_number(record.get("apr", 0), "apr"),
            grace_period_days=None if grace in (None, "") else _coerce_int(grace, "grace_period_days"),
            reward_table=reward_table,
        )


def _coerce_number(value: Any, field_name: str) -> Any:
    """Convert numeric strings; anything else is left for validation."""
    if value is None:
        return 0.0
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            raise ContractViolation(f"{field_name} must be numeric, got {value!r}") from None
    return value


def _coerce_int(value: Any, field_name: str) -> Any:
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise ContractViolation(f"{field_name} must be an integer, got {value!r}") from None
    if value is None:
        raise ContractViolation(f"{field_name} is required")
    return value


def as_cards(cards: Iterable[Any]) -> List[Card]:
    """Accept a mix of Card objects and persistence records."""
    return [card if isinstance(card, Card) else Card.from_dict(card) for card in cards]
