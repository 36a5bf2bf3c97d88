"""
Strategy Engine for card recommendations.

Scores every card in the wallet under three independent strategies:
- Rewards: cashback earned on the purchase (requires a grace period)
- APR: interest cost if the purchase is carried as a balance
- Grace period: interest-free float days until payment is due

Cards are never filtered out. Ineligible cards stay in the results with
``eligible=False`` and a sentinel score so callers can explain why.
"""

import logging
import math
import numbers
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from ..cards.card import Card, as_cards
from ..categorisation.catalog import CategoryCatalog, default_catalog
from ..categorisation.engine import (
    ClassificationResult,
    ClassificationSource,
    MerchantClassifier,
)
from ..categorisation.reward_matcher import CategoryMatcher, RewardTable
from ..config.strategy_config import STRATEGY_CONFIG, merge_config
from ..cycles.cycle_calculator import (
    cycle_for_purchase,
    float_days,
    grace_period,
    grace_period_warning,
    to_date,
)
from ..exceptions import ContractViolation, RewardTableError

logger = logging.getLogger(__name__)

NO_GRACE_EXPLANATION = "carries a balance — grace period unavailable."


class Strategy(Enum):
    """Recommendation strategies."""
    REWARDS = "rewards"
    APR = "apr"
    GRACE_PERIOD = "grace_period"


@dataclass
class StrategyResult:
    """Score for one card under one strategy."""
    card_id: str
    card_name: str
    strategy: Strategy
    score: float
    eligible: bool
    explanation: str
    warning: Optional[str] = None
    rank: int = 0

    # Rewards
    multiplier: Optional[float] = None
    cashback: Optional[float] = None
    projected_annual: Optional[float] = None

    # APR
    apr: Optional[float] = None
    monthly_interest: Optional[float] = None
    annual_interest: Optional[float] = None

    # Grace period
    float_days: Optional[int] = None
    statement_close: Optional[date] = None
    payment_due: Optional[date] = None
    grace_period_days: Optional[int] = None


@dataclass
class RecommendationSet:
    """Ranked results for all three strategies."""
    rewards: List[StrategyResult]
    apr: List[StrategyResult]
    grace_period: List[StrategyResult]
    classification: ClassificationResult
    amount: float
    purchase_date: date

    def for_strategy(self, strategy: Strategy) -> List[StrategyResult]:
        return {
            Strategy.REWARDS: self.rewards,
            Strategy.APR: self.apr,
            Strategy.GRACE_PERIOD: self.grace_period,
        }[strategy]

    def ordered(self, priorities: Iterable[Strategy]) -> List[Tuple[Strategy, List[StrategyResult]]]:
        """Result lists in presentation order (e.g. a profile's priorities)."""
        return [(strategy, self.for_strategy(strategy)) for strategy in priorities]

    def summary(self) -> Dict:
        """Best eligible card per strategy and eligibility counts."""
        return {
            "category": self.classification.category_id,
            "best_rewards": next((r for r in self.rewards if r.eligible), None),
            "best_apr": self.apr[0] if self.apr else None,
            "best_grace_period": next((r for r in self.grace_period if r.eligible), None),
            "cards_with_balance": sum(1 for r in self.rewards if not r.eligible),
            "cards_with_grace_period": sum(1 for r in self.rewards if r.eligible),
        }


def format_money(amount: float) -> str:
    """e.g. 20999.96 -> "$20,999.96"."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def _validate_amount(amount) -> float:
    if isinstance(amount, bool) or not isinstance(amount, numbers.Real):
        raise ContractViolation(f"amount must be a number, got {amount!r}")
    if not math.isfinite(amount):
        raise ContractViolation(f"amount must be finite, got {amount!r}")
    if amount < 0:
        raise ContractViolation(f"amount cannot be negative, got {amount}")
    return float(amount)


def _utilization_key(card: Card) -> float:
    utilization = card.utilization
    return float("inf") if utilization is None else utilization


class StrategyEngine:
    """Scores cards for a purchase under each strategy."""

    def __init__(
        self,
        catalog: Optional[CategoryCatalog] = None,
        classifier: Optional[MerchantClassifier] = None,
        matcher: Optional[CategoryMatcher] = None,
        config: Optional[Dict] = None,
    ):
        self.catalog = catalog if catalog is not None else default_catalog()
        self.classifier = classifier or MerchantClassifier(catalog=self.catalog)
        self.matcher = matcher or CategoryMatcher(self.catalog)
        self.config = merge_config(STRATEGY_CONFIG, config)
        self.ineligible_score = self.config["eligibility"]["ineligible_score"]

    def _default_multiplier(self, card: Card) -> float:
        try:
            return RewardTable.from_mapping(card.reward_table).default_multiplier()
        except RewardTableError:
            return 1.0

    @staticmethod
    def _rank(results: List[StrategyResult]) -> List[StrategyResult]:
        for position, result in enumerate(results, start=1):
            result.rank = position
        return results

    # Rewards

    def score_rewards(self, cards: Iterable[Card], category: Optional[str], amount) -> List[StrategyResult]:
        """
        Score cards by cashback on the purchase.

        Only cards without a carried balance are eligible; multiplier is a
        percentage (1.5 means 1.5% back).

        Args:
            cards: Card collection
            category: Resolved category id (or any reward key)
            amount: Purchase amount (>= 0)

        Returns:
            Results for every card, best first
        """
        amount = _validate_amount(amount)
        cards = as_cards(cards)
        months = self.config["rewards"]["annual_projection_months"]

        scored = []
        for card in cards:
            if not card.has_grace_period:
                logger.debug("Rewards: %s ineligible, balance %.2f", card.name, card.current_balance)
                scored.append((card, StrategyResult(
                    card_id=card.card_id,
                    card_name=card.name,
                    strategy=Strategy.REWARDS,
                    score=self.ineligible_score,
                    eligible=False,
                    explanation=NO_GRACE_EXPLANATION,
                    warning=f"Has {format_money(card.current_balance)} balance - no grace period",
                    apr=card.apr,
                )))
                continue

            warning = None
            note = None
            try:
                match = self.matcher.match(card.reward_table, category)
                multiplier = match.multiplier
                note = match.note
            except RewardTableError as e:
                logger.warning("Card %s has an unreadable reward table: %s", card.card_id, e)
                multiplier = 1.0
                warning = f"Reward table could not be read ({e}); using 1x"

            cashback = amount * multiplier / 100
            projected = cashback * months

            logger.debug(
                "Rewards: %s multiplier %.2fx, amount %.2f, cashback %.2f, annual %.2f",
                card.name, multiplier, amount, cashback, projected,
            )

            if amount > 0:
                explanation = (
                    f"Earn {format_money(cashback)} cashback on {format_money(amount)} purchase "
                    f"({multiplier:g}x)"
                )
            else:
                explanation = f"{multiplier:g}x rewards on {category}"
            if note:
                explanation = f"{explanation}; {note}"

            scored.append((card, StrategyResult(
                card_id=card.card_id,
                card_name=card.name,
                strategy=Strategy.REWARDS,
                score=cashback,
                eligible=True,
                explanation=explanation,
                warning=warning,
                multiplier=multiplier,
                cashback=cashback,
                projected_annual=projected,
                apr=card.apr,
            )))

        scored.sort(key=lambda cr: (
            not cr[1].eligible,
            -cr[1].score,
            -cr[0].available_credit,
            _utilization_key(cr[0]),
            -(cr[0].grace_period_days or 0),
            cr[0].apr,
            cr[0].name,
        ))
        return self._rank([result for _, result in scored])

    # APR

    def score_apr(self, cards: Iterable[Card], amount) -> List[StrategyResult]:
        """
        Score cards by interest cost if the amount is carried.

        Category-independent and always eligible. Score is the negated
        monthly interest, so cheaper cards rank higher.
        """
        amount = _validate_amount(amount)
        cards = as_cards(cards)

        scored = []
        for card in cards:
            monthly_interest = amount * (card.apr / 100) / 12
            annual_interest = amount * (card.apr / 100)

            logger.debug(
                "APR: %s apr %.2f%%, monthly interest %.2f, annual %.2f",
                card.name, card.apr, monthly_interest, annual_interest,
            )

            if amount > 0:
                explanation = (
                    f"If you carry {format_money(amount)} balance: "
                    f"{format_money(monthly_interest)}/month interest"
                )
            else:
                explanation = f"{card.apr:.2f}% APR"

            scored.append((card, StrategyResult(
                card_id=card.card_id,
                card_name=card.name,
                strategy=Strategy.APR,
                score=-monthly_interest,
                eligible=True,
                explanation=explanation,
                apr=card.apr,
                monthly_interest=monthly_interest,
                annual_interest=annual_interest,
            )))

        scored.sort(key=lambda cr: (
            -cr[1].score,
            cr[0].apr,
            -cr[0].available_credit,
            _utilization_key(cr[0]),
            -(cr[0].grace_period_days or 0),
            -self._default_multiplier(cr[0]),
            cr[0].name,
        ))
        return self._rank([result for _, result in scored])

    # Grace period

    def score_grace_period(self, cards: Iterable[Card], purchase_date) -> List[StrategyResult]:
        """
        Score cards by interest-free float days.

        Cards carrying a balance get the ineligible sentinel score and a
        warning naming the balance.
        """
        purchase = to_date(purchase_date)
        cards = as_cards(cards)

        scored = []
        for card in cards:
            if not card.has_grace_period:
                logger.debug("Grace: %s ineligible, balance %.2f", card.name, card.current_balance)
                scored.append((card, StrategyResult(
                    card_id=card.card_id,
                    card_name=card.name,
                    strategy=Strategy.GRACE_PERIOD,
                    score=self.ineligible_score,
                    eligible=False,
                    explanation="Interest charges immediately - no float time available",
                    warning=f"Has {format_money(card.current_balance)} balance - NO grace period",
                    apr=card.apr,
                )))
                continue

            closes, due = cycle_for_purchase(card.statement_close_day, card.payment_due_day, purchase)
            days = float_days(purchase, card)
            grace_days = grace_period(closes, due)
            warning = grace_period_warning(grace_days, self.config)
            if warning:
                logger.warning("Card %s: %s", card.card_id, warning)

            scored.append((card, StrategyResult(
                card_id=card.card_id,
                card_name=card.name,
                strategy=Strategy.GRACE_PERIOD,
                score=float(days),
                eligible=True,
                explanation=(
                    f"{days} days to pay - statement closes {closes.isoformat()}, "
                    f"payment due {due.isoformat()}"
                ),
                warning=warning,
                apr=card.apr,
                float_days=days,
                statement_close=closes,
                payment_due=due,
                grace_period_days=grace_days,
            )))

        scored.sort(key=lambda cr: (
            not cr[1].eligible,
            -cr[1].score,
            -(cr[1].payment_due.toordinal() if cr[1].payment_due else 0),
            -cr[0].available_credit,
            _utilization_key(cr[0]),
            -self._default_multiplier(cr[0]),
            cr[0].apr,
            cr[0].name,
        ))
        return self._rank([result for _, result in scored])

    # Orchestration

    def resolve_category(self, category_or_merchant, mcc_code=None) -> ClassificationResult:
        """
        Resolve a category id, alias or free-text merchant to a classification.

        Catalog ids and aliases ("dining", "restaurants") skip the classifier.
        """
        if isinstance(category_or_merchant, str):
            category = self.catalog.find_by_alias(category_or_merchant)
            if category is not None:
                return ClassificationResult(
                    category_id=category.id,
                    category_name=category.name,
                    confidence=1.0,
                    source=ClassificationSource.KEYWORD,
                    explanation=f"'{category_or_merchant}' names the {category.name} category",
                    mcc_code=None,
                )
        return self.classifier.classify(category_or_merchant, mcc_code)

    def get_all_strategies(
        self,
        cards: Iterable,
        category_or_merchant,
        amount,
        purchase_date=None,
        mcc_code=None,
    ) -> RecommendationSet:
        """
        Score the wallet under all three strategies.

        Args:
            cards: Card objects or persistence records
            category_or_merchant: Category id/alias or merchant text
            amount: Purchase amount (>= 0)
            purchase_date: Purchase date (defaults to today)
            mcc_code: Optional merchant category code

        Returns:
            RecommendationSet
        """
        amount = _validate_amount(amount)
        purchase = to_date(purchase_date) if purchase_date is not None else date.today()
        cards = as_cards(cards)

        classification = self.resolve_category(category_or_merchant, mcc_code)
        logger.debug(
            "Scoring %d cards for %s (%s, %.2f), amount %.2f",
            len(cards), classification.category_id, classification.source.value,
            classification.confidence, amount,
        )

        return RecommendationSet(
            rewards=self.score_rewards(cards, classification.category_id, amount),
            apr=self.score_apr(cards, amount),
            grace_period=self.score_grace_period(cards, purchase),
            classification=classification,
            amount=amount,
            purchase_date=purchase,
        )
