"""
User profile detection.

Classifies payoff behaviour from the card collection's balances and
utilization, and picks the order in which the three strategies are
presented. The ordering never changes any score.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional

from ..cards.card import as_cards
from ..config.strategy_config import STRATEGY_CONFIG
from .strategies import Strategy

logger = logging.getLogger(__name__)


class ProfileType(Enum):
    """Payoff behaviour profiles."""
    REWARDS_MAXIMIZER = "REWARDS_MAXIMIZER"
    APR_MINIMIZER = "APR_MINIMIZER"
    BALANCED = "BALANCED"


PROFILE_PRIORITIES = {
    ProfileType.REWARDS_MAXIMIZER: [Strategy.REWARDS, Strategy.GRACE_PERIOD, Strategy.APR],
    ProfileType.APR_MINIMIZER: [Strategy.APR, Strategy.REWARDS, Strategy.GRACE_PERIOD],
    ProfileType.BALANCED: [Strategy.REWARDS, Strategy.APR, Strategy.GRACE_PERIOD],
}

PROFILE_ADVICE = {
    ProfileType.REWARDS_MAXIMIZER: (
        "Keep paying balances in full to maximize rewards without interest charges."
    ),
    ProfileType.APR_MINIMIZER: (
        "Focus on cards with the lowest APR to minimize interest costs, and pay down "
        "high-APR cards first."
    ),
    ProfileType.BALANCED: (
        "Pay balances in full when possible to unlock grace periods and earn rewards "
        "without interest."
    ),
}


@dataclass
class BehaviorMetrics:
    """Aggregate balance and utilization figures for a card collection."""
    total_cards: int = 0
    cards_with_balance: int = 0
    cards_without_balance: int = 0
    total_debt: float = 0.0
    average_utilization: float = 0.0  # ratio, over cards with a credit limit
    high_utilization_cards: int = 0
    balance_ratio: float = 0.0


@dataclass
class UserProfile:
    """Detected profile and strategy presentation order."""
    profile: ProfileType
    priorities: List[Strategy]
    description: str
    confidence: float
    metrics: BehaviorMetrics = field(default_factory=BehaviorMetrics)

    @property
    def advice(self) -> str:
        return PROFILE_ADVICE[self.profile]


def calculate_behavior_metrics(cards: Iterable, config: Optional[Dict] = None) -> BehaviorMetrics:
    """
    Calculate behaviour metrics from a card collection.

    Cards with a zero credit limit are left out of the utilization figures.
    """
    config = config or STRATEGY_CONFIG
    high_threshold = config["profile"]["high_card_utilization"]
    cards = as_cards(cards)

    total_cards = len(cards)
    with_balance = sum(1 for c in cards if c.current_balance > 0)
    # A wallet of zero-limit cards has no utilization figures and averages 0.0
    utilizations = [c.utilization for c in cards if c.utilization is not None]

    return BehaviorMetrics(
        total_cards=total_cards,
        cards_with_balance=with_balance,
        cards_without_balance=total_cards - with_balance,
        total_debt=sum(c.current_balance for c in cards),
        average_utilization=sum(utilizations) / len(utilizations) if utilizations else 0.0,
        high_utilization_cards=sum(1 for u in utilizations if u > high_threshold),
        balance_ratio=with_balance / total_cards if total_cards else 0.0,
    )


def detect_profile(cards: Iterable, config: Optional[Dict] = None) -> UserProfile:
    """
    Detect the user's payoff profile.

    Rules, in order:
    1. No card carries a balance, or average utilization under 10%:
       REWARDS_MAXIMIZER
    2. Any card over 50% utilization, or average over 30%: APR_MINIMIZER
    3. Otherwise BALANCED

    Args:
        cards: Card objects or persistence records
        config: Optional strategy configuration

    Returns:
        UserProfile
    """
    config = config or STRATEGY_CONFIG
    thresholds = config["profile"]
    cards = as_cards(cards)

    if not cards:
        return UserProfile(
            profile=ProfileType.REWARDS_MAXIMIZER,
            priorities=list(PROFILE_PRIORITIES[ProfileType.REWARDS_MAXIMIZER]),
            description="Add cards to get personalized recommendations",
            confidence=0.0,
        )

    metrics = calculate_behavior_metrics(cards, config)

    if metrics.cards_with_balance == 0:
        profile, confidence = ProfileType.REWARDS_MAXIMIZER, 1.0
        description = "You pay balances in full - maximize rewards"
    elif metrics.average_utilization < thresholds["low_average_utilization"]:
        profile, confidence = ProfileType.REWARDS_MAXIMIZER, 0.85
        description = "You typically pay balances in full"
    elif (
        metrics.high_utilization_cards > 0
        or metrics.average_utilization > thresholds["high_average_utilization"]
    ):
        profile, confidence = ProfileType.APR_MINIMIZER, 0.9
        description = "You carry balances - minimizing interest saves money"
    else:
        profile, confidence = ProfileType.BALANCED, 0.7
        description = "You occasionally carry balances"

    logger.debug(
        "Profile %s (confidence %.2f): %d/%d cards with balance, average utilization %.3f",
        profile.value, confidence, metrics.cards_with_balance, metrics.total_cards,
        metrics.average_utilization,
    )

    return UserProfile(
        profile=profile,
        priorities=list(PROFILE_PRIORITIES[profile]),
        description=description,
        confidence=confidence,
        metrics=metrics,
    )
