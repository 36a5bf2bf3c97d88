"""
Cardwise Engine - Credit Card Purchase Recommendation Core.

A pure, synchronous library that decides which card in a wallet to use for
a purchase, under three competing objectives: maximizing rewards, minimizing
interest, and maximizing interest-free float.

Main Components:
    - cards: Card data model
    - cycles: Statement cycle date arithmetic
    - patterns: Purchase category and MCC reference data
    - categorisation: Category catalog, merchant classifier and reward matcher
    - scoring: Strategy engine and user profile detection
    - config: Strategy and classifier configuration
"""

from functools import lru_cache
from typing import Iterable

# Data model
from .cards.card import Card, as_cards

# Statement cycles
from .cycles.cycle_calculator import (
    PaymentObligation,
    PaymentStatus,
    cycle_for_purchase,
    describe_cycle,
    float_days,
    grace_period,
    grace_period_warning,
    payment_due,
    statement_close,
    upcoming_payments,
)

# Categorisation
from .categorisation.catalog import Category, CategoryCatalog, default_catalog
from .categorisation.engine import (
    ClassificationCache,
    ClassificationResult,
    ClassificationSource,
    KnownMerchantTable,
    MerchantClassifier,
)
from .categorisation.reward_matcher import CategoryMatcher, RewardTable, find_multiplier

# Scoring
from .scoring.strategies import RecommendationSet, Strategy, StrategyEngine, StrategyResult
from .scoring.profile_detector import ProfileType, UserProfile, detect_profile

# Configuration
from .config.strategy_config import CLASSIFIER_CONFIG, STRATEGY_CONFIG, merge_config

from .exceptions import CardwiseError, ContractViolation, RewardTableError


@lru_cache(maxsize=1)
def default_engine() -> StrategyEngine:
    """Process-wide engine used by the module-level helpers."""
    return StrategyEngine()


def classify(merchant_text=None, mcc_code=None) -> ClassificationResult:
    """Classify a merchant with the default classifier."""
    return default_engine().classifier.classify(merchant_text, mcc_code)


def get_all_strategies(
    cards: Iterable,
    category_or_merchant,
    amount,
    purchase_date=None,
    mcc_code=None,
) -> RecommendationSet:
    """Score a wallet under the rewards, APR and grace-period strategies."""
    return default_engine().get_all_strategies(
        cards, category_or_merchant, amount, purchase_date=purchase_date, mcc_code=mcc_code
    )


def grace(statement_close_date, payment_due_date) -> int:
    """Grace period in whole days between a statement close and its due date."""
    return grace_period(statement_close_date, payment_due_date)


__version__ = "1.0.0"
__all__ = [
    # Data model
    "Card",
    "as_cards",
    # Statement cycles
    "PaymentObligation",
    "PaymentStatus",
    "cycle_for_purchase",
    "describe_cycle",
    "float_days",
    "grace",
    "grace_period",
    "grace_period_warning",
    "payment_due",
    "statement_close",
    "upcoming_payments",
    # Categorisation
    "Category",
    "CategoryCatalog",
    "default_catalog",
    "ClassificationCache",
    "ClassificationResult",
    "ClassificationSource",
    "KnownMerchantTable",
    "MerchantClassifier",
    "CategoryMatcher",
    "RewardTable",
    "find_multiplier",
    "classify",
    # Scoring
    "RecommendationSet",
    "Strategy",
    "StrategyEngine",
    "StrategyResult",
    "ProfileType",
    "UserProfile",
    "default_engine",
    "get_all_strategies",
    "detect_profile",
    # Configuration
    "CLASSIFIER_CONFIG",
    "STRATEGY_CONFIG",
    "merge_config",
    # Errors
    "CardwiseError",
    "ContractViolation",
    "RewardTableError",
]
