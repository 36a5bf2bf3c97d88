"""
Scoring Module for the Cardwise engine.

Provides the three recommendation strategies (rewards, APR, grace period)
and user profile detection for strategy ordering.
"""

from .strategies import (
    NO_GRACE_EXPLANATION,
    RecommendationSet,
    Strategy,
    StrategyEngine,
    StrategyResult,
    format_money,
)
from .profile_detector import (
    PROFILE_PRIORITIES,
    BehaviorMetrics,
    ProfileType,
    UserProfile,
    calculate_behavior_metrics,
    detect_profile,
)

__all__ = [
    # Strategies
    "NO_GRACE_EXPLANATION",
    "RecommendationSet",
    "Strategy",
    "StrategyEngine",
    "StrategyResult",
    "format_money",
    # Profile detection
    "PROFILE_PRIORITIES",
    "BehaviorMetrics",
    "ProfileType",
    "UserProfile",
    "calculate_behavior_metrics",
    "detect_profile",
]
