"""
Strategy and classifier configuration for the Cardwise engine.
Contains scoring sentinels, validity ranges, profile thresholds and
classification confidence levels.
"""

import copy
from typing import Dict, Optional

# Strategy Configuration
STRATEGY_CONFIG = {
    # Cards without a grace period get this score in the rewards and
    # grace-period strategies so they always rank below eligible cards
    "eligibility": {
        "ineligible_score": -1000.0,
    },

    "rewards": {
        "annual_projection_months": 12,  # assumes the purchase recurs monthly
    },

    # Grace period (days between statement close and payment due)
    "grace_period": {
        "min_valid_days": 15,
        "max_valid_days": 35,
    },

    # Profile detection thresholds (utilization expressed as a ratio)
    "profile": {
        "low_average_utilization": 0.10,
        "high_card_utilization": 0.50,
        "high_average_utilization": 0.30,
    },

    # Payment reminders
    "payments": {
        "due_soon_days": 7,
        "upcoming_window_days": 30,
        "stale_after_days": 30,  # past-due obligations older than this are dropped
    },
}

# Merchant Classification Configuration
CLASSIFIER_CONFIG = {
    # Stages below this confidence do not stop the fallback chain
    "confidence_threshold": 0.70,
    "cache_max_entries": 500,
    "max_text_length": 512,

    "mcc": {
        "shared_code_confidence": 0.85,   # code used by more than one category
        "default_code_confidence": 0.90,  # unique code without an explicit level
        "disambiguated_confidence": 0.92,  # shared code resolved by merchant text
    },

    "keyword": {
        "exact": 0.90,      # whole text equals a keyword
        "phrase": 0.85,     # multi-word keyword found as whole words
        "word": 0.75,       # single-word keyword found as a whole word
        "substring": 0.65,  # keyword found inside a longer word
        "fuzzy": 0.60,      # near-miss spelling (rapidfuzz)
        "fuzzy_max": 0.65,
        "min_substring_length": 4,
        "fuzzy_threshold": 88,
        "min_fuzzy_length": 5,
    },

    "database": {
        "min_confidence": 0.95,
        "max_confidence": 0.99,
    },
}


def merge_config(base: Dict, overrides: Optional[Dict] = None) -> Dict:
    """
    Deep-merge configuration overrides onto a copy of a base config.

    Args:
        base: Base configuration dictionary (never mutated)
        overrides: Optional nested dictionary of values to replace

    Returns:
        New configuration dictionary

    Example:
        >>> merge_config(STRATEGY_CONFIG, {"grace_period": {"min_valid_days": 20}})
    """
    merged = copy.deepcopy(base)
    if not overrides:
        return merged

    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)

    return merged
