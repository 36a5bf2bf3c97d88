"""
Categorisation Module for the Cardwise engine.

Orchestrates purchase categorisation through:
- Preprocessing (text, MCC code and reward-key normalization)
- Category catalog (keywords, MCC codes, aliases, parent/child relations)
- MCC code mapping
- Keyword pattern matching (literal and fuzzy)
- Merchant classification (MCC, known merchants, keywords, default)
- Reward matching (card reward table to multiplier)
"""

from .catalog import Category, CategoryCatalog, default_catalog
from .engine import (
    DEFAULT_CATEGORY_ID,
    ClassificationCache,
    ClassificationResult,
    ClassificationSource,
    KnownMerchantTable,
    MerchantClassifier,
    MerchantLookup,
)
from .mcc_mapper import (
    MccMatch,
    classify_by_mcc_code,
    describe_mcc_code,
    is_known_mcc_code,
    mcc_confidence,
    most_confident_mcc_code,
)
from .pattern_matching import (
    KeywordMatch,
    compile_keyword_patterns,
    fuzzy_match_keywords,
    match_catalog_keywords,
    match_keyword,
)
from .preprocess import normalize_mcc_code, normalize_reward_key, normalize_text
from .reward_matcher import (
    CategoryMatcher,
    DetailedReward,
    FlatReward,
    RewardMatch,
    RewardTable,
    RotatingReward,
    descriptor_value,
    find_multiplier,
    parse_descriptor,
)

__all__ = [
    # Catalog
    "Category",
    "CategoryCatalog",
    "default_catalog",
    # Classifier
    "DEFAULT_CATEGORY_ID",
    "ClassificationCache",
    "ClassificationResult",
    "ClassificationSource",
    "KnownMerchantTable",
    "MerchantClassifier",
    "MerchantLookup",
    # MCC codes
    "MccMatch",
    "classify_by_mcc_code",
    "describe_mcc_code",
    "is_known_mcc_code",
    "mcc_confidence",
    "most_confident_mcc_code",
    # Pattern matching utilities
    "KeywordMatch",
    "compile_keyword_patterns",
    "fuzzy_match_keywords",
    "match_catalog_keywords",
    "match_keyword",
    # Preprocessing utilities
    "normalize_mcc_code",
    "normalize_reward_key",
    "normalize_text",
    # Reward matching
    "CategoryMatcher",
    "DetailedReward",
    "FlatReward",
    "RewardMatch",
    "RewardTable",
    "RotatingReward",
    "descriptor_value",
    "find_multiplier",
    "parse_descriptor",
]
