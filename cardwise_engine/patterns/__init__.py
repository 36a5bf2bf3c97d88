"""
Category Pattern Definitions for the Cardwise engine.

Contains the static purchase-category registry and MCC reference data:
- Merchant categories (keywords, MCC codes, reward aliases, subcategories)
- MCC confidence levels and descriptions
"""

from .category_patterns import MERCHANT_CATEGORIES
from .mcc_codes import MCC_CONFIDENCE_LEVELS, MCC_DESCRIPTIONS

__all__ = [
    "MERCHANT_CATEGORIES",
    "MCC_CONFIDENCE_LEVELS",
    "MCC_DESCRIPTIONS",
]
