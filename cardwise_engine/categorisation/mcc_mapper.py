"""
MCC (Merchant Category Code) mapping.

Maps card-network merchant codes to catalog categories with a code-specific
confidence. Codes listed by a single category score from
``MCC_CONFIDENCE_LEVELS``; codes shared by several categories score the lower
shared-code level and are reported as ambiguous.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ..config.strategy_config import CLASSIFIER_CONFIG
from ..patterns.mcc_codes import MCC_CONFIDENCE_LEVELS, MCC_DESCRIPTIONS
from .catalog import CategoryCatalog, default_catalog
from .preprocess import normalize_mcc_code


@dataclass(frozen=True)
class MccMatch:
    """Categories an MCC code maps to."""
    code: int
    category_id: str  # first candidate in catalog order
    candidates: Tuple[str, ...]
    confidence: float

    @property
    def is_ambiguous(self) -> bool:
        return len(self.candidates) > 1


def mcc_confidence(
    code,
    catalog: Optional[CategoryCatalog] = None,
    config: Optional[Dict] = None,
) -> float:
    """
    Confidence that a code identifies its category.

    Returns:
        0.0 for unknown codes, the shared-code level for ambiguous codes,
        otherwise the code's level (or the default unique-code level)
    """
    catalog = catalog if catalog is not None else default_catalog()
    mcc_config = (config or CLASSIFIER_CONFIG)["mcc"]

    candidates = catalog.categories_for_mcc_code(code)
    if not candidates:
        return 0.0
    if len(candidates) > 1:
        return mcc_config["shared_code_confidence"]
    return MCC_CONFIDENCE_LEVELS.get(
        normalize_mcc_code(code), mcc_config["default_code_confidence"]
    )


def classify_by_mcc_code(
    code,
    catalog: Optional[CategoryCatalog] = None,
    config: Optional[Dict] = None,
) -> Optional[MccMatch]:
    """
    Map an MCC code to catalog categories.

    Example:
        >>> classify_by_mcc_code(5812).category_id
        'dining'
        >>> classify_by_mcc_code("5411").candidates
        ('groceries', 'warehouse')
    """
    catalog = catalog if catalog is not None else default_catalog()
    normalized = normalize_mcc_code(code)
    if normalized is None:
        return None

    candidates = catalog.categories_for_mcc_code(normalized)
    if not candidates:
        return None

    return MccMatch(
        code=normalized,
        category_id=candidates[0].id,
        candidates=tuple(c.id for c in candidates),
        confidence=mcc_confidence(normalized, catalog, config),
    )


def is_known_mcc_code(code, catalog: Optional[CategoryCatalog] = None) -> bool:
    catalog = catalog if catalog is not None else default_catalog()
    return bool(catalog.categories_for_mcc_code(code))


def describe_mcc_code(code) -> Optional[str]:
    """Network description for a code, e.g. 5812 -> "Eating places and restaurants"."""
    return MCC_DESCRIPTIONS.get(normalize_mcc_code(code))


def most_confident_mcc_code(
    category_id: str,
    catalog: Optional[CategoryCatalog] = None,
) -> Optional[int]:
    """The category's code that most reliably identifies it."""
    catalog = catalog if catalog is not None else default_catalog()
    codes = catalog.mcc_codes_for(category_id)
    if not codes:
        return None
    return max(codes, key=lambda c: mcc_confidence(c, catalog))
