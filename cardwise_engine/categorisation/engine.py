"""
Merchant Classifier for card recommendations.
Resolves free-text merchant names and MCC codes to purchase categories.
"""

import logging
import threading
from collections import OrderedDict
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Mapping, Optional, Protocol, Tuple

from ..config.merchant_table_loader import load_known_merchants_csv
from ..config.strategy_config import CLASSIFIER_CONFIG, merge_config
from .catalog import CategoryCatalog, default_catalog
from .mcc_mapper import classify_by_mcc_code, describe_mcc_code
from .pattern_matching import compile_keyword_patterns, match_catalog_keywords
from .preprocess import normalize_mcc_code, normalize_text

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY_ID = "default"


class ClassificationSource(Enum):
    """Which stage of the fallback chain produced a classification."""
    MCC_CODE = "mcc-code"
    DATABASE = "database"
    KEYWORD = "keyword"
    DEFAULT = "default"


@dataclass(frozen=True)
class ClassificationResult:
    """Result of merchant classification."""
    category_id: str
    category_name: str
    confidence: float
    source: ClassificationSource
    explanation: str
    mcc_code: Optional[int] = None
    warning: Optional[str] = None

    @property
    def is_default(self) -> bool:
        return self.source == ClassificationSource.DEFAULT


class MerchantLookup(Protocol):
    """Known-merchant table keyed by normalized merchant name."""

    def lookup(self, normalized_name: str) -> Optional[Dict]:
        """Return {"category_id": ..., "confidence": ...} or None."""
        ...


class KnownMerchantTable:
    """In-memory known-merchant table."""

    def __init__(self, entries: Optional[Mapping[str, Dict]] = None):
        self._entries = {}
        for merchant, entry in (entries or {}).items():
            key = normalize_text(merchant)
            if key:
                self._entries[key] = dict(entry)

    @classmethod
    def from_csv(cls, csv_path: str) -> "KnownMerchantTable":
        return cls(load_known_merchants_csv(csv_path))

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, normalized_name: str) -> Optional[Dict]:
        entry = self._entries.get(normalized_name)
        return dict(entry) if entry else None


class ClassificationCache:
    """
    Bounded FIFO cache of classification results.

    Keys are (normalized merchant text, MCC code). Guarded by a lock so a
    classifier can be shared between threads.
    """

    def __init__(self, max_entries: int = CLASSIFIER_CONFIG["cache_max_entries"]):
        self.max_entries = max(1, int(max_entries))
        self._entries = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: Tuple[str, Optional[int]]) -> Optional[ClassificationResult]:
        with self._lock:
            result = self._entries.get(key)
            if result is None:
                self.misses += 1
            else:
                self.hits += 1
            return result

    def put(self, key: Tuple[str, Optional[int]], result: ClassificationResult) -> None:
        with self._lock:
            if key in self._entries:
                return
            while len(self._entries) >= self.max_entries:
                self._entries.popitem(last=False)
            self._entries[key] = result

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "size": len(self._entries),
                "max_entries": self.max_entries,
                "hits": self.hits,
                "misses": self.misses,
            }


class MerchantClassifier:
    """
    Classifies merchants into catalog categories.

    Fallback chain: MCC code, known-merchant table, keyword match, default.
    A stage whose confidence is below ``confidence_threshold`` does not stop
    the chain; its result is kept and returned only if no later stage matches.
    """

    def __init__(
        self,
        catalog: Optional[CategoryCatalog] = None,
        known_merchants: Optional[MerchantLookup] = None,
        cache: Optional[ClassificationCache] = None,
        config: Optional[Dict] = None,
    ):
        self.catalog = catalog if catalog is not None else default_catalog()
        self.known_merchants = known_merchants
        self.config = merge_config(CLASSIFIER_CONFIG, config)
        self.cache = cache if cache is not None else ClassificationCache(
            self.config["cache_max_entries"]
        )
        self._patterns = compile_keyword_patterns(self.catalog)

    def classify(self, merchant_text=None, mcc_code=None) -> ClassificationResult:
        """
        Classify a merchant.

        Never raises: None, non-string text and junk MCC codes are treated as
        missing input.

        Args:
            merchant_text: Merchant name or free text
            mcc_code: Optional Merchant Category Code (int or digit string)

        Returns:
            ClassificationResult
        """
        text = normalize_text(merchant_text, self.config["max_text_length"])
        code = normalize_mcc_code(mcc_code)
        if mcc_code is not None and code is None:
            logger.debug("Ignoring unparseable MCC code %r", mcc_code)

        key = (text, code)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Classification cache hit for %r", key)
            return cached

        result = self._classify(text, code)
        self.cache.put(key, result)
        return result

    def classify_many(self, merchants: Iterable) -> List[ClassificationResult]:
        """Classify merchant strings or (merchant_text, mcc_code) pairs."""
        results = []
        for item in merchants:
            if isinstance(item, tuple):
                results.append(self.classify(*item))
            else:
                results.append(self.classify(item))
        return results

    def supported_categories(self) -> List[str]:
        return self.catalog.ids()

    def cache_stats(self) -> Dict[str, int]:
        return self.cache.stats()

    def _classify(self, text: str, code: Optional[int]) -> ClassificationResult:
        threshold = self.config["confidence_threshold"]
        fallback = None
        keyword_match = match_catalog_keywords(text, self._patterns, self.config) if text else None

        # Stage 1: MCC code
        if code is not None:
            result = self._classify_by_mcc(code, keyword_match)
            if result is not None:
                if result.confidence >= threshold:
                    return result
                fallback = result
            else:
                logger.debug("MCC code %s is not in the catalog", code)

        # Stage 2: known-merchant table
        if text and self.known_merchants is not None:
            result = self._classify_by_database(text, code)
            if result is not None:
                if result.confidence >= threshold:
                    return result
                fallback = self._pick(fallback, result)

        # Stage 3: keyword
        if keyword_match is not None:
            category = self.catalog.get(keyword_match.category_id)
            result = ClassificationResult(
                category_id=category.id,
                category_name=category.name,
                confidence=keyword_match.confidence,
                source=ClassificationSource.KEYWORD,
                explanation=(
                    f"Merchant text matched keyword '{keyword_match.keyword}' "
                    f"({keyword_match.match_method}) for {category.name}"
                ),
                mcc_code=code,
            )
            if result.confidence >= threshold:
                return result
            fallback = self._pick(fallback, result)

        if fallback is not None:
            logger.debug(
                "No stage reached %.2f confidence, using %s (%.2f)",
                threshold, fallback.category_id, fallback.confidence,
            )
            return fallback

        # Stage 4: default
        return ClassificationResult(
            category_id=DEFAULT_CATEGORY_ID,
            category_name="Uncategorized",
            confidence=0.0,
            source=ClassificationSource.DEFAULT,
            explanation="no classification signal",
            mcc_code=code,
            warning="Merchant could not be classified; using the card's default reward",
        )

    def _classify_by_mcc(self, code: int, keyword_match) -> Optional[ClassificationResult]:
        mcc = classify_by_mcc_code(code, self.catalog, self.config)
        if mcc is None:
            return None

        description = describe_mcc_code(code) or "merchant code"
        warning = None
        category_id = mcc.category_id
        confidence = mcc.confidence

        if mcc.is_ambiguous:
            shared = ", ".join(mcc.candidates)
            if keyword_match is not None and keyword_match.category_id in mcc.candidates:
                category_id = keyword_match.category_id
                confidence = self.config["mcc"]["disambiguated_confidence"]
                explanation = (
                    f"MCC {code} ({description}) is shared by {shared}; "
                    f"merchant text '{keyword_match.keyword}' selects {category_id}"
                )
            else:
                explanation = f"MCC {code} ({description}) is shared by {shared}"
                warning = f"Ambiguous MCC code {code} (shared by {shared}); using {category_id}"
                logger.warning("%s", warning)
        else:
            explanation = f"MCC {code} ({description})"

        category = self.catalog.get(category_id)
        return ClassificationResult(
            category_id=category.id,
            category_name=category.name,
            confidence=confidence,
            source=ClassificationSource.MCC_CODE,
            explanation=f"{explanation} maps to {category.name}",
            mcc_code=code,
            warning=warning,
        )

    def _classify_by_database(self, text: str, code: Optional[int]) -> Optional[ClassificationResult]:
        entry = self.known_merchants.lookup(text)
        if not entry:
            return None

        category = self.catalog.get(entry.get("category_id"))
        if category is None:
            logger.warning(
                "Known-merchant entry for %r names unknown category %r",
                text, entry.get("category_id"),
            )
            return None

        limits = self.config["database"]
        try:
            raw_confidence = float(entry.get("confidence", limits["min_confidence"]))
        except (TypeError, ValueError):
            raw_confidence = limits["min_confidence"]
        confidence = min(max(raw_confidence, limits["min_confidence"]), limits["max_confidence"])

        return ClassificationResult(
            category_id=category.id,
            category_name=category.name,
            confidence=confidence,
            source=ClassificationSource.DATABASE,
            explanation=f"Known merchant '{text}' maps to {category.name}",
            mcc_code=code,
        )

    @staticmethod
    def _pick(current: Optional[ClassificationResult], candidate: ClassificationResult):
        if current is None or candidate.confidence > current.confidence:
            return candidate
        return current
