"""
Category Catalog.

Immutable registry of purchase categories built from ``MERCHANT_CATEGORIES``.
Provides keyword, MCC code and reward-alias lookups plus the parent/child
relations used for reward fallback ("travel" covers "travel_airfare",
"entertainment" covers "streaming").
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from ..patterns.category_patterns import MERCHANT_CATEGORIES
from .preprocess import normalize_mcc_code, normalize_reward_key, normalize_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Category:
    """A purchase category."""
    id: str
    name: str
    description: str
    keywords: Tuple[str, ...]
    mcc_codes: Tuple[int, ...]
    reward_aliases: Tuple[str, ...]
    subcategories: Tuple[str, ...]
    parent_category: Optional[str] = None


class CategoryCatalog:
    """Closed, read-only set of purchase categories."""

    def __init__(self, definitions: Optional[Mapping[str, Dict]] = None):
        definitions = MERCHANT_CATEGORIES if definitions is None else definitions

        categories = {}
        for category_id, info in definitions.items():
            aliases = [normalize_reward_key(a) for a in info.get("reward_aliases", [])]
            if category_id not in aliases:
                aliases.insert(0, category_id)
            categories[category_id] = Category(
                id=category_id,
                name=info.get("name", category_id),
                description=info.get("description", ""),
                keywords=tuple(normalize_text(k) for k in info.get("keywords", [])),
                mcc_codes=tuple(int(c) for c in info.get("mcc_codes", [])),
                reward_aliases=tuple(aliases),
                subcategories=tuple(normalize_reward_key(s) for s in info.get("subcategories", [])),
                parent_category=info.get("parent_category"),
            )

        for category in categories.values():
            if category.parent_category and category.parent_category not in categories:
                raise ValueError(
                    f"Category {category.id} has unknown parent {category.parent_category}"
                )

        self._categories = MappingProxyType(categories)

        # First definition wins for shared keywords and aliases
        keyword_index = {}
        alias_index = {}
        mcc_index = {}
        for category in categories.values():
            for keyword in category.keywords:
                keyword_index.setdefault(keyword, category.id)
            for alias in category.reward_aliases:
                alias_index.setdefault(alias, category.id)
            for code in category.mcc_codes:
                mcc_index.setdefault(code, []).append(category.id)

        self._keyword_index = MappingProxyType(keyword_index)
        self._alias_index = MappingProxyType(alias_index)
        self._mcc_index = MappingProxyType({k: tuple(v) for k, v in mcc_index.items()})

        logger.debug(
            "Category catalog built: %d categories, %d keywords, %d MCC codes",
            len(categories), len(keyword_index), len(mcc_index),
        )

    def __len__(self) -> int:
        return len(self._categories)

    def __contains__(self, category_id) -> bool:
        return category_id in self._categories

    def __iter__(self):
        return iter(self._categories.values())

    def get(self, category_id: str) -> Optional[Category]:
        return self._categories.get(category_id)

    def categories(self) -> List[Category]:
        return list(self._categories.values())

    def ids(self) -> List[str]:
        return list(self._categories.keys())

    def display_name(self, category_id: str) -> str:
        category = self._categories.get(category_id)
        if category is None:
            return str(category_id).replace("_", " ").title()
        return category.name

    def mcc_codes_for(self, category_id: str) -> Tuple[int, ...]:
        category = self._categories.get(category_id)
        return category.mcc_codes if category else ()

    # Lookups

    def find_by_keyword(self, text) -> Optional[Category]:
        """Category whose keyword list contains the normalized text exactly."""
        category_id = self._keyword_index.get(normalize_text(text))
        return self._categories[category_id] if category_id else None

    def find_by_mcc_code(self, code) -> Optional[Category]:
        """First category (catalog order) listing the MCC code."""
        candidates = self.categories_for_mcc_code(code)
        return candidates[0] if candidates else None

    def categories_for_mcc_code(self, code) -> List[Category]:
        """All categories listing the MCC code, in catalog order."""
        normalized = normalize_mcc_code(code)
        if normalized is None:
            return []
        return [self._categories[c] for c in self._mcc_index.get(normalized, ())]

    def find_by_alias(self, alias) -> Optional[Category]:
        if not isinstance(alias, str) or not alias.strip():
            return None
        category_id = self._alias_index.get(normalize_reward_key(alias))
        return self._categories[category_id] if category_id else None

    def find(self, query) -> Optional[Category]:
        """
        Unified lookup: alias, then keyword, then MCC code.

        Returns:
            First matching Category or None
        """
        if query is None:
            return None
        if isinstance(query, str):
            return (
                self.find_by_alias(query)
                or self.find_by_keyword(query)
                or self.find_by_mcc_code(query)
            )
        return self.find_by_mcc_code(query)

    # Hierarchy

    def resolve(self, key) -> Optional[Tuple[str, Optional[str]]]:
        """
        Resolve a category id, alias or reward key to (category_id, subcategory).

        Handles ids ("travel"), aliases ("restaurants"), compound keys
        ("travel_airfare") and bare subcategory names ("airfare").

        Example:
            >>> catalog.resolve("travel_airfare")
            ('travel', 'airfare')
        """
        if not isinstance(key, str) or not key.strip():
            return None
        normalized = normalize_reward_key(key)

        if normalized in self._categories:
            return normalized, None

        category_id = self._alias_index.get(normalized)
        if category_id:
            return category_id, None

        # Longest id first so "department_stores_clothing" is not read as a
        # "department" prefix
        for category_id in sorted(self._categories, key=len, reverse=True):
            prefix = category_id + "_"
            if normalized.startswith(prefix):
                sub = normalized[len(prefix):]
                if sub in self._categories[category_id].subcategories:
                    return category_id, sub

        for category in self._categories.values():
            if normalized in category.subcategories:
                return category.id, normalized

        return None

    def ancestors(self, key) -> List[str]:
        """
        Ancestor category ids of a key, nearest first.

        A subcategory key's first ancestor is its own category.
        """
        resolved = self.resolve(key)
        if resolved is None:
            return []

        category_id, sub = resolved
        chain = [category_id] if sub else []
        parent = self._categories[category_id].parent_category
        while parent and parent not in chain:
            chain.append(parent)
            parent = self._categories[parent].parent_category
        return chain

    def are_compatible(self, a, b) -> bool:
        """True if a and b name the same category or one is an ancestor of the other."""
        if a == b:
            return True
        res_a, res_b = self.resolve(a), self.resolve(b)
        if res_a is None or res_b is None:
            return False
        if res_a == res_b:
            return True
        # Only a whole category can be an ancestor
        if res_a[1] is None and res_a[0] in self.ancestors(b):
            return True
        if res_b[1] is None and res_b[0] in self.ancestors(a):
            return True
        return False


@lru_cache(maxsize=1)
def default_catalog() -> CategoryCatalog:
    """Process-wide catalog built from ``MERCHANT_CATEGORIES``."""
    return CategoryCatalog()
