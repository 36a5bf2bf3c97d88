"""
Reward Matcher.

Finds the reward multiplier a card's reward table gives a purchase category.

Reward tables map category keys to descriptors in one of three shapes:
- a bare multiplier: ``{"dining": 4}``
- a detailed descriptor: ``{"travel": {"value": 3, "subcategories": ["airfare"], "note": "..."}}``
- a rotating descriptor: ``{"rotating": {"active_categories": ["gas"], "value": 5, "max_per_period": 1500}}``

Resolution order for a category:
1. Exact key (a rotating descriptor counts only if the category is active)
2. Any rotating descriptor listing the category
3. Alias or subcategory key ("restaurants" for dining, "travel_airfare" for travel)
4. Parent/child category ("entertainment" for streaming)
5. The table's ``default`` entry
6. 1.0

Multipliers are used as given: zero, negative and very large values are data.
"""

import logging
import math
import numbers
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from ..exceptions import RewardTableError
from .catalog import CategoryCatalog, default_catalog
from .preprocess import normalize_reward_key

logger = logging.getLogger(__name__)

DEFAULT_KEY = "default"
FALLBACK_MULTIPLIER = 1.0


@dataclass(frozen=True)
class FlatReward:
    """Bare multiplier."""
    value: float


@dataclass(frozen=True)
class DetailedReward:
    """Multiplier with optional subcategory restriction and issuer note."""
    value: float
    subcategories: Tuple[str, ...] = ()
    note: Optional[str] = None


@dataclass(frozen=True)
class RotatingReward:
    """Multiplier that applies only to the currently active categories."""
    active_categories: Tuple[str, ...]
    value: float
    max_per_period: Optional[float] = None


RewardDescriptor = Union[FlatReward, DetailedReward, RotatingReward]


@dataclass(frozen=True)
class RewardMatch:
    """Multiplier found for a category and how it was found."""
    multiplier: float
    matched_key: Optional[str]
    method: str  # 'exact', 'rotating', 'alias', 'parent', 'default', 'fallback'
    note: Optional[str] = None


def _number(value: Any, where: str) -> float:
    if isinstance(value, bool):
        raise RewardTableError(f"{where}: expected a number, got {value!r}")
    number = None
    if isinstance(value, numbers.Real):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            pass
    if number is None:
        raise RewardTableError(f"{where}: expected a number, got {value!r}")
    # Negative, zero and large values are data; NaN and infinity are not
    if not math.isfinite(number):
        raise RewardTableError(f"{where}: expected a finite number, got {value!r}")
    return number


def _name_list(value: Any, where: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        raise RewardTableError(f"{where}: expected a list of names, got {value!r}")
    return tuple(normalize_reward_key(v) for v in value if str(v).strip())


def parse_descriptor(raw: Any, key: str = "?") -> RewardDescriptor:
    """
    Parse one raw reward-table value.

    Raises:
        RewardTableError: If the value matches none of the supported shapes
    """
    if isinstance(raw, (FlatReward, DetailedReward, RotatingReward)):
        return raw

    if isinstance(raw, Mapping):
        if "active_categories" in raw:
            max_per_period = raw.get("max_per_period")
            return RotatingReward(
                active_categories=_name_list(raw["active_categories"], key),
                value=_number(raw.get("value"), key),
                max_per_period=None if max_per_period is None else _number(max_per_period, key),
            )
        if "value" in raw:
            note = raw.get("note")
            return DetailedReward(
                value=_number(raw["value"], key),
                subcategories=_name_list(raw.get("subcategories"), key),
                note=str(note) if note else None,
            )
        raise RewardTableError(f"{key}: reward descriptor has no 'value'")

    return FlatReward(_number(raw, key))


def descriptor_value(descriptor: RewardDescriptor) -> float:
    """Multiplier carried by any descriptor shape."""
    if isinstance(descriptor, FlatReward):
        return descriptor.value
    if isinstance(descriptor, DetailedReward):
        return descriptor.value
    if isinstance(descriptor, RotatingReward):
        return descriptor.value
    raise RewardTableError(f"Unsupported reward descriptor: {descriptor!r}")


def descriptor_note(descriptor: RewardDescriptor) -> Optional[str]:
    if isinstance(descriptor, DetailedReward):
        return descriptor.note
    if isinstance(descriptor, RotatingReward) and descriptor.max_per_period is not None:
        return f"rotating bonus capped at ${descriptor.max_per_period:,.0f} per period"
    return None


class RewardTable:
    """Parsed reward table with normalized keys."""

    def __init__(self, entries: Optional[Mapping[str, RewardDescriptor]] = None):
        self._entries = MappingProxyType(dict(entries or {}))

    @classmethod
    def from_mapping(cls, raw: Any) -> "RewardTable":
        """
        Parse a raw reward table.

        Args:
            raw: Mapping of category key to descriptor, a RewardTable, or None

        Raises:
            RewardTableError: If the table or any descriptor is malformed
        """
        if isinstance(raw, RewardTable):
            return raw
        if raw is None:
            return cls()
        if not isinstance(raw, Mapping):
            raise RewardTableError(f"Reward table must be a mapping, got {type(raw).__name__}")

        entries = {}
        for key, value in raw.items():
            normalized = normalize_reward_key(key)
            if not normalized:
                raise RewardTableError(f"Reward table has an empty key: {key!r}")
            entries[normalized] = parse_descriptor(value, normalized)
        return cls(entries)

    def __contains__(self, key) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Optional[RewardDescriptor]:
        return self._entries.get(key)

    def items(self):
        return self._entries.items()

    def default_multiplier(self) -> float:
        descriptor = self._entries.get(DEFAULT_KEY)
        if descriptor is None:
            return FALLBACK_MULTIPLIER
        if isinstance(descriptor, RotatingReward):
            raise RewardTableError("The default entry cannot be a rotating descriptor")
        return descriptor_value(descriptor)


class CategoryMatcher:
    """Matches categories to card reward multipliers."""

    def __init__(self, catalog: Optional[CategoryCatalog] = None):
        self.catalog = catalog if catalog is not None else default_catalog()

    def match(self, reward_table: Any, category_id: Optional[str]) -> RewardMatch:
        """
        Find the multiplier a reward table gives a category.

        Args:
            reward_table: Raw reward mapping or RewardTable
            category_id: Category id, alias or reward key

        Returns:
            RewardMatch

        Raises:
            RewardTableError: If the reward table is malformed
        """
        table = RewardTable.from_mapping(reward_table)
        query = normalize_reward_key(category_id) if category_id else ""

        if query and query != DEFAULT_KEY:
            found = (
                self._exact(table, query)
                or self._rotating(table, query)
                or self._related(table, query, same_category=True)
                or self._related(table, query, same_category=False)
            )
            if found is not None:
                logger.debug(
                    "Reward match for %s: %sx via %s (%s)",
                    query, found.multiplier, found.matched_key, found.method,
                )
                return found

        if DEFAULT_KEY in table:
            descriptor = table.get(DEFAULT_KEY)
            return RewardMatch(
                multiplier=table.default_multiplier(),
                matched_key=DEFAULT_KEY,
                method="default",
                note=descriptor_note(descriptor),
            )

        return RewardMatch(multiplier=FALLBACK_MULTIPLIER, matched_key=None, method="fallback")

    def find_multiplier(self, reward_table: Any, category_id: Optional[str]) -> float:
        """
        Reward multiplier for a category.

        Example:
            >>> CategoryMatcher().find_multiplier({"dining": 4, "default": 1}, "dining")
            4.0
        """
        return self.match(reward_table, category_id).multiplier

    def _is_active(self, descriptor: RotatingReward, query: str) -> bool:
        if query in descriptor.active_categories:
            return True
        resolved = self.catalog.resolve(query)
        if resolved is None:
            return False
        return any(self.catalog.resolve(name) == resolved for name in descriptor.active_categories)

    def _exact(self, table: RewardTable, query: str) -> Optional[RewardMatch]:
        descriptor = table.get(query)
        if descriptor is None:
            return None
        if isinstance(descriptor, RotatingReward) and not self._is_active(descriptor, query):
            return None
        return RewardMatch(
            multiplier=descriptor_value(descriptor),
            matched_key=query,
            method="exact",
            note=descriptor_note(descriptor),
        )

    def _best(self, candidates: List[Tuple[str, RewardDescriptor]], method: str) -> Optional[RewardMatch]:
        if not candidates:
            return None
        # Highest multiplier wins, first key on ties
        key, descriptor = max(candidates, key=lambda kv: descriptor_value(kv[1]))
        return RewardMatch(
            multiplier=descriptor_value(descriptor),
            matched_key=key,
            method=method,
            note=descriptor_note(descriptor),
        )

    def _rotating(self, table: RewardTable, query: str) -> Optional[RewardMatch]:
        candidates = [
            (key, descriptor) for key, descriptor in table.items()
            if isinstance(descriptor, RotatingReward) and self._is_active(descriptor, query)
        ]
        return self._best(candidates, "rotating")

    def _related(self, table: RewardTable, query: str, same_category: bool) -> Optional[RewardMatch]:
        resolved = self.catalog.resolve(query)
        if resolved is None:
            return None

        candidates = []
        for key, descriptor in table.items():
            if key in (query, DEFAULT_KEY) or isinstance(descriptor, RotatingReward):
                continue
            key_resolved = self.catalog.resolve(key)
            if key_resolved is None:
                continue

            if same_category:
                if key_resolved[0] != resolved[0]:
                    continue
                if key_resolved[1] and resolved[1] and key_resolved[1] != resolved[1]:
                    continue
                # A whole-category entry restricted to some subcategories
                if (
                    key_resolved[1] is None
                    and resolved[1] is not None
                    and isinstance(descriptor, DetailedReward)
                    and descriptor.subcategories
                    and resolved[1] not in descriptor.subcategories
                ):
                    continue
            else:
                if key_resolved[0] == resolved[0]:
                    continue
                if not self.catalog.are_compatible(key, query):
                    continue

            candidates.append((key, descriptor))

        return self._best(candidates, "alias" if same_category else "parent")

    def reward_categories(self, reward_table: Any) -> List[Tuple[str, float]]:
        """
        Categories the table rewards above 1x, highest multiplier first.

        Rotating descriptors contribute each active category.
        """
        table = RewardTable.from_mapping(reward_table)
        rewarded = {}
        for key, descriptor in table.items():
            if key == DEFAULT_KEY:
                continue
            names = descriptor.active_categories if isinstance(descriptor, RotatingReward) else (key,)
            value = descriptor_value(descriptor)
            for name in names:
                if value > 1 and value > rewarded.get(name, float("-inf")):
                    rewarded[name] = value
        return sorted(rewarded.items(), key=lambda kv: -kv[1])

    def best_category(self, reward_table: Any) -> Optional[Tuple[str, float]]:
        rewarded = self.reward_categories(reward_table)
        return rewarded[0] if rewarded else None

    def has_reward_for(self, reward_table: Any, category_id: str, min_multiplier: float = 2) -> bool:
        return self.find_multiplier(reward_table, category_id) >= min_multiplier

    def explain(self, reward_table: Any, category_id: Optional[str]) -> str:
        """Human-readable reason for the multiplier a category gets."""
        found = self.match(reward_table, category_id)
        rate = f"{found.multiplier:g}x"

        if found.method in ("default", "fallback"):
            text = f"No special rewards ({rate} default)"
        elif found.method == "exact":
            text = f"Offers {rate} rewards on {category_id}"
        elif found.method == "rotating":
            text = f"Offers {rate} rewards on {category_id} (active rotating category)"
        else:
            text = f"Offers {rate} rewards on {category_id} via {found.matched_key}"

        if found.note:
            text = f"{text}; {found.note}"
        return text

    def rank_cards(self, cards, category_id: str) -> List[Dict]:
        """
        Rank cards by multiplier for a category, highest first.

        Cards with a malformed reward table rank at 1x.
        """
        ranked = []
        for card in cards:
            try:
                multiplier = self.find_multiplier(card.reward_table, category_id)
                explanation = self.explain(card.reward_table, category_id)
            except RewardTableError as e:
                logger.warning("Card %s has an unreadable reward table: %s", card.card_id, e)
                multiplier = FALLBACK_MULTIPLIER
                explanation = "Standard rewards apply"
            ranked.append({"card": card, "multiplier": multiplier, "explanation": explanation})
        ranked.sort(key=lambda r: -r["multiplier"])
        return ranked


def find_multiplier(reward_table: Any, category_id: Optional[str]) -> float:
    """Multiplier for a category using the default catalog."""
    return CategoryMatcher().find_multiplier(reward_table, category_id)
