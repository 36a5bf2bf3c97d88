"""
Keyword Pattern Matching for Merchant Classification.

Matches normalized merchant text against catalog keywords. Confidence grows
with match specificity: the whole text equal to a keyword beats a multi-word
phrase, which beats a single whole word, which beats a fragment inside a
longer word, which beats a near-miss spelling.
"""

import re
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from rapidfuzz import fuzz, process

from ..config.strategy_config import CLASSIFIER_CONFIG
from .catalog import CategoryCatalog


@dataclass(frozen=True)
class KeywordPattern:
    """A compiled catalog keyword."""
    category_id: str
    keyword: str
    pattern: "re.Pattern"
    order: int  # position in catalog order, used for tie-breaking

    @property
    def is_phrase(self) -> bool:
        return " " in self.keyword


@dataclass(frozen=True)
class KeywordMatch:
    """Best keyword hit for a piece of merchant text."""
    category_id: str
    keyword: str
    confidence: float
    match_method: str  # 'exact', 'phrase', 'word', 'substring', 'fuzzy'
    order: int = 0


def compile_keyword_patterns(catalog: CategoryCatalog) -> List[KeywordPattern]:
    """
    Compile whole-word patterns for every catalog keyword.

    Keywords shared by several categories keep their first category.
    """
    compiled = []
    seen = set()
    for category in catalog:
        for keyword in category.keywords:
            if not keyword or keyword in seen:
                continue
            seen.add(keyword)
            compiled.append(KeywordPattern(
                category_id=category.id,
                keyword=keyword,
                pattern=re.compile(r"\b" + re.escape(keyword) + r"\b"),
                order=len(compiled),
            ))
    return compiled


def match_keyword(
    text: str,
    pattern: KeywordPattern,
    config: Optional[Dict] = None,
) -> Optional[Tuple[float, str]]:
    """
    Match normalized text against a single keyword.

    Returns:
        Tuple of (confidence, match_method) or None
    """
    levels = (config or CLASSIFIER_CONFIG)["keyword"]

    if text == pattern.keyword:
        return (levels["exact"], "exact")
    if pattern.pattern.search(text):
        if pattern.is_phrase:
            return (levels["phrase"], "phrase")
        return (levels["word"], "word")
    if len(pattern.keyword) >= levels["min_substring_length"] and pattern.keyword in text:
        return (levels["substring"], "substring")
    return None


def _better(candidate: KeywordMatch, best: Optional[KeywordMatch]) -> bool:
    if best is None:
        return True
    if candidate.confidence != best.confidence:
        return candidate.confidence > best.confidence
    if len(candidate.keyword) != len(best.keyword):
        return len(candidate.keyword) > len(best.keyword)
    return candidate.order < best.order


def _ngrams(tokens: List[str], max_n: int) -> Iterable[str]:
    for n in range(1, max_n + 1):
        for start in range(len(tokens) - n + 1):
            yield " ".join(tokens[start:start + n])


def fuzzy_match_keywords(
    text: str,
    patterns: List[KeywordPattern],
    config: Optional[Dict] = None,
) -> Optional[KeywordMatch]:
    """
    Match near-miss spellings ("starbuks") using rapidfuzz.

    Each word and short word sequence of the text is compared with keywords of
    at least ``min_fuzzy_length`` characters using ``fuzz.ratio``.

    Returns:
        KeywordMatch with confidence between the fuzzy and fuzzy_max levels, or None
    """
    levels = (config or CLASSIFIER_CONFIG)["keyword"]
    threshold = levels["fuzzy_threshold"]

    candidates = {
        p.keyword: p for p in patterns if len(p.keyword) >= levels["min_fuzzy_length"]
    }
    if not candidates or not text:
        return None

    tokens = text.split()
    max_words = max(k.count(" ") + 1 for k in candidates)

    best_score = 0.0
    best_pattern = None
    for fragment in _ngrams(tokens, max_words):
        if len(fragment) < levels["min_fuzzy_length"]:
            continue
        hit = process.extractOne(
            fragment, list(candidates), scorer=fuzz.ratio, score_cutoff=threshold
        )
        if hit is None:
            continue
        keyword, score = hit[0], hit[1]
        pattern = candidates[keyword]
        if score > best_score or (
            score == best_score and best_pattern is not None and pattern.order < best_pattern.order
        ):
            best_score = score
            best_pattern = pattern

    if best_pattern is None:
        return None

    span = max(100 - threshold, 1)
    confidence = levels["fuzzy"] + (levels["fuzzy_max"] - levels["fuzzy"]) * (
        (best_score - threshold) / span
    )
    return KeywordMatch(
        category_id=best_pattern.category_id,
        keyword=best_pattern.keyword,
        confidence=round(min(confidence, levels["fuzzy_max"]), 4),
        match_method="fuzzy",
        order=best_pattern.order,
    )


def match_catalog_keywords(
    text: str,
    patterns: List[KeywordPattern],
    config: Optional[Dict] = None,
) -> Optional[KeywordMatch]:
    """
    Find the most specific keyword match in normalized merchant text.

    Best match is the highest confidence, then the longest keyword, then
    catalog order. Fuzzy matching only runs when nothing matches literally.

    Example:
        >>> match_catalog_keywords("uber eats", patterns).category_id
        'dining'
    """
    if not text:
        return None

    best = None
    for pattern in patterns:
        hit = match_keyword(text, pattern, config)
        if hit is None:
            continue
        candidate = KeywordMatch(
            category_id=pattern.category_id,
            keyword=pattern.keyword,
            confidence=hit[0],
            match_method=hit[1],
            order=pattern.order,
        )
        if _better(candidate, best):
            best = candidate

    if best is not None:
        return best

    return fuzzy_match_keywords(text, patterns, config)
