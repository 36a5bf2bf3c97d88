"""
Preprocessing utilities for merchant classification.
Handles text normalization, MCC code parsing and reward-key normalization.
"""

import re
import unicodedata
from typing import Any, Optional

from ..config.strategy_config import CLASSIFIER_CONFIG

_NON_WORD = re.compile(r"[\W_]+", re.UNICODE)
_APOSTROPHES = re.compile(r"['’`]")
_KEY_SEPARATORS = re.compile(r"[\s\-]+")


def normalize_text(text: Any, max_length: Optional[int] = None) -> str:
    """
    Normalize text for matching.

    Strips accents, case-folds, removes apostrophes ("Wendy's" -> "wendys"),
    spells out "+" ("Disney+" -> "disney plus"), turns remaining punctuation
    and symbols into spaces and collapses whitespace.

    Args:
        text: Raw text to normalize; None or non-strings give ""
        max_length: Truncate the result to this many characters

    Returns:
        Normalized lowercase text
    """
    if not isinstance(text, str) or not text:
        return ""

    if max_length is None:
        max_length = CLASSIFIER_CONFIG["max_text_length"]

    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    lowered = stripped.casefold()
    lowered = _APOSTROPHES.sub("", lowered)
    lowered = lowered.replace("+", " plus ")
    cleaned = _NON_WORD.sub(" ", lowered)
    return " ".join(cleaned.split())[:max_length].strip()


def normalize_mcc_code(code: Any) -> Optional[int]:
    """
    Parse an MCC code.

    Accepts ints and digit strings (with or without padding). Anything else,
    including out-of-range values, gives None.

    Example:
        >>> normalize_mcc_code(" 05812 ")
        5812
        >>> normalize_mcc_code("abc") is None
        True
    """
    if code is None or isinstance(code, bool):
        return None
    if isinstance(code, int):
        value = code
    elif isinstance(code, str):
        digits = code.strip()
        if not digits.isdigit():
            return None
        value = int(digits)
    else:
        return None

    if 0 < value <= 9999:
        return value
    return None


def normalize_reward_key(key: Any) -> str:
    """Normalize a reward-table key ("Travel-Airfare" -> "travel_airfare")."""
    return _KEY_SEPARATORS.sub("_", str(key).strip().lower())
