"""
Card data model for the Cardwise engine.
"""

from .card import Card, as_cards, validate_day_of_month

__all__ = [
    "Card",
    "as_cards",
    "validate_day_of_month",
]
