"""
Exception types for the Cardwise engine.

Only caller bugs raise. Data-quality problems (odd grace periods, ambiguous
merchant codes, unresolved merchants) are reported as ``warning`` strings on
the result objects instead.
"""


class CardwiseError(Exception):
    """Base class for all engine errors."""


class ContractViolation(CardwiseError, ValueError):
    """An input broke the calling contract (bad day-of-month, negative amount, non-numeric APR)."""


class RewardTableError(CardwiseError, ValueError):
    """A card's reward table has a shape the matcher cannot read."""
