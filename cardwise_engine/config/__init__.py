"""
Configuration module for the Cardwise engine.

This module contains the strategy and classifier configuration dictionaries
and the known-merchant table loader.
"""

from .strategy_config import STRATEGY_CONFIG, CLASSIFIER_CONFIG, merge_config
from .merchant_table_loader import load_known_merchants_csv

__all__ = [
    "STRATEGY_CONFIG",
    "CLASSIFIER_CONFIG",
    "merge_config",
    "load_known_merchants_csv",
]
