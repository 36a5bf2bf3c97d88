"""
Known-merchant table loader.
Loads CSV files mapping merchant names to purchase categories.
"""

import csv
import logging
from pathlib import Path
from typing import Dict

logger = logging.getLogger(__name__)


def load_known_merchants_csv(csv_path: str, default_confidence: float = 0.95) -> Dict[str, Dict]:
    """
    Load a known-merchant table from a CSV file.

    Merchant names are returned as written; ``KnownMerchantTable`` normalizes
    them the same way it normalizes lookups.

    Args:
        csv_path: Path to CSV file containing merchant mappings
        default_confidence: Confidence used when a row leaves it blank

    Returns:
        Dictionary keyed by merchant name, values are
        {"category_id": ..., "confidence": ...}

    Example CSV format:
        merchant,category_id,confidence
        Blue Bottle Coffee,dining,0.98
        Costco Wholesale,warehouse,0.99
    """
    table = {}

    csv_file = Path(csv_path)
    if not csv_file.exists():
        raise FileNotFoundError(f"Known-merchant file not found: {csv_path}")

    with open(csv_file, 'r', encoding='utf-8') as f:
        reader = csv.DictReader(f)
        for line_no, row in enumerate(reader, start=2):
            merchant = (row.get('merchant') or '').strip()
            category_id = (row.get('category_id') or '').strip().lower()
            if not merchant or not category_id:
                continue

            raw_confidence = (row.get('confidence') or '').strip()
            try:
                confidence = float(raw_confidence) if raw_confidence else default_confidence
            except ValueError:
                logger.warning(
                    "Line %d of %s: confidence %r is not a number, using %.2f",
                    line_no, csv_path, raw_confidence, default_confidence,
                )
                confidence = default_confidence

            table[merchant] = {
                'category_id': category_id,
                'confidence': confidence,
            }

    logger.debug("Loaded %d known merchants from %s", len(table), csv_path)
    return table
