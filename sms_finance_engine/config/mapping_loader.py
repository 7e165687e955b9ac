"""
Merchant mapping seed loader.
Loads CSV files containing known merchant -> category mappings so a fresh
mapping store can resolve common merchants at tier 1.
"""

import csv
import logging
from pathlib import Path
from typing import List

from ..models import MerchantMapping

logger = logging.getLogger(__name__)


class MappingFileError(ValueError):
    """Raised when a seed CSV row cannot be turned into a mapping."""


def load_merchant_mappings_csv(csv_path: str) -> List[MerchantMapping]:
    """
    Load merchant mappings from a CSV file.

    Args:
        csv_path: Path to CSV file containing merchant mappings

    Returns:
        List of MerchantMapping objects, one per non-empty row

    Example CSV format:
        raw_merchant_name,normalized_name,category_id,subcategory_id
        SWIGGY,Swiggy,1,
        UBER INDIA,Uber,2,
    """
    csv_file = Path(csv_path)
    if not csv_file.exists():
        raise FileNotFoundError(f"Merchant mapping file not found: {csv_path}")

    mappings = []
    with open(csv_path, "r", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for line_no, row in enumerate(reader, start=2):
            raw_name = (row.get("raw_merchant_name") or "").strip()
            if not raw_name:
                continue
            try:
                category_id = int((row.get("category_id") or "").strip())
                subcategory = (row.get("subcategory_id") or "").strip()
                subcategory_id = int(subcategory) if subcategory else None
            except ValueError as e:
                raise MappingFileError(f"{csv_path}:{line_no}: invalid category id ({e})") from e

            mappings.append(MerchantMapping(
                raw_merchant_name=raw_name.upper(),
                normalized_name=(row.get("normalized_name") or "").strip() or raw_name.title(),
                category_id=category_id,
                subcategory_id=subcategory_id,
                confidence=1.0,
                match_count=0,
            ))

    logger.info(f"Loaded {len(mappings)} merchant mappings from {csv_file.name}")
    return mappings


def seed_mapping_store(store, csv_path: str) -> int:
    """
    Insert every mapping from a seed CSV that the store does not already hold.

    Returns:
        Number of mappings inserted
    """
    inserted = 0
    for mapping in load_merchant_mappings_csv(csv_path):
        if store.find_by_raw_name(mapping.raw_merchant_name) is None:
            store.insert(mapping)
            inserted += 1
    return inserted
