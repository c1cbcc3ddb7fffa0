"""
Direction keyword loader.
Loads CSV files containing extra debit / credit keywords for a bank or channel.
"""

import csv
from typing import Dict, List, Tuple
from pathlib import Path

from .extraction_config import EXTRACTION_CONFIG


VALID_DIRECTIONS = ("debit", "credit")


def load_direction_keywords_csv(csv_path: str) -> Dict[str, List[Tuple[str, float]]]:
    """
    Load direction keywords from a CSV file.

    Args:
        csv_path: Path to CSV file containing keyword rows

    Returns:
        Dictionary with "debit" and "credit" lists of (keyword, weight) tuples

    Example CSV format:
        keyword,direction,weight
        autopay,debit,2
        nach credit,credit,3
        emi,debit,
    """
    csv_file = Path(csv_path)
    if not csv_file.exists():
        raise FileNotFoundError(f"Keyword file not found: {csv_path}")

    default_weight = float(EXTRACTION_CONFIG["direction"]["loaded_keyword_weight"])
    keywords = {direction: [] for direction in VALID_DIRECTIONS}

    with open(csv_file, 'r', encoding='utf-8') as f:
        reader = csv.DictReader(f)
        for row in reader:
            keyword = (row.get('keyword') or '').strip().lower()
            direction = (row.get('direction') or '').strip().lower()
            if not keyword or direction not in keywords:
                continue

            raw_weight = (row.get('weight') or '').strip()
            weight = float(raw_weight) if raw_weight else default_weight
            keywords[direction].append((keyword, weight))

    return keywords


def merge_keyword_tables(
    base: Tuple[Tuple[str, float], ...],
    extra: List[Tuple[str, float]]
) -> Tuple[Tuple[str, float], ...]:
    """
    Append extra keywords to a base table, skipping keywords it already has.

    Args:
        base: Built-in (keyword, weight) table
        extra: Loaded (keyword, weight) pairs

    Returns:
        New immutable table with the base order preserved
    """
    known = {keyword for keyword, _ in base}
    merged = list(base)
    for keyword, weight in extra:
        if keyword not in known:
            merged.append((keyword, weight))
            known.add(keyword)
    return tuple(merged)
