"""Column and table name normalization"""

import re
from pathlib import PurePath
from typing import Dict, List, Set

_NON_IDENTIFIER_ASCII = re.compile(r"[^a-zA-Z0-9_]")


def sanitize_column_name(name: str) -> str:
    """
    Replace every character that is not alphanumeric or underscore with "_"

    Alphanumeric follows Unicode rules, so "売上" or "Montréal" are kept as is.
    Length and positions are preserved: runs are not collapsed, nothing is trimmed.
    """
    return "".join(c if c.isalnum() or c == "_" else "_" for c in name)


def _claim_name(base_name: str, name_counts: Dict[str, int], taken: Set[str]) -> str:
    """Next free name for base_name: base, base_1, base_2, ..."""
    count = name_counts.get(base_name, 0)
    candidate = base_name if count == 0 else f"{base_name}_{count}"

    # ["a", "a", "a_1"] would otherwise emit "a_1" twice
    while candidate in taken:
        count += 1
        candidate = f"{base_name}_{count}"

    name_counts[base_name] = count + 1
    taken.add(candidate)
    return candidate


def deduplicate_names(names: List[str]) -> List[str]:
    """
    Make a batch of names pairwise distinct

    The first occurrence of a name is kept, the Nth repeat gets a "_N" suffix.
    """
    name_counts: Dict[str, int] = {}
    taken: Set[str] = set()
    return [_claim_name(name, name_counts, taken) for name in names]


def generate_unique_column_names(columns: List[str], source_prefix: str) -> List[str]:
    """
    Prefix, sanitize and deduplicate a batch of column names

    Each column becomes "{source_prefix}_{sanitized}". The first occurrence of
    that base name is emitted unchanged, the Nth repeat gets a "_N" suffix.
    Duplicates from different raw names that sanitize to the same base share
    one counter. The counters live only for the duration of this call.

    Args:
        columns: Raw column names, in source order
        source_prefix: Tag prepended to every name (e.g. a table name)

    Returns:
        Names in input order, pairwise distinct within this batch
    """
    return deduplicate_names(
        [f"{source_prefix}_{sanitize_column_name(column)}" for column in columns]
    )


def table_name_from_file(file_name: str) -> str:
    """Derive an ASCII table identifier from a file name ("sales 2024.csv" -> "sales_2024")"""
    stem = PurePath(file_name).name
    if "." in stem.lstrip("."):
        stem = stem[:stem.rfind(".")]
    return _NON_IDENTIFIER_ASCII.sub("_", stem)
