"""Utility modules"""

from .encoding import (
    detect_bom,
    detect_encoding,
    get_detector,
    HeuristicEncodingDetector,
    ChardetEncodingDetector,
)
from .naming import (
    sanitize_column_name,
    generate_unique_column_names,
    deduplicate_names,
    table_name_from_file,
)

__all__ = [
    "detect_bom",
    "detect_encoding",
    "get_detector",
    "HeuristicEncodingDetector",
    "ChardetEncodingDetector",
    "sanitize_column_name",
    "generate_unique_column_names",
    "deduplicate_names",
    "table_name_from_file",
]
