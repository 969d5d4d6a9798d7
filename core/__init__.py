"""Core abstractions for tabular ingestion"""

from .models import *
from .enums import *
from .exceptions import *
from .interfaces import *

__all__ = [
    # Models
    "ParsedTable",
    # Enums
    "TextEncoding",
    # Exceptions
    "IngestError",
    "FileNotFound",
    "DecodeFailure",
    "ParseError",
    "NoSheets",
    "SheetReadError",
    "WriteError",
    "UnsupportedFileError",
    # Interfaces
    "EncodingDetector",
    "TableReader",
]
