"""Reception - file ingestion into ParsedTable values"""

from .receiver import Receiver, read_delimited, read_spreadsheet
from .exporter import export_delimited, export_spreadsheet

__all__ = [
    "Receiver",
    "read_delimited",
    "read_spreadsheet",
    "export_delimited",
    "export_spreadsheet",
]
