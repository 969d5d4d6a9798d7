"""Table parsers"""

from .base import TableParser
from .delimited import DelimitedParser
from .spreadsheet import SpreadsheetParser

__all__ = ["TableParser", "DelimitedParser", "SpreadsheetParser"]
