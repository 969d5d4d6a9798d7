"""Reception: dispatch a file to its table parser"""

import asyncio
import logging
from pathlib import Path
from typing import Dict, List, Optional

from core.models import ParsedTable
from core.interfaces import EncodingDetector
from core.exceptions import IngestError, UnsupportedFileError
from utils.naming import deduplicate_names, table_name_from_file
from .parsers import TableParser, DelimitedParser, SpreadsheetParser

logger = logging.getLogger(__name__)


class Receiver:
    """Parse and validate input files into ParsedTable values"""

    def __init__(
        self,
        detector: Optional[EncodingDetector] = None,
        preview_limit: Optional[int] = None,
    ):
        csv_parser = DelimitedParser(detector=detector, preview_limit=preview_limit)
        tsv_parser = DelimitedParser(delimiter="\t", detector=detector, preview_limit=preview_limit)
        excel_parser = SpreadsheetParser(preview_limit=preview_limit)

        self.parsers: Dict[str, TableParser] = {}
        for parser in (csv_parser, tsv_parser, excel_parser):
            for ext in parser.supported_extensions:
                self.parsers[ext] = parser

    def validate_input(self, input_data: str) -> bool:
        """Validate file path"""
        if not isinstance(input_data, (str, Path)):
            return False

        path = Path(input_data)
        return path.exists() and path.is_file() and path.suffix.lower() in self.parsers

    def parser_for(self, file_path: str) -> TableParser:
        ext = Path(file_path).suffix.lower()

        if ext not in self.parsers:
            raise UnsupportedFileError(
                f"Unsupported file type: {ext or '(none)'}. Supported: {', '.join(self.parsers.keys())}",
                str(file_path),
            )
        return self.parsers[ext]

    def ingest(self, file_path: str) -> ParsedTable:
        """Parse one file with the parser registered for its extension"""
        parser = self.parser_for(file_path)

        try:
            return parser.read(str(file_path))
        except IngestError:
            raise
        except Exception as e:
            raise IngestError(f"Unexpected error parsing file: {e}", str(file_path)) from e

    async def execute(self, file_path: str) -> ParsedTable:
        """Parse one file off the event loop"""
        return await asyncio.to_thread(self.ingest, file_path)

    async def load_files(self, file_paths: List[str]) -> Dict[str, ParsedTable]:
        """
        Parse several files concurrently

        Args:
            file_paths: Files to ingest

        Returns:
            Table name -> ParsedTable, in input order. Table names come from
            table_name_from_file and are deduplicated within this call.

        Raises:
            IngestError: The first failure; no partial result is returned
        """
        tables = await asyncio.gather(*(self.execute(path) for path in file_paths))
        names = deduplicate_names([table_name_from_file(t.source_name) for t in tables])

        for name, table in zip(names, tables):
            logger.info(f"Loaded {table.source_name} as {name}: {table.row_count} rows")

        return dict(zip(names, tables))


def read_delimited(file_path: str, delimiter: Optional[str] = None) -> ParsedTable:
    """Read a delimited text file with default settings"""
    return DelimitedParser(delimiter=delimiter).read(file_path)


def read_spreadsheet(file_path: str) -> ParsedTable:
    """Read the first sheet of a workbook with default settings"""
    return SpreadsheetParser().read(file_path)
