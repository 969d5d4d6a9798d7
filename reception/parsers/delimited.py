"""Delimited text (CSV/TSV) parser"""

import csv
import io
import logging
import sys
from typing import List, Optional, Tuple

from core.models import ParsedTable
from core.enums import TextEncoding
from core.interfaces import EncodingDetector
from core.exceptions import DecodeFailure, ParseError
from utils.encoding import detect_encoding, get_detector
from config import settings
from .base import TableParser

logger = logging.getLogger(__name__)

# No cap on field length (default is 128 KiB); must fit a C long
csv.field_size_limit(min(sys.maxsize, 2**31 - 1))


class DelimitedParser(TableParser):
    """Parser for delimited text files with a header row"""

    def __init__(
        self,
        delimiter: Optional[str] = None,
        detector: Optional[EncodingDetector] = None,
        preview_limit: Optional[int] = None,
    ):
        super().__init__(preview_limit)
        self.delimiter = delimiter or settings.CSV_DELIMITER
        self.detector = detector or get_detector()

    @property
    def supported_extensions(self) -> List[str]:
        if self.delimiter == "\t":
            return [".tsv"]
        return [".csv", ".txt"]

    def detect_encoding(self, file_path: str) -> TextEncoding:
        """Detect encoding from the head of the file"""
        return detect_encoding(file_path, self.detector)

    def read(self, file_path: str) -> ParsedTable:
        """Read delimited file into a ParsedTable"""
        path = self._existing_path(file_path)

        try:
            encoding = self.detect_encoding(str(path))
            raw = path.read_bytes()
        except OSError as e:
            raise DecodeFailure(f"Failed to read file: {e}", str(file_path)) from e

        # Malformed sequences become U+FFFD instead of failing the read
        text = raw.decode(encoding.codec, errors="replace")

        columns, row_count, preview_rows = self.parse_text(text, str(file_path))
        logger.debug(
            f"Read {path.name}: {encoding.value}, {len(columns)} columns, {row_count} rows"
        )

        return ParsedTable(
            columns=columns,
            row_count=row_count,
            preview_rows=preview_rows,
            source_name=path.name,
        )

    def parse_text(
        self, text: str, file_path: str = None
    ) -> Tuple[List[str], int, List[List[str]]]:
        """
        Parse decoded text with the first record as header

        Args:
            text: Decoded file content
            file_path: Used in error messages only

        Returns:
            (columns, row_count, preview_rows) tuple

        Raises:
            ParseError: A record has the wrong field count or bad quoting
        """
        reader = csv.reader(io.StringIO(text, newline=""), delimiter=self.delimiter, strict=True)

        try:
            columns = next((record for record in reader if record), [])
        except csv.Error as e:
            raise ParseError(f"Failed to read headers: {e}", file_path=file_path) from e

        row_count = 0
        preview_rows = []

        while True:
            try:
                record = next(reader)
            except StopIteration:
                break
            except csv.Error as e:
                raise ParseError(str(e), row_count, file_path) from e

            # Blank lines are not records
            if not record:
                continue

            if len(record) != len(columns):
                raise ParseError(
                    f"found record with {len(record)} fields, but the header has {len(columns)} fields",
                    row_count,
                    file_path,
                )

            if row_count < self.preview_limit:
                preview_rows.append(record)
            row_count += 1

        return list(columns), row_count, preview_rows
