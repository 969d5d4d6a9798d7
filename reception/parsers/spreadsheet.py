"""Excel workbook parser"""

import logging
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Iterable, List, Sequence, Tuple

import openpyxl
import pandas as pd

from core.models import ParsedTable
from core.exceptions import IngestError, NoSheets, SheetReadError
from .base import TableParser

logger = logging.getLogger(__name__)


def cell_to_text(value: Any) -> str:
    """Render a cell value the way it is shown in the preview"""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat(sep=" ")
    if isinstance(value, (date, time)):
        return value.isoformat()
    return str(value)


def _is_empty(value: Any) -> bool:
    return value is None or value == ""


def used_range(rows: Iterable[Sequence[Any]]) -> List[List[Any]]:
    """
    Crop a sheet to the bounding box of its non-empty cells

    Rows are consumed in one pass. The result is rectangular: short rows are
    padded with None.
    """
    kept = []
    bottom = left = right = None

    for row in rows:
        used = [c for c, value in enumerate(row) if not _is_empty(value)]
        if not used and not kept:
            continue

        kept.append(row)
        if used:
            bottom = len(kept) - 1
            left = used[0] if left is None else min(left, used[0])
            right = used[-1] if right is None else max(right, used[-1])

    if bottom is None:
        return []

    width = right - left + 1
    del kept[bottom + 1:]
    for i, row in enumerate(kept):
        values = list(row[left:right + 1])
        values.extend([None] * (width - len(values)))
        kept[i] = values
    return kept


class SpreadsheetParser(TableParser):
    """Parser for Excel files (.xlsx, .xlsm, .xls); only the first sheet is read"""

    @property
    def supported_extensions(self) -> List[str]:
        return [".xlsx", ".xlsm", ".xls"]

    def read(self, file_path: str) -> ParsedTable:
        """Read the first worksheet into a ParsedTable"""
        path = self._existing_path(file_path)

        if path.suffix.lower() == ".xls":
            sheet_name, grid = self._load_xls(path)
        else:
            sheet_name, grid = self._load_xlsx(path)

        height = len(grid)
        width = len(grid[0]) if grid else 0

        columns = []
        if height > 0:
            for col in range(width):
                value = grid[0][col]
                columns.append(f"Column_{col + 1}" if _is_empty(value) else cell_to_text(value))

        preview_rows = []
        row_count = 0
        for row in range(1, height):
            row_data = [cell_to_text(grid[row][col]) for col in range(width)]

            # Sheet row 1 is the first data row
            if row <= self.preview_limit:
                preview_rows.append(row_data)
            row_count += 1

        logger.debug(
            f"Read {path.name} [{sheet_name}]: {height}x{width} range, {row_count} rows"
        )

        return ParsedTable(
            columns=columns,
            row_count=row_count,
            preview_rows=preview_rows,
            source_name=path.name,
        )

    def _load_xlsx(self, path: Path) -> Tuple[str, List[list]]:
        try:
            workbook = openpyxl.load_workbook(path, read_only=True, data_only=True)
        except Exception as e:
            raise IngestError(f"Failed to open Excel file: {e}", str(path)) from e

        try:
            # Chartsheets have no cells; worksheets keeps workbook order
            if not workbook.worksheets:
                raise NoSheets(str(path))

            sheet = workbook.worksheets[0]
            try:
                # The stored dimension tag can be stale; scan every row instead
                sheet.reset_dimensions()
                grid = used_range(sheet.iter_rows(values_only=True))
            except Exception as e:
                raise SheetReadError(sheet.title, str(path), str(e)) from e
            return sheet.title, grid
        finally:
            workbook.close()

    def _load_xls(self, path: Path) -> Tuple[str, List[list]]:
        try:
            excel_file = pd.ExcelFile(path)
        except Exception as e:
            raise IngestError(f"Failed to open Excel file: {e}", str(path)) from e

        with excel_file:
            if not excel_file.sheet_names:
                raise NoSheets(str(path))

            sheet_name = excel_file.sheet_names[0]
            try:
                df = pd.read_excel(excel_file, sheet_name=sheet_name, header=None, dtype=object)
            except Exception as e:
                raise SheetReadError(str(sheet_name), str(path), str(e)) from e

        rows = df.astype(object).where(df.notna(), None).values.tolist()
        return str(sheet_name), used_range(rows)
