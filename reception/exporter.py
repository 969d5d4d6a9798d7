"""Export of tabular data to delimited files"""

import csv
import logging
from pathlib import Path
from typing import Sequence, Union

from core.exceptions import WriteError

logger = logging.getLogger(__name__)


def export_delimited(
    rows: Sequence[Sequence[str]],
    headers: Sequence[str],
    path: Union[str, Path],
    delimiter: str = ",",
) -> Path:
    """
    Write a header row followed by data rows

    Args:
        rows: Data rows, each with len(headers) cells
        headers: Column names
        path: Destination file, overwritten if it exists
        delimiter: Field delimiter

    Returns:
        Path of the written file

    Raises:
        WriteError: A row has the wrong width, or the file cannot be created/written
    """
    path = Path(path)

    # Checked up front so a bad row never leaves a half-written file behind
    for i, row in enumerate(rows):
        if len(row) != len(headers):
            raise WriteError(
                f"Failed to write row {i}: found record with {len(row)} fields, "
                f"but the header has {len(headers)} fields",
                str(path),
            )

    try:
        f = open(path, "w", encoding="utf-8", newline="")
    except OSError as e:
        raise WriteError(f"Failed to create file: {e}", str(path)) from e

    try:
        with f:
            writer = csv.writer(f, delimiter=delimiter, lineterminator="\n")
            writer.writerow(headers)
            writer.writerows(rows)
    except (OSError, csv.Error) as e:
        raise WriteError(f"Failed to write file: {e}", str(path)) from e

    logger.debug(f"Exported {len(rows)} rows to {path}")
    return path


def export_spreadsheet(
    rows: Sequence[Sequence[str]],
    headers: Sequence[str],
    path: Union[str, Path],
) -> Path:
    """Spreadsheet export is not supported; always raises WriteError"""
    raise WriteError(
        "Excel export not yet implemented. Please use CSV format.",
        str(path),
    )
