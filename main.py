"""Main entry point for tabular ingestion"""

import asyncio
import argparse
import logging
from pathlib import Path

from reception import Receiver, export_delimited
from utils.encoding import get_detector
from utils.naming import generate_unique_column_names
from core.exceptions import IngestError
from config import settings


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Ingest CSV/TSV and Excel files into a bounded preview",
    )
    parser.add_argument("files", type=Path, nargs="+", help="Input file paths")
    parser.add_argument(
        "--prefix",
        action="store_true",
        help="Show column names prefixed with the table name and deduplicated"
    )
    parser.add_argument(
        "--export",
        type=str,
        default=None,
        help=f"Export the first table's preview as CSV into {settings.EXPORT_DIR}"
    )
    parser.add_argument(
        "--encoding-strategy",
        choices=["heuristic", "chardet"],
        default=settings.ENCODING_STRATEGY,
        help="Encoding detection strategy for text files"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    receiver = Receiver(detector=get_detector(args.encoding_strategy))

    try:
        tables = asyncio.run(receiver.load_files([str(f) for f in args.files]))
    except IngestError as e:
        print(f"✗ Ingestion failed: {e}")
        return 1

    for name, table in tables.items():
        columns = table.columns
        if args.prefix:
            columns = generate_unique_column_names(columns, name)

        print(f"✓ {table.source_name} -> {name}")
        print(f"  Columns ({table.col_count}): {', '.join(columns)}")
        print(f"  Rows: {table.row_count} (preview: {len(table.preview_rows)})")

    if args.export:
        first = next(iter(tables.values()))
        try:
            path = export_delimited(
                first.preview_rows,
                first.columns,
                settings.get_export_path(args.export),
            )
        except IngestError as e:
            print(f"✗ Export failed: {e}")
            return 1
        print(f"✓ Exported preview to {path}")

    return 0


if __name__ == "__main__":
    exit(main())
