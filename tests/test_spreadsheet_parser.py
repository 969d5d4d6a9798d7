from datetime import datetime
from pathlib import Path

import openpyxl
import pandas as pd
import pytest
from openpyxl import Workbook

from core.exceptions import FileNotFound, IngestError, NoSheets, SheetReadError
from reception.parsers import SpreadsheetParser
from reception.parsers.spreadsheet import cell_to_text, used_range
from reception import read_spreadsheet


def save(workbook: Workbook, tmp_path: Path, name: str = "book.xlsx") -> str:
    path = tmp_path / name
    workbook.save(path)
    return str(path)


def test_header_and_rows(tmp_path: Path):
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(["Name", "Qty", "Price"])
    sheet.append(["apple", 3, 1.25])
    sheet.append(["pear", 10, 2.0])

    table = read_spreadsheet(save(workbook, tmp_path))

    assert table.columns == ["Name", "Qty", "Price"]
    assert table.row_count == 2
    assert table.preview_rows == [["apple", "3", "1.25"], ["pear", "10", "2"]]
    assert table.source_name == "book.xlsx"


def test_empty_sheet(tmp_path: Path):
    table = read_spreadsheet(save(Workbook(), tmp_path))

    assert table.columns == []
    assert table.row_count == 0
    assert table.preview_rows == []


def test_missing_header_cells_get_synthetic_names(tmp_path: Path):
    workbook = Workbook()
    sheet = workbook.active
    sheet["A1"] = "id"
    sheet["C1"] = "label"
    sheet["A2"] = 1
    sheet["B2"] = "x"
    sheet["C2"] = "y"

    table = read_spreadsheet(save(workbook, tmp_path))

    assert table.columns == ["id", "Column_2", "label"]
    assert table.preview_rows == [["1", "x", "y"]]


def test_sparse_rows_stay_rectangular(tmp_path: Path):
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(["a", "b", "c"])
    sheet.append(["1"])
    sheet.append([None, None, "3"])

    table = read_spreadsheet(save(workbook, tmp_path))

    assert table.row_count == 2
    assert table.preview_rows == [["1", "", ""], ["", "", "3"]]


def test_range_starts_at_first_used_cell(tmp_path: Path):
    workbook = Workbook()
    sheet = workbook.active
    sheet["B3"] = "h1"
    sheet["C3"] = "h2"
    sheet["B4"] = "v1"
    sheet["C4"] = "v2"

    table = read_spreadsheet(save(workbook, tmp_path))

    assert table.columns == ["h1", "h2"]
    assert table.preview_rows == [["v1", "v2"]]


def test_first_sheet_by_position(tmp_path: Path):
    workbook = Workbook()
    workbook.active.append(["second"])
    first = workbook.create_sheet("Zeta", 0)
    first.append(["first"])
    first.append(["row"])

    table = read_spreadsheet(save(workbook, tmp_path))

    assert table.columns == ["first"]
    assert table.preview_rows == [["row"]]


def test_preview_is_bounded(tmp_path: Path):
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(["n"])
    for i in range(150):
        sheet.append([i])

    table = read_spreadsheet(save(workbook, tmp_path))

    assert table.row_count == 150
    assert len(table.preview_rows) == 100
    assert table.preview_rows[-1] == ["99"]


def test_cell_rendering(tmp_path: Path):
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(["flag", "when"])
    sheet.append([True, datetime(2024, 1, 2, 3, 4, 5)])

    table = read_spreadsheet(save(workbook, tmp_path))

    assert table.preview_rows == [["true", "2024-01-02 03:04:05"]]


@pytest.mark.parametrize(
    "value, expected",
    [(None, ""), (False, "false"), (7, "7"), (7.0, "7"), (0.5, "0.5"), ("text", "text")],
)
def test_cell_to_text(value, expected):
    assert cell_to_text(value) == expected


def test_used_range():
    rows = [(None, None, None), (None, "a", None), (None, None, "b"), (None, None, None)]

    assert used_range(rows) == [["a", None], [None, "b"]]
    assert used_range([(None,), ("",)]) == []


def test_used_range_consumes_rows_lazily():
    def rows():
        yield ()
        yield (None, "h")
        yield ("x",)
        yield (None, None, None)

    assert used_range(rows()) == [[None, "h"], ["x", None]]


def test_workbook_opened_read_only(tmp_path: Path, monkeypatch):
    workbook = Workbook()
    workbook.active.append(["id"])
    workbook.active.append([1])
    path = save(workbook, tmp_path)

    calls = []
    real_load = openpyxl.load_workbook

    def load(*args, **kwargs):
        calls.append(kwargs)
        return real_load(*args, **kwargs)

    monkeypatch.setattr("reception.parsers.spreadsheet.openpyxl.load_workbook", load)

    table = read_spreadsheet(path)

    assert calls == [{"read_only": True, "data_only": True}]
    assert table.columns == ["id"]
    assert table.preview_rows == [["1"]]


def test_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFound):
        read_spreadsheet(str(tmp_path / "missing.xlsx"))


def test_corrupt_workbook(tmp_path: Path):
    path = tmp_path / "fake.xlsx"
    path.write_text("not a zip archive")

    with pytest.raises(IngestError, match="Failed to open Excel file"):
        read_spreadsheet(str(path))


class FakeWorkbook:
    def __init__(self, worksheets):
        self.worksheets = worksheets
        self.closed = False

    def close(self):
        self.closed = True


class BrokenSheet:
    title = "Broken"

    def reset_dimensions(self):
        pass

    def iter_rows(self, **kwargs):
        raise ValueError("bad cell data")


def test_no_sheets(tmp_path: Path, monkeypatch):
    path = tmp_path / "charts.xlsx"
    path.write_bytes(b"")
    fake = FakeWorkbook([])
    monkeypatch.setattr(
        "reception.parsers.spreadsheet.openpyxl.load_workbook", lambda *a, **kw: fake
    )

    with pytest.raises(NoSheets):
        read_spreadsheet(str(path))
    assert fake.closed


def test_sheet_read_error_names_the_sheet(tmp_path: Path, monkeypatch):
    path = tmp_path / "broken.xlsx"
    path.write_bytes(b"")
    monkeypatch.setattr(
        "reception.parsers.spreadsheet.openpyxl.load_workbook",
        lambda *a, **kw: FakeWorkbook([BrokenSheet()]),
    )

    with pytest.raises(SheetReadError) as exc_info:
        read_spreadsheet(str(path))

    assert exc_info.value.sheet_name == "Broken"
    assert "Broken" in str(exc_info.value)


class FakeExcelFile:
    def __init__(self, sheet_names):
        self.sheet_names = sheet_names

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def test_xls_goes_through_pandas(tmp_path: Path, monkeypatch):
    path = tmp_path / "legacy.xls"
    path.write_bytes(b"")
    frame = pd.DataFrame([["h1", None], [1.0, "x"], [None, None]])
    monkeypatch.setattr(
        "reception.parsers.spreadsheet.pd.ExcelFile", lambda p: FakeExcelFile(["Data", "Other"])
    )
    monkeypatch.setattr("reception.parsers.spreadsheet.pd.read_excel", lambda *a, **kw: frame)

    table = SpreadsheetParser().read(str(path))

    assert table.columns == ["h1", "Column_2"]
    assert table.row_count == 1
    assert table.preview_rows == [["1", "x"]]


def test_xls_without_sheets(tmp_path: Path, monkeypatch):
    path = tmp_path / "empty.xls"
    path.write_bytes(b"")
    monkeypatch.setattr("reception.parsers.spreadsheet.pd.ExcelFile", lambda p: FakeExcelFile([]))

    with pytest.raises(NoSheets):
        SpreadsheetParser().read(str(path))
