"""Custom exceptions for tabular ingestion"""


class IngestError(Exception):
    """Base exception for all ingestion errors"""
    def __init__(self, message: str, file_path: str = None):
        super().__init__(message)
        self.file_path = file_path


class FileNotFound(IngestError):
    """Input path does not exist"""
    def __init__(self, file_path: str):
        super().__init__(f"File not found: {file_path}", file_path)


class DecodeFailure(IngestError):
    """Reading the raw bytes of a file failed"""
    pass


class ParseError(IngestError):
    """Structural malformation in delimited content"""
    def __init__(self, message: str, row_index: int = None, file_path: str = None):
        if row_index is None:
            super().__init__(message, file_path)
        else:
            super().__init__(f"Failed to read row {row_index}: {message}", file_path)
        self.row_index = row_index


class NoSheets(IngestError):
    """Workbook contains no worksheets"""
    def __init__(self, file_path: str = None):
        super().__init__("No sheets found in Excel file", file_path)


class SheetReadError(IngestError):
    """The selected worksheet could not be read"""
    def __init__(self, sheet_name: str, file_path: str = None, reason: str = None):
        message = f"Failed to read sheet: {sheet_name}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, file_path)
        self.sheet_name = sheet_name


class WriteError(IngestError):
    """Export destination could not be created or written"""
    pass


class UnsupportedFileError(IngestError):
    """No reader is registered for the file extension"""
    pass
