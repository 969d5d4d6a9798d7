"""Base table parser"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from core.interfaces import TableReader
from core.models import ParsedTable
from core.exceptions import FileNotFound
from config import settings


class TableParser(TableReader, ABC):
    """Abstract base class for table parsers"""

    def __init__(self, preview_limit: Optional[int] = None):
        # Overrides can shrink the preview, never grow it past the configured limit
        if preview_limit is None:
            self.preview_limit = settings.PREVIEW_LIMIT
        else:
            self.preview_limit = min(preview_limit, settings.PREVIEW_LIMIT)

    @abstractmethod
    def read(self, file_path: str) -> ParsedTable:
        """Read file and return ParsedTable"""
        pass

    def _existing_path(self, file_path: str) -> Path:
        path = Path(file_path)
        if not path.exists():
            raise FileNotFound(str(file_path))
        return path
