"""Abstract base classes for ingestion components"""

from abc import ABC, abstractmethod

from .enums import TextEncoding


class EncodingDetector(ABC):
    """Abstract base class for encoding detection strategies"""

    @property
    @abstractmethod
    def name(self) -> str:
        """Strategy name, as used in settings.ENCODING_STRATEGY"""
        pass

    @abstractmethod
    def detect(self, sample: bytes, complete: bool = True) -> TextEncoding:
        """Classify the encoding of a byte sample

        ``complete`` is False when the sample was cut from a longer file.
        """
        pass


class TableReader(ABC):
    """Abstract base class for tabular file readers"""

    @property
    @abstractmethod
    def supported_extensions(self) -> list[str]:
        """List of supported file extensions"""
        pass

    @abstractmethod
    def read(self, file_path: str) -> "ParsedTable":
        """Read file and return a ParsedTable"""
        pass
