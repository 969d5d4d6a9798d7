"""Core enumerations for tabular ingestion"""

from enum import Enum


class TextEncoding(str, Enum):
    """Text encodings the detector can report"""
    UTF_8 = "UTF-8"
    UTF_16LE = "UTF-16LE"
    UTF_16BE = "UTF-16BE"
    SHIFT_JIS = "Shift_JIS"

    @property
    def codec(self) -> str:
        """Python codec used to decode bytes carrying this label"""
        # utf-8-sig and utf-16 both consume the byte order mark
        return {
            TextEncoding.UTF_8: "utf-8-sig",
            TextEncoding.UTF_16LE: "utf-16",
            TextEncoding.UTF_16BE: "utf-16",
            TextEncoding.SHIFT_JIS: "cp932",
        }[self]
