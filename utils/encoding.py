"""Encoding detection utilities"""

import codecs
import logging
from pathlib import Path
from typing import Optional, Union

import chardet

from core.enums import TextEncoding
from core.interfaces import EncodingDetector
from config import settings

logger = logging.getLogger(__name__)

UTF8_BOM = b"\xef\xbb\xbf"
UTF16LE_BOM = b"\xff\xfe"
UTF16BE_BOM = b"\xfe\xff"


def detect_bom(sample: bytes) -> Optional[TextEncoding]:
    """Encoding announced by a byte order mark, or None"""
    if sample.startswith(UTF8_BOM):
        return TextEncoding.UTF_8
    if sample.startswith(UTF16LE_BOM):
        return TextEncoding.UTF_16LE
    if sample.startswith(UTF16BE_BOM):
        return TextEncoding.UTF_16BE
    return None


def _is_valid_utf8(sample: bytes, complete: bool) -> bool:
    # A truncated sample may end in the middle of a multibyte sequence;
    # only a complete sample has to end on a character boundary.
    decoder = codecs.getincrementaldecoder("utf-8")(errors="strict")
    try:
        decoder.decode(sample, final=complete)
    except UnicodeDecodeError:
        return False
    return True


class HeuristicEncodingDetector(EncodingDetector):
    """
    UTF-8 / Shift_JIS classifier with byte order mark sniffing

    Rules, first match wins:
    1. byte order mark -> UTF-8, UTF-16LE or UTF-16BE
    2. any byte >= 0x80 -> UTF-8 if the sample validates strictly, else Shift_JIS
    3. pure 7-bit ASCII (including an empty sample) -> UTF-8

    Shift_JIS text that also happens to be valid UTF-8 is reported as UTF-8.
    """

    @property
    def name(self) -> str:
        return "heuristic"

    def detect(self, sample: bytes, complete: bool = True) -> TextEncoding:
        bom_encoding = detect_bom(sample)
        if bom_encoding is not None:
            return bom_encoding

        if any(b >= 0x80 for b in sample):
            if _is_valid_utf8(sample, complete):
                return TextEncoding.UTF_8
            return TextEncoding.SHIFT_JIS

        return TextEncoding.UTF_8


class ChardetEncodingDetector(EncodingDetector):
    """Statistical detection via chardet, falling back to the heuristic rules"""

    _CHARDET_LABELS = {
        "ascii": TextEncoding.UTF_8,
        "utf-8": TextEncoding.UTF_8,
        "utf-8-sig": TextEncoding.UTF_8,
        "shift_jis": TextEncoding.SHIFT_JIS,
        "cp932": TextEncoding.SHIFT_JIS,
    }

    def __init__(self, threshold: Optional[float] = None):
        self.threshold = threshold if threshold is not None else settings.CHARDET_CONFIDENCE_THRESHOLD
        self._fallback = HeuristicEncodingDetector()

    @property
    def name(self) -> str:
        return "chardet"

    def detect(self, sample: bytes, complete: bool = True) -> TextEncoding:
        bom_encoding = detect_bom(sample)
        if bom_encoding is not None:
            return bom_encoding

        result = chardet.detect(sample)
        encoding = (result.get("encoding") or "").lower()
        confidence = result.get("confidence") or 0.0
        logger.debug(f"chardet detected: {encoding or None} (confidence: {confidence})")

        label = self._CHARDET_LABELS.get(encoding)
        if label is not None and confidence > self.threshold:
            return label

        return self._fallback.detect(sample, complete)


_DETECTORS = {
    "heuristic": HeuristicEncodingDetector,
    "chardet": ChardetEncodingDetector,
}


def get_detector(name: Optional[str] = None) -> EncodingDetector:
    """
    Build the encoding detector registered under ``name``

    Args:
        name: Strategy name, defaults to settings.ENCODING_STRATEGY

    Returns:
        EncodingDetector instance
    """
    name = (name or settings.ENCODING_STRATEGY).lower()
    try:
        return _DETECTORS[name]()
    except KeyError:
        raise ValueError(
            f"Unknown encoding strategy: {name}. Supported: {', '.join(_DETECTORS)}"
        ) from None


def detect_encoding(
    file_path: Union[str, Path],
    detector: Optional[EncodingDetector] = None,
    sample_size: Optional[int] = None,
) -> TextEncoding:
    """
    Detect file encoding from the head of the file

    Args:
        file_path: Path to file
        detector: Detection strategy, defaults to get_detector()
        sample_size: Bytes to inspect, defaults to settings.ENCODING_SAMPLE_BYTES

    Returns:
        Detected TextEncoding

    Raises:
        OSError: The file could not be opened or read
    """
    detector = detector or get_detector()
    sample_size = sample_size or settings.ENCODING_SAMPLE_BYTES

    with open(file_path, "rb") as f:
        # One extra byte tells whether the sample is the whole file
        sample = f.read(sample_size + 1)

    complete = len(sample) <= sample_size
    sample = sample[:sample_size]

    encoding = detector.detect(sample, complete=complete)
    logger.debug(f"{detector.name} detected {encoding.value} for {file_path}")
    return encoding
