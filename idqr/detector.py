# idqr/detector.py
"""
Structural sniffing of scanned QR text.
"""

import re

from idqr.schemas.base import DetectedFormat

_ALL_DIGITS = re.compile(r"[0-9]+")


def detect(text) -> DetectedFormat:
    """
    Classify a scanned payload by its shape

    Markup wins over pipes, pipes win over digits. Anything else, including
    non-string or empty input, is UNRECOGNIZED rather than an error.
    """
    if not isinstance(text, str):
        return DetectedFormat.UNRECOGNIZED

    text = text.strip().lstrip("\ufeff").strip()
    if not text:
        return DetectedFormat.UNRECOGNIZED

    if "<?xml" in text or text.startswith("<"):
        return DetectedFormat.XML_LEGACY
    if "|" in text:
        return DetectedFormat.PIPE_LEGACY
    if _ALL_DIGITS.fullmatch(text):
        return DetectedFormat.SECURE_NUMERIC
    return DetectedFormat.UNRECOGNIZED
