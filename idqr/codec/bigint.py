# idqr/codec/bigint.py
"""
Conversion between decimal digit strings and big-endian bytes.

Secure QR payloads are thousands of digits long, which is past the
interpreter's default int/str conversion limit, so both directions work
in fixed-size digit chunks.
"""

import re

from idqr.config.settings import DIGIT_CHUNK_SIZE

_DIGITS = re.compile(r"[0-9]+")


def _parse_decimal(digits: str, chunk_size: int = DIGIT_CHUNK_SIZE) -> int:
    value = 0
    for start in range(0, len(digits), chunk_size):
        chunk = digits[start:start + chunk_size]
        value = value * 10 ** len(chunk) + int(chunk)
    return value


def _format_decimal(value: int, chunk_size: int = DIGIT_CHUNK_SIZE) -> str:
    if value == 0:
        return "0"
    base = 10 ** chunk_size
    chunks = []
    while value:
        value, remainder = divmod(value, base)
        chunks.append(remainder)
    head = str(chunks.pop())
    return head + "".join(str(c).zfill(chunk_size) for c in reversed(chunks))


def digits_to_bytes(digits: str) -> bytes:
    """
    Convert a non-negative decimal integer string to its minimal big-endian bytes

    Args:
        digits: ASCII decimal digits, any length

    Returns:
        Big-endian byte string; b"\\x00" for zero
    """
    if not isinstance(digits, str) or not _DIGITS.fullmatch(digits):
        raise ValueError("Expected a string of decimal digits")

    value = _parse_decimal(digits)
    hex_digits = format(value, "x")
    if len(hex_digits) % 2:
        hex_digits = "0" + hex_digits
    return bytes.fromhex(hex_digits)


def bytes_to_digits(data: bytes) -> str:
    """Inverse of digits_to_bytes (leading zeros are not preserved)"""
    return _format_decimal(int.from_bytes(data, "big"))
