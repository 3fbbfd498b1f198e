# idqr/codec/splitter.py
"""
Delimiter-based field splitting for Secure QR buffers.
"""

from typing import List, Optional

from idqr.config.settings import (
    SECURE_QR_DELIMITER,
    SECURE_QR_HEADER_LENGTH,
    SECURE_QR_MAX_FIELDS,
    SECURE_QR_TEXT_ENCODING,
)


def split_fields(data: bytes,
                 delimiter: int = SECURE_QR_DELIMITER,
                 skip_bytes: int = SECURE_QR_HEADER_LENGTH,
                 max_fields: int = SECURE_QR_MAX_FIELDS) -> List[str]:
    """
    Split a decompressed buffer into text fields

    Bytes before skip_bytes are ignored. Every run of bytes terminated by
    the delimiter becomes one field, decoded one byte per character.
    Splitting stops after max_fields so the binary photo that follows the
    text fields is never decoded. A final run with no terminating
    delimiter is dropped.
    """
    fields: List[str] = []
    position = skip_bytes

    while len(fields) < max_fields:
        end = data.find(bytes((delimiter,)), position)
        if end == -1:
            break
        fields.append(data[position:end].decode(SECURE_QR_TEXT_ENCODING))
        position = end + 1

    return fields


def tail_offset(data: bytes,
                delimiter: int = SECURE_QR_DELIMITER,
                skip_bytes: int = SECURE_QR_HEADER_LENGTH,
                max_fields: int = SECURE_QR_MAX_FIELDS) -> Optional[int]:
    """Offset of the first byte after the max_fields-th delimiter, or None"""
    position = skip_bytes
    for _ in range(max_fields):
        end = data.find(bytes((delimiter,)), position)
        if end == -1:
            return None
        position = end + 1
    return position
