# idqr/codec/inflate.py
"""
Streaming decompression of gzip, zlib or raw deflate buffers.
"""

import logging
import zlib

from idqr.config.settings import INFLATE_CHUNK_SIZE
from idqr.exceptions import QRDecodeError
from idqr.schemas.base import FailureReason

logger = logging.getLogger(__name__)

GZIP_MAGIC = b"\x1f\x8b"


def _window_bits(data: bytes) -> int:
    """Pick the zlib container from the leading bytes"""
    if data[:2] == GZIP_MAGIC:
        return 16 + zlib.MAX_WBITS
    # zlib header: CM=8 and the first two bytes form a multiple of 31
    if len(data) >= 2 and data[0] & 0x0F == 8 and (data[0] << 8 | data[1]) % 31 == 0:
        return zlib.MAX_WBITS
    return -zlib.MAX_WBITS


def inflate(data: bytes, chunk_size: int = INFLATE_CHUNK_SIZE) -> bytes:
    """
    Decompress a complete compressed buffer

    Input is pushed through the decompressor chunk by chunk and every piece
    of output is kept in order. The call only returns once the stream has
    reported its end; truncated or corrupt input is a decode error.

    Args:
        data: gzip, zlib or raw deflate bytes
        chunk_size: Compressed bytes fed per step

    Returns:
        Decompressed bytes
    """
    if not data:
        raise QRDecodeError(FailureReason.DECOMPRESSION_ERROR, "empty buffer")

    decompressor = zlib.decompressobj(_window_bits(data))
    output = bytearray()

    try:
        for start in range(0, len(data), chunk_size):
            output += decompressor.decompress(data[start:start + chunk_size])
            if decompressor.eof:
                break
        output += decompressor.flush()
    except zlib.error as e:
        raise QRDecodeError(FailureReason.DECOMPRESSION_ERROR, str(e)) from e

    if not decompressor.eof:
        raise QRDecodeError(FailureReason.DECOMPRESSION_ERROR, "compressed stream is truncated")

    if decompressor.unused_data:
        logger.debug(f"Ignoring {len(decompressor.unused_data)} bytes after end of stream")

    logger.debug(f"Inflated {len(data)} bytes to {len(output)} bytes")
    return bytes(output)
