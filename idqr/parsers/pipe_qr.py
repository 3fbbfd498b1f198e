# idqr/parsers/pipe_qr.py
"""
Legacy pipe-delimited QR extraction.

Format: uid|name|dob|gender|address...|city|state|pincode
"""

import logging

from idqr.exceptions import QRDecodeError
from idqr.schemas.base import FailureReason, RawFieldBag
from .base import join_present

logger = logging.getLogger(__name__)

PIPE_SEPARATOR = "|"
FIXED_FIELDS = ("id_number", "name", "dob", "gender")
TAIL_FIELDS = ("city", "state", "pincode")  # counted from the end


class PipeQRExtractor:
    """Extract identity fields from pipe-delimited QR payloads"""

    @staticmethod
    def extract(text: str) -> RawFieldBag:
        """
        Extract raw fields from a pipe-delimited payload

        Position alone carries meaning here, so fewer than four segments is
        a TOO_FEW_FIELDS error rather than a partial result.
        """
        parts = text.strip().split(PIPE_SEPARATOR)

        if len(parts) < len(FIXED_FIELDS):
            logger.warning(f"Insufficient pipe QR fields: {len(parts)}")
            raise QRDecodeError(
                FailureReason.TOO_FEW_FIELDS,
                f"expected at least {len(FIXED_FIELDS)} segments, got {len(parts)}",
            )

        bag = RawFieldBag(zip(FIXED_FIELDS, parts))

        tail = parts[len(FIXED_FIELDS):]
        fixed_tail = tail[-len(TAIL_FIELDS):] if tail else []
        # Right-align so a short tail still fills pincode, then state, then city
        for key, value in zip(TAIL_FIELDS[len(TAIL_FIELDS) - len(fixed_tail):], fixed_tail):
            bag[key] = value

        bag["address_line"] = join_present(tail[:-len(TAIL_FIELDS)])
        return bag


extract_pipe = PipeQRExtractor.extract
