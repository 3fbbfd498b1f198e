# idqr/parsers/secure_qr.py
"""
Secure QR field mapping.

The Secure QR payload is a decimal integer wrapping a compressed buffer:
a signature header, then text fields separated by 0xFF, then the photo.
This module turns decoded field segments into a RawFieldBag using the
versioned layouts in idqr.config.field_tables.
"""

import base64
import logging
import re
from typing import List, Optional, Sequence

from idqr.codec import digits_to_bytes, inflate, split_fields, tail_offset
from idqr.config.field_tables import SecureQrFieldTable, get_field_table
from idqr.exceptions import QRDecodeError
from idqr.schemas.base import FailureReason, RawFieldBag
from .base import join_present

logger = logging.getLogger(__name__)

_VERSION_TAG = re.compile(r"V\d+", re.IGNORECASE)


class SecureQRExtractor:
    """Extract identity fields from Secure QR digit strings"""

    @staticmethod
    def extract(digits: str) -> RawFieldBag:
        """
        Decode a Secure QR digit string into raw fields

        digits -> bytes -> inflate -> split -> layout selection -> mapping
        """
        compressed = digits_to_bytes(digits)
        data = inflate(compressed)
        logger.info(f"Secure QR inflated: {len(compressed)} -> {len(data)} bytes")

        # The default layout locates the version tag; the selected one drives the rest
        version_field = split_fields(data, skip_bytes=get_field_table(None).header_length, max_fields=1)
        table = SecureQRExtractor.select_field_table(version_field)

        segments: List[str] = split_fields(data, table.delimiter, table.header_length, table.max_fields)
        bag = SecureQRExtractor.map_fields(segments, table)
        bag["photo"] = SecureQRExtractor.extract_photo(data, table)
        return bag

    @staticmethod
    def select_field_table(segments: Sequence[str]) -> SecureQrFieldTable:
        """Layout named by the version tag in the first segment, else the default"""
        version = segments[0].strip() if segments else ""
        if _VERSION_TAG.fullmatch(version):
            return get_field_table(version)
        return get_field_table(None)

    @staticmethod
    def map_fields(segments: Sequence[str], table: SecureQrFieldTable) -> RawFieldBag:
        """
        Map decoded segments to semantic fields by ordinal

        Raises QRDecodeError(INSUFFICIENT_FIELDS) when there are fewer segments
        than the layout's minimum. Mask characters in the ID are left as-is.
        """
        if len(segments) < table.min_fields:
            logger.warning(f"Secure QR has {len(segments)} fields, layout {table.version} needs {table.min_fields}")
            raise QRDecodeError(
                FailureReason.INSUFFICIENT_FIELDS,
                f"{len(segments)} fields decoded, at least {table.min_fields} required",
            )

        values = {key: SecureQRExtractor._segment(segments, ordinal)
                  for key, ordinal in table.ordinals().items()}

        bag = RawFieldBag()
        for key in ("name", "dob", "gender", "care_of", "district", "landmark", "locality",
                    "pincode", "state", "masked_id", "mobile_hash", "email_hash"):
            bag[key] = values.get(key)

        bag["house_and_street"] = values.get("house")
        bag["address_line"] = join_present([values.get("house"), values.get("landmark"), values.get("locality")])
        bag["city"] = values.get("city") or values.get("district")
        return bag

    @staticmethod
    def extract_photo(data: bytes, table: SecureQrFieldTable) -> Optional[str]:
        """Photo bytes following the text fields, as a data URI"""
        offset = tail_offset(data, table.delimiter, table.header_length, table.max_fields)
        if offset is None or offset >= len(data):
            return None
        encoded = base64.b64encode(data[offset:]).decode("ascii")
        return f"data:image/jp2;base64,{encoded}"

    @staticmethod
    def _segment(segments: Sequence[str], ordinal: Optional[int]) -> Optional[str]:
        if ordinal is None or ordinal >= len(segments):
            return None
        return segments[ordinal]


extract_secure_qr = SecureQRExtractor.extract
select_field_table = SecureQRExtractor.select_field_table
map_secure_qr_fields = SecureQRExtractor.map_fields
