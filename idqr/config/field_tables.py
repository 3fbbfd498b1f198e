# idqr/config/field_tables.py
"""
Versioned Secure QR field layouts.

Each table says how many header bytes to skip, which byte separates
fields, and at which ordinal every semantic field sits. Supporting a new
document revision means registering a new table here.
"""

from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Mapping, Optional

from idqr.config.settings import (
    DEFAULT_SECURE_QR_VERSION,
    SECURE_QR_DELIMITER,
    SECURE_QR_HEADER_LENGTH,
    SECURE_QR_MAX_FIELDS,
    SECURE_QR_MIN_FIELDS,
)


@dataclass(frozen=True)
class SecureQrFieldTable:
    version: str
    header_length: int = SECURE_QR_HEADER_LENGTH
    delimiter: int = SECURE_QR_DELIMITER
    max_fields: int = SECURE_QR_MAX_FIELDS
    min_fields: int = SECURE_QR_MIN_FIELDS

    name: Optional[int] = None
    dob: Optional[int] = None
    gender: Optional[int] = None
    care_of: Optional[int] = None
    district: Optional[int] = None
    landmark: Optional[int] = None
    house: Optional[int] = None
    locality: Optional[int] = None
    pincode: Optional[int] = None
    state: Optional[int] = None
    city: Optional[int] = None
    masked_id: Optional[int] = None
    mobile_hash: Optional[int] = None
    email_hash: Optional[int] = None

    def __post_init__(self):
        if not 0 <= self.delimiter <= 255:
            raise ValueError(f"Delimiter must be a byte value, got {self.delimiter}")
        if self.min_fields > self.max_fields:
            raise ValueError("min_fields cannot exceed max_fields")
        # Fields past max_fields would be cut off by the splitter's early stop
        for field_name, ordinal in self.ordinals().items():
            if ordinal >= self.max_fields:
                raise ValueError(
                    f"{self.version}: ordinal {ordinal} of '{field_name}' "
                    f"is beyond max_fields={self.max_fields}"
                )

    def ordinals(self) -> Mapping[str, int]:
        """Semantic field name -> ordinal, for fields this layout carries"""
        names = (
            "name", "dob", "gender", "care_of", "district", "landmark", "house",
            "locality", "pincode", "state", "city", "masked_id",
            "mobile_hash", "email_hash",
        )
        return {n: getattr(self, n) for n in names if getattr(self, n) is not None}


SECURE_QR_V2 = SecureQrFieldTable(
    version="V2",
    name=3,
    dob=4,
    gender=5,
    care_of=6,
    district=7,
    landmark=8,
    house=9,
    locality=10,
    pincode=11,
    state=12,
    city=13,
    masked_id=14,
)

# V3 keeps the V2 text field layout
SECURE_QR_V3 = replace(SECURE_QR_V2, version="V3")

FIELD_TABLES: Mapping[str, SecureQrFieldTable] = MappingProxyType({
    table.version: table for table in (SECURE_QR_V2, SECURE_QR_V3)
})

DEFAULT_FIELD_TABLE = FIELD_TABLES[DEFAULT_SECURE_QR_VERSION]


def get_field_table(version: Optional[str]) -> SecureQrFieldTable:
    """Table for a version tag, falling back to the default layout"""
    if version:
        table = FIELD_TABLES.get(version.strip().upper())
        if table is not None:
            return table
    return DEFAULT_FIELD_TABLE
