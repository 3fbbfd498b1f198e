# idqr/schemas/base.py
"""
Data model shared by every stage of the identity QR decoder.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, Optional, Union


class DetectedFormat(Enum):
    """Wire format of a scanned payload"""
    XML_LEGACY = "xml_legacy"
    PIPE_LEGACY = "pipe_legacy"
    SECURE_NUMERIC = "secure_numeric"
    UNRECOGNIZED = "unrecognized"


class PayloadSource(Enum):
    """Where a decoded record came from"""
    XML_LEGACY = "xml_legacy"
    PIPE_LEGACY = "pipe_legacy"
    SECURE_NUMERIC = "secure_numeric"
    EKYC_TEXT = "ekyc_text"
    OFFLINE_ZIP = "offline_zip"


class Gender(Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class FailureReason(Enum):
    """Why a payload could not be turned into an identity record"""
    UNRECOGNIZED_FORMAT = "unrecognized_format"
    MALFORMED_MARKUP = "malformed_markup"
    TOO_FEW_FIELDS = "too_few_fields"
    DECOMPRESSION_ERROR = "decompression_error"
    INSUFFICIENT_FIELDS = "insufficient_fields"
    UNREADABLE_ARCHIVE = "unreadable_archive"


FIELD_KEYS = (
    "name",
    "dob",
    "gender",
    "id_number",
    "address_line",
    "house_and_street",
    "care_of",
    "locality",
    "landmark",
    "city",
    "district",
    "state",
    "pincode",
    "masked_id",
    "mobile_hash",
    "email_hash",
    "photo",
)


class RawFieldBag(dict):
    """
    Literal strings lifted out of a payload, keyed by semantic field name.

    Only keys from FIELD_KEYS are accepted. Blank values are dropped on
    the way in, so a missing key always means "not present in the source".
    """

    def __init__(self, *args, **kwargs):
        super().__init__()
        self.update(*args, **kwargs)

    def __setitem__(self, key: str, value: Optional[str]) -> None:
        if key not in FIELD_KEYS:
            raise KeyError(f"Unknown identity field: {key}")
        if value is None:
            return
        value = value.strip()
        if value:
            super().__setitem__(key, value)

    def update(self, *args, **kwargs) -> None:
        for key, value in dict(*args, **kwargs).items():
            self[key] = value

    def setdefault(self, key: str, default: Optional[str] = None) -> Optional[str]:
        if key not in self:
            self[key] = default
        return self.get(key)


@dataclass(frozen=True)
class Address:
    line1: Optional[str] = None
    city: Optional[str] = None
    district: Optional[str] = None
    state: Optional[str] = None
    pincode: Optional[str] = None


@dataclass(frozen=True)
class IdentityRecord:
    """Canonical, already-normalized identity extracted from a QR payload"""
    name: Optional[str] = None
    first_name: Optional[str] = None
    middle_name: Optional[str] = None
    last_name: Optional[str] = None
    date_of_birth: Optional[str] = None  # YYYY-MM-DD
    gender: Optional[Gender] = None
    national_id_number: Optional[str] = None
    is_masked: bool = False
    id_checksum_valid: Optional[bool] = None
    address: Address = field(default_factory=Address)
    photo: Optional[str] = None  # data URI
    mobile: Optional[str] = None
    email: Optional[str] = None
    care_of: Optional[str] = None
    source_format: Optional[PayloadSource] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization, dropping absent fields"""
        result = {}
        for key, value in asdict(self).items():
            if key == "address":
                address = {k: v for k, v in value.items() if v is not None}
                if address:
                    result["address"] = address
            elif isinstance(value, Enum):
                result[key] = value.value
            elif value is not None:
                result[key] = value
        return result


@dataclass(frozen=True)
class DecodeFailure:
    reason: FailureReason
    detail: str = ""


DecodeOutcome = Union[IdentityRecord, DecodeFailure]
