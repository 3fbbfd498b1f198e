# idqr/__init__.py
"""
Identity QR decoding: legacy XML, legacy pipe-delimited and Secure QR
payloads of national ID cards, normalized into one record type.
"""

from .decoder import IdentityQRDecoder, decode, get_decoder
from .detector import detect
from .normalizer import normalize
from .schemas.base import (
    Address,
    DecodeFailure,
    DecodeOutcome,
    DetectedFormat,
    PayloadSource,
    FailureReason,
    Gender,
    IdentityRecord,
    RawFieldBag,
)

__version__ = "0.1.0"

__all__ = [
    "Address",
    "DecodeFailure",
    "DecodeOutcome",
    "DetectedFormat",
    "PayloadSource",
    "FailureReason",
    "Gender",
    "IdentityQRDecoder",
    "IdentityRecord",
    "RawFieldBag",
    "decode",
    "detect",
    "get_decoder",
    "normalize",
]
