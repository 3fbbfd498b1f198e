# idqr/normalizer.py
"""
Turns raw field bags from any extractor into canonical identity records.

This is the only place field values are reformatted; consumers of
IdentityRecord never normalize again.
"""

import logging
import re
from datetime import date
from typing import NamedTuple, Optional

from idqr.config.settings import ADULT_AGE, MASK_CHARACTERS, NATIONAL_ID_LENGTH
from idqr.schemas.base import Address, Gender, IdentityRecord, PayloadSource, RawFieldBag
from idqr.utils.verhoeff import verhoeff_validate

logger = logging.getLogger(__name__)

_DAY_FIRST = re.compile(r"(\d{1,2})[-/](\d{1,2})[-/](\d{4})")
_YEAR_FIRST = re.compile(r"(\d{4})[-/](\d{1,2})[-/](\d{1,2})")
_ALPHA_RUN = re.compile(r"[^\W\d_]+")

MALE_VALUES = {"M", "MALE", "पुरुष"}
FEMALE_VALUES = {"F", "FEMALE", "महिला"}


class NameParts(NamedTuple):
    first: Optional[str]
    middle: Optional[str]
    last: Optional[str]


def normalize_date(value: Optional[str]) -> Optional[str]:
    """
    Reformat DD-MM-YYYY, DD/MM/YYYY, YYYY-MM-DD or YYYY/MM/DD as YYYY-MM-DD

    Returns None for absent or unparseable dates; no placeholder is ever
    produced.
    """
    if not value:
        return None

    cleaned = value.strip()
    match = _DAY_FIRST.fullmatch(cleaned)
    if match:
        day, month, year = match.groups()
    else:
        match = _YEAR_FIRST.fullmatch(cleaned)
        if not match:
            logger.warning(f"Unrecognized date format: {value!r}")
            return None
        year, month, day = match.groups()

    try:
        return date(int(year), int(month), int(day)).isoformat()
    except ValueError:
        logger.warning(f"Invalid calendar date: {value!r}")
        return None


def normalize_gender(value: Optional[str]) -> Optional[Gender]:
    if not value or not value.strip():
        return None
    gender = value.strip().upper()
    if gender in MALE_VALUES:
        return Gender.MALE
    if gender in FEMALE_VALUES:
        return Gender.FEMALE
    return Gender.OTHER


def title_case(value: Optional[str]) -> Optional[str]:
    """Collapse whitespace and capitalize every run of letters"""
    if not value:
        return None
    collapsed = " ".join(value.split())
    if not collapsed:
        return None
    return _ALPHA_RUN.sub(lambda m: m.group(0)[0].upper() + m.group(0)[1:].lower(), collapsed)


def split_name(name: Optional[str]) -> NameParts:
    """First token, middle tokens, last token"""
    tokens = name.split() if name else []
    if not tokens:
        return NameParts(None, None, None)
    if len(tokens) == 1:
        return NameParts(tokens[0], None, None)
    return NameParts(tokens[0], " ".join(tokens[1:-1]) or None, tokens[-1])


def normalize_id(value: Optional[str]) -> Optional[str]:
    """Drop separators but keep digits and mask characters"""
    if not value:
        return None
    cleaned = re.sub(r"[\s-]", "", value)
    return cleaned or None


def is_masked(value: Optional[str]) -> bool:
    return bool(value) and any(c in MASK_CHARACTERS for c in value)


def is_age_above(dob_iso: Optional[str], years: int = ADULT_AGE, today: Optional[date] = None) -> bool:
    """Whether someone born on dob_iso is at least `years` old today"""
    if not dob_iso:
        return False
    try:
        born = date.fromisoformat(dob_iso)
    except ValueError:
        return False

    today = today or date.today()
    age = today.year - born.year - ((today.month, today.day) < (born.month, born.day))
    return age >= years


def normalize(bag: RawFieldBag, source_format: Optional[PayloadSource] = None) -> IdentityRecord:
    """
    Build the canonical record for a raw field bag

    Args:
        bag: Fields as found by an extractor
        source_format: Format the bag was extracted from

    Returns:
        IdentityRecord with every present field normalized
    """
    name = title_case(bag.get("name"))
    parts = split_name(name)

    national_id = normalize_id(bag.get("id_number") or bag.get("masked_id"))
    masked = is_masked(national_id)

    checksum_valid = None
    if national_id and not masked and len(national_id) == NATIONAL_ID_LENGTH and national_id.isdigit():
        checksum_valid = verhoeff_validate(national_id)
        if not checksum_valid:
            logger.warning(f"National ID checksum failed: XXXX XXXX {national_id[-4:]}")

    pincode = bag.get("pincode")
    if pincode:
        pincode = re.sub(r"\s", "", pincode)

    address = Address(
        line1=bag.get("address_line"),
        city=bag.get("city"),
        district=bag.get("district"),
        state=bag.get("state"),
        pincode=pincode,
    )

    return IdentityRecord(
        name=name,
        first_name=parts.first,
        middle_name=parts.middle,
        last_name=parts.last,
        date_of_birth=normalize_date(bag.get("dob")),
        gender=normalize_gender(bag.get("gender")),
        national_id_number=national_id,
        is_masked=masked,
        id_checksum_valid=checksum_valid,
        address=address,
        photo=bag.get("photo"),
        mobile=bag.get("mobile_hash"),
        email=bag.get("email_hash"),
        care_of=bag.get("care_of"),
        source_format=source_format,
    )
