# idqr/parsers/ekyc.py
"""
Offline eKYC inputs: the "~"-separated secure text and the downloadable ZIP.

Each part of the secure text after the first is a base64url-encoded JSON
array of the form [id, key, value].
"""

import base64
import binascii
import json
import logging
import re
import zipfile
import zlib
from typing import IO, Dict, Optional, Union

from idqr.config.settings import EKYC_MIN_PARTS, EKYC_SEPARATOR
from idqr.exceptions import QRDecodeError
from idqr.schemas.base import FailureReason, RawFieldBag
from .base import join_present

logger = logging.getLogger(__name__)

_TWELVE_DIGITS = re.compile(r"\d{12}")

# eKYC key (lower-cased) -> semantic field
EKYC_KEYS = {
    "residentname": "name",
    "name": "name",
    "dob": "dob",
    "gender": "gender",
    "uid": "id_number",
    "aadhaarnumber": "id_number",
    "mobile": "mobile_hash",
    "email": "email_hash",
    "careof": "care_of",
    "pincode": "pincode",
    "state": "state",
    "district": "district",
    "vtc": "vtc",
    "building": "building",
    "street": "street",
    "locality": "locality",
    "landmark": "landmark",
    "address": "address",
    "residentimage": "photo",
}


class EkycExtractor:
    """Extract identity fields from offline eKYC secure text and archives"""

    @staticmethod
    def extract_text(text: str) -> RawFieldBag:
        """
        Extract raw fields from offline eKYC secure text

        Raises TOO_FEW_FIELDS when the document has too few parts.
        """
        parts = text.strip().split(EKYC_SEPARATOR)
        if len(parts) < EKYC_MIN_PARTS:
            raise QRDecodeError(
                FailureReason.TOO_FEW_FIELDS,
                f"expected at least {EKYC_MIN_PARTS} parts, got {len(parts)}",
            )

        values = EkycExtractor._collect(parts[1:])

        bag = RawFieldBag()
        for key in ("name", "dob", "gender", "id_number", "mobile_hash", "email_hash",
                    "care_of", "pincode", "state", "district", "locality", "landmark"):
            bag[key] = values.get(key)

        if "id_number" not in bag:
            bag["id_number"] = EkycExtractor._find_raw_uid(parts[1:])

        bag["house_and_street"] = join_present([values.get("building"), values.get("street")])
        bag["address_line"] = values.get("address") or join_present(
            [values.get("building"), values.get("street"), values.get("locality")]
        )
        bag["city"] = values.get("vtc") or values.get("district")

        if values.get("photo"):
            bag["photo"] = f"data:image/jpeg;base64,{values['photo']}"

        logger.debug(f"eKYC text fields: {list(bag.keys())}")
        return bag

    @staticmethod
    def read_zip(file: Union[str, IO[bytes]], password: Optional[str] = None) -> str:
        """
        Return the first text document in an offline eKYC ZIP that looks
        like XML or secure text

        Members that are not valid UTF-8 (photos, signatures) are skipped.

        Args:
            file: Path or binary file object
            password: Share code protecting the archive, if any
        """
        try:
            with zipfile.ZipFile(file) as archive:
                if password:
                    archive.setpassword(password.encode("utf-8"))
                for info in archive.infolist():
                    if info.is_dir():
                        continue
                    try:
                        content = archive.read(info).decode("utf-8-sig")
                    except UnicodeDecodeError:
                        logger.debug(f"Skipping binary archive member: {info.filename}")
                        continue
                    if "<?xml" in content or EKYC_SEPARATOR in content or "ResidentName" in content:
                        logger.info(f"Found eKYC document in archive: {info.filename}")
                        return content
        except (zipfile.BadZipFile, zlib.error, RuntimeError, NotImplementedError, OSError) as e:
            # RuntimeError: missing or wrong password
            logger.warning(f"Offline eKYC archive could not be read: {e}")
            raise QRDecodeError(FailureReason.UNREADABLE_ARCHIVE, str(e)) from e

        raise QRDecodeError(FailureReason.UNREADABLE_ARCHIVE, "no eKYC document found in archive")

    @staticmethod
    def _b64url_decode(part: str) -> bytes:
        padded = part.replace("-", "+").replace("_", "/")
        padded += "=" * (-len(padded) % 4)
        return base64.b64decode(padded, validate=True)

    @staticmethod
    def _decode_part(part: str) -> Optional[list]:
        try:
            decoded = EkycExtractor._b64url_decode(part).decode("utf-8")
            value = json.loads(decoded)
        except (binascii.Error, UnicodeDecodeError, ValueError):
            return None
        return value if isinstance(value, list) and len(value) >= 3 else None

    @staticmethod
    def _collect(parts) -> Dict[str, str]:
        values: Dict[str, str] = {}
        for part in parts:
            part = part.strip()
            if not part:
                continue
            entry = EkycExtractor._decode_part(part)
            if entry is None:
                continue
            key = EKYC_KEYS.get(str(entry[1]).strip().lower())
            value = str(entry[2]).strip()
            # First occurrence wins
            if key and value and key not in values:
                values[key] = value
        return values

    @staticmethod
    def _find_raw_uid(parts) -> Optional[str]:
        """Last resort: a bare 12-digit number inside any decodable part"""
        for part in parts:
            try:
                text = EkycExtractor._b64url_decode(part.strip()).decode("latin-1")
            except (binascii.Error, ValueError):
                continue
            match = _TWELVE_DIGITS.search(text)
            if match:
                return match.group(0)
        return None


extract_ekyc_text = EkycExtractor.extract_text
read_offline_zip = EkycExtractor.read_zip
