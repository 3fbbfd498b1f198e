# idqr/parsers/xml_qr.py
"""
Legacy XML QR extraction.

Older cards carry the data as leaf elements; the printed-letter barcode
and offline eKYC XML carry the same names as attributes. Both are read.
"""

import logging
import re
import xml.etree.ElementTree as ET
from typing import Optional, Sequence

from idqr.exceptions import QRDecodeError
from idqr.schemas.base import FailureReason, RawFieldBag
from .base import join_present

logger = logging.getLogger(__name__)

BYTE_ORDER_MARK = "\ufeff"

_PROLOG = re.compile(r"^\s*<\?xml[^>]*>", re.IGNORECASE)
_DOCTYPE = re.compile(r"^\s*<!DOCTYPE[^>]*>", re.IGNORECASE)

# Semantic key -> tag/attribute names, most specific first
XML_TAGS = {
    "id_number": ("uid",),
    "name": ("name",),
    "dob": ("dob",),
    "gender": ("gender",),
    "care_of": ("co", "careof"),
    "house": ("house",),
    "street": ("street",),
    "landmark": ("lm", "landmark"),
    "locality": ("loc",),
    "vtc": ("vtc",),
    "district": ("dist",),
    "state": ("state",),
    "pincode": ("pc",),
    "email_hash": ("e", "email"),
    "mobile_hash": ("m", "mobile"),
    "photo": ("Pht",),
}


class XmlQRExtractor:
    """Extract identity fields from legacy XML QR payloads"""

    @staticmethod
    def extract(text: str) -> RawFieldBag:
        """
        Extract raw fields from a legacy XML payload

        Missing tags leave their key absent. Unparseable markup raises
        QRDecodeError(MALFORMED_MARKUP).
        """
        root = XmlQRExtractor._parse(text)
        values = {key: XmlQRExtractor._lookup(root, names) for key, names in XML_TAGS.items()}

        bag = RawFieldBag()
        for key in ("id_number", "name", "dob", "gender", "care_of", "landmark",
                    "locality", "district", "state", "pincode", "email_hash", "mobile_hash"):
            bag[key] = values[key]

        bag["house_and_street"] = join_present([values["house"], values["street"]])
        bag["address_line"] = join_present([values["house"], values["street"], values["locality"]])
        bag["city"] = values["vtc"] or values["district"]

        if values["photo"]:
            bag["photo"] = f"data:image/jpeg;base64,{values['photo']}"

        logger.debug(f"XML QR fields: {list(bag.keys())}")
        return bag

    @staticmethod
    def _parse(text: str) -> ET.Element:
        """
        Parse the payload as a document; if that fails, retry the body
        (prolog and doctype removed) as a run of sibling elements
        """
        text = text.strip().lstrip(BYTE_ORDER_MARK).strip()
        try:
            return ET.fromstring(text)
        except ET.ParseError as e:
            document_error = e

        body = _DOCTYPE.sub("", _PROLOG.sub("", text, count=1), count=1)
        try:
            return ET.fromstring(f"<qr>{body}</qr>")
        except ET.ParseError:
            logger.warning(f"XML QR parsing failed: {document_error}")
            raise QRDecodeError(FailureReason.MALFORMED_MARKUP, str(document_error)) from document_error

    @staticmethod
    def _lookup(root: ET.Element, names: Sequence[str]) -> Optional[str]:
        for name in names:
            for element in root.iter(name):
                if element.text and element.text.strip():
                    return element.text.strip()
        for name in names:
            for element in root.iter():
                value = element.get(name)
                if value and value.strip():
                    return value.strip()
        return None


extract_xml = XmlQRExtractor.extract
