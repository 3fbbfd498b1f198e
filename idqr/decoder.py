# idqr/decoder.py
"""
Decode orchestrator - detects the payload format, runs the matching
extractor and normalizes the result.
"""

import logging
from typing import IO, Callable, Dict, Optional, Union

from idqr.detector import detect
from idqr.exceptions import QRDecodeError
from idqr.normalizer import normalize
from idqr.parsers import extract_ekyc_text, extract_pipe, extract_secure_qr, extract_xml, read_offline_zip
from idqr.parsers.base import mask_for_log
from idqr.schemas.base import (
    DecodeFailure,
    DecodeOutcome,
    DetectedFormat,
    FailureReason,
    PayloadSource,
    RawFieldBag,
)

logger = logging.getLogger(__name__)

Extractor = Callable[[str], RawFieldBag]


class IdentityQRDecoder:
    """Decodes scanned identity QR payloads into IdentityRecords"""

    def __init__(self, extractors: Optional[Dict[DetectedFormat, Extractor]] = None):
        self.extractors: Dict[DetectedFormat, Extractor] = extractors or {
            DetectedFormat.XML_LEGACY: extract_xml,
            DetectedFormat.PIPE_LEGACY: extract_pipe,
            DetectedFormat.SECURE_NUMERIC: extract_secure_qr,
        }

    def decode(self, raw_text: str) -> DecodeOutcome:
        """
        Decode one scanned payload

        Args:
            raw_text: Text recovered from the QR code

        Returns:
            IdentityRecord on success, DecodeFailure otherwise
        """
        detected = detect(raw_text)
        extractor = self.extractors.get(detected)

        if extractor is None:
            logger.info("Scanned payload is not a recognized identity QR format")
            return DecodeFailure(FailureReason.UNRECOGNIZED_FORMAT, "payload matches no known format")

        return self._run(extractor, raw_text.strip(), PayloadSource(detected.value))

    def decode_ekyc_text(self, text: str) -> DecodeOutcome:
        """Decode offline eKYC secure text ("~"-separated)"""
        return self._run(extract_ekyc_text, text, PayloadSource.EKYC_TEXT)

    def decode_offline_zip(self, file: Union[str, IO[bytes]], password: Optional[str] = None) -> DecodeOutcome:
        """
        Decode an offline eKYC ZIP archive

        Args:
            file: Path or binary file object
            password: Share code of the archive
        """
        try:
            content = read_offline_zip(file, password)
        except QRDecodeError as e:
            return e.to_failure()

        if detect(content) is DetectedFormat.XML_LEGACY:
            return self._run(extract_xml, content, PayloadSource.OFFLINE_ZIP)
        return self._run(extract_ekyc_text, content, PayloadSource.OFFLINE_ZIP)

    def _run(self, extractor: Extractor, text: str, source_format: PayloadSource) -> DecodeOutcome:
        try:
            bag = extractor(text)
        except QRDecodeError as e:
            logger.warning(f"{source_format.value} payload rejected: {e}")
            return e.to_failure()

        # A record with neither name nor number would look complete but is not
        if not bag.get("name") and not bag.get("id_number") and not bag.get("masked_id"):
            logger.warning(f"{source_format.value} payload has neither a name nor an ID number")
            return DecodeFailure(FailureReason.INSUFFICIENT_FIELDS, "neither name nor ID number present")

        record = normalize(bag, source_format)
        logger.info(
            f"✅ {source_format.value} decode successful: "
            f"id={mask_for_log(record.national_id_number)} fields={list(bag.keys())}"
        )
        return record


# Global decoder instance
_decoder: Optional[IdentityQRDecoder] = None


def get_decoder() -> IdentityQRDecoder:
    """Shared decoder instance (holds no per-call state)"""
    global _decoder
    if _decoder is None:
        _decoder = IdentityQRDecoder()
        logger.debug("Created new identity QR decoder instance")
    return _decoder


def decode(raw_text: str) -> DecodeOutcome:
    """Convenience function: decode one payload with the shared decoder"""
    return get_decoder().decode(raw_text)
