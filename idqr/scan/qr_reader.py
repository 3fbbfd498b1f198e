# idqr/scan/qr_reader.py
"""
Reads QR payloads out of an already captured image and decodes them.
Capture itself (camera, framing) belongs to the caller.
"""

import cv2
import numpy as np
from pyzbar import pyzbar
import logging
from typing import List, Optional

from idqr.decoder import IdentityQRDecoder, get_decoder
from idqr.schemas.base import DecodeFailure, DecodeOutcome, FailureReason

logger = logging.getLogger(__name__)


def read_qr_payloads(image: np.ndarray) -> List[str]:
    """
    Text of every QR code found in the image

    Args:
        image: Input image (BGR or grayscale)

    Returns:
        Payload strings in detection order; empty when nothing was found
    """
    if image.ndim == 3:
        image = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)

    qr_codes = pyzbar.decode(image, symbols=[pyzbar.ZBarSymbol.QRCODE])
    if not qr_codes:
        logger.info("No QR code found in image")
        return []

    payloads = [qr.data.decode("utf-8", errors="ignore") for qr in qr_codes]
    logger.info(f"Found {len(payloads)} QR code(s), data lengths: {[len(p) for p in payloads]}")
    return payloads


def decode_image(image: np.ndarray, decoder: Optional[IdentityQRDecoder] = None) -> DecodeOutcome:
    """
    Decode the first identity QR code in the image

    Cards can carry more than one QR code; the first that decodes wins,
    otherwise the last failure is returned.
    """
    decoder = decoder or get_decoder()
    outcome: DecodeOutcome = DecodeFailure(FailureReason.UNRECOGNIZED_FORMAT, "no QR code found in image")

    for payload in read_qr_payloads(image):
        outcome = decoder.decode(payload)
        if not isinstance(outcome, DecodeFailure):
            return outcome

    return outcome


def decode_image_file(image_path: str, decoder: Optional[IdentityQRDecoder] = None) -> DecodeOutcome:
    """Load an image from disk and decode its identity QR code"""
    image = cv2.imread(image_path)
    if image is None:
        raise FileNotFoundError(f"Could not load image: {image_path}")
    return decode_image(image, decoder)
