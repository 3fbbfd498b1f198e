# idqr/exceptions.py
"""
Errors raised inside the decoding pipeline.

Extractors raise QRDecodeError; the decoder turns it into a DecodeFailure
so callers only ever see a returned outcome.
"""

from idqr.schemas.base import DecodeFailure, FailureReason


class QRDecodeError(ValueError):
    """A payload was recognized but could not be decoded"""

    def __init__(self, reason: FailureReason, detail: str = ""):
        self.reason = reason
        self.detail = detail
        super().__init__(f"{reason.value}: {detail}" if detail else reason.value)

    def to_failure(self) -> DecodeFailure:
        return DecodeFailure(reason=self.reason, detail=self.detail)
