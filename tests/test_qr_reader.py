from types import SimpleNamespace

import pytest

np = pytest.importorskip("numpy")
pytest.importorskip("cv2")
pytest.importorskip("pyzbar.pyzbar")

from idqr.scan import qr_reader  # noqa: E402
from idqr.schemas.base import DecodeFailure, FailureReason, IdentityRecord  # noqa: E402

PIPE_PAYLOAD = "123456789012|Ravi Kumar|15-08-1990|M|12 MG Road|Mysuru|Karnataka|570001"


@pytest.fixture
def image():
    return np.zeros((120, 120, 3), dtype=np.uint8)


def fake_codes(monkeypatch, *payloads):
    codes = [SimpleNamespace(data=p.encode("utf-8")) for p in payloads]
    monkeypatch.setattr(qr_reader.pyzbar, "decode", lambda image, symbols=None: codes)


def test_no_qr_code(image):
    assert qr_reader.read_qr_payloads(image) == []
    outcome = qr_reader.decode_image(image)
    assert isinstance(outcome, DecodeFailure)
    assert outcome.reason is FailureReason.UNRECOGNIZED_FORMAT


def test_reads_payloads(monkeypatch, image):
    fake_codes(monkeypatch, "first", PIPE_PAYLOAD)
    assert qr_reader.read_qr_payloads(image) == ["first", PIPE_PAYLOAD]


def test_first_decodable_code_wins(monkeypatch, image):
    fake_codes(monkeypatch, "https://example.com", PIPE_PAYLOAD)
    record = qr_reader.decode_image(image)
    assert isinstance(record, IdentityRecord)
    assert record.name == "Ravi Kumar"


def test_last_failure_is_returned(monkeypatch, image):
    fake_codes(monkeypatch, "junk", "1|2")
    outcome = qr_reader.decode_image(image)
    assert isinstance(outcome, DecodeFailure)
    assert outcome.reason is FailureReason.TOO_FEW_FIELDS


def test_missing_image_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        qr_reader.decode_image_file(str(tmp_path / "missing.png"))
