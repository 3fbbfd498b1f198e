import gzip
import io
import zipfile

import pytest

from idqr import (
    DecodeFailure,
    PayloadSource,
    FailureReason,
    Gender,
    IdentityQRDecoder,
    IdentityRecord,
    decode,
    get_decoder,
)
from idqr.codec import bytes_to_digits
from tests.helpers import build_ekyc_text


SCENARIO_XML = (
    "<?xml ...><uid>123456789012</uid><name>ravi kumar</name><dob>15-08-1990</dob>"
    "<gender>M</gender><vtc>Mysuru</vtc><state>Karnataka</state><pc>570001</pc>"
)
SCENARIO_PIPE = "123456789012|Ravi Kumar|15-08-1990|M|12 MG Road|Mysuru|Karnataka|570001"


@pytest.fixture
def decoder():
    return IdentityQRDecoder()


class TestDecode:

    def test_xml_scenario(self, decoder):
        record = decoder.decode(SCENARIO_XML)
        assert isinstance(record, IdentityRecord)
        assert record.name == "Ravi Kumar"
        assert record.date_of_birth == "1990-08-15"
        assert record.gender is Gender.MALE
        assert record.national_id_number == "123456789012"
        assert record.address.city == "Mysuru"
        assert record.address.state == "Karnataka"
        assert record.address.pincode == "570001"
        assert record.address.line1 is None
        assert record.source_format is PayloadSource.XML_LEGACY

    def test_pipe_scenario(self, decoder):
        record = decoder.decode(SCENARIO_PIPE)
        assert isinstance(record, IdentityRecord)
        assert record.address.line1 == "12 MG Road"
        assert record.address.city == "Mysuru"
        assert record.address.state == "Karnataka"
        assert record.address.pincode == "570001"
        assert record.source_format is PayloadSource.PIPE_LEGACY

    def test_secure_qr(self, decoder, secure_payload):
        record = decoder.decode(secure_payload)
        assert isinstance(record, IdentityRecord)
        assert record.name == "Ravi Kumar"
        assert record.date_of_birth == "1990-08-15"
        assert record.gender is Gender.MALE
        assert record.care_of == "S/O Ramesh Kumar"
        assert record.national_id_number == "xxxxxxxx9012"
        assert record.is_masked is True
        assert record.address.line1 == "12, Near Temple, MG Road"
        assert record.address.city == "Mysuru City"
        assert record.address.district == "Mysuru"
        assert record.source_format is PayloadSource.SECURE_NUMERIC

    def test_unrecognized(self, decoder):
        outcome = decoder.decode("not a qr payload")
        assert outcome == DecodeFailure(FailureReason.UNRECOGNIZED_FORMAT, outcome.detail)

    @pytest.mark.parametrize("value", [None, "", 42])
    def test_non_payloads_are_unrecognized(self, decoder, value):
        outcome = decoder.decode(value)
        assert isinstance(outcome, DecodeFailure)
        assert outcome.reason is FailureReason.UNRECOGNIZED_FORMAT

    def test_secure_qr_too_short(self, decoder):
        digits = bytes_to_digits(gzip.compress(b"V2\xffshort\xff"))
        outcome = decoder.decode(digits)
        assert isinstance(outcome, DecodeFailure)
        assert outcome.reason is FailureReason.INSUFFICIENT_FIELDS

    def test_digits_that_are_not_compressed(self, decoder):
        outcome = decoder.decode("1234567890")
        assert isinstance(outcome, DecodeFailure)
        assert outcome.reason is FailureReason.DECOMPRESSION_ERROR

    def test_malformed_markup(self, decoder):
        outcome = decoder.decode("<?xml version='1.0'?><uid>1</name>")
        assert isinstance(outcome, DecodeFailure)
        assert outcome.reason is FailureReason.MALFORMED_MARKUP

    def test_too_few_pipe_fields(self, decoder):
        outcome = decoder.decode("1|A")
        assert isinstance(outcome, DecodeFailure)
        assert outcome.reason is FailureReason.TOO_FEW_FIELDS

    def test_no_name_and_no_id_is_not_a_record(self, decoder):
        outcome = decoder.decode("<?xml version='1.0'?><dob>01-01-1990</dob><state>Goa</state>")
        assert isinstance(outcome, DecodeFailure)
        assert outcome.reason is FailureReason.INSUFFICIENT_FIELDS

    def test_idempotent(self, decoder, secure_payload):
        for payload in (SCENARIO_XML, SCENARIO_PIPE, secure_payload, "junk", "1|2"):
            assert decoder.decode(payload) == decoder.decode(payload)

    def test_module_level_decode_uses_shared_decoder(self):
        assert get_decoder() is get_decoder()
        assert decode(SCENARIO_PIPE) == IdentityQRDecoder().decode(SCENARIO_PIPE)


class TestEkyc:

    def test_secure_text(self, decoder, ekyc_text):
        record = decoder.decode_ekyc_text(ekyc_text)
        assert isinstance(record, IdentityRecord)
        assert record.name == "Sunita Devi"
        assert record.date_of_birth == "1986-01-01"
        assert record.gender is Gender.FEMALE
        assert record.national_id_number == "xxxxxxxx1869"
        assert record.is_masked is True
        assert record.care_of == "W/O Raj Kumar"
        assert record.address.line1 == "House 4, Station Road, Shastri Nagar"
        assert record.address.city == "Jaipur"
        assert record.photo == "data:image/jpeg;base64,aGVsbG8="
        assert record.source_format is PayloadSource.EKYC_TEXT

    def test_secure_text_with_too_few_parts(self, decoder):
        outcome = decoder.decode_ekyc_text("a~b")
        assert isinstance(outcome, DecodeFailure)
        assert outcome.reason is FailureReason.TOO_FEW_FIELDS

    def test_undecodable_parts_are_skipped(self, decoder):
        text = build_ekyc_text([("ResidentName", "Asha"), ("Dob", "02-03-1999")]) + "~!!!~@@@"
        record = decoder.decode_ekyc_text(text)
        assert record.name == "Asha"
        assert record.date_of_birth == "1999-03-02"

    def _zip(self, name, content):
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as archive:
            archive.writestr("readme/", "")
            archive.writestr(name, content)
        buffer.seek(0)
        return buffer

    def test_zip_with_xml(self, decoder):
        archive = self._zip("offline.xml", SCENARIO_XML)
        record = decoder.decode_offline_zip(archive)
        assert isinstance(record, IdentityRecord)
        assert record.name == "Ravi Kumar"
        assert record.source_format is PayloadSource.OFFLINE_ZIP

    def test_zip_with_secure_text(self, decoder, ekyc_text):
        record = decoder.decode_offline_zip(self._zip("kyc.txt", ekyc_text))
        assert isinstance(record, IdentityRecord)
        assert record.name == "Sunita Devi"

    def test_not_a_zip(self, decoder):
        outcome = decoder.decode_offline_zip(io.BytesIO(b"definitely not a zip"))
        assert isinstance(outcome, DecodeFailure)
        assert outcome.reason is FailureReason.UNREADABLE_ARCHIVE

    def test_zip_without_document(self, decoder):
        outcome = decoder.decode_offline_zip(self._zip("notes.txt", "nothing useful"))
        assert isinstance(outcome, DecodeFailure)
        assert outcome.reason is FailureReason.UNREADABLE_ARCHIVE

    def test_zip_with_byte_order_mark(self, decoder):
        archive = self._zip("offline.xml", b"\xef\xbb\xbf" + SCENARIO_XML.encode("utf-8"))
        record = decoder.decode_offline_zip(archive)
        assert isinstance(record, IdentityRecord)
        assert record.name == "Ravi Kumar"

    def test_zip_skips_binary_members(self, decoder):
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as archive:
            archive.writestr("photo.jpg", b"\xff\xd8\x00~\x01~\x02~\x03\xff\xd9")
            archive.writestr("offline.xml", SCENARIO_XML)
        buffer.seek(0)
        record = decoder.decode_offline_zip(buffer)
        assert isinstance(record, IdentityRecord)
        assert record.name == "Ravi Kumar"
        assert record.national_id_number == "123456789012"
