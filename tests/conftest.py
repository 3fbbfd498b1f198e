import pytest

from tests.helpers import SAMPLE_FIELDS, build_ekyc_text, build_secure_payload


@pytest.fixture
def secure_payload():
    return build_secure_payload(SAMPLE_FIELDS)


@pytest.fixture
def ekyc_text():
    return build_ekyc_text([
        ("ResidentName", "SUNITA DEVI"),
        ("Dob", "01/01/1986"),
        ("Gender", "F"),
        ("Uid", "xxxxxxxx1869"),
        ("CareOf", "W/O Raj Kumar"),
        ("Building", "House 4"),
        ("Street", "Station Road"),
        ("Locality", "Shastri Nagar"),
        ("Vtc", "Jaipur"),
        ("District", "Jaipur"),
        ("State", "Rajasthan"),
        ("Pincode", "302019"),
        ("ResidentImage", "aGVsbG8="),
    ])
