import base64
import gzip
import json

from idqr.codec import bytes_to_digits

HEADER = bytes(range(256))

SAMPLE_FIELDS = [
    "V2",
    "3",
    "123420190101120000",
    "ravi kumar",
    "15-08-1990",
    "M",
    "S/O Ramesh Kumar",
    "Mysuru",
    "Near Temple",
    "12",
    "MG Road",
    "570001",
    "Karnataka",
    "Mysuru City",
    "xxxxxxxx9012",
    "Chamundipuram",
]


def build_secure_buffer(fields, header=HEADER, photo=b""):
    body = b"".join(field.encode("iso-8859-1") + b"\xff" for field in fields)
    return header + body + photo


def build_secure_payload(fields, header=HEADER, photo=b""):
    """Digit string of a gzip-compressed Secure QR buffer"""
    return bytes_to_digits(gzip.compress(build_secure_buffer(fields, header, photo)))


def ekyc_part(key, value):
    encoded = base64.urlsafe_b64encode(json.dumps(["1", key, value]).encode("utf-8"))
    return encoded.decode("ascii").rstrip("=")


def build_ekyc_text(entries):
    return "~".join(["header"] + [ekyc_part(key, value) for key, value in entries])
