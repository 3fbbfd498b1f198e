from .ekyc import EkycExtractor, extract_ekyc_text, read_offline_zip
from .pipe_qr import PipeQRExtractor, extract_pipe
from .secure_qr import SecureQRExtractor, extract_secure_qr, map_secure_qr_fields, select_field_table
from .xml_qr import XmlQRExtractor, extract_xml

__all__ = [
    "EkycExtractor",
    "PipeQRExtractor",
    "SecureQRExtractor",
    "XmlQRExtractor",
    "extract_ekyc_text",
    "extract_pipe",
    "extract_secure_qr",
    "extract_xml",
    "map_secure_qr_fields",
    "read_offline_zip",
    "select_field_table",
]
