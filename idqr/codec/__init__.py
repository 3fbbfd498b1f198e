from .bigint import bytes_to_digits, digits_to_bytes
from .inflate import inflate
from .splitter import split_fields, tail_offset

__all__ = ["bytes_to_digits", "digits_to_bytes", "inflate", "split_fields", "tail_offset"]
