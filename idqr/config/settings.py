# Secure QR binary layout
SECURE_QR_HEADER_LENGTH = 256  # signature region skipped before field data
SECURE_QR_DELIMITER = 255
SECURE_QR_MAX_FIELDS = 16  # photo blob starts after this many fields
SECURE_QR_MIN_FIELDS = 5
DEFAULT_SECURE_QR_VERSION = "V2"

# Text encoding of Secure QR fields (one byte per character)
SECURE_QR_TEXT_ENCODING = "iso-8859-1"

INFLATE_CHUNK_SIZE = 4096  # compressed bytes fed to the decompressor per step
DIGIT_CHUNK_SIZE = 1000  # decimal digits converted per step

# Offline eKYC secure text
EKYC_SEPARATOR = "~"
EKYC_MIN_PARTS = 5

MASK_CHARACTERS = "Xx*"
NATIONAL_ID_LENGTH = 12
ADULT_AGE = 18
