"""Project-wide constants (reserved ID range, on-disk names, format versions)."""

RESERVED_ID_LIMIT: int = 256  # IDs below this value are special
MAX_FILE_ID: int = 2**64 - 1

FIRST_FILE_ID: int = RESERVED_ID_LIMIT

STATE_FILE_NAME: str = "tbf.dat"
DATA_EXTENSION: str = "dat"
TAG_EXTENSION: str = "tag"
FILE_ID_HEX_WIDTH: int = 16

TAG_FORMAT_VERSION: int = 1
MAX_FIELD_LENGTH: int = 2**32 - 1
