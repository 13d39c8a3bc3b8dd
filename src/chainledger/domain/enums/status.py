from enum import Enum


class ImportStatus(str, Enum):
    """Whether a converted file has been uploaded to CoinTracking yet."""

    PENDING = "pending"
    IMPORTED = "imported"
