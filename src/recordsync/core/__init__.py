"""
Core models, configuration and record helpers for recordsync.
"""

from .exceptions import (
    RecordSyncError,
    ConfigurationError,
    APIError,
    TransportError,
    ChangeFetchError,
    BatchProtocolError,
)
from .records import clean_record, RECORD_FIELDS_TO_CLEAN

__all__ = [
    "RecordSyncError",
    "ConfigurationError",
    "APIError",
    "TransportError",
    "ChangeFetchError",
    "BatchProtocolError",
    "clean_record",
    "RECORD_FIELDS_TO_CLEAN",
]
