"""
recordsync: pull and push records against a remote collections API.
"""

from .core.exceptions import (
    RecordSyncError,
    ConfigurationError,
    APIError,
    TransportError,
    ChangeFetchError,
    BatchProtocolError,
)
from .core.models import (
    EndpointOptions,
    FetchOptions,
    BatchOptions,
    ChangeSet,
    BatchResult,
    Conflict,
    BatchItemError,
)
from .core.records import clean_record
from .integrations.remote.client import RemoteRecordsClient, create_client_from_env
from .integrations.remote.transport import RequestsTransport
from .version import __version__

__all__ = [
    "RemoteRecordsClient",
    "create_client_from_env",
    "RequestsTransport",
    "clean_record",
    "EndpointOptions",
    "FetchOptions",
    "BatchOptions",
    "ChangeSet",
    "BatchResult",
    "Conflict",
    "BatchItemError",
    "RecordSyncError",
    "ConfigurationError",
    "APIError",
    "TransportError",
    "ChangeFetchError",
    "BatchProtocolError",
    "__version__",
]
