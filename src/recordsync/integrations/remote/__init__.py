"""
Client for the remote records API.
"""

from .client import RemoteRecordsClient, create_client_from_env, DEFAULT_REQUEST_HEADERS
from .endpoints import Endpoints, parse_remote
from .transport import RequestsTransport

__all__ = [
    "RemoteRecordsClient",
    "create_client_from_env",
    "DEFAULT_REQUEST_HEADERS",
    "Endpoints",
    "parse_remote",
    "RequestsTransport",
]
