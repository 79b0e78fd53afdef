"""URL building for the remote records API."""

import re
from typing import Any, Optional, Tuple

from ...core.exceptions import ConfigurationError

VERSION_PATTERN = re.compile(r"/v(\d+)/?$")


def parse_remote(remote: Any) -> Tuple[str, str]:
    """Validate a remote URL and split out its API version.
    
    Args:
        remote: Server URL, which must end with ``/v<digits>`` (optionally
            followed by a slash)
        
    Returns:
        Tuple of (remote without trailing slash, version segment such as "v1")
        
    Raises:
        ConfigurationError: If the URL is empty or carries no version
    """
    if not isinstance(remote, str) or not remote:
        raise ConfigurationError(f"Invalid remote URL: {remote!r}")
    match = VERSION_PATTERN.search(remote)
    if match is None:
        raise ConfigurationError(f"The remote URL must contain the version: {remote}")
    return remote.rstrip("/"), f"v{match.group(1)}"


class Endpoints:
    """Server endpoints, either absolute or relative to the API root."""

    def __init__(self, remote: str, version: str, full_url: bool = True):
        self.remote = remote
        self.version = version
        self.full_url = full_url

    def root(self) -> str:
        return self.remote if self.full_url else f"/{self.version}"

    def batch(self) -> str:
        return f"{self.root()}/batch"

    def collection(self, name: str) -> str:
        return f"{self.root()}/collections/{name}/records"

    def record(self, name: str, record_id: Optional[Any]) -> str:
        return f"{self.collection(name)}/{record_id}"

    def __repr__(self) -> str:
        return f"Endpoints(root={self.root()!r})"
