"""Data models for record synchronization."""

from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

# Server-issued sync marker, usually a timestamp string.
Checkpoint = Union[int, str]


class EndpointOptions(BaseModel):
    """Options for building endpoint URLs."""
    model_config = ConfigDict(extra="forbid")

    full_url: bool = Field(True, description="Include the remote host in returned URLs")


class FetchOptions(BaseModel):
    """Options for pulling changes."""
    model_config = ConfigDict(extra="forbid")

    headers: Dict[str, str] = Field(default_factory=dict, description="Headers overriding the defaults")


class BatchOptions(BaseModel):
    """Options for pushing a batch of records."""
    model_config = ConfigDict(extra="forbid")

    safe: bool = Field(True, description="Send If-Unmodified-Since so stale writes are rejected")


class ChangeSet(BaseModel):
    """Changes pulled from the server since a checkpoint."""
    last_modified: Optional[Checkpoint] = None
    changes: List[Dict[str, Any]] = Field(default_factory=list)


class BatchRequestItem(BaseModel):
    """A single sub-request of a batch call."""
    method: Literal["PUT", "DELETE"]
    path: str
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Optional[Dict[str, Any]] = None

    def to_payload(self) -> Dict[str, Any]:
        payload = self.model_dump(exclude={"body"})
        if self.body is not None:
            payload["body"] = self.body
        return payload


class BatchDefaults(BaseModel):
    """Values applied by the server to every sub-request."""
    headers: Dict[str, str] = Field(default_factory=dict)


class BatchRequest(BaseModel):
    """Body of the batch POST."""
    defaults: BatchDefaults = Field(default_factory=BatchDefaults)
    requests: List[BatchRequestItem] = Field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        """JSON payload; deletions carry no ``body`` key at all."""
        return {
            "defaults": self.defaults.model_dump(),
            "requests": [item.to_payload() for item in self.requests],
        }


class Conflict(BaseModel):
    """A write the server refused because the record changed remotely."""
    model_config = ConfigDict(frozen=True)

    type: Literal["outgoing"] = "outgoing"
    data: Any = None


class BatchItemError(BaseModel):
    """A sub-request that failed for any reason other than 404 or 412."""
    model_config = ConfigDict(frozen=True)

    path: Optional[str] = None
    error: Any = None


class BatchResult(BaseModel):
    """Outcome of a batch push, one bucket per kind of server response.

    Buckets are tuples so the returned result cannot be changed.
    """
    model_config = ConfigDict(frozen=True)

    published: Tuple[Any, ...] = ()
    conflicts: Tuple[Conflict, ...] = ()
    skipped: Tuple[Any, ...] = ()
    errors: Tuple[BatchItemError, ...] = ()

    @property
    def ok(self) -> bool:
        """True when nothing conflicted or failed."""
        return not self.conflicts and not self.errors

    def get_summary(self) -> Dict[str, int]:
        """Get bucket counts for logging."""
        return {
            "published": len(self.published),
            "conflicts": len(self.conflicts),
            "skipped": len(self.skipped),
            "errors": len(self.errors),
        }
