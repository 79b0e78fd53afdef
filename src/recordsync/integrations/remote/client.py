"""Client for pulling and pushing records against a remote records API."""

import logging
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from ...core.config import REMOTE_URL_ENV, get_required_env, get_timeout_env
from ...core.exceptions import BatchProtocolError, ChangeFetchError, ConfigurationError
from ...core.models import (
    BatchDefaults,
    BatchItemError,
    BatchOptions,
    BatchRequest,
    BatchRequestItem,
    BatchResult,
    ChangeSet,
    Checkpoint,
    Conflict,
    EndpointOptions,
    FetchOptions,
)
from ...core.records import clean_record, is_deletion
from .endpoints import Endpoints, parse_remote
from .transport import RequestsTransport

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}

OptionsT = TypeVar("OptionsT", bound=BaseModel)

# (url, method=..., headers=..., body=...) -> response
Transport = Callable[..., Any]


def _coerce_options(model: Type[OptionsT], options: Union[OptionsT, Dict[str, Any], None]) -> OptionsT:
    """Turn a dict (or nothing) into an options model, rejecting unknown keys."""
    if options is None:
        return model()
    if isinstance(options, model):
        return options
    try:
        return model.model_validate(options)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid {model.__name__}: {e}") from e


class RemoteRecordsClient:
    """Synchronizes local records with a remote collection API.

    Both ``fetch_changes_since`` and ``batch`` make exactly one round trip
    through the transport and keep no state between calls.
    """

    def __init__(self, remote: str, transport: Optional[Transport] = None, timeout: float = 30.0):
        """Initialize the client.

        Args:
            remote: Server URL ending with the API version, e.g. https://host/v1
            transport: Callable used to send requests; defaults to a
                RequestsTransport owned by this client
            timeout: Request timeout for the default transport

        Raises:
            ConfigurationError: If the remote URL is missing its version
        """
        self.remote, self.version = parse_remote(remote)
        self._owns_transport = transport is None
        self.transport = transport if transport is not None else RequestsTransport(timeout=timeout)
        logger.info(f"Initialized records client for {self.remote} (API {self.version})")

    def endpoints(self, options: Union[EndpointOptions, Dict[str, Any], None] = None) -> Endpoints:
        """Retrieve the server endpoints.

        Args:
            options: EndpointOptions or dict; ``full_url`` (default True)
                selects absolute URLs over root-relative paths
        """
        opts = _coerce_options(EndpointOptions, options)
        return Endpoints(self.remote, self.version, full_url=opts.full_url)

    def fetch_changes_since(self, collection_name: str, last_modified: Optional[Checkpoint] = None,
                            options: Union[FetchOptions, Dict[str, Any], None] = None) -> ChangeSet:
        """Fetch the records changed on the server since a checkpoint.

        Args:
            collection_name: The collection name
            last_modified: Latest sync checkpoint, or None for a full fetch
            options: FetchOptions or dict; ``headers`` override the defaults

        Returns:
            ChangeSet with the new checkpoint and the changed records,
            tombstones included

        Raises:
            ChangeFetchError: If the server answers with HTTP 400 or above
        """
        opts = _coerce_options(FetchOptions, options)
        query_string = "?" + (f"_since={last_modified}" if last_modified else "")
        url = self.endpoints().collection(collection_name) + query_string
        headers = {
            **DEFAULT_REQUEST_HEADERS,
            "If-Modified-Since": str(last_modified) if last_modified else "0",
            **opts.headers,
        }

        logger.debug(f"Fetching changes for {collection_name} since {last_modified}")
        response = self.transport(url, method="GET", headers=headers)
        status = response.status_code

        # If HTTP 304, nothing has changed
        if status == 304:
            logger.info(f"No changes in {collection_name} since {last_modified}")
            return ChangeSet(last_modified=last_modified, changes=[])
        if status >= 400:
            logger.error(f"Fetching changes for {collection_name} failed: HTTP {status}")
            raise ChangeFetchError(f"Fetching changes failed: HTTP {status}", status_code=status)

        new_last_modified = response.headers.get("Last-Modified")
        data = response.json()
        changes = data.get("items") or []
        logger.info(f"Fetched {len(changes)} changes for {collection_name}, checkpoint {new_last_modified}")
        return ChangeSet(last_modified=new_last_modified, changes=changes)

    def build_batch_request(self, collection_name: str, records: List[Dict[str, Any]],
                            headers: Optional[Dict[str, str]] = None, safe: bool = True) -> BatchRequest:
        """Build the batch body for a list of local records, in input order.

        Raises:
            ConfigurationError: If the shared headers or a record cannot be
                turned into a valid sub-request
        """
        endpoints = self.endpoints(EndpointOptions(full_url=False))
        try:
            items = []
            for record in records:
                deletion = is_deletion(record)
                item_headers = {}
                if safe:
                    item_headers["If-Unmodified-Since"] = str(record.get("last_modified") or "0")
                items.append(BatchRequestItem(
                    method="DELETE" if deletion else "PUT",
                    path=endpoints.record(collection_name, record.get("id")),
                    headers=item_headers,
                    body=None if deletion else clean_record(record),
                ))
            return BatchRequest(defaults=BatchDefaults(headers=headers or {}), requests=items)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid batch request for {collection_name}: {e}") from e

    def batch(self, collection_name: str, records: List[Dict[str, Any]],
              headers: Optional[Dict[str, str]] = None,
              options: Union[BatchOptions, Dict[str, Any], None] = None) -> BatchResult:
        """Send local record updates to the server in a single batch request.

        Responses are matched to records by position: the server answers in
        the order the sub-requests were sent.

        Args:
            collection_name: The collection name
            records: Local records; ``_status == "deleted"`` marks deletions
            headers: Headers the server applies to every sub-request
            options: BatchOptions or dict; ``safe`` (default True) makes every
                write conditional on the record's ``last_modified``

        Returns:
            BatchResult with published, conflicts, skipped and errors buckets

        Raises:
            BatchProtocolError: If the server rejects the batch as a whole
        """
        opts = _coerce_options(BatchOptions, options)
        if not records:
            return BatchResult()

        request = self.build_batch_request(collection_name, records, headers, safe=opts.safe)
        logger.debug(f"Sending batch of {len(request.requests)} requests for {collection_name}")
        response = self.transport(
            self.endpoints().batch(),
            method="POST",
            headers=dict(DEFAULT_REQUEST_HEADERS),
            body=request.to_payload(),
        )
        data = response.json()

        if data.get("error"):
            details = {key: value for key, value in data.items() if key != "message"}
            logger.error(f"Batch for {collection_name} rejected: {data.get('message')}")
            raise BatchProtocolError(f"BATCH request failed: {data.get('message')}", details=details)

        responses = data.get("responses") or []
        if len(responses) != len(request.requests):
            raise BatchProtocolError(
                f"BATCH response count mismatch: sent {len(request.requests)}, got {len(responses)}",
                details={"responses": responses},
            )

        result = self._classify_responses(responses)
        logger.info(f"Batch for {collection_name} done: {result.get_summary()}")
        return result

    def _classify_responses(self, responses: List[Dict[str, Any]]) -> BatchResult:
        """Sort sub-responses into outcome buckets by HTTP status."""
        published: List[Any] = []
        conflicts: List[Conflict] = []
        skipped: List[Any] = []
        errors: List[BatchItemError] = []

        for response in responses:
            status = response.get("status")
            body = response.get("body")
            # TODO: give 409 (unicity rule violated) its own bucket instead of errors
            if status and 200 <= status < 400:
                published.append(body)
            elif status == 404:
                skipped.append(body)
            elif status == 412:
                conflicts.append(Conflict(type="outgoing", data=body))
            else:
                # Only the server path identifies the record here
                logger.warning(f"Batch item {response.get('path')} failed with HTTP {status}")
                errors.append(BatchItemError(path=response.get("path"), error=body))

        return BatchResult(published=published, conflicts=conflicts, skipped=skipped, errors=errors)

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            self.transport.close()

    def __enter__(self) -> "RemoteRecordsClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def create_client_from_env() -> RemoteRecordsClient:
    """Create a records client using environment variables.

    Returns:
        Configured RemoteRecordsClient instance

    Raises:
        ConfigurationError: If RECORDSYNC_REMOTE_URL is missing or invalid
    """
    remote = get_required_env(REMOTE_URL_ENV)
    return RemoteRecordsClient(remote=remote, timeout=get_timeout_env())
