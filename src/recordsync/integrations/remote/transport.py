"""Default HTTP transport built on requests."""

import logging
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ...core.exceptions import TransportError
from ...version import __version__

logger = logging.getLogger(__name__)


class RequestsTransport:
    """Sends one HTTP request per call through a shared session.
    
    Any callable with the same signature can stand in for this class; it must
    return an object exposing ``status_code``, ``headers.get()`` and ``json()``.
    """
    
    def __init__(self, timeout: float = 30.0, max_retries: int = 0,
                 user_agent: Optional[str] = None):
        """Initialize the transport.
        
        Args:
            timeout: Per-request timeout in seconds
            max_retries: Connection-level retries done by urllib3. Zero leaves
                retrying to the caller.
            user_agent: User-Agent header value
        """
        self.timeout = timeout
        
        self.session = requests.Session()
        retry_strategy = Retry(
            total=max_retries,
            status_forcelist=[429, 500, 502, 503, 504],
            backoff_factor=1,
            # Hand back the last response once retries run out; callers map the status
            raise_on_status=False
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)
        
        self.session.headers.update({
            'User-Agent': user_agent or f'recordsync/{__version__}'
        })
    
    def __call__(self, url: str, method: str = "GET", headers: Optional[Dict[str, str]] = None,
                 body: Optional[Any] = None) -> requests.Response:
        """Send a request and return the raw response, whatever its status.
        
        Raises:
            TransportError: If no response could be obtained
        """
        try:
            logger.debug(f"Sending {method} request to {url}")
            return self.session.request(
                method,
                url,
                headers=headers,
                json=body,
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"{method} {url} failed: {e}")
            raise TransportError(f"Request failed: {e}") from e
    
    def close(self) -> None:
        self.session.close()
    
    def __enter__(self) -> "RequestsTransport":
        return self
    
    def __exit__(self, *exc_info) -> None:
        self.close()
