"""HTTP transport used to send signed requests."""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

import requests

from paapi.errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30  # seconds


@dataclass
class TransportResponse:
    """Raw HTTP exchange result."""

    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""


class Transport(ABC):
    """Abstract base class for objects that POST bytes and return the raw response."""

    @abstractmethod
    def post(self, url: str, headers: Mapping[str, str], body: bytes) -> TransportResponse:
        """
        Send one request body.

        Args:
            url: Absolute endpoint URL
            headers: Wire headers, sent as given
            body: Exact bytes to send

        Returns:
            TransportResponse: Status, headers and body of any HTTP answer

        Raises:
            TransportError: If the exchange itself fails
        """
        pass


class RequestsTransport(Transport):
    """Transport backed by a requests session."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, session: Optional[requests.Session] = None):
        """
        Initialize transport.

        Args:
            timeout: Request timeout in seconds
            session: Session to reuse (a new one is created if omitted)
        """
        self.timeout = timeout
        self.session = session or requests.Session()

    def post(self, url: str, headers: Mapping[str, str], body: bytes) -> TransportResponse:
        """
        POST the body exactly as given.

        Any status code is returned; only failures of the exchange raise.

        Raises:
            TransportError: Connection, TLS or timeout failure
        """
        try:
            response = self.session.post(
                url,
                data=body,
                headers=dict(headers),
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise TransportError(f"POST {url} failed: {e}") from e

        logger.debug(f"POST {url} -> {response.status_code}")
        return TransportResponse(
            status=response.status_code,
            headers=dict(response.headers),
            body=response.content,
        )
