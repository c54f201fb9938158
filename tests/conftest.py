"""
Shared pytest fixtures for client tests.
"""

from datetime import datetime, timezone

import pytest

from paapi import ProductAdvertisingClient, RequestSigner
from paapi.api.transport import Transport, TransportResponse
from paapi.schema.models import ClientConfig, Credentials


FIXED_NOW = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


class SpyTransport(Transport):
    """Transport that records every call and answers with a canned response."""

    def __init__(self, response=None, error=None):
        self.calls = []
        self.response = response or TransportResponse(
            status=200,
            headers={"Content-Type": "application/json"},
            body=b'{"ItemsResult": {"Items": []}}',
        )
        self.error = error

    def post(self, url, headers, body):
        self.calls.append({"url": url, "headers": dict(headers), "body": body})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(access_key="AKIDEXAMPLE", secret_key="wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY")


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def signer() -> RequestSigner:
    """Signer whose clock always reads FIXED_NOW."""
    return RequestSigner(clock=lambda: FIXED_NOW)


@pytest.fixture
def client_config() -> ClientConfig:
    return ClientConfig(partner_tag="tag-01", resources=["ItemInfo.Title"])


@pytest.fixture
def spy_transport() -> SpyTransport:
    return SpyTransport()


@pytest.fixture
def client(spy_transport, signer, credentials) -> ProductAdvertisingClient:
    """Client on marketplace "us" that never touches the network."""
    return ProductAdvertisingClient(
        access_key=credentials.access_key,
        secret_key=credentials.secret_key,
        partner_tag="tag-01",
        marketplace="us",
        resources=["ItemInfo.Title"],
        transport=spy_transport,
        signer=signer,
    )
