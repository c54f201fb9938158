"""
Request Dispatcher - Builds, signs and sends one operation call

Steps:
1. Build the canonical body for the operation
2. Serialize it once; those bytes are signed and sent unchanged
3. Resolve the marketplace endpoint and region
4. Sign and assemble the wire headers
5. POST through the transport and wrap the raw response
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from paapi.api.marketplaces import MarketplaceRegistry, default_registry
from paapi.api.response import Response
from paapi.api.transport import RequestsTransport, Transport
from paapi.builder.operations import SERVICE, Operation
from paapi.builder.params import OperationRequest
from paapi.builder.payload_builder import PayloadBuilder, serialize
from paapi.schema.models import ClientConfig, Credentials
from paapi.signing.signer import RequestSigner

logger = logging.getLogger(__name__)

CONTENT_TYPE = "application/json; charset=UTF-8"
CONTENT_ENCODING = "amz-1.0"


@dataclass
class PreparedRequest:
    """A signed request ready to be sent."""

    operation: Operation
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    config: Optional[ClientConfig] = None


class RequestDispatcher:
    """Orchestrates payload building, signing and transport for one call."""

    def __init__(
        self,
        transport: Optional[Transport] = None,
        signer: Optional[RequestSigner] = None,
        registry: Optional[MarketplaceRegistry] = None,
        builder: Optional[PayloadBuilder] = None,
    ):
        self.transport = transport or RequestsTransport()
        self.signer = signer or RequestSigner()
        self.registry = registry or default_registry
        self.builder = builder or PayloadBuilder(self.registry)

    def prepare(
        self,
        request: OperationRequest,
        config: ClientConfig,
        credentials: Credentials,
    ) -> PreparedRequest:
        """
        Build and sign a request without sending it.

        Raises:
            InvalidRequest: Parameters cannot produce a body
            UnknownMarketplace: Marketplace code has no record
            SigningError: Credentials or endpoint unusable
        """
        operation = request.OPERATION
        effective = self.builder.resolve_config(request, config)
        marketplace = self.registry.lookup(effective.marketplace)

        body = serialize(self.builder.build(request, effective, marketplace))
        url = marketplace.endpoint(operation)

        headers = {
            "X-Amz-Target": operation.target,
            "Content-Encoding": CONTENT_ENCODING,
        }
        signed = self.signer.sign(
            "POST",
            url,
            {**headers, "Host": marketplace.host},
            body,
            credentials,
            marketplace.region,
            service=SERVICE,
        )

        headers["Content-Type"] = CONTENT_TYPE
        headers.update(signed.as_headers())
        headers["Host"] = marketplace.host

        return PreparedRequest(
            operation=operation,
            url=url,
            headers=headers,
            body=body,
            config=effective,
        )

    def execute(
        self,
        request: OperationRequest,
        config: ClientConfig,
        credentials: Credentials,
    ) -> Response:
        """
        Send one operation call.

        Non-success statuses are returned in the Response, not raised.

        Raises:
            TransportError: Propagated unchanged from the transport
        """
        return self.send(self.prepare(request, config, credentials))

    def send(self, prepared: PreparedRequest) -> Response:
        """Send a prepared request exactly once and wrap the raw response."""
        logger.info(f"{prepared.operation.value} -> {prepared.url}")

        raw = self.transport.post(prepared.url, prepared.headers, prepared.body)

        return Response(
            operation=prepared.operation,
            status=raw.status,
            headers=dict(raw.headers),
            body=raw.body,
            config=prepared.config,
        )
