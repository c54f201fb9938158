"""
Product Advertising API 5.0 client.

Builds operation payloads, signs them with AWS Signature Version 4 and sends
them to the configured marketplace.
"""

__version__ = "0.1.0"

from .errors import (
    PaapiError,
    InvalidOperation,
    InvalidRequest,
    UnknownMarketplace,
    SigningError,
    TransportError,
    RemoteError,
)
from .schema.models import ClientConfig, Credentials
from .api.marketplaces import Marketplace, MarketplaceRegistry
from .api.transport import RequestsTransport, Transport, TransportResponse
from .api.response import Response
from .api.dispatcher import PreparedRequest, RequestDispatcher
from .api.client import ProductAdvertisingClient
from .builder import (
    Operation,
    BrowseNodesRequest,
    ItemsRequest,
    VariationsRequest,
    PayloadBuilder,
)
from .signing import RequestSigner, SignedHeaders

__all__ = [
    "PaapiError",
    "InvalidOperation",
    "InvalidRequest",
    "UnknownMarketplace",
    "SigningError",
    "TransportError",
    "RemoteError",
    "ClientConfig",
    "Credentials",
    "Marketplace",
    "MarketplaceRegistry",
    "RequestsTransport",
    "Transport",
    "TransportResponse",
    "Response",
    "PreparedRequest",
    "RequestDispatcher",
    "ProductAdvertisingClient",
    "Operation",
    "BrowseNodesRequest",
    "ItemsRequest",
    "VariationsRequest",
    "PayloadBuilder",
    "RequestSigner",
    "SignedHeaders",
]
