"""HTTP-facing pieces: marketplaces, transport, dispatcher and client."""

from .marketplaces import Marketplace, MarketplaceRegistry, default_registry
from .transport import RequestsTransport, Transport, TransportResponse

__all__ = [
    "Marketplace",
    "MarketplaceRegistry",
    "default_registry",
    "RequestsTransport",
    "Transport",
    "TransportResponse",
]
