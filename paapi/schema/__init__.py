"""Account and credential models shared across the client."""

from .models import ClientConfig, Credentials, DEFAULT_PARTNER_TYPE, DEFAULT_MARKETPLACE

__all__ = [
    "ClientConfig",
    "Credentials",
    "DEFAULT_PARTNER_TYPE",
    "DEFAULT_MARKETPLACE",
]
