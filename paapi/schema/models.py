"""Models for account credentials and per-client configuration."""
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Optional, Tuple

DEFAULT_PARTNER_TYPE = "Associates"
DEFAULT_MARKETPLACE = "us"


@dataclass(frozen=True)
class Credentials:
    """Access key pair used to sign requests."""

    access_key: str
    secret_key: str = field(repr=False)


@dataclass(frozen=True)
class ClientConfig:
    """Account-level defaults merged into every request body."""

    partner_tag: str
    partner_type: str = DEFAULT_PARTNER_TYPE
    marketplace: str = DEFAULT_MARKETPLACE
    resources: Tuple[str, ...] = ()

    def __post_init__(self):
        # Accept any iterable of selectors but store an immutable tuple
        if isinstance(self.resources, str):
            object.__setattr__(self, "resources", (self.resources,))
        else:
            object.__setattr__(self, "resources", tuple(self.resources))

    def with_overrides(
        self,
        resources: Optional[Iterable[str]] = None,
        marketplace: Optional[str] = None,
    ) -> "ClientConfig":
        """
        Return the configuration to use for a call.

        Supplied values replace the current ones; omitted values are kept.
        """
        changes: Dict[str, Any] = {}
        if resources is not None:
            changes["resources"] = resources
        if marketplace is not None:
            changes["marketplace"] = marketplace

        if not changes:
            return self
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "partner_tag": self.partner_tag,
            "partner_type": self.partner_type,
            "marketplace": self.marketplace,
            "resources": list(self.resources),
        }
