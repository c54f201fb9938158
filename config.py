"""Application configuration."""
import os
from dataclasses import dataclass, field
from typing import List, Optional


def _split_list(value: Optional[str]) -> List[str]:
    """Parse a comma separated environment value."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def _parse_timeout(value: Optional[str]) -> Optional[float]:
    """Parse a timeout in seconds; None when the value is not a positive number."""
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        return None
    return timeout if timeout > 0 else None


@dataclass
class PaapiApiConfig:
    """Product Advertising API account configuration."""

    access_key: str = ""
    secret_key: str = field(default="", repr=False)
    partner_tag: str = ""
    partner_type: str = "Associates"
    marketplace: str = "us"
    resources: List[str] = field(default_factory=list)
    timeout: float = 30
    invalid: List[str] = field(default_factory=list)

    @classmethod
    def from_env(cls) -> "PaapiApiConfig":
        """Load config from environment variables.

        Malformed values fall back to their defaults and are reported in
        ``invalid`` instead of raising at import time.
        """
        invalid = []
        raw_timeout = os.getenv("PAAPI_TIMEOUT", "30")
        timeout = _parse_timeout(raw_timeout)
        if timeout is None:
            invalid.append(f"PAAPI_TIMEOUT must be a positive number of seconds (got {raw_timeout!r})")
            timeout = 30

        return cls(
            access_key=os.getenv("PAAPI_ACCESS_KEY", ""),
            secret_key=os.getenv("PAAPI_SECRET_KEY", ""),
            partner_tag=os.getenv("PAAPI_PARTNER_TAG", ""),
            partner_type=os.getenv("PAAPI_PARTNER_TYPE", "Associates"),
            marketplace=os.getenv("PAAPI_MARKETPLACE", "us"),
            resources=_split_list(os.getenv("PAAPI_RESOURCES")),
            timeout=timeout,
            invalid=invalid,
        )

    def missing(self) -> List[str]:
        """Names of required settings that are empty."""
        required = {
            "PAAPI_ACCESS_KEY": self.access_key,
            "PAAPI_SECRET_KEY": self.secret_key,
            "PAAPI_PARTNER_TAG": self.partner_tag,
        }
        return [name for name, value in required.items() if not value]


@dataclass
class AppConfig:
    """Application configuration."""

    log_level: str = "WARNING"
    paapi: PaapiApiConfig = None

    def __post_init__(self):
        """Initialize default values."""
        if self.paapi is None:
            self.paapi = PaapiApiConfig.from_env()

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load config from environment variables."""
        return cls(
            log_level=os.getenv("PAAPI_LOG_LEVEL", "WARNING").upper(),
            paapi=PaapiApiConfig.from_env(),
        )


# Global instance
app_config = AppConfig.from_env()
