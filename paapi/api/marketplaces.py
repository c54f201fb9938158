"""Map marketplace codes to Product Advertising API hosts and regions."""
from dataclasses import dataclass
from difflib import SequenceMatcher
from typing import Dict, List, Optional

from paapi.errors import UnknownMarketplace


@dataclass(frozen=True)
class Marketplace:
    """A regional Product Advertising API endpoint."""

    code: str
    host: str
    region: str

    @property
    def site(self) -> str:
        """Storefront domain sent as the Marketplace body field."""
        return self.host.replace("webservices", "www", 1)

    def endpoint(self, operation) -> str:
        """URL of an operation on this marketplace, e.g. .../paapi5/getitems."""
        name = getattr(operation, "value", operation)
        return f"https://{self.host}/paapi5/{str(name).lower()}"


class MarketplaceRegistry:
    """Looks up marketplaces by their two-letter code."""

    # Code -> (host, region)
    MARKETPLACES = {
        'ae': ('webservices.amazon.ae', 'eu-west-1'),
        'au': ('webservices.amazon.com.au', 'us-west-2'),
        'be': ('webservices.amazon.com.be', 'eu-west-1'),
        'br': ('webservices.amazon.com.br', 'us-east-1'),
        'ca': ('webservices.amazon.ca', 'us-east-1'),
        'de': ('webservices.amazon.de', 'eu-west-1'),
        'eg': ('webservices.amazon.eg', 'eu-west-1'),
        'es': ('webservices.amazon.es', 'eu-west-1'),
        'fr': ('webservices.amazon.fr', 'eu-west-1'),
        'gb': ('webservices.amazon.co.uk', 'eu-west-1'),
        'in': ('webservices.amazon.in', 'eu-west-1'),
        'it': ('webservices.amazon.it', 'eu-west-1'),
        'jp': ('webservices.amazon.co.jp', 'us-west-2'),
        'mx': ('webservices.amazon.com.mx', 'us-east-1'),
        'nl': ('webservices.amazon.nl', 'eu-west-1'),
        'pl': ('webservices.amazon.pl', 'eu-west-1'),
        'sa': ('webservices.amazon.sa', 'eu-west-1'),
        'se': ('webservices.amazon.se', 'eu-west-1'),
        'sg': ('webservices.amazon.sg', 'us-west-2'),
        'tr': ('webservices.amazon.com.tr', 'eu-west-1'),
        'us': ('webservices.amazon.com', 'us-east-1'),
    }

    # Alternative spellings accepted by lookup()
    ALIASES = {
        'uk': 'gb',
    }

    def __init__(self, marketplaces: Optional[Dict[str, tuple]] = None):
        """
        Initialize registry.

        Args:
            marketplaces: Optional {code: (host, region)} table replacing the
                built-in one.
        """
        table = marketplaces if marketplaces is not None else self.MARKETPLACES
        self._records: Dict[str, Marketplace] = {
            code: Marketplace(code=code, host=host, region=region)
            for code, (host, region) in table.items()
        }

    def lookup(self, code: str) -> Marketplace:
        """
        Get the marketplace for a code.

        Matching is case-insensitive and accepts aliases such as "uk".

        Raises:
            UnknownMarketplace: If the code has no record.
        """
        key = self._normalize(code)
        key = self.ALIASES.get(key, key)

        if key in self._records:
            return self._records[key]

        raise UnknownMarketplace(code, suggestions=self.suggest(code))

    def __contains__(self, code) -> bool:
        key = self._normalize(code)
        return self.ALIASES.get(key, key) in self._records

    def codes(self) -> List[str]:
        """Sorted list of supported codes."""
        return sorted(self._records)

    def all(self) -> List[Marketplace]:
        """All marketplaces sorted by code."""
        return [self._records[code] for code in self.codes()]

    def suggest(self, code: str, limit: int = 3) -> List[str]:
        """
        Suggest known codes that look like an unknown one.

        Args:
            code: Code that failed to match
            limit: Maximum number of suggestions

        Returns:
            list: Codes sorted by similarity
        """
        key = self._normalize(code)
        if not key:
            return []

        suggestions = []
        for candidate, record in self._records.items():
            score = max(
                SequenceMatcher(None, key, candidate).ratio(),
                SequenceMatcher(None, key, record.site).ratio(),
            )
            if score >= 0.5:
                suggestions.append((candidate, score))

        suggestions.sort(key=lambda x: x[1], reverse=True)
        return [candidate for candidate, _ in suggestions[:limit]]

    @staticmethod
    def _normalize(code) -> str:
        if code is None:
            return ""
        return str(code).lower().strip()


# Shared registry built from the static table
default_registry = MarketplaceRegistry()
