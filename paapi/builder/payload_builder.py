"""
Payload Builder - Assembles Product Advertising API request bodies

Integrates:
- FieldBuilder: Field-level construction and omission of unset fields
- TransformerRegistry: Identifier normalization
- ClientConfig: Account-level defaults (partner tag/type, marketplace, resources)
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from paapi.api.marketplaces import Marketplace, MarketplaceRegistry, default_registry
from paapi.builder.field_builder import FieldBuilder, FieldMapping
from paapi.builder.operations import Operation
from paapi.builder.params import OperationRequest
from paapi.errors import InvalidRequest
from paapi.schema.models import ClientConfig

logger = logging.getLogger(__name__)

CanonicalBody = Dict[str, Any]

# Resource selectors used by GetBrowseNodes when the caller names none
BROWSE_NODE_RESOURCES = ("BrowseNodes.Ancestor", "BrowseNodes.Children")


@dataclass(frozen=True)
class PayloadConfig:
    """Field layout of one operation's request body"""
    operation: Operation
    mappings: Tuple[FieldMapping, ...]
    default_resources: Optional[Tuple[str, ...]] = None


_CONDITION = FieldMapping("condition", "Condition")
_CURRENCY = FieldMapping("currency_of_preference", "CurrencyOfPreference")
_LANGUAGES = FieldMapping("languages_of_preference", "LanguagesOfPreference", "LIST")
_OFFER_COUNT = FieldMapping("offer_count", "OfferCount")

PAYLOAD_CONFIGS: Dict[Operation, PayloadConfig] = {
    Operation.GET_BROWSE_NODES: PayloadConfig(
        operation=Operation.GET_BROWSE_NODES,
        mappings=(
            FieldMapping("browse_node_ids", "BrowseNodeIds", "ID_LIST", required=True),
            _LANGUAGES,
        ),
        default_resources=BROWSE_NODE_RESOURCES,
    ),
    Operation.GET_ITEMS: PayloadConfig(
        operation=Operation.GET_ITEMS,
        mappings=(
            FieldMapping("item_ids", "ItemIds", "ID_LIST", required=True),
            _CONDITION,
            _CURRENCY,
            _LANGUAGES,
            _OFFER_COUNT,
        ),
    ),
    Operation.GET_VARIATIONS: PayloadConfig(
        operation=Operation.GET_VARIATIONS,
        mappings=(
            FieldMapping("asin", "ASIN", "ASIN", required=True),
            _CONDITION,
            _CURRENCY,
            _LANGUAGES,
            _OFFER_COUNT,
            FieldMapping("variation_count", "VariationCount"),
            FieldMapping("variation_page", "VariationPage"),
        ),
    ),
}

_missing = set(Operation) - set(PAYLOAD_CONFIGS)
if _missing:
    raise RuntimeError(f"No payload layout for: {sorted(op.value for op in _missing)}")


class PayloadBuilder:
    """
    Builds request bodies for the supported operations

    Usage:
    ```python
    config = ClientConfig(partner_tag="tag-01", resources=["ItemInfo.Title"])
    body = PayloadBuilder().build(ItemsRequest(item_ids="B000123456"), config)
    # Returns: {"ItemIds": ["B000123456"], "PartnerTag": "tag-01", ...}
    ```
    """

    def __init__(
        self,
        registry: Optional[MarketplaceRegistry] = None,
        field_builder: Optional[FieldBuilder] = None,
    ):
        """
        Initialize PayloadBuilder

        Args:
            registry: Marketplace registry used to resolve the site identifier
            field_builder: Field builder (a default one is created if omitted)
        """
        self.registry = registry or default_registry
        self.field_builder = field_builder or FieldBuilder()

    def build(
        self,
        request: OperationRequest,
        config: ClientConfig,
        marketplace: Optional[Marketplace] = None,
    ) -> CanonicalBody:
        """
        Build the body of one request

        Resources and marketplace given on the request take precedence over
        the configuration; optional fields left unset are omitted entirely.

        Args:
            request: Operation parameters
            config: Account-level defaults
            marketplace: Resolved marketplace (looked up from config if omitted)

        Returns:
            Ordered body: operation fields first, then the account defaults

        Raises:
            InvalidRequest: Missing required identifier or partner tag
            UnknownMarketplace: If the marketplace code has no record
        """
        layout = PAYLOAD_CONFIGS[request.OPERATION]
        effective = self.resolve_config(request, config)
        if marketplace is None:
            marketplace = self.registry.lookup(effective.marketplace)

        source_data = request.to_dict()
        payload: CanonicalBody = {}

        for mapping in layout.mappings:
            target, value = self.field_builder.build_field(mapping, source_data)
            if value is not None:
                payload[target] = value

        payload.update(self._default_fields(layout, request, effective, marketplace))

        logger.debug(f"Built {layout.operation.value} payload with fields: {list(payload)}")
        return payload

    @staticmethod
    def resolve_config(request: OperationRequest, config: ClientConfig) -> ClientConfig:
        """Configuration after applying the request's own overrides."""
        return config.with_overrides(
            resources=request.resources,
            marketplace=request.marketplace,
        )

    def _default_fields(
        self,
        layout: PayloadConfig,
        request: OperationRequest,
        config: ClientConfig,
        marketplace: Marketplace,
    ) -> CanonicalBody:
        if not config.partner_tag or not config.partner_tag.strip():
            raise InvalidRequest("partner_tag is required")

        defaults: CanonicalBody = {
            "PartnerTag": config.partner_tag,
            "PartnerType": config.partner_type,
            "Marketplace": marketplace.site,
        }

        resources = self._resources(layout, request, config)
        if resources:
            defaults["Resources"] = resources

        return defaults

    @staticmethod
    def _resources(
        layout: PayloadConfig,
        request: OperationRequest,
        config: ClientConfig,
    ) -> List[str]:
        if request.resources is None and layout.default_resources is not None:
            return list(layout.default_resources)
        return list(config.resources)


def serialize(body: CanonicalBody) -> bytes:
    """Encode a body as compact UTF-8 JSON; the result is what gets signed."""
    return json.dumps(body, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
