"""Product Advertising API client."""
import logging
import threading
from typing import Any, Iterable, Optional

from paapi.api.dispatcher import PreparedRequest, RequestDispatcher
from paapi.api.marketplaces import MarketplaceRegistry
from paapi.api.response import Response
from paapi.api.transport import DEFAULT_TIMEOUT, RequestsTransport, Transport
from paapi.builder.operations import Operation
from paapi.builder.params import (
    BrowseNodesRequest,
    ItemsRequest,
    OperationRequest,
    VariationsRequest,
    request_from_params,
)
from paapi.schema.models import (
    DEFAULT_MARKETPLACE,
    DEFAULT_PARTNER_TYPE,
    ClientConfig,
    Credentials,
)
from paapi.signing.signer import RequestSigner

logger = logging.getLogger(__name__)


class ProductAdvertisingClient:
    """
    Client for the Product Advertising API.

    Resources and marketplace given on a call become the client's current
    values and are reused by later calls that omit them. The current values
    live in an immutable ClientConfig exposed through ``config``.

    Example:
        ```python
        client = ProductAdvertisingClient(
            access_key="AKID",
            secret_key="secret",
            partner_tag="tag-01",
            resources=["ItemInfo.Title"],
        )
        response = client.get_items(item_ids=["B000123456"])
        response.raise_for_status()
        print(response.json())
        ```
    """

    def __init__(
        self,
        access_key: str,
        secret_key: str,
        partner_tag: str,
        marketplace: str = DEFAULT_MARKETPLACE,
        partner_type: str = DEFAULT_PARTNER_TYPE,
        resources: Optional[Iterable[str]] = None,
        transport: Optional[Transport] = None,
        timeout: float = DEFAULT_TIMEOUT,
        registry: Optional[MarketplaceRegistry] = None,
        signer: Optional[RequestSigner] = None,
    ):
        """
        Initialize client.

        Args:
            access_key: Access key id
            secret_key: Secret access key
            partner_tag: Associate tag sent with every request
            marketplace: Marketplace code (default: "us")
            partner_type: Partner type (default: "Associates")
            resources: Resource selectors used when a call names none
            transport: Transport to send requests with (default: requests)
            timeout: Timeout of the default transport in seconds
            registry: Marketplace registry (default: built-in table)
            signer: Request signer (default: wall clock SigV4 signer)
        """
        self._credentials = Credentials(access_key=access_key, secret_key=secret_key)
        self._config = ClientConfig(
            partner_tag=partner_tag,
            partner_type=partner_type,
            marketplace=marketplace,
            resources=resources or (),
        )
        self._lock = threading.Lock()
        self.dispatcher = RequestDispatcher(
            transport=transport or RequestsTransport(timeout=timeout),
            signer=signer,
            registry=registry,
        )

    @classmethod
    def from_config(cls, api_config, **kwargs) -> "ProductAdvertisingClient":
        """Create a client from a PaapiApiConfig (see config.py)."""
        return cls(
            access_key=api_config.access_key,
            secret_key=api_config.secret_key,
            partner_tag=api_config.partner_tag,
            marketplace=api_config.marketplace,
            partner_type=api_config.partner_type,
            resources=api_config.resources,
            timeout=api_config.timeout,
            **kwargs,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(access_key={self._credentials.access_key!r}, config={self.config!r})"

    @property
    def credentials(self) -> Credentials:
        return self._credentials

    @property
    def config(self) -> ClientConfig:
        """Current account defaults."""
        with self._lock:
            return self._config

    @property
    def resources(self) -> tuple:
        """Resource selectors reused by calls that omit them."""
        return self.config.resources

    @property
    def marketplace(self) -> str:
        return self.config.marketplace

    def configure(
        self,
        resources: Optional[Iterable[str]] = None,
        marketplace: Optional[str] = None,
    ) -> ClientConfig:
        """Replace current defaults explicitly; returns the new configuration."""
        with self._lock:
            self._config = self._config.with_overrides(
                resources=resources, marketplace=marketplace
            )
            return self._config

    def get_browse_nodes(
        self,
        browse_node_ids,
        languages_of_preference=None,
        resources: Optional[Iterable[str]] = None,
        marketplace: Optional[str] = None,
    ) -> Response:
        """
        Look up browse nodes.

        Without explicit resources the ancestor and children selectors are
        requested for this call only. They are never stored as the client's
        default resources, so a following get_items or get_variations call
        still uses the previously configured selectors. Explicit resources
        given here are stored like on any other call.
        """
        return self._call(BrowseNodesRequest(
            browse_node_ids=browse_node_ids,
            languages_of_preference=languages_of_preference,
            resources=resources,
            marketplace=marketplace,
        ))

    def get_items(
        self,
        item_ids,
        resources: Optional[Iterable[str]] = None,
        condition: Optional[str] = None,
        currency_of_preference: Optional[str] = None,
        languages_of_preference=None,
        marketplace: Optional[str] = None,
        offer_count: Optional[int] = None,
    ) -> Response:
        """Look up items by ASIN (one or many)."""
        return self._call(ItemsRequest(
            item_ids=item_ids,
            resources=resources,
            condition=condition,
            currency_of_preference=currency_of_preference,
            languages_of_preference=languages_of_preference,
            marketplace=marketplace,
            offer_count=offer_count,
        ))

    def get_variations(
        self,
        asin: str,
        resources: Optional[Iterable[str]] = None,
        condition: Optional[str] = None,
        currency_of_preference: Optional[str] = None,
        languages_of_preference=None,
        marketplace: Optional[str] = None,
        offer_count: Optional[int] = None,
        variation_count: Optional[int] = None,
        variation_page: Optional[int] = None,
    ) -> Response:
        """Look up the variations of a parent or child ASIN."""
        return self._call(VariationsRequest(
            asin=asin,
            resources=resources,
            condition=condition,
            currency_of_preference=currency_of_preference,
            languages_of_preference=languages_of_preference,
            marketplace=marketplace,
            offer_count=offer_count,
            variation_count=variation_count,
            variation_page=variation_page,
        ))

    def execute(self, operation_name: Any, **params: Any) -> Response:
        """
        Call an operation by name.

        Raises:
            InvalidOperation: Before any signing or network work when the
                name is not a supported operation
            InvalidRequest: On unknown or missing parameters
        """
        operation = Operation.parse(operation_name)
        return self._call(request_from_params(operation, params))

    def prepare(self, operation_name: Any, **params: Any) -> PreparedRequest:
        """Build and sign a call without sending it or changing defaults."""
        operation = Operation.parse(operation_name)
        request = request_from_params(operation, params)
        return self.dispatcher.prepare(request, self.config, self._credentials)

    def _call(self, request: OperationRequest) -> Response:
        with self._lock:
            prepared = self.dispatcher.prepare(request, self._config, self._credentials)
            self._config = prepared.config

        return self.dispatcher.send(prepared)
