"""Typed parameter bundles, one per operation."""
from dataclasses import dataclass, fields
from typing import Any, Dict, Iterable, Optional, Type, Union

from paapi.builder.operations import Operation
from paapi.errors import InvalidRequest

Identifiers = Union[str, Iterable[str]]


def _as_source(request) -> Dict[str, Any]:
    """Shallow field mapping; values reach the builder as given."""
    return {f.name: getattr(request, f.name) for f in fields(request)}


@dataclass
class BrowseNodesRequest:
    """Parameters of a GetBrowseNodes call."""

    OPERATION = Operation.GET_BROWSE_NODES

    browse_node_ids: Identifiers
    languages_of_preference: Optional[Identifiers] = None
    resources: Optional[Iterable[str]] = None
    marketplace: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _as_source(self)


@dataclass
class ItemsRequest:
    """Parameters of a GetItems call."""

    OPERATION = Operation.GET_ITEMS

    item_ids: Identifiers
    resources: Optional[Iterable[str]] = None
    condition: Optional[str] = None
    currency_of_preference: Optional[str] = None
    languages_of_preference: Optional[Identifiers] = None
    marketplace: Optional[str] = None
    offer_count: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return _as_source(self)


@dataclass
class VariationsRequest:
    """Parameters of a GetVariations call."""

    OPERATION = Operation.GET_VARIATIONS

    asin: str
    resources: Optional[Iterable[str]] = None
    condition: Optional[str] = None
    currency_of_preference: Optional[str] = None
    languages_of_preference: Optional[Identifiers] = None
    marketplace: Optional[str] = None
    offer_count: Optional[int] = None
    variation_count: Optional[int] = None
    variation_page: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return _as_source(self)


OperationRequest = Union[BrowseNodesRequest, ItemsRequest, VariationsRequest]

REQUEST_TYPES: Dict[Operation, Type] = {
    Operation.GET_BROWSE_NODES: BrowseNodesRequest,
    Operation.GET_ITEMS: ItemsRequest,
    Operation.GET_VARIATIONS: VariationsRequest,
}


def request_from_params(operation: Operation, params: Dict[str, Any]) -> OperationRequest:
    """
    Build the parameter bundle of an operation from keyword arguments.

    Raises:
        InvalidRequest: On unknown or missing parameters
    """
    request_type = REQUEST_TYPES[operation]
    known = {f.name for f in fields(request_type)}

    unknown = sorted(set(params) - known)
    if unknown:
        raise InvalidRequest(
            f"Unknown parameters for {operation.value}: {', '.join(unknown)}"
        )

    try:
        return request_type(**params)
    except TypeError as e:
        raise InvalidRequest(f"Invalid parameters for {operation.value}: {e}") from e
