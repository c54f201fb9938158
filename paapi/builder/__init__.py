"""
Payload Builder Module

Builds Product Advertising API request bodies with:
- One typed parameter bundle per operation
- Identifier normalization (single value or many)
- Omission of unset optional fields
- Merging of account-level defaults
"""

from .operations import Operation
from .params import BrowseNodesRequest, ItemsRequest, VariationsRequest, request_from_params
from .field_builder import FieldBuilder, FieldMapping
from .payload_builder import PayloadBuilder, PayloadConfig, serialize, BROWSE_NODE_RESOURCES

__all__ = [
    "Operation",
    "BrowseNodesRequest",
    "ItemsRequest",
    "VariationsRequest",
    "request_from_params",
    "FieldBuilder",
    "FieldMapping",
    "PayloadBuilder",
    "PayloadConfig",
    "serialize",
    "BROWSE_NODE_RESOURCES",
]
