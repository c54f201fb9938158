"""
Field Builder - Constructs individual request body fields

Supports:
- Direct field mapping (parameter -> wire field)
- Identifier normalization through named transformers
- Omission of unset optional fields
- Required field validation
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple
import logging

from paapi.errors import InvalidRequest
from paapi.transformer.registry import TransformerRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldMapping:
    """Maps a request parameter to a field of the JSON request body"""

    source: str  # Parameter name (e.g., "item_ids")
    target: str  # Wire field name (e.g., "ItemIds")
    transformer: Optional[str] = None  # Transformer to apply (e.g., "ID_LIST")
    required: bool = False


class FieldBuilder:
    """Builds individual fields for request payloads"""

    def __init__(self, registry: Optional[TransformerRegistry] = None):
        """
        Initialize FieldBuilder

        Args:
            registry: Transformer registry (a default one is created if omitted)
        """
        self.registry = registry or TransformerRegistry()

    def build_field(
        self,
        mapping: FieldMapping,
        source_data: Dict[str, Any],
    ) -> Tuple[str, Any]:
        """
        Build a single body field

        Args:
            mapping: Field mapping configuration
            source_data: Request parameters

        Returns:
            Tuple of (target_field_name, field_value). The value is None when
            the field must be left out of the body.

        Raises:
            InvalidRequest: If a required field is missing or empty
        """
        source_value = source_data.get(mapping.source)

        if source_value is None:
            if mapping.required:
                raise InvalidRequest(f"{mapping.source} is required")
            return mapping.target, None

        if mapping.transformer:
            source_value = self.registry.transform(source_value, mapping.transformer)

        if mapping.required and self._is_empty(source_value):
            raise InvalidRequest(f"{mapping.source} must not be empty")

        return mapping.target, source_value

    @staticmethod
    def _is_empty(value: Any) -> bool:
        if isinstance(value, (str, list, tuple)):
            return len(value) == 0
        return False
