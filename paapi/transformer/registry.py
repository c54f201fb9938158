"""Transformer registry."""
from typing import Any, Callable, Dict, List

from paapi.errors import InvalidRequest


def to_list(value: Any) -> List[Any]:
    """Wrap a single value in a list; pass other iterables through as a list."""
    if value is None:
        return []
    if isinstance(value, (str, bytes, int, float)):
        return [value]
    return list(value)


class TransformerRegistry:
    """Registry of value transformers applied while building payload fields."""

    def __init__(self):
        """Initialize registry."""
        self.transformers: Dict[str, Callable[[Any], Any]] = {
            "LIST": to_list,
            "ID_LIST": self._id_list,
            "ASIN": self._asin,
        }

    def get(self, name: str) -> Callable[[Any], Any]:
        """Get transformer by name."""
        if name not in self.transformers:
            raise ValueError(f"Unknown transformer: {name}")
        return self.transformers[name]

    def register(self, name: str, func: Callable[[Any], Any]) -> None:
        """Register a custom transformer function."""
        self.transformers[name] = func

    def transform(self, value: Any, transformer_name: str) -> Any:
        """Apply transformation."""
        return self.get(transformer_name)(value)

    @staticmethod
    def _asin(value: Any) -> str:
        """A single catalog identifier; collections are rejected."""
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        if not isinstance(value, str):
            raise InvalidRequest(f"asin must be a single string, got {type(value).__name__}")
        return value.strip()

    @staticmethod
    def _id_list(value: Any) -> List[str]:
        """Normalize one identifier or many into an ordered list of strings."""
        ids = []
        for item in to_list(value):
            if item is None:
                continue
            if isinstance(item, bytes):
                item = item.decode("utf-8")
            text = str(item).strip()
            if text:
                ids.append(text)
        return ids
