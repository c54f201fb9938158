"""Operations supported by the Product Advertising API."""
from enum import Enum
from typing import List, Union

from paapi.errors import InvalidOperation

SERVICE = "ProductAdvertisingAPI"
TARGET_PREFIX = f"com.amazon.paapi5.v1.{SERVICE}v1"


class Operation(str, Enum):
    """Closed set of operations this client can sign and send."""

    GET_BROWSE_NODES = "GetBrowseNodes"
    GET_ITEMS = "GetItems"
    GET_VARIATIONS = "GetVariations"

    @property
    def target(self) -> str:
        """Value of the X-Amz-Target header."""
        return f"{TARGET_PREFIX}.{self.value}"

    @classmethod
    def names(cls) -> List[str]:
        return [member.value for member in cls]

    @classmethod
    def parse(cls, name: Union[str, "Operation"]) -> "Operation":
        """
        Resolve an operation from its name.

        Accepts the API name ("GetItems"), the short name ("Items") and
        snake case ("get_items"), case-insensitively.

        Raises:
            InvalidOperation: If the name is not a supported operation.
        """
        if isinstance(name, cls):
            return name
        if not isinstance(name, str):
            raise InvalidOperation(name, cls.names())

        key = name.strip().replace("_", "").replace("-", "").lower()
        if key.startswith("get"):
            key = key[3:]

        for member in cls:
            if member.value[3:].lower() == key:
                return member

        raise InvalidOperation(name, cls.names())
