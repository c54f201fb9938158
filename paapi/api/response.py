"""Result returned to callers of the client."""
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from paapi.builder.operations import Operation
from paapi.errors import RemoteError
from paapi.schema.models import ClientConfig


@dataclass
class Response:
    """Wraps the raw transport response of one operation call."""

    operation: Operation
    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    config: Optional[ClientConfig] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def json(self) -> Any:
        """Decode the body as JSON without interpreting it."""
        return json.loads(self.body.decode("utf-8"))

    def raise_for_status(self) -> "Response":
        """
        Raise if the remote service answered with a non-success status.

        Raises:
            RemoteError: On any status outside 2xx
        """
        if not self.ok:
            raise RemoteError(self)
        return self
