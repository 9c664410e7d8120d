"""Controller port — transport capabilities a controller needs.

Any transport (FastAPI, a CLI, a test double) implements this capability
set; controllers never import the transport library itself.
"""

from typing import Any, Protocol


class Context(Protocol):
    def json(self, payload: Any, status_code: int = 200) -> None:
        """Serialize payload and write it as the response."""
        ...

    def bind(self, target: Any) -> None:
        """Decode the incoming payload into the target dataclass.

        Raises:
            BindError: payload is malformed or does not fit the target
        """
        ...

    def query(self, key: str, default: str = '') -> str:
        """Read a single query parameter."""
        ...
