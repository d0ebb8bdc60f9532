from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any


class BaseNodeModel(ABC):
    """Node lookup contract used by the field resolvers of compiled types."""

    @abstractmethod
    def get_node_by_id(self, *, id: str, type: str | None = None) -> Any:  # noqa: A002
        """Return the node with ``id`` (optionally checking its type), or None."""

    @abstractmethod
    def get_nodes_by_ids(self, *, ids: Sequence[str]) -> list[Any]:
        """Return the nodes for ``ids``, in the same order."""
