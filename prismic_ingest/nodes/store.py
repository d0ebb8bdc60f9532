from collections.abc import Sequence
from typing import Any

from prismic_ingest.nodes.base import BaseNodeModel


class NodeStore(BaseNodeModel):
    """In-memory node model. Nodes are kept with the type they were added as."""

    def __init__(self) -> None:
        self._nodes: dict[str, tuple[str | None, Any]] = {}

    def add(self, node_id: str, node: Any, node_type: str | None = None) -> None:
        self._nodes[node_id] = (node_type, node)

    def get_node_by_id(self, *, id: str, type: str | None = None) -> Any:  # noqa: A002
        stored = self._nodes.get(id)
        if stored is None:
            return None
        stored_type, node = stored
        if type is not None and stored_type is not None and stored_type != type:
            return None
        return node

    def get_nodes_by_ids(self, *, ids: Sequence[str]) -> list[Any]:
        return [self.get_node_by_id(id=node_id) for node_id in ids]

    def __len__(self) -> int:
        return len(self._nodes)
