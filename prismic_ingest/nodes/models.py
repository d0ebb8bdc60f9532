from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class FileNode:
    """A remote file downloaded to the local cache."""

    id: str
    url: str
    path: Path
    parent_node_id: str | None
    content_type: str | None
    size: int
