from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any

from prismic_ingest.schema.exceptions import DuplicateTypePathError
from prismic_ingest.schema.models import PathEntry


class PathRegistry:
    """Append-only index of structural path -> resolved type name.

    Entries keep their registration order; lookups go by path equality.
    """

    def __init__(self, entries: Iterable[PathEntry] = ()) -> None:
        self._entries: list[PathEntry] = []
        self._index: dict[tuple[str, ...], str] = {}
        for entry in entries:
            self.register(entry.path, entry.type)

    def register(self, path: Sequence[str], type_name: str) -> PathEntry:
        key = tuple(path)
        if key in self._index:
            raise DuplicateTypePathError(
                f"Path {'.'.join(key)} is already registered as {self._index[key]}"
            )
        entry = PathEntry(path=key, type=type_name)
        self._entries.append(entry)
        self._index[key] = type_name
        return entry

    def lookup(self, path: Sequence[str]) -> str | None:
        return self._index.get(tuple(path))

    def __contains__(self, path: object) -> bool:
        return isinstance(path, (tuple, list)) and tuple(path) in self._index

    def __iter__(self) -> Iterator[PathEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def entries(self) -> tuple[PathEntry, ...]:
        return tuple(self._entries)

    def children(self, path: Sequence[str]) -> list[PathEntry]:
        """Entries exactly one segment below ``path``, in registration order."""
        prefix = tuple(path)
        return [
            entry
            for entry in self._entries
            if len(entry.path) == len(prefix) + 1 and entry.path[: len(prefix)] == prefix
        ]

    def root_path(self) -> tuple[str, ...]:
        """Path of the document root, the only single-segment entry."""
        for entry in self._entries:
            if len(entry.path) == 1:
                return entry.path
        raise LookupError("Registry has no document root entry")

    def to_records(self) -> list[dict[str, object]]:
        return [entry.to_record() for entry in self._entries]

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> "PathRegistry":
        return cls(PathEntry.from_record(record) for record in records)
