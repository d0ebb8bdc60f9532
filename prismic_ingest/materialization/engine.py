"""Walks a raw document and materializes every field registered for its type."""

import asyncio
from collections.abc import Iterable, Mapping
from typing import Any

from prismic_ingest.fields.factory import ResolverFactory
from prismic_ingest.logging.logger import Log
from prismic_ingest.materialization.environment import FieldContext, FieldError, ProxyEnvironment
from prismic_ingest.schema.models import PathEntry
from prismic_ingest.schema.naming import TypeNamer
from prismic_ingest.schema.registry import PathRegistry


class DocumentWalker:
    """Materialization state for one document.

    The registry decides how each field is handled; the raw value's shape is
    never used for dispatch. Every field is isolated: an exception turns that
    field into None and leaves its siblings untouched.
    """

    def __init__(
        self,
        raw_document: Mapping[str, Any],
        registry: PathRegistry,
        environment: ProxyEnvironment,
    ) -> None:
        self.raw_document = raw_document
        self.registry = registry
        self.environment = environment
        self._namer = TypeNamer(environment.type_prefix)
        self.document_node_id = self._build_document_node_id()

    def field_context(self, key: str, value: Any) -> FieldContext:
        return FieldContext(key=key, value=value, node=self.raw_document)

    async def materialize_record(self, record: Any, path: tuple[str, ...]) -> Any:
        """Materialize every key of ``record`` concurrently, keeping key order."""
        if not isinstance(record, Mapping):
            return record
        keys = list(record)
        values = await asyncio.gather(
            *(self.materialize_field(key, record[key], path + (key,)) for key in keys)
        )
        transform = self.environment.transform_field_name
        return {transform(key): value for key, value in zip(keys, values)}

    async def materialize_field(self, key: str, value: Any, path: tuple[str, ...]) -> Any:
        type_name = self.registry.lookup(path)
        if type_name is None or value is None:
            return value
        resolver = ResolverFactory.for_type(type_name, self._namer)
        try:
            if resolver is None:
                return await self.materialize_record(value, path)
            return await resolver.materialize(key, value, path, self)
        except Exception as exc:
            self.report(path, exc)
            return None

    def report(self, path: tuple[str, ...], error: Exception) -> None:
        """Record a degraded field on the log and the optional error callback."""
        Log.warning(f"Field {'.'.join(path)} could not be materialized: {error}")
        if self.environment.on_field_error is not None:
            self.environment.on_field_error(FieldError(path=path, error=error))

    def _build_document_node_id(self) -> str | None:
        document_type = self.raw_document.get("type")
        document_id = self.raw_document.get("id")
        if not document_type or not document_id:
            return None
        return self.environment.document_node_id_builder(document_type, document_id)


async def materialize(
    raw_document: Mapping[str, Any],
    type_paths: PathRegistry | Iterable[PathEntry],
    environment: ProxyEnvironment,
) -> dict[str, Any]:
    """Return the materialized copy of ``raw_document``.

    Keys go through ``environment.transform_field_name``; lists keep their
    order and length. Failures never propagate: a failing field becomes None.
    """
    registry = type_paths if isinstance(type_paths, PathRegistry) else PathRegistry(type_paths)
    walker = DocumentWalker(raw_document, registry, environment)
    return await walker.materialize_record(raw_document, registry.root_path())
