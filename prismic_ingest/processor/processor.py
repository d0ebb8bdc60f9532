import asyncio
from collections.abc import Callable, Mapping
from typing import Any

from prismic_ingest.config.settings import Settings
from prismic_ingest.database.repositories.compiled_schema_repository import (
    CompiledSchemaRepository,
)
from prismic_ingest.logging.logger import Log
from prismic_ingest.materialization.engine import materialize
from prismic_ingest.materialization.environment import (
    FieldError,
    HtmlSerializerFactory,
    LinkResolverFactory,
    ProxyEnvironment,
    RemoteFileFetcher,
    build_environment,
)
from prismic_ingest.nodes.ids import NodeIdBuilder
from prismic_ingest.processor.exceptions import UnsupportedDocumentError
from prismic_ingest.schema.registry import PathRegistry


class Processor:
    """Materializes raw Prismic documents with their stored compiled schema.

    Pipeline: resolve custom type -> load type paths -> materialize.
    Type paths are loaded once per custom type and reused.
    """

    def __init__(
        self,
        schema_repo: CompiledSchemaRepository,
        environment: ProxyEnvironment,
    ) -> None:
        self._schema_repo = schema_repo
        self._environment = environment
        self._registries: dict[str, PathRegistry] = {}

    async def process(self, raw_document: Mapping[str, Any]) -> dict[str, Any]:
        """Return the materialized copy of ``raw_document``.

        Raises:
            UnsupportedDocumentError: if the document has no ``type``.
            CompiledSchemaNotFoundError: if its custom type was never compiled.
        """
        custom_type_id = raw_document.get("type")
        if not custom_type_id:
            raise UnsupportedDocumentError(
                f"Document {raw_document.get('id')} has no custom type"
            )
        Log.info(f"Processing document {raw_document.get('id')} of type {custom_type_id}")

        registry = await self._registry_for(custom_type_id)
        result = await materialize(raw_document, registry, self._environment)

        Log.info(f"Materialized document {raw_document.get('id')}: {len(result)} keys")
        return result

    async def _registry_for(self, custom_type_id: str) -> PathRegistry:
        registry = self._registries.get(custom_type_id)
        if registry is None:
            registry = await asyncio.to_thread(self._schema_repo.find_type_paths, custom_type_id)
            self._registries[custom_type_id] = registry
            Log.debug(f"Loaded {len(registry)} type paths for {custom_type_id}")
        return registry


def build_processor(
    settings: Settings,
    remote_file_fetcher: RemoteFileFetcher,
    *,
    link_resolver: LinkResolverFactory | None = None,
    html_serializer: HtmlSerializerFactory | None = None,
    on_field_error: Callable[[FieldError], None] | None = None,
) -> Processor:
    """Build a Processor backed by the compiled_schemas table."""
    environment = build_environment(
        settings,
        remote_file_fetcher=remote_file_fetcher,
        document_node_id_builder=NodeIdBuilder(settings.node_id_namespace),
        link_resolver=link_resolver,
        html_serializer=html_serializer,
        on_field_error=on_field_error,
    )
    return Processor(schema_repo=CompiledSchemaRepository(), environment=environment)
