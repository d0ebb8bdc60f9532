from pathlib import Path

from prismic_ingest.config.settings import Settings
from prismic_ingest.database.connection import close_pool, init_pool
from prismic_ingest.database.repositories.compiled_schema_repository import (
    CompiledSchemaRepository,
)
from prismic_ingest.logging.logger import Log
from prismic_ingest.nodes.ids import NodeIdBuilder
from prismic_ingest.schema.compiler import SchemaBundle, compile_schemas
from prismic_ingest.schema.exceptions import SchemaError
from prismic_ingest.schema.loader import load_custom_type_schemas


def compile_and_store(settings: Settings, schema_repo: CompiledSchemaRepository) -> SchemaBundle:
    """Compile every custom type in the configured directory and persist its type paths."""
    schemas = load_custom_type_schemas(Path(settings.custom_types_dir))
    bundle = compile_schemas(
        schemas,
        node_id_builder=NodeIdBuilder(settings.node_id_namespace),
        type_prefix=settings.type_prefix,
    )
    for custom_type_id in bundle.custom_types:
        schema_repo.save(custom_type_id, bundle.registry_for(custom_type_id))
        Log.info(f"Stored type paths for custom type {custom_type_id}")
    return bundle


def main() -> None:
    """Entry point: initialize pool -> compile custom types -> store type paths."""
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    try:
        compile_and_store(settings, CompiledSchemaRepository())
    except SchemaError as exc:
        Log.error(f"Custom type compilation failed: {exc}")
        raise
    finally:
        close_pool()


if __name__ == "__main__":
    main()
