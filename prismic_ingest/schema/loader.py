import json
from pathlib import Path

from prismic_ingest.logging.logger import Log
from prismic_ingest.schema.exceptions import SchemaLoadError
from prismic_ingest.schema.models import CustomTypeSchema
from prismic_ingest.schema.parser import parse_custom_type


def load_custom_type_schemas(directory: Path) -> dict[str, CustomTypeSchema]:
    """Read every ``<custom_type_id>.json`` file in ``directory``, sorted by id.

    Raises:
        SchemaLoadError: if the directory is missing or a file is not valid JSON.
        SchemaCompilationError: if a file does not describe a valid custom type.
    """
    if not directory.is_dir():
        raise SchemaLoadError(f"Custom types directory not found: {directory}")

    schemas: dict[str, CustomTypeSchema] = {}
    for path in sorted(directory.glob("*.json")):
        schemas[path.stem] = load_custom_type_schema(path)
    Log.info(f"Loaded {len(schemas)} custom types from {directory}")
    return schemas


def load_custom_type_schema(path: Path) -> CustomTypeSchema:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise SchemaLoadError(f"Cannot read custom type file {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise SchemaLoadError(f"Invalid JSON in custom type file {path}: {exc}") from exc
    return parse_custom_type(raw)
