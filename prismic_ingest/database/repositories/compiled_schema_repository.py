from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from prismic_ingest.database.connection import get_connection
from prismic_ingest.database.models import CompiledSchemaRecord
from prismic_ingest.processor.exceptions import CompiledSchemaNotFoundError
from prismic_ingest.schema.registry import PathRegistry


class CompiledSchemaRepository:
    """Database operations for the compiled_schemas table."""

    def save(self, custom_type_id: str, registry: PathRegistry) -> None:
        """Insert or replace the type paths compiled for a custom type."""
        with get_connection() as conn:
            conn.execute(
                """
                INSERT INTO compiled_schemas (custom_type_id, type_paths, created_at, updated_at)
                VALUES (%s, %s, NOW(), NOW())
                ON CONFLICT (custom_type_id)
                DO UPDATE SET type_paths = EXCLUDED.type_paths, updated_at = NOW()
                """,
                (custom_type_id, Jsonb(registry.to_records())),
            )
            conn.commit()

    def find_by_custom_type_id(self, custom_type_id: str) -> CompiledSchemaRecord | None:
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT custom_type_id, type_paths, created_at, updated_at
                    FROM compiled_schemas
                    WHERE custom_type_id = %s
                    """,
                    (custom_type_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None

        return CompiledSchemaRecord(
            custom_type_id=row["custom_type_id"],
            type_paths=row["type_paths"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def find_type_paths(self, custom_type_id: str) -> PathRegistry:
        """Load the Path Registry of a custom type.

        Raises:
            CompiledSchemaNotFoundError: if the custom type was never compiled.
        """
        record = self.find_by_custom_type_id(custom_type_id)
        if record is None:
            raise CompiledSchemaNotFoundError(
                f"No compiled schema for custom type {custom_type_id}"
            )
        return PathRegistry.from_records(record.type_paths)

    def delete(self, custom_type_id: str) -> bool:
        """Delete a custom type's compiled schema. Returns whether a row was removed."""
        with get_connection() as conn:
            cur = conn.execute(
                "DELETE FROM compiled_schemas WHERE custom_type_id = %s",
                (custom_type_id,),
            )
            conn.commit()
        return cur.rowcount > 0
