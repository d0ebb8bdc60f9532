from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class CompiledSchemaRecord:
    """Represents a row from the compiled_schemas table."""

    custom_type_id: str
    type_paths: list[dict[str, Any]] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
