from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from prismic_ingest.schema.context import CompileContext
from prismic_ingest.schema.models import FieldDescriptor, FieldType

if TYPE_CHECKING:
    from prismic_ingest.materialization.engine import DocumentWalker
    from prismic_ingest.schema.compiler import SchemaCompiler


class FieldTypeResolver(ABC):
    """Contract for one field kind, used at compile time and at ingestion time."""

    @abstractmethod
    def compile(
        self,
        name: str,
        descriptor: FieldDescriptor,
        context: CompileContext,
        compiler: "SchemaCompiler",
    ) -> FieldType:
        """Declare the field's types and register its paths.

        Args:
            name: Field name inside its parent.
            descriptor: The field's descriptor.
            context: Position of the parent inside the custom type.
            compiler: The running compilation (declarations, registry, naming).

        Returns:
            The field's type reference within its parent type.
        """

    async def materialize(
        self,
        key: str,
        value: Any,
        path: tuple[str, ...],
        walker: "DocumentWalker",
    ) -> Any:
        """Turn a raw field value into its enriched value. Values pass through by default.

        Exceptions propagate to the walker, which degrades the field to None.
        """
        return value
