from typing import TYPE_CHECKING, Any

from prismic_ingest.fields.base import FieldTypeResolver
from prismic_ingest.materialization.richtext import as_html, as_text
from prismic_ingest.schema import shared
from prismic_ingest.schema.context import CompileContext
from prismic_ingest.schema.models import FieldDescriptor, FieldType

if TYPE_CHECKING:
    from prismic_ingest.materialization.engine import DocumentWalker
    from prismic_ingest.schema.compiler import SchemaCompiler


class StructuredTextFieldResolver(FieldTypeResolver):
    """Rich text: served as rendered HTML, plain text and the raw blocks."""

    def compile(
        self,
        name: str,
        descriptor: FieldDescriptor,
        context: CompileContext,
        compiler: "SchemaCompiler",
    ) -> FieldType:
        type_name = compiler.namer.shared(shared.STRUCTURED_TEXT)
        compiler.register(context.child(name).path, type_name)
        return FieldType(type_name)

    async def materialize(
        self,
        key: str,
        value: Any,
        path: tuple[str, ...],
        walker: "DocumentWalker",
    ) -> Any:
        context = walker.field_context(key, value)
        link_resolver = walker.environment.link_resolver(context)
        html_serializer = walker.environment.html_serializer(context)
        return {
            "html": as_html(value, link_resolver, html_serializer),
            "text": as_text(value),
            "raw": value,
        }
