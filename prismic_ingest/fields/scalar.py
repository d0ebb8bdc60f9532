from typing import TYPE_CHECKING, ClassVar

from prismic_ingest.fields.base import FieldTypeResolver
from prismic_ingest.schema import shared
from prismic_ingest.schema.context import CompileContext
from prismic_ingest.schema.models import FieldDescriptor, FieldKind, FieldType

if TYPE_CHECKING:
    from prismic_ingest.schema.compiler import SchemaCompiler

UID_DESCRIPTION = (
    "The document's unique identifier. Unique among all instances of the document's type."
)


class ScalarFieldResolver(FieldTypeResolver):
    """Leaf fields whose stored value is served unchanged."""

    _BUILTIN_TYPES: ClassVar[dict[FieldKind, str]] = {
        FieldKind.COLOR: "String",
        FieldKind.SELECT: "String",
        FieldKind.TEXT: "String",
        FieldKind.NUMBER: "Float",
    }
    _SHARED_TYPES: ClassVar[dict[FieldKind, str]] = {
        FieldKind.GEO_POINT: shared.GEO_POINT,
        FieldKind.EMBED: shared.EMBED,
    }

    def compile(
        self,
        name: str,
        descriptor: FieldDescriptor,
        context: CompileContext,
        compiler: "SchemaCompiler",
    ) -> FieldType:
        field_type = self._field_type(descriptor.kind, compiler)
        compiler.register(context.child(name).path, field_type.type)
        return field_type

    def _field_type(self, kind: FieldKind, compiler: "SchemaCompiler") -> FieldType:
        if kind is FieldKind.UID:
            return FieldType("String!", description=UID_DESCRIPTION)
        if kind in (FieldKind.DATE, FieldKind.TIMESTAMP):
            return FieldType("Date", extensions={"dateformat": {}})
        if kind in self._SHARED_TYPES:
            return FieldType(compiler.namer.shared(self._SHARED_TYPES[kind]))
        return FieldType(self._BUILTIN_TYPES[kind])
