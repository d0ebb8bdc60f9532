import asyncio
from typing import TYPE_CHECKING, Any

from prismic_ingest.fields.base import FieldTypeResolver
from prismic_ingest.materialization.exceptions import UnexpectedValueError
from prismic_ingest.schema.context import CompileContext
from prismic_ingest.schema.exceptions import MalformedFieldConfigError
from prismic_ingest.schema.models import (
    FieldDescriptor,
    FieldType,
    GroupField,
    ObjectTypeDeclaration,
)
from prismic_ingest.schema.naming import list_of

if TYPE_CHECKING:
    from prismic_ingest.materialization.engine import DocumentWalker
    from prismic_ingest.schema.compiler import SchemaCompiler


class GroupFieldResolver(FieldTypeResolver):
    """Repeatable groups of fields, served as a list of records."""

    def compile(
        self,
        name: str,
        descriptor: FieldDescriptor,
        context: CompileContext,
        compiler: "SchemaCompiler",
    ) -> FieldType:
        if not isinstance(descriptor, GroupField):
            location = ".".join(context.path + (name,))
            raise MalformedFieldConfigError(f"{location} is not a group")
        group_context = context.child(name)
        fields = compiler.compile_fields(descriptor.fields, group_context)
        type_name = compiler.namer.for_path(group_context.name_path, "GroupType")
        compiler.declare(ObjectTypeDeclaration(type_name, fields))
        compiler.register(group_context.path, list_of(type_name))
        return FieldType(list_of(type_name))

    async def materialize(
        self,
        key: str,
        value: Any,
        path: tuple[str, ...],
        walker: "DocumentWalker",
    ) -> Any:
        if not isinstance(value, list):
            raise UnexpectedValueError(f"Group {key} must be a list, got {type(value).__name__}")
        records = await asyncio.gather(
            *(walker.materialize_record(record, path) for record in value)
        )
        return list(records)
