import asyncio
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from prismic_ingest.fields.base import FieldTypeResolver
from prismic_ingest.materialization.exceptions import UnexpectedValueError
from prismic_ingest.schema.context import CompileContext
from prismic_ingest.schema.exceptions import MalformedFieldConfigError
from prismic_ingest.schema.models import (
    BlockDescriptor,
    FieldDescriptor,
    FieldType,
    ObjectTypeDeclaration,
    SlicesField,
    UnionTypeDeclaration,
)
from prismic_ingest.schema.naming import NODE_INTERFACE, list_of

if TYPE_CHECKING:
    from prismic_ingest.materialization.engine import DocumentWalker
    from prismic_ingest.schema.compiler import SchemaCompiler

PRIMARY = "primary"
ITEMS = "items"
SLICE_TYPE_KEY = "slice_type"


def resolve_slice_nodes(source: Mapping[str, Any], key: str, node_model: Any) -> Any:
    """Field resolver turning a list of slice node ids into the slice nodes."""
    return node_model.get_nodes_by_ids(ids=source[key])


class SlicesFieldResolver(FieldTypeResolver):
    """Slice zones: lists whose elements are one of several named choices.

    Every choice becomes a ``Node`` object type with an optional ``primary``
    record and an optional ``items`` list; the zone itself is a list of the
    union of its choices.
    """

    def compile(
        self,
        name: str,
        descriptor: FieldDescriptor,
        context: CompileContext,
        compiler: "SchemaCompiler",
    ) -> FieldType:
        if not isinstance(descriptor, SlicesField):
            location = ".".join(context.path + (name,))
            raise MalformedFieldConfigError(f"{location} is not a slice zone")
        zone_context = context.child(name)
        choice_types = tuple(
            self._compile_choice(zone_context.child(choice_name), block, compiler)
            for choice_name, block in descriptor.choices.items()
        )
        union_name = compiler.namer.for_path(zone_context.name_path, "SlicesType")
        compiler.declare(UnionTypeDeclaration(union_name, choice_types))
        compiler.register(zone_context.path, list_of(union_name))
        return FieldType(list_of(union_name), resolve=resolve_slice_nodes)

    @staticmethod
    def _compile_choice(
        choice_context: CompileContext,
        block: BlockDescriptor,
        compiler: "SchemaCompiler",
    ) -> str:
        namer = compiler.namer
        fields: dict[str, FieldType] = {}

        if block.non_repeat:
            primary_context = choice_context.child(PRIMARY, named=False)
            primary_fields = compiler.compile_fields(block.non_repeat, primary_context)
            primary_name = namer.for_path(choice_context.name_path, "PrimaryType")
            compiler.declare(ObjectTypeDeclaration(primary_name, primary_fields))
            compiler.register(primary_context.path, primary_name)
            fields[PRIMARY] = FieldType(primary_name)

        if block.repeat:
            items_context = choice_context.child(ITEMS, named=False)
            item_fields = compiler.compile_fields(block.repeat, items_context)
            item_name = namer.for_path(choice_context.name_path, "ItemType")
            compiler.declare(ObjectTypeDeclaration(item_name, item_fields))
            compiler.register(items_context.path, list_of(item_name))
            fields[ITEMS] = FieldType(list_of(item_name))

        fields[SLICE_TYPE_KEY] = FieldType("String!")
        fields["slice_label"] = FieldType("String")
        slice_name = namer.for_path(choice_context.name_path)
        compiler.declare(ObjectTypeDeclaration(slice_name, fields, interfaces=(NODE_INTERFACE,)))
        compiler.register(choice_context.path, slice_name)
        return slice_name

    async def materialize(
        self,
        key: str,
        value: Any,
        path: tuple[str, ...],
        walker: "DocumentWalker",
    ) -> Any:
        if not isinstance(value, list):
            raise UnexpectedValueError(
                f"Slice zone {key} must be a list, got {type(value).__name__}"
            )
        elements = await asyncio.gather(
            *(self._materialize_slice(element, path, walker) for element in value)
        )
        return list(elements)

    async def _materialize_slice(
        self, element: Any, path: tuple[str, ...], walker: "DocumentWalker"
    ) -> Any:
        if not isinstance(element, Mapping):
            return element
        slice_path = path + (str(element.get(SLICE_TYPE_KEY, "")),)

        async def materialize_part(part: str, part_value: Any) -> Any:
            if part == PRIMARY:
                return await walker.materialize_record(part_value, slice_path + (PRIMARY,))
            if part == ITEMS and isinstance(part_value, list):
                items = await asyncio.gather(
                    *(
                        walker.materialize_record(item, slice_path + (ITEMS,))
                        for item in part_value
                    )
                )
                return list(items)
            return part_value

        keys = list(element)
        parts = await asyncio.gather(*(materialize_part(part, element[part]) for part in keys))
        transform = walker.environment.transform_field_name
        return {transform(part): part_value for part, part_value in zip(keys, parts)}
