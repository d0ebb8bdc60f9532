from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from prismic_ingest.fields.base import FieldTypeResolver
from prismic_ingest.materialization.richtext import link_url
from prismic_ingest.schema import shared
from prismic_ingest.schema.context import CompileContext
from prismic_ingest.schema.models import (
    FieldDescriptor,
    FieldResolveFn,
    FieldType,
    NodeIdBuilderFn,
)
from prismic_ingest.schema.naming import TypeNamer

if TYPE_CHECKING:
    from prismic_ingest.materialization.engine import DocumentWalker
    from prismic_ingest.schema.compiler import SchemaCompiler

DOCUMENT_LINK = "Document"


def build_link_resolve(namer: TypeNamer, node_id_builder: NodeIdBuilderFn) -> FieldResolveFn:
    """Field resolver that replaces a document link's target with its node."""

    def resolve(source: Mapping[str, Any], key: str, node_model: Any) -> Any:
        value = source.get(key)
        if not isinstance(value, Mapping) or not value.get("id") or not value.get("type"):
            return value
        if value.get("link_type", DOCUMENT_LINK) != DOCUMENT_LINK:
            return value
        document = node_model.get_node_by_id(
            id=node_id_builder(value["type"], value["id"]),
            type=namer.document_type(value["type"]),
        )
        return {**value, "document": document}

    return resolve


class LinkFieldResolver(FieldTypeResolver):
    def compile(
        self,
        name: str,
        descriptor: FieldDescriptor,
        context: CompileContext,
        compiler: "SchemaCompiler",
    ) -> FieldType:
        type_name = compiler.namer.shared(shared.LINK)
        compiler.register(context.child(name).path, type_name)
        return FieldType(
            type_name, resolve=build_link_resolve(compiler.namer, compiler.node_id_builder)
        )

    async def materialize(
        self,
        key: str,
        value: Any,
        path: tuple[str, ...],
        walker: "DocumentWalker",
    ) -> Any:
        if not isinstance(value, Mapping):
            return value
        environment = walker.environment
        link_resolver = environment.link_resolver(walker.field_context(key, value))
        document = None
        if value.get("link_type") == DOCUMENT_LINK and value.get("type") and value.get("id"):
            document = environment.document_node_id_builder(value["type"], value["id"])
        return {
            **value,
            "url": link_url(value, link_resolver),
            "document": document,
            "raw": value,
        }
