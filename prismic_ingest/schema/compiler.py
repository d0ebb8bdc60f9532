"""Compilation of custom types into type declarations and type paths."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from prismic_ingest.fields.factory import ResolverFactory
from prismic_ingest.logging.logger import Log
from prismic_ingest.schema import shared
from prismic_ingest.schema.context import CompileContext
from prismic_ingest.schema.exceptions import MalformedFieldConfigError
from prismic_ingest.schema.models import (
    CompiledCustomType,
    CustomTypeSchema,
    FieldDescriptor,
    FieldKind,
    FieldType,
    NodeIdBuilderFn,
    ObjectTypeDeclaration,
    PathEntry,
    ScalarTypeDeclaration,
    TypeDeclaration,
    UnionTypeDeclaration,
)
from prismic_ingest.schema.naming import NODE_INTERFACE, TypeNamer
from prismic_ingest.schema.registry import PathRegistry

DATA = "data"


class SchemaCompiler:
    """Compiles one custom type.

    Naming and path state belong to this instance only, so every compilation
    is self-contained.
    """

    def __init__(
        self,
        custom_type_id: str,
        *,
        node_id_builder: NodeIdBuilderFn,
        type_prefix: str = "",
    ) -> None:
        self.custom_type_id = custom_type_id
        self.node_id_builder = node_id_builder
        self.namer = TypeNamer(type_prefix)
        self.registry = PathRegistry()
        self._declarations: list[TypeDeclaration] = []

    def declare(self, declaration: TypeDeclaration) -> None:
        self._declarations.append(declaration)

    def register(self, path: tuple[str, ...], type_name: str) -> None:
        self.registry.register(path, type_name)

    def compile_field(
        self, name: str, descriptor: FieldDescriptor, context: CompileContext
    ) -> FieldType:
        resolver = ResolverFactory.for_kind(descriptor.kind)
        return resolver.compile(name, descriptor, context, self)

    def compile_fields(
        self, fields: Mapping[str, FieldDescriptor], context: CompileContext
    ) -> dict[str, FieldType]:
        return {
            name: self.compile_field(name, descriptor, context)
            for name, descriptor in fields.items()
        }

    def compile(self, schema: CustomTypeSchema) -> CompiledCustomType:
        root = CompileContext.root(self.custom_type_id)
        fields = self._merge_tabs(schema)
        uid_fields = {n: d for n, d in fields.items() if d.kind is FieldKind.UID}
        data_fields = {n: d for n, d in fields.items() if d.kind is not FieldKind.UID}

        # UID fields live next to `data` on the document, not inside it.
        uid_types = self.compile_fields(uid_fields, root)

        data_context = root.child(DATA, named=False)
        data_types = self.compile_fields(data_fields, data_context)
        data_name = self.namer.for_path(root.name_path, "DataType")
        self.register(data_context.path, data_name)
        self.declare(ObjectTypeDeclaration(data_name, data_types))

        document_name = self.namer.for_path(root.name_path)
        self.register(root.path, document_name)
        self.declare(
            ObjectTypeDeclaration(
                document_name,
                {**self._document_fields(data_name), **uid_types},
                interfaces=(NODE_INTERFACE, self.namer.document_interface),
            )
        )

        Log.debug(
            f"Compiled custom type {self.custom_type_id}: "
            f"{len(self._declarations)} types, {len(self.registry)} paths"
        )
        return CompiledCustomType(
            custom_type_id=self.custom_type_id,
            type_declarations=tuple(self._declarations),
            type_paths=self.registry.entries,
        )

    def _merge_tabs(self, schema: CustomTypeSchema) -> dict[str, FieldDescriptor]:
        merged: dict[str, FieldDescriptor] = {}
        for tab_name, tab_fields in schema.items():
            for name, descriptor in tab_fields.items():
                if name in merged:
                    raise MalformedFieldConfigError(
                        f"{self.custom_type_id}: field {name!r} in tab {tab_name!r} "
                        "is already declared by another tab"
                    )
                merged[name] = descriptor
        return merged

    def _document_fields(self, data_name: str) -> dict[str, FieldType]:
        alternate_language = self.namer.shared(shared.ALTERNATE_LANGUAGE)
        return {
            "data": FieldType(data_name, description="The document's data fields."),
            "dataRaw": FieldType(
                "JSON!",
                description="The document's data object without transformations.",
            ),
            "prismicId": FieldType("ID!"),
            "type": FieldType("String!"),
            "href": FieldType("String!"),
            "lang": FieldType("String!"),
            "tags": FieldType("[String!]!"),
            "first_publication_date": FieldType("Date!", extensions={"dateformat": {}}),
            "last_publication_date": FieldType("Date!", extensions={"dateformat": {}}),
            "alternate_languages": FieldType(f"[{alternate_language}!]!"),
        }


def compile_custom_type(
    custom_type_id: str,
    schema: CustomTypeSchema,
    *,
    node_id_builder: NodeIdBuilderFn,
    type_prefix: str = "",
) -> CompiledCustomType:
    """Compile one custom type into its type declarations and type paths.

    Raises:
        SchemaCompilationError: if the schema is malformed. Never recoverable.
    """
    compiler = SchemaCompiler(
        custom_type_id, node_id_builder=node_id_builder, type_prefix=type_prefix
    )
    return compiler.compile(schema)


def collect_document_union(
    type_declarations: Iterable[TypeDeclaration], *, type_prefix: str = ""
) -> UnionTypeDeclaration:
    """Union of every document type, so a link can point at any custom type."""
    namer = TypeNamer(type_prefix)
    document_types = tuple(
        declaration.name
        for declaration in type_declarations
        if isinstance(declaration, ObjectTypeDeclaration)
        and declaration.implements(NODE_INTERFACE, namer.document_interface)
    )
    return UnionTypeDeclaration(namer.shared(shared.ALL_DOCUMENT_TYPES), document_types)


def collect_image_thumbnails_type(
    type_paths: Iterable[PathEntry], *, type_prefix: str = ""
) -> TypeDeclaration:
    """The thumbnails type shared by all images, with every thumbnail name found.

    Without any thumbnail in any schema, this is a scalar that always
    serializes to None.
    """
    namer = TypeNamer(type_prefix)
    name = namer.shared(shared.IMAGE_THUMBNAILS)
    thumbnail_type = namer.shared(shared.IMAGE_THUMBNAIL)
    thumbnail_names = list(
        dict.fromkeys(entry.path[-1] for entry in type_paths if entry.type == thumbnail_type)
    )
    if not thumbnail_names:
        return ScalarTypeDeclaration(name, serialize=lambda value: None)
    return ObjectTypeDeclaration(
        name,
        {thumbnail: FieldType(thumbnail_type, resolve=_get_key) for thumbnail in thumbnail_names},
    )


def _get_key(source: Mapping[str, object], key: str, node_model: object) -> object:
    return source.get(key) if isinstance(source, Mapping) else None


@dataclass(frozen=True)
class SchemaBundle:
    """Everything compiled from a set of custom types."""

    type_declarations: tuple[TypeDeclaration, ...]
    custom_types: Mapping[str, CompiledCustomType] = field(default_factory=dict)

    def registry_for(self, custom_type_id: str) -> PathRegistry:
        return PathRegistry(self.custom_types[custom_type_id].type_paths)


def compile_schemas(
    schemas: Mapping[str, CustomTypeSchema],
    *,
    node_id_builder: NodeIdBuilderFn,
    type_prefix: str = "",
) -> SchemaBundle:
    """Compile several custom types and add the types they all share."""
    compiled = {
        custom_type_id: compile_custom_type(
            custom_type_id, schema, node_id_builder=node_id_builder, type_prefix=type_prefix
        )
        for custom_type_id, schema in schemas.items()
    }
    declarations: list[TypeDeclaration] = list(shared.build_shared_type_declarations(type_prefix))
    all_paths: list[PathEntry] = []
    for custom_type in compiled.values():
        declarations.extend(custom_type.type_declarations)
        all_paths.extend(custom_type.type_paths)
    declarations.append(collect_document_union(declarations, type_prefix=type_prefix))
    declarations.append(collect_image_thumbnails_type(all_paths, type_prefix=type_prefix))
    Log.info(f"Compiled {len(compiled)} custom types into {len(declarations)} types")
    return SchemaBundle(type_declarations=tuple(declarations), custom_types=compiled)
