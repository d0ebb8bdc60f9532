"""Custom type descriptors, type declarations and type paths."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FieldKind(str, Enum):
    """Every field kind a Prismic custom type can declare."""

    COLOR = "Color"
    SELECT = "Select"
    TEXT = "Text"
    UID = "UID"
    NUMBER = "Number"
    DATE = "Date"
    TIMESTAMP = "Timestamp"
    GEO_POINT = "GeoPoint"
    EMBED = "Embed"
    STRUCTURED_TEXT = "StructuredText"
    IMAGE = "Image"
    LINK = "Link"
    GROUP = "Group"
    SLICES = "Slices"


@dataclass(frozen=True)
class ScalarField:
    """A field without nested fields (text-like, number, date, link, rich text...)."""

    kind: FieldKind
    config: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Thumbnail:
    name: str
    width: int | None = None
    height: int | None = None


@dataclass(frozen=True)
class ImageField:
    thumbnails: tuple[Thumbnail, ...] = ()
    config: Mapping[str, Any] = field(default_factory=dict)
    kind: FieldKind = FieldKind.IMAGE


@dataclass(frozen=True)
class GroupField:
    fields: Mapping[str, "FieldDescriptor"]
    config: Mapping[str, Any] = field(default_factory=dict)
    kind: FieldKind = FieldKind.GROUP


@dataclass(frozen=True)
class BlockDescriptor:
    """One slice choice: a non-repeating half and a repeating half."""

    non_repeat: Mapping[str, "FieldDescriptor"] = field(default_factory=dict)
    repeat: Mapping[str, "FieldDescriptor"] = field(default_factory=dict)


@dataclass(frozen=True)
class SlicesField:
    choices: Mapping[str, BlockDescriptor]
    config: Mapping[str, Any] = field(default_factory=dict)
    kind: FieldKind = FieldKind.SLICES


FieldDescriptor = ScalarField | ImageField | GroupField | SlicesField

# tab name -> field name -> descriptor, in declaration order
CustomTypeSchema = Mapping[str, Mapping[str, FieldDescriptor]]


# resolve(source, key, node_model) -> value
FieldResolveFn = Callable[[Mapping[str, Any], str, Any], Any]

# (document type, document id) -> node id
NodeIdBuilderFn = Callable[[str, str], str]


@dataclass(frozen=True)
class FieldType:
    """Type reference of a single field, in GraphQL notation (``[X]``, ``X!``)."""

    type: str
    resolve: FieldResolveFn | None = None
    description: str | None = None
    extensions: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ObjectTypeDeclaration:
    name: str
    fields: Mapping[str, FieldType] = field(default_factory=dict)
    interfaces: tuple[str, ...] = ()
    description: str | None = None

    def implements(self, *interfaces: str) -> bool:
        return all(interface in self.interfaces for interface in interfaces)


@dataclass(frozen=True)
class UnionTypeDeclaration:
    name: str
    types: tuple[str, ...] = ()


@dataclass(frozen=True)
class ScalarTypeDeclaration:
    name: str
    serialize: Callable[[Any], Any]


@dataclass(frozen=True)
class InterfaceTypeDeclaration:
    name: str
    fields: Mapping[str, FieldType] = field(default_factory=dict)


TypeDeclaration = (
    ObjectTypeDeclaration
    | UnionTypeDeclaration
    | ScalarTypeDeclaration
    | InterfaceTypeDeclaration
)


@dataclass(frozen=True)
class PathEntry:
    """The type resolved at one structural path of a custom type."""

    path: tuple[str, ...]
    type: str

    def to_record(self) -> dict[str, object]:
        return {"path": list(self.path), "type": self.type}

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "PathEntry":
        return cls(path=tuple(record["path"]), type=record["type"])


@dataclass(frozen=True)
class CompiledCustomType:
    """Output of compiling one custom type."""

    custom_type_id: str
    type_declarations: tuple[TypeDeclaration, ...]
    type_paths: tuple[PathEntry, ...]

    def find_declaration(self, name: str) -> TypeDeclaration | None:
        for declaration in self.type_declarations:
            if declaration.name == name:
                return declaration
        return None
