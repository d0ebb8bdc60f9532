from typing import ClassVar

from prismic_ingest.fields.base import FieldTypeResolver
from prismic_ingest.fields.group import GroupFieldResolver
from prismic_ingest.fields.image import ImageFieldResolver
from prismic_ingest.fields.link import LinkFieldResolver
from prismic_ingest.fields.scalar import ScalarFieldResolver
from prismic_ingest.fields.slices import SlicesFieldResolver
from prismic_ingest.fields.structured_text import StructuredTextFieldResolver
from prismic_ingest.schema import shared
from prismic_ingest.schema.exceptions import UnknownFieldKindError
from prismic_ingest.schema.models import FieldKind
from prismic_ingest.schema.naming import TypeNamer, is_list, unwrap


class ResolverFactory:
    """Picks the resolver for a field kind or for a registered type name."""

    _SCALAR: ClassVar[FieldTypeResolver] = ScalarFieldResolver()
    _STRUCTURED_TEXT: ClassVar[FieldTypeResolver] = StructuredTextFieldResolver()
    _LINK: ClassVar[FieldTypeResolver] = LinkFieldResolver()
    _IMAGE: ClassVar[FieldTypeResolver] = ImageFieldResolver()
    _GROUP: ClassVar[FieldTypeResolver] = GroupFieldResolver()
    _SLICES: ClassVar[FieldTypeResolver] = SlicesFieldResolver()

    _BY_KIND: ClassVar[dict[FieldKind, FieldTypeResolver]] = {
        FieldKind.COLOR: _SCALAR,
        FieldKind.SELECT: _SCALAR,
        FieldKind.TEXT: _SCALAR,
        FieldKind.UID: _SCALAR,
        FieldKind.NUMBER: _SCALAR,
        FieldKind.DATE: _SCALAR,
        FieldKind.TIMESTAMP: _SCALAR,
        FieldKind.GEO_POINT: _SCALAR,
        FieldKind.EMBED: _SCALAR,
        FieldKind.STRUCTURED_TEXT: _STRUCTURED_TEXT,
        FieldKind.LINK: _LINK,
        FieldKind.IMAGE: _IMAGE,
        FieldKind.GROUP: _GROUP,
        FieldKind.SLICES: _SLICES,
    }

    @classmethod
    def for_kind(cls, kind: FieldKind) -> FieldTypeResolver:
        resolver = cls._BY_KIND.get(kind)
        if resolver is None:
            raise UnknownFieldKindError(f"No resolver for field kind {kind!r}")
        return resolver

    @classmethod
    def for_type(cls, type_expression: str, namer: TypeNamer) -> FieldTypeResolver | None:
        """Resolver for a type registered in a path registry.

        Returns None for object containers (document data, slice halves),
        whose values are walked as plain records.
        """
        base = unwrap(type_expression)
        if is_list(type_expression):
            if base.endswith("GroupType"):
                return cls._GROUP
            if base.endswith("SlicesType"):
                return cls._SLICES
            return None
        if base in shared.SCALAR_TYPES:
            return cls._SCALAR
        by_shared_name = {
            namer.shared(shared.GEO_POINT): cls._SCALAR,
            namer.shared(shared.EMBED): cls._SCALAR,
            namer.shared(shared.STRUCTURED_TEXT): cls._STRUCTURED_TEXT,
            namer.shared(shared.LINK): cls._LINK,
            namer.shared(shared.IMAGE): cls._IMAGE,
        }
        return by_shared_name.get(base)
