"""Types every compiled custom type refers to, independent of any one schema."""

from prismic_ingest.schema.models import (
    FieldType,
    InterfaceTypeDeclaration,
    ObjectTypeDeclaration,
    TypeDeclaration,
)
from prismic_ingest.schema.naming import TypeNamer

STRUCTURED_TEXT = "StructuredTextType"
LINK = "LinkType"
IMAGE = "ImageType"
IMAGE_THUMBNAIL = "ImageThumbnailType"
IMAGE_THUMBNAILS = "ImageThumbnailsType"
IMAGE_DIMENSIONS = "ImageDimensionsType"
GEO_POINT = "GeoPointType"
EMBED = "EmbedType"
ALTERNATE_LANGUAGE = "AlternateLanguageType"
ALL_DOCUMENT_TYPES = "AllDocumentTypes"

SCALAR_TYPES = frozenset({"String", "Float", "Int", "Boolean", "Date", "ID", "JSON"})


def build_shared_type_declarations(type_prefix: str = "") -> tuple[TypeDeclaration, ...]:
    namer = TypeNamer(type_prefix)
    dimensions = namer.shared(IMAGE_DIMENSIONS)
    documents = namer.shared(ALL_DOCUMENT_TYPES)
    image_fields = {
        "alt": FieldType("String"),
        "copyright": FieldType("String"),
        "dimensions": FieldType(dimensions),
        "url": FieldType("String"),
        "localFile": FieldType("File", extensions={"link": {}}),
    }
    return (
        InterfaceTypeDeclaration(namer.document_interface, {"id": FieldType("ID!")}),
        ObjectTypeDeclaration(
            namer.shared(STRUCTURED_TEXT),
            {
                "html": FieldType("String"),
                "text": FieldType("String"),
                "raw": FieldType("JSON"),
            },
        ),
        ObjectTypeDeclaration(
            namer.shared(GEO_POINT),
            {"latitude": FieldType("Float"), "longitude": FieldType("Float")},
        ),
        ObjectTypeDeclaration(
            namer.shared(EMBED),
            {
                name: FieldType("String")
                for name in (
                    "author_name",
                    "author_url",
                    "embed_url",
                    "html",
                    "provider_name",
                    "provider_url",
                    "thumbnail_url",
                    "title",
                    "type",
                    "version",
                )
            },
        ),
        ObjectTypeDeclaration(
            dimensions, {"width": FieldType("Int!"), "height": FieldType("Int!")}
        ),
        ObjectTypeDeclaration(namer.shared(IMAGE_THUMBNAIL), image_fields),
        ObjectTypeDeclaration(
            namer.shared(IMAGE),
            {**image_fields, "thumbnails": FieldType(namer.shared(IMAGE_THUMBNAILS))},
        ),
        ObjectTypeDeclaration(
            namer.shared(LINK),
            {
                "link_type": FieldType("String"),
                "isBroken": FieldType("Boolean"),
                "url": FieldType("String"),
                "target": FieldType("String"),
                "size": FieldType("Int"),
                "id": FieldType("ID"),
                "type": FieldType("String"),
                "tags": FieldType("[String]"),
                "lang": FieldType("String"),
                "slug": FieldType("String"),
                "uid": FieldType("String"),
                "document": FieldType(documents, extensions={"link": {}}),
                "raw": FieldType("JSON"),
            },
        ),
        ObjectTypeDeclaration(
            namer.shared(ALTERNATE_LANGUAGE),
            {
                "id": FieldType("ID"),
                "uid": FieldType("String"),
                "lang": FieldType("String"),
                "type": FieldType("String"),
                "document": FieldType(documents, extensions={"link": {}}),
                "raw": FieldType("JSON"),
            },
        ),
    )
