"""Deterministic type naming.

Names are built from the structural path that produced them, so compiling the
same custom type twice always yields the same names in the same order.
"""

import re

from prismic_ingest.logging.logger import Log

NAMESPACE = "Prismic"

NODE_INTERFACE = "Node"

_WORD_RE = re.compile(r"[A-Za-z0-9]+")
_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def pascal_case(*parts: str) -> str:
    """Join ``parts`` into one PascalCase identifier.

    Every run of characters other than ASCII letters and digits separates
    words, as do camel boundaries (including the end of an acronym):

        >>> pascal_case("Prismic", "blog_post", "Data Type")
        'PrismicBlogPostDataType'
        >>> pascal_case("myHTMLField")
        'MyHtmlField'
    """
    words: list[str] = []
    for part in parts:
        for chunk in _WORD_RE.findall(part):
            words.extend(_CAMEL_BOUNDARY_RE.split(chunk))
    return "".join(word[:1].upper() + word[1:].lower() for word in words if word)


def list_of(type_name: str) -> str:
    return f"[{type_name}]"


def unwrap(type_expression: str) -> str:
    """Strip list brackets and non-null markers: ``[Foo!]!`` -> ``Foo``."""
    return type_expression.replace("[", "").replace("]", "").replace("!", "")


def is_list(type_expression: str) -> bool:
    return type_expression.rstrip("!").startswith("[")


class TypeNamer:
    """Issues type names for one compilation.

    Shared type names (``PrismicImageType``...) only depend on the prefix.
    Path-derived names are tracked so that two different paths can never
    end up with the same name.
    """

    def __init__(self, type_prefix: str = "") -> None:
        self._type_prefix = type_prefix
        self._owners: dict[str, tuple[str, ...]] = {}

    def shared(self, suffix: str) -> str:
        return pascal_case(NAMESPACE, self._type_prefix, suffix)

    @property
    def document_interface(self) -> str:
        return self.shared("Document")

    def document_type(self, custom_type_id: str) -> str:
        """Name of a custom type's root document type, without registering it."""
        return pascal_case(NAMESPACE, self._type_prefix, custom_type_id)

    def for_path(self, segments: tuple[str, ...], suffix: str = "") -> str:
        """Name the type produced at ``segments``, unique within this namer.

        A colliding name gets a counter ahead of ``suffix``, so the role
        suffix (``GroupType``, ``SlicesType``...) always ends the name.
        """
        stem = pascal_case(NAMESPACE, self._type_prefix, *segments)
        role = pascal_case(suffix)
        name = f"{stem}{role}"
        owner = segments + (suffix,)
        candidate = name
        counter = 2
        while candidate in self._owners and self._owners[candidate] != owner:
            candidate = f"{stem}{counter}{role}"
            counter += 1
        if candidate != name:
            Log.warning(f"Type name {name} already taken, using {candidate} for {owner}")
        self._owners[candidate] = owner
        return candidate
