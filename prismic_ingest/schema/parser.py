"""Builds custom type descriptors from Prismic's custom type JSON."""

from collections.abc import Mapping
from typing import Any

from prismic_ingest.schema.exceptions import (
    MalformedFieldConfigError,
    UnknownFieldKindError,
)
from prismic_ingest.schema.models import (
    BlockDescriptor,
    CustomTypeSchema,
    FieldDescriptor,
    FieldKind,
    GroupField,
    ImageField,
    ScalarField,
    SlicesField,
    Thumbnail,
)

_KINDS_BY_NAME = {kind.value: kind for kind in FieldKind}
_SLICE_CHOICE_TYPE = "Slice"


def parse_custom_type(raw: Any) -> CustomTypeSchema:
    """Parse ``{tab: {field: {"type": ..., "config": ...}}}`` into descriptors.

    Raises:
        MalformedFieldConfigError: when a tab, field or config has the wrong shape.
        UnknownFieldKindError: when a field declares an unsupported type.
    """
    tabs = _require_mapping(raw, "custom type")
    return {
        str(tab_name): _parse_fields(tab_fields, tab_name)
        for tab_name, tab_fields in tabs.items()
    }


def parse_field(raw: Any, location: str) -> FieldDescriptor:
    definition = _require_mapping(raw, location)
    kind = _parse_kind(definition.get("type"), location)
    config = definition.get("config") or {}
    if not isinstance(config, Mapping):
        raise MalformedFieldConfigError(f"{location}: 'config' must be an object")

    if kind is FieldKind.IMAGE:
        return ImageField(thumbnails=_parse_thumbnails(config, location), config=config)
    if kind is FieldKind.GROUP:
        fields = _parse_fields(config.get("fields") or {}, f"{location}.fields")
        return GroupField(fields=fields, config=config)
    if kind is FieldKind.SLICES:
        return SlicesField(choices=_parse_choices(config, location), config=config)
    return ScalarField(kind=kind, config=config)


def _parse_fields(raw: Any, location: str) -> dict[str, FieldDescriptor]:
    fields = _require_mapping(raw, location)
    return {
        str(name): parse_field(definition, f"{location}.{name}")
        for name, definition in fields.items()
    }


def _parse_kind(raw: Any, location: str) -> FieldKind:
    if not isinstance(raw, str):
        raise MalformedFieldConfigError(f"{location}: 'type' must be a string")
    kind = _KINDS_BY_NAME.get(raw)
    if kind is None:
        raise UnknownFieldKindError(
            f"{location}: unsupported field type {raw!r}. "
            f"Choose from: {sorted(_KINDS_BY_NAME)}"
        )
    return kind


def _parse_thumbnails(config: Mapping[str, Any], location: str) -> tuple[Thumbnail, ...]:
    raw = config.get("thumbnails") or []
    if not isinstance(raw, list):
        raise MalformedFieldConfigError(f"{location}: 'thumbnails' must be a list")
    thumbnails: list[Thumbnail] = []
    for index, item in enumerate(raw):
        if not isinstance(item, Mapping) or not isinstance(item.get("name"), str):
            raise MalformedFieldConfigError(
                f"{location}: thumbnail at index {index} must have a string 'name'"
            )
        thumbnails.append(
            Thumbnail(name=item["name"], width=item.get("width"), height=item.get("height"))
        )
    return tuple(thumbnails)


def _parse_choices(config: Mapping[str, Any], location: str) -> dict[str, BlockDescriptor]:
    choices = _require_mapping(config.get("choices") or {}, f"{location}.choices")
    blocks: dict[str, BlockDescriptor] = {}
    for choice_name, raw_choice in choices.items():
        choice_location = f"{location}.choices.{choice_name}"
        choice = _require_mapping(raw_choice, choice_location)
        choice_type = choice.get("type", _SLICE_CHOICE_TYPE)
        if choice_type != _SLICE_CHOICE_TYPE:
            raise UnknownFieldKindError(
                f"{choice_location}: unsupported slice choice type {choice_type!r}"
            )
        blocks[str(choice_name)] = BlockDescriptor(
            non_repeat=_parse_fields(
                choice.get("non-repeat") or {}, f"{choice_location}.non-repeat"
            ),
            repeat=_parse_fields(choice.get("repeat") or {}, f"{choice_location}.repeat"),
        )
    return blocks


def _require_mapping(value: Any, location: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise MalformedFieldConfigError(f"{location} must be an object")
    return value
