from typing import Any
from unittest.mock import MagicMock

import pytest

from prismic_ingest.schema.compiler import SchemaCompiler, compile_custom_type
from prismic_ingest.schema.exceptions import MalformedFieldConfigError
from prismic_ingest.schema.models import (
    CompiledCustomType,
    FieldKind,
    ObjectTypeDeclaration,
    PathEntry,
    ScalarField,
    UnionTypeDeclaration,
)
from prismic_ingest.schema.parser import parse_custom_type

CUSTOM_TYPE_ID = "custom_type"

SLICES_JSON = {
    "Main": {
        "body": {
            "type": "Slices",
            "config": {
                "choices": {
                    "slice": {
                        "type": "Slice",
                        "non-repeat": {"key": {"type": "Text"}},
                        "repeat": {"key": {"type": "Text"}},
                    }
                }
            },
        }
    }
}


def _node_id_builder(document_type: str, document_id: str) -> str:
    return "result of node id builder"


def _compile(raw: dict[str, Any], **kwargs: Any) -> CompiledCustomType:
    options: dict[str, Any] = {"node_id_builder": _node_id_builder}
    options.update(kwargs)
    return compile_custom_type(CUSTOM_TYPE_ID, parse_custom_type(raw), **options)


def _object(compiled: CompiledCustomType, name: str) -> ObjectTypeDeclaration:
    declaration = compiled.find_declaration(name)
    assert isinstance(declaration, ObjectTypeDeclaration), f"{name} not declared"
    return declaration


def _data_field(compiled: CompiledCustomType, field_name: str):
    return _object(compiled, "PrismicCustomTypeDataType").fields[field_name]


class TestScalarFields:
    @pytest.mark.parametrize(
        ("kind", "expected"),
        [
            ("Color", "String"),
            ("Select", "String"),
            ("Text", "String"),
            ("Number", "Float"),
            ("StructuredText", "PrismicStructuredTextType"),
            ("GeoPoint", "PrismicGeoPointType"),
            ("Embed", "PrismicEmbedType"),
            ("Image", "PrismicImageType"),
            ("Link", "PrismicLinkType"),
        ],
    )
    def test_field_type(self, kind: str, expected: str) -> None:
        compiled = _compile({"Main": {"key": {"type": kind}}})

        assert _data_field(compiled, "key").type == expected

    @pytest.mark.parametrize("kind", ["Date", "Timestamp"])
    def test_dates_carry_dateformat_extension(self, kind: str) -> None:
        compiled = _compile({"Main": {"key": {"type": kind}}})

        field = _data_field(compiled, "key")
        assert field.type == "Date"
        assert field.extensions == {"dateformat": {}}

    def test_uid_lives_on_the_document_root(self) -> None:
        compiled = _compile({"Main": {"uid": {"type": "UID"}, "title": {"type": "Text"}}})

        root = _object(compiled, "PrismicCustomType")
        assert root.fields["uid"].type == "String!"
        assert "uid" not in _object(compiled, "PrismicCustomTypeDataType").fields
        assert compiled.type_paths[0] == PathEntry(("custom_type", "uid"), "String!")


class TestSimpleCustomType:
    def test_declares_data_type_and_root(self) -> None:
        compiled = _compile({"Main": {"title": {"type": "Text"}}})

        assert [d.name for d in compiled.type_declarations] == [
            "PrismicCustomTypeDataType",
            "PrismicCustomType",
        ]
        assert _data_field(compiled, "title").type == "String"

    def test_type_paths(self) -> None:
        compiled = _compile({"Main": {"title": {"type": "Text"}}})

        assert compiled.type_paths == (
            PathEntry(("custom_type", "data", "title"), "String"),
            PathEntry(("custom_type", "data"), "PrismicCustomTypeDataType"),
            PathEntry(("custom_type",), "PrismicCustomType"),
        )

    def test_root_implements_node_and_document(self) -> None:
        compiled = _compile({"Main": {"title": {"type": "Text"}}})

        root = _object(compiled, "PrismicCustomType")
        assert root.implements("Node", "PrismicDocument")
        assert root.fields["data"].type == "PrismicCustomTypeDataType"
        assert root.fields["dataRaw"].type == "JSON!"
        assert root.fields["prismicId"].type == "ID!"
        assert root.fields["alternate_languages"].type == "[PrismicAlternateLanguageType!]!"

    def test_tabs_are_merged_in_order(self) -> None:
        compiled = _compile(
            {"Main": {"title": {"type": "Text"}}, "SEO": {"meta": {"type": "Text"}}}
        )

        assert list(_object(compiled, "PrismicCustomTypeDataType").fields) == ["title", "meta"]

    def test_field_declared_in_two_tabs_raises(self) -> None:
        with pytest.raises(MalformedFieldConfigError, match="'title' in tab 'SEO'"):
            _compile({"Main": {"title": {"type": "Text"}}, "SEO": {"title": {"type": "Text"}}})

    def test_type_prefix(self) -> None:
        compiled = _compile({"Main": {"title": {"type": "Text"}}}, type_prefix="blog")

        assert compiled.type_paths[-1] == PathEntry(("custom_type",), "PrismicBlogCustomType")
        root = _object(compiled, "PrismicBlogCustomType")
        assert root.implements("Node", "PrismicBlogDocument")

    def test_is_deterministic(self, page_schema_json: dict) -> None:
        first = _compile(page_schema_json)
        second = _compile(page_schema_json)

        assert first.type_paths == second.type_paths
        assert [d.name for d in first.type_declarations] == [
            d.name for d in second.type_declarations
        ]

    def test_compilers_do_not_share_state(self) -> None:
        schema = {"Main": {"title": ScalarField(kind=FieldKind.TEXT)}}
        first = SchemaCompiler("a", node_id_builder=_node_id_builder).compile(schema)
        second = SchemaCompiler("a", node_id_builder=_node_id_builder).compile(schema)

        assert first.type_paths == second.type_paths


class TestGroupFields:
    def test_group_returns_list_of_namespaced_group_type(self) -> None:
        compiled = _compile({"Main": {"key": {"type": "Group", "config": {"fields": {}}}}})

        assert _data_field(compiled, "key").type == "[PrismicCustomTypeKeyGroupType]"

    def test_group_type_has_field_types(self) -> None:
        compiled = _compile(
            {"Main": {"key": {"type": "Group", "config": {"fields": {"text": {"type": "Text"}}}}}}
        )

        group = _object(compiled, "PrismicCustomTypeKeyGroupType")
        assert group.fields["text"].type == "String"
        assert PathEntry(("custom_type", "data", "key", "text"), "String") in compiled.type_paths
        assert (
            PathEntry(("custom_type", "data", "key"), "[PrismicCustomTypeKeyGroupType]")
            in compiled.type_paths
        )

    def test_nested_groups(self) -> None:
        compiled = _compile(
            {
                "Main": {
                    "outer": {
                        "type": "Group",
                        "config": {
                            "fields": {
                                "inner": {
                                    "type": "Group",
                                    "config": {"fields": {"n": {"type": "Number"}}},
                                }
                            }
                        },
                    }
                }
            }
        )

        outer = _object(compiled, "PrismicCustomTypeOuterGroupType")
        assert outer.fields["inner"].type == "[PrismicCustomTypeOuterInnerGroupType]"
        assert _object(compiled, "PrismicCustomTypeOuterInnerGroupType").fields["n"].type == "Float"
        assert (
            PathEntry(("custom_type", "data", "outer", "inner", "n"), "Float")
            in compiled.type_paths
        )


class TestImageFields:
    def test_thumbnail_paths_are_registered(self) -> None:
        compiled = _compile(
            {
                "Main": {
                    "hero": {
                        "type": "Image",
                        "config": {"thumbnails": [{"name": "mobile"}, {"name": "tablet"}]},
                    }
                }
            }
        )

        assert compiled.type_paths[:3] == (
            PathEntry(("custom_type", "data", "hero"), "PrismicImageType"),
            PathEntry(
                ("custom_type", "data", "hero", "thumbnails", "mobile"),
                "PrismicImageThumbnailType",
            ),
            PathEntry(
                ("custom_type", "data", "hero", "thumbnails", "tablet"),
                "PrismicImageThumbnailType",
            ),
        )


class TestLinkFields:
    def test_resolver_gets_document_node_by_id(self) -> None:
        compiled = _compile({"Main": {"key": {"type": "Link"}}})
        resolve = _data_field(compiled, "key").resolve
        node_model = MagicMock()
        node_model.get_node_by_id.return_value = {"id": "node"}

        result = resolve(
            {"link": {"link_type": "Document", "id": "id", "type": "custom_type"}},
            "link",
            node_model,
        )

        node_model.get_node_by_id.assert_called_once_with(
            id="result of node id builder", type="PrismicCustomType"
        )
        assert result["document"] == {"id": "node"}

    def test_resolver_leaves_web_links_alone(self) -> None:
        compiled = _compile({"Main": {"key": {"type": "Link"}}})
        resolve = _data_field(compiled, "key").resolve
        node_model = MagicMock()
        web_link = {"link_type": "Web", "url": "https://example.com"}

        assert resolve({"key": web_link}, "key", node_model) == web_link
        node_model.get_node_by_id.assert_not_called()

    def test_resolver_leaves_links_without_type_alone(self) -> None:
        compiled = _compile({"Main": {"key": {"type": "Link"}}})
        resolve = _data_field(compiled, "key").resolve
        node_model = MagicMock()
        link = {"id": "id"}

        assert resolve({"key": link}, "key", node_model) == link
        node_model.get_node_by_id.assert_not_called()


class TestSliceFields:
    def test_slice_type_has_primary_and_items(self) -> None:
        compiled = _compile(SLICES_JSON)

        slice_type = _object(compiled, "PrismicCustomTypeBodySlice")
        assert slice_type.fields["primary"].type == "PrismicCustomTypeBodySlicePrimaryType"
        assert slice_type.fields["items"].type == "[PrismicCustomTypeBodySliceItemType]"
        assert slice_type.fields["slice_type"].type == "String!"
        assert "Node" in slice_type.interfaces

    def test_primary_and_item_types_have_field_types(self) -> None:
        compiled = _compile(SLICES_JSON)

        primary = _object(compiled, "PrismicCustomTypeBodySlicePrimaryType")
        items = _object(compiled, "PrismicCustomTypeBodySliceItemType")
        assert primary.fields["key"].type == "String"
        assert items.fields["key"].type == "String"

    def test_slices_field_is_list_of_union(self) -> None:
        compiled = _compile(SLICES_JSON)

        assert _data_field(compiled, "body").type == "[PrismicCustomTypeBodySlicesType]"
        union = compiled.find_declaration("PrismicCustomTypeBodySlicesType")
        assert isinstance(union, UnionTypeDeclaration)
        assert union.types == ("PrismicCustomTypeBodySlice",)

    def test_one_slice_type_per_choice_in_declaration_order(self) -> None:
        choices = {
            name: {"type": "Slice", "non-repeat": {"key": {"type": "Text"}}}
            for name in ("quote", "gallery", "cta")
        }
        compiled = _compile({"Main": {"body": {"type": "Slices", "config": {"choices": choices}}}})

        expected = (
            "PrismicCustomTypeBodyQuote",
            "PrismicCustomTypeBodyGallery",
            "PrismicCustomTypeBodyCta",
        )
        union = compiled.find_declaration("PrismicCustomTypeBodySlicesType")
        assert isinstance(union, UnionTypeDeclaration)
        assert union.types == expected
        slice_types = [
            declaration.name
            for declaration in compiled.type_declarations
            if isinstance(declaration, ObjectTypeDeclaration)
            and "slice_type" in declaration.fields
        ]
        assert slice_types == list(expected)
        assert [
            entry.path[-1] for entry in compiled.type_paths if entry.type in expected
        ] == ["quote", "gallery", "cta"]

    def test_slices_resolver_gets_slice_nodes_by_ids(self) -> None:
        compiled = _compile(SLICES_JSON)
        resolve = _data_field(compiled, "body").resolve
        node_model = MagicMock()

        resolve({"body": ["id1", "id2"]}, "body", node_model)

        node_model.get_nodes_by_ids.assert_called_once_with(ids=["id1", "id2"])

    def test_type_paths_list_children_before_containers(self) -> None:
        compiled = _compile(SLICES_JSON)

        assert compiled.type_paths == (
            PathEntry(("custom_type", "data", "body", "slice", "primary", "key"), "String"),
            PathEntry(
                ("custom_type", "data", "body", "slice", "primary"),
                "PrismicCustomTypeBodySlicePrimaryType",
            ),
            PathEntry(("custom_type", "data", "body", "slice", "items", "key"), "String"),
            PathEntry(
                ("custom_type", "data", "body", "slice", "items"),
                "[PrismicCustomTypeBodySliceItemType]",
            ),
            PathEntry(("custom_type", "data", "body", "slice"), "PrismicCustomTypeBodySlice"),
            PathEntry(("custom_type", "data", "body"), "[PrismicCustomTypeBodySlicesType]"),
            PathEntry(("custom_type", "data"), "PrismicCustomTypeDataType"),
            PathEntry(("custom_type",), "PrismicCustomType"),
        )

    def test_choice_without_repeat_fields_has_no_items(self) -> None:
        compiled = _compile(
            {
                "Main": {
                    "body": {
                        "type": "Slices",
                        "config": {
                            "choices": {
                                "text": {"non-repeat": {"copy": {"type": "StructuredText"}}}
                            }
                        },
                    }
                }
            }
        )

        slice_type = _object(compiled, "PrismicCustomTypeBodyText")
        assert "items" not in slice_type.fields
        assert compiled.find_declaration("PrismicCustomTypeBodyTextItemType") is None
