"""Tests for actiondoc.swagger.paths -- operations, parameters and tags."""

from __future__ import annotations

from typing import Any

import pytest

from actiondoc.meta.analyzer import analyze_document
from actiondoc.models import (
    ActionDocMeta,
    AnnotationMeta,
    ClassTrait,
    ClassType,
    DocumentMeta,
    MetaRegistry,
    SwaggerOptions,
    TypeDocMeta,
)
from actiondoc.swagger.hooks import SwaggerHooks
from actiondoc.swagger.paths import PathsBuilder, tag_of

STRING = ClassType(name="java.lang.String")
INTEGER = ClassType(name="java.lang.Integer")
OPTIONAL = ClassType(name="org.dbflute.optional.OptionalThing", traits=[ClassTrait.OPTIONAL])
REQUIRED = AnnotationMeta(type_name="org.lastaflute.web.validation.Required")


@pytest.fixture
def builder(products_document: DocumentMeta) -> PathsBuilder:
    """PathsBuilder fed with every action of the products fixture."""
    paths_builder = PathsBuilder(MetaRegistry(), SwaggerOptions())
    paths_builder.add_actions(analyze_document(products_document).actions)
    return paths_builder


def _form_action(url: str, method_name: str, *fields: TypeDocMeta) -> ActionDocMeta:
    return ActionDocMeta(
        url=url,
        method_name=method_name,
        form_type_doc_meta=TypeDocMeta(
            name="form",
            type=ClassType(name="org.app.EditForm"),
            type_name="EditForm",
            nested_properties=list(fields),
        ),
    )


# ---------------------------------------------------------------------------
# Paths and tags
# ---------------------------------------------------------------------------


class TestPathsAndTags:
    """Discovery order, optional-path variants and tags."""

    def test_paths_in_discovery_order(self, builder: PathsBuilder) -> None:
        assert list(builder.paths) == [
            "/products/list",
            "/products/list/{pageNumber}",
            "/products/detail/{productId}",
            "/signin/",
        ]

    def test_verbs(self, builder: PathsBuilder) -> None:
        assert list(builder.paths["/products/list/{pageNumber}"]) == ["post"]
        assert list(builder.paths["/products/detail/{productId}"]) == ["get"]
        assert list(builder.paths["/signin/"]) == ["get"]

    def test_operation_key_order(self, builder: PathsBuilder) -> None:
        operation = builder.paths["/products/list/{pageNumber}"]["post"]
        assert list(operation) == [
            "summary", "description", "consumes", "parameters", "tags", "responses", "produces",
        ]

    def test_tags(self, builder: PathsBuilder) -> None:
        assert builder.tags == [{"name": "products"}, {"name": "signin"}]
        assert builder.paths["/signin/"]["get"]["tags"] == ["signin"]

    def test_optional_variant_drops_parameter(self, builder: PathsBuilder) -> None:
        full = builder.paths["/products/list/{pageNumber}"]["post"]
        variant = builder.paths["/products/list"]["post"]
        assert [p["name"] for p in full["parameters"]] == ["pageNumber", "ProductSearchBody"]
        assert [p["name"] for p in variant["parameters"]] == ["ProductSearchBody"]
        assert variant["responses"] == full["responses"]

    @pytest.mark.parametrize(
        ("url", "tag"),
        [("/products/list", "products"), ("signin/", "signin"), ("/", "")],
    )
    def test_tag_of(self, url: str, tag: str) -> None:
        assert tag_of(url) == tag

    def test_two_optional_parameters(self) -> None:
        action = ActionDocMeta(
            url="/products/{category}/{page}",
            method_name="get$index",
            parameter_type_doc_metas=[
                TypeDocMeta(name="category", type=OPTIONAL, generic_type=STRING),
                TypeDocMeta(name="page", type=OPTIONAL, generic_type=INTEGER),
            ],
        )
        paths_builder = PathsBuilder(MetaRegistry(), SwaggerOptions())
        paths_builder.add_action(action)
        assert list(paths_builder.paths) == [
            "/products",
            "/products/{category}",
            "/products/{category}/{page}",
        ]
        names = [p["name"] for p in paths_builder.paths["/products/{category}"]["get"]["parameters"]]
        assert names == ["category"]


# ---------------------------------------------------------------------------
# Path parameters
# ---------------------------------------------------------------------------


class TestPathParameters:
    def test_example_becomes_default(self, builder: PathsBuilder) -> None:
        param = builder.paths["/products/list/{pageNumber}"]["post"]["parameters"][0]
        assert param == {
            "name": "pageNumber",
            "type": "integer",
            "format": "int32",
            "in": "path",
            "default": 1,
            "required": True,
        }

    def test_plain_path_parameter(self, builder: PathsBuilder) -> None:
        param = builder.paths["/products/detail/{productId}"]["get"]["parameters"][0]
        assert param == {
            "name": "productId",
            "type": "integer",
            "format": "int32",
            "in": "path",
            "required": True,
        }


# ---------------------------------------------------------------------------
# JSON body
# ---------------------------------------------------------------------------


class TestJsonBody:
    def test_body_parameter(self, builder: PathsBuilder) -> None:
        operation = builder.paths["/products/list/{pageNumber}"]["post"]
        assert operation["consumes"] == ["application/json"]
        assert operation["parameters"][1] == {
            "name": "ProductSearchBody",
            "in": "body",
            "required": True,
            "schema": {"$ref": "#/definitions/ProductSearchBody"},
        }

    def test_body_definition(self, builder: PathsBuilder) -> None:
        definition = builder.definitions["ProductSearchBody"]
        assert definition["required"] == ["purchaseMemberName"]
        assert list(definition["properties"]) == [
            "productName", "productStatus", "purchaseMemberName",
        ]
        assert definition["properties"]["productName"] == {
            "description": "product name",
            "type": "string",
            "minLength": 0,
            "maxLength": 80,
            "example": "Dockside",
        }
        status = definition["properties"]["productStatus"]
        assert status["enum"] == ["ONS", "PST"]
        assert status["description"].endswith(":: fromCls(CDef.ProductStatus)")

    def test_iterable_body_is_array(self) -> None:
        action = ActionDocMeta(
            url="/products/import",
            method_name="post$index",
            form_type_doc_meta=TypeDocMeta(
                name="body",
                type=ClassType(name="java.util.List", traits=[ClassTrait.ITERABLE]),
                type_name="List<ProductBody>",
                simple_type_name="List<ProductBody>",
                nested_properties=[TypeDocMeta(name="productName", type=STRING)],
            ),
        )
        paths_builder = PathsBuilder(MetaRegistry(), SwaggerOptions())
        paths_builder.add_action(action)
        body = paths_builder.paths["/products/import"]["post"]["parameters"][0]
        assert body["schema"] == {"type": "array", "items": {"$ref": "#/definitions/ProductBody"}}

    def test_body_definition_replaces_existing(self) -> None:
        paths_builder = PathsBuilder(MetaRegistry(), SwaggerOptions())
        paths_builder.definitions["EditBody"] = {"type": "object", "properties": {}}
        paths_builder.add_action(
            ActionDocMeta(
                url="/edit",
                method_name="post$index",
                form_type_doc_meta=TypeDocMeta(
                    name="body",
                    type=ClassType(name="org.app.EditBody"),
                    type_name="EditBody",
                    nested_properties=[TypeDocMeta(name="memo", type=STRING)],
                ),
            )
        )
        assert paths_builder.definitions["EditBody"]["properties"] == {"memo": {"type": "string"}}


# ---------------------------------------------------------------------------
# Forms
# ---------------------------------------------------------------------------


class TestForms:
    """Form fields as query or formData parameters."""

    def test_query_parameters(self, builder: PathsBuilder) -> None:
        operation = builder.paths["/signin/"]["get"]
        assert "consumes" not in operation
        assert operation["parameters"] == [
            {"name": "account", "type": "string", "in": "query", "required": True},
            {"name": "rememberMe", "type": "boolean", "in": "query", "default": True, "required": False},
        ]

    def test_form_data_is_urlencoded(self) -> None:
        paths_builder = PathsBuilder(MetaRegistry(), SwaggerOptions())
        paths_builder.add_action(
            _form_action("/edit", "post$update", TypeDocMeta(name="memo", type=STRING, annotations=[REQUIRED]))
        )
        operation = paths_builder.paths["/edit"]["post"]
        assert operation["consumes"] == ["application/x-www-form-urlencoded"]
        assert operation["parameters"] == [
            {"name": "memo", "type": "string", "in": "formData", "required": True},
        ]

    def test_file_field_is_multipart(self) -> None:
        upload = TypeDocMeta(
            name="image", type=ClassType(name="org.lastaflute.web.ruts.multipart.MultipartFormFile")
        )
        paths_builder = PathsBuilder(MetaRegistry(), SwaggerOptions())
        paths_builder.add_action(_form_action("/upload", "post$index", upload))
        operation = paths_builder.paths["/upload"]["post"]
        assert operation["consumes"] == ["multipart/form-data"]
        assert operation["parameters"][0]["type"] == "file"

    def test_composite_field_is_string(self) -> None:
        nested = TypeDocMeta(
            name="address",
            type=ClassType(name="org.app.AddressPart"),
            type_name="AddressPart",
            nested_properties=[TypeDocMeta(name="city", type=STRING)],
        )
        rows = TypeDocMeta(
            name="rows",
            type=ClassType(name="java.util.List", traits=[ClassTrait.ITERABLE]),
            type_name="List<AddressPart>",
            nested_properties=[TypeDocMeta(name="city", type=STRING)],
        )
        paths_builder = PathsBuilder(MetaRegistry(), SwaggerOptions())
        paths_builder.add_action(_form_action("/search", "get$index", nested, rows))
        address, rows_param = paths_builder.paths["/search"]["get"]["parameters"]
        assert address == {"name": "address", "type": "string", "in": "query", "required": False}
        assert rows_param["items"] == {"type": "string"}

    def test_default_form_method_option(self) -> None:
        options = SwaggerOptions(default_form_http_method="post")
        paths_builder = PathsBuilder(MetaRegistry(), options)
        paths_builder.add_action(_form_action("/edit", "index", TypeDocMeta(name="memo", type=STRING)))
        assert list(paths_builder.paths["/edit"]) == ["post"]

    def test_default_form_method_hook_wins(self) -> None:
        hooks = SwaggerHooks(default_form_http_method=lambda _action: "put")
        options = SwaggerOptions(default_form_http_method="post")
        paths_builder = PathsBuilder(MetaRegistry(), options, hooks)
        paths_builder.add_action(_form_action("/edit", "index", TypeDocMeta(name="memo", type=STRING)))
        operation: dict[str, Any] = paths_builder.paths["/edit"]["put"]
        assert operation["parameters"][0]["in"] == "formData"
