"""Tests for actiondoc.swagger.parameter -- TypeDocMeta to parameter maps."""

from __future__ import annotations

from typing import Any

import pytest

from actiondoc.models import (
    AnnotationMeta,
    ClassifiedEnumConstant,
    ClassTrait,
    ClassType,
    MetaRegistry,
    PlainEnumConstant,
    TypeDocMeta,
)
from actiondoc.swagger.parameter import ParameterMapper, effective_type

STRING = ClassType(name="java.lang.String")
INTEGER = ClassType(name="java.lang.Integer")
LIST = ClassType(name="java.util.List", traits=[ClassTrait.ITERABLE])
OPTIONAL = ClassType(name="org.dbflute.optional.OptionalThing", traits=[ClassTrait.OPTIONAL])
STATUS = ClassType(
    name="org.app.AppCDef$MemberStatus",
    traits=[ClassTrait.ENUM, ClassTrait.CLASSIFICATION],
    enum_constants=[
        ClassifiedEnumConstant(name="Formalized", code="FML", alias="Formal"),
        ClassifiedEnumConstant(name="Provisional", code="PRV", alias="Provisional"),
    ],
)
CONSTRAINT = AnnotationMeta(type_name="javax.validation.Constraint")


def _constraint(type_name: str, **attributes: Any) -> AnnotationMeta:
    return AnnotationMeta(type_name=type_name, attributes=attributes, meta_annotations=[CONSTRAINT])


@pytest.fixture
def mapper() -> ParameterMapper:
    return ParameterMapper(MetaRegistry())


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------


class TestToParameterMap:
    """Dispatch on the documented class."""

    def test_data_type(self, mapper: ParameterMapper) -> None:
        meta = TypeDocMeta(name="productId", type=INTEGER, description="product ID")
        assert mapper.to_parameter_map(meta, {}) == {
            "name": "productId",
            "description": "product ID",
            "type": "integer",
            "format": "int32",
        }

    def test_public_name(self, mapper: ParameterMapper) -> None:
        meta = TypeDocMeta(name="memberName", public_name="member_name", type=STRING)
        assert mapper.to_parameter_map(meta, {})["name"] == "member_name"

    def test_json_parameter_is_string(self, mapper: ParameterMapper) -> None:
        meta = TypeDocMeta(
            name="filter",
            type=ClassType(name="org.app.Filter"),
            annotations=[AnnotationMeta(type_name="org.lastaflute.JsonParameter")],
            nested_properties=[TypeDocMeta(name="x", type=STRING)],
        )
        definitions: dict[str, Any] = {}
        assert mapper.to_parameter_map(meta, definitions) == {"name": "filter", "type": "string"}
        assert definitions == {}

    def test_object_and_map(self, mapper: ParameterMapper) -> None:
        assert mapper.to_parameter_map(TypeDocMeta(name="any"), {})["type"] == "object"
        map_meta = TypeDocMeta(name="attrs", type=ClassType(name="java.util.HashMap", traits=[ClassTrait.MAP]))
        assert mapper.to_parameter_map(map_meta, {})["type"] == "object"

    def test_composite_registers_definition(self, mapper: ParameterMapper) -> None:
        meta = TypeDocMeta(
            name="member",
            type=ClassType(name="org.app.MemberPart"),
            type_name="MemberPart",
            description="ignored for refs",
            nested_properties=[
                TypeDocMeta(
                    name="memberId",
                    type=INTEGER,
                    annotations=[AnnotationMeta(type_name="org.lastaflute.Required")],
                ),
                TypeDocMeta(name="memberName", type=STRING),
            ],
        )
        definitions: dict[str, Any] = {}
        assert mapper.to_parameter_map(meta, definitions) == {
            "name": "member",
            "$ref": "#/definitions/MemberPart",
        }
        assert definitions == {
            "MemberPart": {
                "type": "object",
                "required": ["memberId"],
                "properties": {
                    "memberId": {"type": "integer", "format": "int32"},
                    "memberName": {"type": "string"},
                },
            }
        }

    def test_definition_registered_once(self, mapper: ParameterMapper) -> None:
        definitions: dict[str, Any] = {"MemberPart": {"type": "object", "properties": {}}}
        meta = TypeDocMeta(
            name="member",
            type=ClassType(name="org.app.MemberPart"),
            type_name="MemberPart",
            nested_properties=[TypeDocMeta(name="memberId", type=INTEGER)],
        )
        mapper.to_parameter_map(meta, definitions)
        assert definitions["MemberPart"] == {"type": "object", "properties": {}}

    def test_native_without_data_type_is_object(self, mapper: ParameterMapper) -> None:
        meta = TypeDocMeta(name="nothing", type=ClassType(name="java.lang.Void"))
        assert mapper.to_parameter_map(meta, {})["type"] == "object"

    def test_optional_is_documented_as_argument(self, mapper: ParameterMapper) -> None:
        meta = TypeDocMeta(name="page", type=OPTIONAL, generic_type=INTEGER, comment="page e.g. 2")
        assert effective_type(meta) == INTEGER
        assert mapper.to_parameter_map(meta, {}) == {
            "name": "page",
            "type": "integer",
            "format": "int32",
            "example": 2,
        }

    def test_optional_without_argument_is_itself(self) -> None:
        meta = TypeDocMeta(name="page", type=OPTIONAL)
        assert effective_type(meta) == OPTIONAL


# ---------------------------------------------------------------------------
# Arrays
# ---------------------------------------------------------------------------


class TestArrays:
    def test_list_of_strings(self, mapper: ParameterMapper) -> None:
        meta = TypeDocMeta(name="tags", type=LIST, type_name="List<String>", generic_type=STRING)
        param = mapper.to_parameter_map(meta, {})
        assert param["type"] == "array"
        assert param["items"] == {"type": "string"}

    def test_list_of_composites(self, mapper: ParameterMapper) -> None:
        meta = TypeDocMeta(
            name="rows",
            type=LIST,
            type_name="List<ProductRow>",
            generic_type=ClassType(name="org.app.ProductRow"),
            nested_properties=[TypeDocMeta(name="productId", type=INTEGER)],
        )
        definitions: dict[str, Any] = {}
        param = mapper.to_parameter_map(meta, definitions)
        assert param["items"] == {"$ref": "#/definitions/ProductRow"}
        assert list(definitions) == ["ProductRow"]

    def test_list_of_enums(self, mapper: ParameterMapper) -> None:
        meta = TypeDocMeta(name="statuses", type=LIST, type_name="List<MemberStatus>", generic_type=STATUS)
        items = mapper.to_parameter_map(meta, {})["items"]
        assert items["type"] == "string"
        assert items["enum"] == ["FML", "PRV"]

    def test_list_of_unknown(self, mapper: ParameterMapper) -> None:
        meta = TypeDocMeta(name="things", type=LIST, type_name="List")
        assert mapper.to_parameter_map(meta, {})["items"] == {"type": "object"}

    def test_nested_lists(self, mapper: ParameterMapper) -> None:
        meta = TypeDocMeta(
            name="matrix",
            type=LIST,
            type_name="List<List<Integer>>",
            generic_type=ClassType(name="java.util.List", traits=[ClassTrait.ITERABLE]),
        )
        param = mapper.to_parameter_map(meta, {})
        assert param["items"] == {"type": "array", "items": {"type": "object"}}

    def test_list_example(self, mapper: ParameterMapper) -> None:
        meta = TypeDocMeta(
            name="ids", type=LIST, type_name="List<Integer>", generic_type=INTEGER, comment="ids e.g. [1, 2]"
        )
        assert mapper.to_parameter_map(meta, {})["example"] == [1, 2]


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class TestEnums:
    def test_classified(self, mapper: ParameterMapper) -> None:
        meta = TypeDocMeta(name="status", type=STATUS, description="member status")
        assert mapper.to_parameter_map(meta, {}) == {
            "name": "status",
            "description": (
                "member status:"
                " * `FML` - Formalized, Formal."
                " * `PRV` - Provisional."
                " :: fromCls(AppCDef.MemberStatus)"
            ),
            "type": "string",
            "enum": ["FML", "PRV"],
            "x-enum": [
                {"name": "Formalized", "code": "FML", "alias": "Formal"},
                {"name": "Provisional", "code": "PRV", "alias": "Provisional"},
            ],
            "example": "FML",
        }

    def test_plain_without_description(self, mapper: ParameterMapper) -> None:
        color = ClassType(
            name="org.app.Color",
            traits=[ClassTrait.ENUM],
            enum_constants=[PlainEnumConstant(name="RED")],
        )
        param = mapper.to_parameter_map(TypeDocMeta(name="color", type=color), {})
        assert param["description"] == " * `RED` - RED. :: fromCls(Color)"


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestValidation:
    """Constraint annotations become validation keywords."""

    def _param(self, mapper: ParameterMapper, *annotations: AnnotationMeta) -> dict[str, Any]:
        meta = TypeDocMeta(name="x", type=STRING, annotations=list(annotations))
        return mapper.to_parameter_map(meta, {})

    def test_length(self, mapper: ParameterMapper) -> None:
        param = self._param(mapper, _constraint("org.hibernate.Length", min=2, max=32))
        assert (param["minLength"], param["maxLength"]) == (2, 32)

    def test_size_defaults(self, mapper: ParameterMapper) -> None:
        param = self._param(mapper, _constraint("javax.validation.Size"))
        assert (param["minLength"], param["maxLength"]) == (0, 2147483647)

    def test_pattern_and_email(self, mapper: ParameterMapper) -> None:
        assert self._param(mapper, _constraint("x.Pattern", regexp="^[a-z]+$"))["pattern"] == "^[a-z]+$"
        assert self._param(mapper, _constraint("x.Email"))["pattern"] == ".*"

    def test_min_max(self, mapper: ParameterMapper) -> None:
        param = self._param(mapper, _constraint("x.Min", value=1), _constraint("x.Max", value=9))
        assert (param["minimum"], param["maximum"]) == (1, 9)

    def test_non_constraint_is_ignored(self, mapper: ParameterMapper) -> None:
        param = self._param(mapper, AnnotationMeta(type_name="x.Length", attributes={"max": 3}))
        assert "maxLength" not in param

    def test_later_qualified_name_overwrites(self, mapper: ParameterMapper) -> None:
        param = self._param(
            mapper,
            _constraint("z.Size", max=5),
            _constraint("a.Length", max=10),
        )
        assert param["maxLength"] == 5

    def test_composed_constraint(self, mapper: ParameterMapper) -> None:
        composed = AnnotationMeta(
            type_name="org.app.ProductCode",
            meta_annotations=[CONSTRAINT, _constraint("x.Pattern", regexp="^P[0-9]+$")],
        )
        assert self._param(mapper, composed)["pattern"] == "^P[0-9]+$"
