"""Tests for actiondoc.swagger.defaultvalue -- property example values."""

from __future__ import annotations

import pytest

from actiondoc.exceptions import DefaultValueError
from actiondoc.models import ClassifiedEnumConstant, ClassTrait, ClassType, TypeDocMeta
from actiondoc.swagger.defaultvalue import derive_default_value

LIST = ClassType(name="java.util.List", traits=[ClassTrait.ITERABLE])
STATUS = ClassType(
    name="org.app.CDef$ProductStatus",
    traits=[ClassTrait.ENUM, ClassTrait.CLASSIFICATION],
    enum_constants=[
        ClassifiedEnumConstant(name="OnSale", code="ONS", alias="On Sale"),
        ClassifiedEnumConstant(name="Stopped", code="PST", alias="Stopped"),
    ],
)


class TestDeriveDefaultValue:
    """Examples for scalars, lists and enums."""

    def test_scalar_from_comment(self) -> None:
        meta = TypeDocMeta(name="price", type=ClassType(name="java.lang.Long"), comment="price e.g. 1800")
        assert derive_default_value(meta, meta.type) == 1800

    def test_scalar_without_example(self) -> None:
        meta = TypeDocMeta(name="name", type=ClassType(name="java.lang.String"))
        assert derive_default_value(meta, meta.type) is None

    def test_list_of_integers(self) -> None:
        meta = TypeDocMeta(name="ids", type=LIST, comment="ids e.g. [1, 2, null]")
        item = ClassType(name="java.lang.Integer")
        assert derive_default_value(meta, LIST, item) == [1, 2, None]

    def test_list_defaults_to_strings(self) -> None:
        meta = TypeDocMeta(name="tags", type=LIST, comment='tags e.g. ["sea", "land"]')
        assert derive_default_value(meta, LIST) == ["sea", "land"]

    def test_list_of_composites_has_no_example(self) -> None:
        meta = TypeDocMeta(
            name="rows",
            type=LIST,
            comment="rows e.g. [1]",
            nested_properties=[TypeDocMeta(name="x")],
        )
        assert derive_default_value(meta, LIST) is None

    def test_list_without_list_example(self) -> None:
        meta = TypeDocMeta(name="ids", type=LIST, comment="ids e.g. 1")
        assert derive_default_value(meta, LIST) is None

    def test_list_item_without_data_type(self) -> None:
        meta = TypeDocMeta(name="rows", type=LIST, comment="rows e.g. [a]")
        assert derive_default_value(meta, LIST, ClassType(name="org.app.Row")) is None

    def test_enum_first_code(self) -> None:
        meta = TypeDocMeta(name="status", type=STATUS)
        assert derive_default_value(meta, STATUS) == "ONS"

    def test_enum_comment_wins(self) -> None:
        meta = TypeDocMeta(name="status", type=STATUS, comment="status e.g. PST")
        assert derive_default_value(meta, STATUS) == "PST"

    def test_composite_has_none(self) -> None:
        row = ClassType(name="org.app.Row")
        assert derive_default_value(TypeDocMeta(name="row", type=row), row) is None

    def test_unfit_example_raises(self) -> None:
        meta = TypeDocMeta(name="count", type=ClassType(name="int"), comment="count e.g. many")
        with pytest.raises(DefaultValueError, match="property=count"):
            derive_default_value(meta, meta.type)
