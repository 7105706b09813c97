"""フィールド名解決・型分類のユニットテスト。"""

import pytest
from builders import ident, make_field, selector, star

from tagliatelle.models.errors import UnsupportedTypeError
from tagliatelle.models.field_type import FieldType
from tagliatelle.models.syntax import ArrayType, ChanType, MapType, OpaqueExpr, SliceType, StructType
from tagliatelle.validators.fields import describe_type, get_field_name, get_field_types, get_type_name


class TestGetFieldName:
    def test_named_field(self) -> None:
        field = make_field("UserID", ident("int"), '`json:"user_id"`')
        assert get_field_name(field) == "UserID"

    def test_last_name_wins(self) -> None:
        field = make_field(["First", "Second"], ident("int"), '`json:"x"`')
        assert get_field_name(field) == "Second"

    def test_empty_names_are_ignored(self) -> None:
        field = make_field(["First", ""], ident("int"), None)
        assert get_field_name(field) == "First"

    def test_embedded_ident(self) -> None:
        assert get_field_name(make_field(None, ident("Base"), None)) == "Base"

    def test_embedded_pointer_selector(self) -> None:
        field = make_field(None, star(selector("pkg", "Thing")), '`json:"thing"`')
        assert get_field_name(field) == "Thing"

    def test_embedded_unsupported_type(self) -> None:
        field = make_field(None, SliceType(elt=ident("int")), None)
        with pytest.raises(UnsupportedTypeError) as exc_info:
            get_field_name(field)
        assert exc_info.value.kind == "slice"
        assert '"elt"' in exc_info.value.serialized
        assert '"pos"' not in exc_info.value.serialized


class TestGetTypeName:
    def test_nested_pointers(self) -> None:
        assert get_type_name(star(star(ident("Node")))) == "Node"

    def test_opaque(self) -> None:
        with pytest.raises(UnsupportedTypeError, match="unexpected type opaque"):
            get_type_name(OpaqueExpr(node_type="FuncType", text="func()"))


class TestGetFieldTypes:
    def test_ident(self) -> None:
        assert get_field_types(ident("int")) == [FieldType.INT]
        assert get_field_types(ident("Custom")) == [FieldType.NAMED]

    def test_pointer_to_slice(self) -> None:
        expr = star(SliceType(elt=ident("int")))
        assert get_field_types(expr) == [FieldType.POINTER, FieldType.SLICE, FieldType.INT]

    def test_array(self) -> None:
        assert get_field_types(ArrayType(len="4", elt=ident("byte"))) == [FieldType.ARRAY, FieldType.BYTE]

    def test_map_uses_value_type(self) -> None:
        expr = MapType(key=ident("string"), value=star(ident("bool")))
        assert get_field_types(expr) == [FieldType.MAP, FieldType.POINTER, FieldType.BOOL]

    def test_selector_uses_selected_name(self) -> None:
        assert get_field_types(selector("time", "Time")) == [FieldType.NAMED]
        assert get_field_types(selector("pkg", "string")) == [FieldType.STRING]

    def test_unsupported_is_empty(self) -> None:
        assert get_field_types(StructType()) == []
        assert get_field_types(ChanType(value=ident("int"))) == []
        assert get_field_types(OpaqueExpr(node_type="InterfaceType", text="interface{}")) == []

    def test_qualifier_over_unsupported_element(self) -> None:
        assert get_field_types(SliceType(elt=StructType())) == [FieldType.SLICE]

    def test_describe_type(self) -> None:
        assert describe_type(StructType()).startswith("unexpected type struct: ")


class TestFieldType:
    def test_parse_builtin(self) -> None:
        assert FieldType.parse("string") is FieldType.STRING
        assert FieldType.parse("any") is FieldType.ANY

    def test_parse_qualifier_name_is_named(self) -> None:
        assert FieldType.parse("map") is FieldType.NAMED
        assert FieldType.parse("named") is FieldType.NAMED
