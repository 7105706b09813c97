"""フィールド名の解決とフィールド型の形状分類。"""

import json
from typing import Any

from tagliatelle.models.errors import UnsupportedTypeError
from tagliatelle.models.field_type import FieldType
from tagliatelle.models.syntax import (
    ArrayType,
    FieldDecl,
    Ident,
    MapType,
    SelectorExpr,
    SliceType,
    StarExpr,
)


def get_field_name(field: FieldDecl) -> str:
    """フィールドの正規名を返す。

    複数名のフィールド宣言（``a, b int``）では最後の名前を採用する。
    埋め込みフィールドでは型式から基底の型名を取り出す。

    Raises:
        UnsupportedTypeError: 埋め込みフィールドの型式が識別子・ポインタ・修飾名以外の場合。
    """
    name = ""
    for ident in field.names:
        if ident.name:
            name = ident.name

    if name:
        return name

    return get_type_name(field.type)


def get_type_name(expr: object) -> str:
    """型式を剥がして基底の型名を返す。"""
    if isinstance(expr, Ident):
        return expr.name
    if isinstance(expr, StarExpr):
        return get_type_name(expr.x)
    if isinstance(expr, SelectorExpr):
        return get_type_name(expr.sel)
    raise UnsupportedTypeError(_kind_of(expr), _serialize(expr))


def get_field_types(expr: object) -> list[FieldType]:
    """型式を外側から順に形状タグの列へ分類する。

    未対応の型式に対しては空リストを返す。呼び出し側はこれをエラーとして扱う。
    """
    if isinstance(expr, Ident):
        return [FieldType.parse(expr.name)]
    if isinstance(expr, StarExpr):
        return [FieldType.POINTER, *get_field_types(expr.x)]
    if isinstance(expr, ArrayType):
        return [FieldType.ARRAY, *get_field_types(expr.elt)]
    if isinstance(expr, SliceType):
        return [FieldType.SLICE, *get_field_types(expr.elt)]
    if isinstance(expr, MapType):
        return [FieldType.MAP, *get_field_types(expr.value)]
    if isinstance(expr, SelectorExpr):
        return get_field_types(expr.sel)
    return []


def describe_type(expr: object) -> str:
    """未対応の型式をエラーメッセージ用の文字列にする。"""
    return str(UnsupportedTypeError(_kind_of(expr), _serialize(expr)))


def _kind_of(expr: object) -> str:
    return getattr(expr, "kind", type(expr).__name__)


def _serialize(expr: object) -> str:
    dump = getattr(expr, "model_dump", None)
    if dump is None:
        return repr(expr)
    return json.dumps(_strip_positions(dump(mode="json")), ensure_ascii=False)


def _strip_positions(data: Any) -> Any:
    if isinstance(data, dict):
        return {k: _strip_positions(v) for k, v in data.items() if k != "pos"}
    if isinstance(data, list):
        return [_strip_positions(v) for v in data]
    return data
