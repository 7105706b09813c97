"""フィールド型の形状分類。"""

from enum import StrEnum


class FieldType(StrEnum):
    """フィールド型の形状タグ。

    ポインタ・配列・スライス・マップの修飾子と、終端となる基底型の分類。
    """

    POINTER = "pointer"
    ARRAY = "array"
    SLICE = "slice"
    MAP = "map"

    BOOL = "bool"
    STRING = "string"
    INT = "int"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT = "uint"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    UINTPTR = "uintptr"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    COMPLEX64 = "complex64"
    COMPLEX128 = "complex128"
    BYTE = "byte"
    RUNE = "rune"
    ERROR = "error"
    ANY = "any"

    # 組み込み型以外の識別子（ユーザー定義型など）
    NAMED = "named"

    @classmethod
    def parse(cls, name: str) -> "FieldType":
        """識別子名を基底型の分類に変換する。"""
        member = _BASE_TYPES.get(name)
        if member is None:
            return cls.NAMED
        return member


_QUALIFIERS = frozenset({FieldType.POINTER, FieldType.ARRAY, FieldType.SLICE, FieldType.MAP})

_BASE_TYPES: dict[str, FieldType] = {
    member.value: member for member in FieldType if member not in _QUALIFIERS and member is not FieldType.NAMED
}
