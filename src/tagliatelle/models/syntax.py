"""Go構文木のデータモデル。

構造体型・フィールド・型式のみを扱う最小限の構文木。
型式は ``kind`` を判別子とする直和型として表現する。
"""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class Position(BaseModel):
    """ソース上の位置（行・列は1始まり）。"""

    model_config = ConfigDict(frozen=True)

    filename: str = ""
    line: int = 1
    column: int = 1
    offset: int = 0

    def __str__(self) -> str:
        if self.filename:
            return f"{self.filename}:{self.line}:{self.column}"
        return f"{self.line}:{self.column}"


class Node(BaseModel):
    """構文木ノードの基底クラス。"""

    model_config = ConfigDict(frozen=True)

    pos: Position = Field(default_factory=Position)


class Ident(Node):
    """識別子。"""

    kind: Literal["ident"] = "ident"
    name: str


class StarExpr(Node):
    """ポインタ型 ``*X``。"""

    kind: Literal["star"] = "star"
    x: "Expr"


class SelectorExpr(Node):
    """修飾名 ``pkg.Sel``。"""

    kind: Literal["selector"] = "selector"
    x: "Expr"
    sel: Ident


class ArrayType(Node):
    """固定長配列型 ``[N]Elt``。"""

    kind: Literal["array"] = "array"
    len: str
    elt: "Expr"


class SliceType(Node):
    """スライス型 ``[]Elt``。"""

    kind: Literal["slice"] = "slice"
    elt: "Expr"


class MapType(Node):
    """マップ型 ``map[Key]Value``。"""

    kind: Literal["map"] = "map"
    key: "Expr"
    value: "Expr"


class ChanType(Node):
    """チャネル型。"""

    kind: Literal["chan"] = "chan"
    dir: Literal["both", "send", "recv"] = "both"
    value: "Expr"


class OpaqueExpr(Node):
    """構造を解析しない型式（interface, func, ジェネリクス等）。"""

    kind: Literal["opaque"] = "opaque"
    node_type: str
    text: str


class BasicLit(Node):
    """タグ文字列リテラル。``value`` は引用符を含む生の文字列。"""

    kind: Literal["string"] = "string"
    value: str


class FieldDecl(Node):
    """構造体のフィールド宣言。埋め込みフィールドでは ``names`` が空。"""

    names: list[Ident] = Field(default_factory=list)
    type: "Expr"
    tag: BasicLit | None = None


class StructType(Node):
    """構造体型。"""

    kind: Literal["struct"] = "struct"
    fields: list[FieldDecl] = Field(default_factory=list)


Expr = Annotated[
    Ident | StarExpr | SelectorExpr | ArrayType | SliceType | MapType | ChanType | StructType | OpaqueExpr,
    Field(discriminator="kind"),
]


class SourceFile(BaseModel):
    """1ファイル分の構文木。出現順の構造体型を保持する。"""

    model_config = ConfigDict(frozen=True)

    filename: str = ""
    structs: list[StructType] = Field(default_factory=list)


for _model in (StarExpr, SelectorExpr, ArrayType, SliceType, MapType, ChanType, FieldDecl, StructType, SourceFile):
    _model.model_rebuild()
