"""Goソースから構造体型の構文木を組み立てるリーダー。

完全なGoパーサーではなく、構造体型とそのフィールド宣言・型式だけを読む。
ファイル中の ``struct {`` の出現をすべて構造体型として扱う。
"""

import bisect
import logging
import re
from typing import NamedTuple, NoReturn

from tagliatelle.models.errors import SourceParseError
from tagliatelle.models.syntax import (
    ArrayType,
    BasicLit,
    ChanType,
    Expr,
    FieldDecl,
    Ident,
    MapType,
    OpaqueExpr,
    Position,
    SelectorExpr,
    SliceType,
    SourceFile,
    StarExpr,
    StructType,
)

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(
    r"""
    (?P<newline>\n)
    |(?P<space>[ \t\r\f\v]+)
    |(?P<line_comment>//[^\n]*)
    |(?P<block_comment>/\*.*?\*/)
    |(?P<raw_string>`[^`]*`)
    |(?P<string>"(?:\\.|[^"\\\n])*")
    |(?P<rune>'(?:\\.|[^'\\\n])+')
    |(?P<ident>[^\W\d]\w*)
    |(?P<number>\.?\d(?:[eEpP][+-]|[\w.])*)
    |(?P<op>\.\.\.|<<=|>>=|&\^=|&&|\|\||<-|\+\+|--|==|!=|<=|>=|:=|<<|>>|&\^|[-+*/%&|^]=|[-+*/%&|^<>=!~:.,;()\[\]{}])
    """,
    re.VERBOSE | re.DOTALL,
)

GO_KEYWORDS: frozenset[str] = frozenset(
    {
        "break",
        "case",
        "chan",
        "const",
        "continue",
        "default",
        "defer",
        "else",
        "fallthrough",
        "for",
        "func",
        "go",
        "goto",
        "if",
        "import",
        "interface",
        "map",
        "package",
        "range",
        "return",
        "select",
        "struct",
        "switch",
        "type",
        "var",
    }
)

# 行末で自動的にセミコロンを挿入するトークン
_SEMI_KEYWORDS = frozenset({"break", "continue", "fallthrough", "return"})
_SEMI_OPS = frozenset({")", "]", "}", "++", "--"})
_SEMI_KINDS = frozenset({"number", "string", "raw_string", "rune"})

_OPENERS = {"(": ")", "[": "]", "{": "}"}

# 型式の先頭になりうるトークン
_TYPE_STARTS = frozenset({"*", "[", "map", "chan", "<-", "struct", "interface", "func", "("})

_TAG_KINDS = frozenset({"string", "raw_string"})


class Token(NamedTuple):
    kind: str
    text: str
    offset: int


def tokenize(source: str, filename: str = "<source>") -> list[Token]:
    """ソースをトークン列に分割する。

    コメントと空白は捨て、Goの規則に従って改行位置にセミコロンを挿入する。
    末尾には ``eof`` トークンを置く。

    Raises:
        SourceParseError: 解釈できない文字がある場合。
    """
    tokens: list[Token] = []
    pos = 0
    length = len(source)

    def needs_semicolon() -> bool:
        if not tokens:
            return False
        last = tokens[-1]
        if last.kind == "ident":
            return last.text not in GO_KEYWORDS or last.text in _SEMI_KEYWORDS
        if last.kind == "op":
            return last.text in _SEMI_OPS
        return last.kind in _SEMI_KINDS

    while pos < length:
        match = _TOKEN_RE.match(source, pos)
        if match is None:
            line, column = _line_column(source, pos)
            raise SourceParseError(f"unexpected character {source[pos]!r}", filename, line, column)
        kind = match.lastgroup or ""
        text = match.group()
        if kind == "newline" or (kind == "block_comment" and "\n" in text):
            if needs_semicolon():
                tokens.append(Token("op", ";", pos))
        elif kind not in ("space", "line_comment", "block_comment"):
            tokens.append(Token(kind, text, pos))
        pos = match.end()

    if needs_semicolon():
        tokens.append(Token("op", ";", length))
    tokens.append(Token("eof", "", length))
    return tokens


def _line_column(source: str, offset: int) -> tuple[int, int]:
    line = source.count("\n", 0, offset) + 1
    column = offset - (source.rfind("\n", 0, offset) + 1) + 1
    return line, column


class _StructParser:
    """トークン列から構造体型を読む再帰下降パーサー。"""

    def __init__(self, source: str, tokens: list[Token], filename: str) -> None:
        self._source = source
        self._tokens = tokens
        self._filename = filename
        self._index = 0
        self._line_starts = [0] + [m.end() for m in re.finditer("\n", source)]
        self.parsed_offsets: set[int] = set()

    # ---- トークン操作 ----

    def _peek(self, ahead: int = 0) -> Token:
        index = min(self._index + ahead, len(self._tokens) - 1)
        return self._tokens[index]

    def _at(self, text: str) -> bool:
        tok = self._peek()
        return tok.kind != "eof" and tok.text == text and tok.kind not in _TAG_KINDS

    def _advance(self) -> Token:
        tok = self._peek()
        if tok.kind != "eof":
            self._index += 1
        return tok

    def _expect(self, text: str) -> Token:
        tok = self._peek()
        if not self._at(text):
            self._fail(f"expected {text!r}, found {tok.text or 'EOF'!r}", tok)
        return self._advance()

    def _position(self, tok: Token) -> Position:
        line = bisect.bisect_right(self._line_starts, tok.offset)
        column = tok.offset - self._line_starts[line - 1] + 1
        return Position(filename=self._filename, line=line, column=column, offset=tok.offset)

    def _fail(self, message: str, tok: Token) -> NoReturn:
        pos = self._position(tok)
        raise SourceParseError(message, self._filename, pos.line, pos.column)

    def _skip_balanced(self) -> Token:
        """開き括弧から対応する閉じ括弧までを読み飛ばし、閉じ括弧を返す。"""
        stack = [_OPENERS[self._advance().text]]
        while True:
            tok = self._advance()
            if tok.kind == "eof":
                self._fail("unbalanced brackets", tok)
            if tok.kind != "op":
                continue
            if tok.text in _OPENERS:
                stack.append(_OPENERS[tok.text])
            elif tok.text in (")", "]", "}"):
                if tok.text != stack.pop():
                    self._fail(f"mismatched {tok.text!r}", tok)
                if not stack:
                    return tok

    def _text(self, start: Token, end: Token) -> str:
        return self._source[start.offset : end.offset + len(end.text)]

    # ---- 構文 ----

    def parse_struct_at(self, index: int) -> StructType:
        self._index = index
        return self._parse_struct()

    def _parse_struct(self) -> StructType:
        start = self._expect("struct")
        self.parsed_offsets.add(start.offset)
        self._expect("{")

        fields: list[FieldDecl] = []
        while not self._at("}"):
            if self._at(";"):
                self._advance()
                continue
            if self._peek().kind == "eof":
                self._fail("unterminated struct type", self._peek())
            fields.append(self._parse_field())
            if self._at(";"):
                self._advance()
            elif not self._at("}"):
                tok = self._peek()
                self._fail(f"expected ';' or '}}' after field, found {tok.text!r}", tok)
        self._expect("}")
        return StructType(pos=self._position(start), fields=fields)

    def _parse_field(self) -> FieldDecl:
        start = self._peek()
        tok = start
        names: list[Ident] = []

        if tok.kind == "ident" and tok.text not in GO_KEYWORDS and not self._is_embedded():
            names.append(self._parse_ident())
            while self._at(","):
                self._advance()
                names.append(self._parse_ident())
        elif not (tok.text == "*" or tok.kind == "ident"):
            self._fail(f"unexpected {tok.text or 'EOF'!r} in field declaration", tok)

        field_type = self._parse_type()

        tag = None
        tok = self._peek()
        if tok.kind in _TAG_KINDS:
            self._advance()
            tag = BasicLit(pos=self._position(tok), value=tok.text)

        pos = names[0].pos if names else self._position(start)
        return FieldDecl(pos=pos, names=names, type=field_type, tag=tag)

    def _is_embedded(self) -> bool:
        """識別子で始まるフィールドが埋め込みフィールドかどうか。"""
        following = self._peek(1)
        if following.text == "[" and following.kind == "op":
            # T[int] の形なら型引数付きの埋め込み、[]int や [4]int なら名前付き
            return self._ends_field(self._matching_index(self._index + 1) + 1)
        return self._ends_field(self._index + 1)

    def _ends_field(self, index: int) -> bool:
        tok = self._tokens[min(index, len(self._tokens) - 1)]
        if tok.kind in _TAG_KINDS or tok.kind == "eof":
            return True
        return tok.kind == "op" and tok.text in (".", ";", "}")

    def _matching_index(self, index: int) -> int:
        """index の開き括弧に対応する閉じ括弧の位置を返す。見つからなければ末尾。"""
        depth = 0
        for i in range(index, len(self._tokens)):
            tok = self._tokens[i]
            if tok.kind != "op":
                continue
            if tok.text in _OPENERS:
                depth += 1
            elif tok.text in (")", "]", "}"):
                depth -= 1
                if depth == 0:
                    return i
        return len(self._tokens) - 1

    def _parse_ident(self) -> Ident:
        tok = self._peek()
        if tok.kind != "ident" or tok.text in GO_KEYWORDS:
            self._fail(f"expected identifier, found {tok.text or 'EOF'!r}", tok)
        self._advance()
        return Ident(pos=self._position(tok), name=tok.text)

    def _starts_type(self, tok: Token) -> bool:
        if tok.kind == "ident":
            return tok.text in _TYPE_STARTS or tok.text not in GO_KEYWORDS
        return tok.kind == "op" and tok.text in _TYPE_STARTS

    def _parse_type(self) -> Expr:
        tok = self._peek()
        pos = self._position(tok)

        if self._at("*"):
            self._advance()
            return StarExpr(pos=pos, x=self._parse_type())

        if self._at("["):
            self._advance()
            if self._at("]"):
                self._advance()
                return SliceType(pos=pos, elt=self._parse_type())
            self._index -= 1
            close = self._skip_balanced()
            length = self._source[tok.offset + 1 : close.offset].strip()
            return ArrayType(pos=pos, len=length, elt=self._parse_type())

        if self._at("map"):
            self._advance()
            self._expect("[")
            key = self._parse_type()
            self._expect("]")
            return MapType(pos=pos, key=key, value=self._parse_type())

        if self._at("chan"):
            self._advance()
            direction = "both"
            if self._at("<-"):
                self._advance()
                direction = "send"
            return ChanType(pos=pos, dir=direction, value=self._parse_type())

        if self._at("<-"):
            self._advance()
            self._expect("chan")
            return ChanType(pos=pos, dir="recv", value=self._parse_type())

        if self._at("struct"):
            return self._parse_struct()

        if self._at("interface"):
            self._advance()
            if not self._at("{"):
                self._fail("expected '{' after interface", self._peek())
            end = self._skip_balanced()
            return OpaqueExpr(pos=pos, node_type="InterfaceType", text=self._text(tok, end))

        if self._at("func"):
            return self._parse_func_type()

        if self._at("("):
            end = self._skip_balanced()
            return OpaqueExpr(pos=pos, node_type="ParenExpr", text=self._text(tok, end))

        if tok.kind == "ident" and tok.text not in GO_KEYWORDS:
            expr = self._parse_type_name()
            if self._at("["):
                end = self._skip_balanced()
                return OpaqueExpr(pos=pos, node_type="IndexExpr", text=self._text(tok, end))
            return expr

        self._fail(f"unexpected {tok.text or 'EOF'!r} in type", tok)

    def _parse_type_name(self) -> Ident | SelectorExpr:
        start = self._peek()
        ident = self._parse_ident()
        if self._at(".") and self._peek(1).kind == "ident":
            self._advance()
            sel = self._parse_ident()
            return SelectorExpr(pos=self._position(start), x=ident, sel=sel)
        return ident

    def _parse_func_type(self) -> OpaqueExpr:
        start = self._advance()
        if not self._at("("):
            self._fail("expected '(' after func", self._peek())
        end = self._skip_balanced()
        if self._at("("):
            end = self._skip_balanced()
        elif self._starts_type(self._peek()):
            self._parse_type()
            end = self._tokens[self._index - 1]
        return OpaqueExpr(pos=self._position(start), node_type="FuncType", text=self._text(start, end))


def parse_source(source: str, filename: str = "<source>") -> SourceFile:
    """Goソースを読み、含まれる全ての構造体型を持つ構文木を返す。

    Raises:
        SourceParseError: 字句解析または構造体型の構文解析に失敗した場合。
    """
    tokens = tokenize(source, filename)
    parser = _StructParser(source, tokens, filename)

    structs: list[StructType] = []
    for index, tok in enumerate(tokens[:-1]):
        if tok.kind != "ident" or tok.text != "struct" or tokens[index + 1].text != "{":
            continue
        if tok.offset in parser.parsed_offsets:
            # 親の構造体のフィールド型として読み込み済み
            continue
        structs.append(parser.parse_struct_at(index))

    logger.debug("Parsed %d struct types from %s", len(structs), filename)
    return SourceFile(filename=filename, structs=structs)
