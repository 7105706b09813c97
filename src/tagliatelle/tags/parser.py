"""構造体タグの解析。

タグは ``key:"value,opt"`` 形式のエントリを空白区切りで並べたもの。
書式が崩れている箇所以降は読み飛ばし、キーが見つからない場合と区別しない。
"""

from tagliatelle.models.syntax import BasicLit

_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    '"': '"',
}
# エスケープ文字と続く16進数の桁数
_HEX_ESCAPES = {"x": 2, "u": 4, "U": 8}
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_OCTAL_DIGITS = frozenset("01234567")


def unquote(quoted: str) -> str | None:
    """ダブルクォートの文字列リテラルを Go のエスケープ規則で解釈する。

    ``\\x`` と8進数のエスケープはバイト値として扱う。改行を含む場合や
    未定義のエスケープがある場合はNoneを返す。
    """
    if len(quoted) < 2 or quoted[0] != '"' or quoted[-1] != '"':
        return None
    body = quoted[1:-1]
    if "\n" in body:
        return None

    out = bytearray()
    i = 0
    while i < len(body):
        ch = body[i]
        if ch == '"':
            return None
        if ch != "\\":
            out += ch.encode("utf-8", "surrogatepass")
            i += 1
            continue
        if i + 1 >= len(body):
            return None

        esc = body[i + 1]
        if esc in _SIMPLE_ESCAPES:
            out += _SIMPLE_ESCAPES[esc].encode()
            i += 2
        elif esc in _HEX_ESCAPES:
            width = _HEX_ESCAPES[esc]
            digits = body[i + 2 : i + 2 + width]
            if len(digits) != width or not set(digits) <= _HEX_DIGITS:
                return None
            code = int(digits, 16)
            if esc == "x":
                out.append(code)
            elif code > 0x10FFFF or 0xD800 <= code <= 0xDFFF:
                return None
            else:
                out += chr(code).encode("utf-8")
            i += 2 + width
        elif esc in _OCTAL_DIGITS:
            digits = body[i + 1 : i + 4]
            if len(digits) != 3 or not set(digits) <= _OCTAL_DIGITS:
                return None
            code = int(digits, 8)
            if code > 0xFF:
                return None
            out.append(code)
            i += 4
        else:
            return None

    return out.decode("utf-8", errors="replace")


def unquote_tag(literal: str) -> str | None:
    """タグリテラルから外側の引用符を取り除く。

    バッククォートのrawリテラルはそのまま剥がし、ダブルクォートの
    リテラルはエスケープを解釈する。解釈できない場合はNoneを返す。
    """
    if literal.startswith("`"):
        return literal.strip("`")
    if literal.startswith('"'):
        return unquote(literal)
    return literal


def lookup(tag: str, key: str) -> tuple[str, bool]:
    """引用符を除いたタグ文字列から ``key`` の値を探す。

    Returns:
        (値, 見つかったかどうか) のタプル。
    """
    while tag:
        tag = tag.lstrip(" ")
        if not tag:
            break

        i = 0
        while i < len(tag) and tag[i] > " " and tag[i] not in ':"\x7f':
            i += 1
        if i == 0 or i + 1 >= len(tag) or tag[i] != ":" or tag[i + 1] != '"':
            break
        name = tag[:i]
        tag = tag[i + 1 :]

        # 引用符で囲まれた値の終端を探す
        i = 1
        while i < len(tag) and tag[i] != '"':
            if tag[i] == "\\":
                i += 1
            i += 1
        if i >= len(tag):
            break
        quoted = tag[: i + 1]
        tag = tag[i + 1 :]

        if name == key:
            value = unquote(quoted)
            if value is None:
                break
            return value, True

    return "", False


def lookup_tag_value(tag: BasicLit, key: str) -> tuple[str, bool]:
    """タグリテラルから ``key`` の値の先頭カンマ区切り要素を取り出す。

    ``omitempty`` 等の後続オプションは捨てる。
    """
    raw = unquote_tag(tag.value)
    if raw is None:
        return "", False

    value, ok = lookup(raw, key)
    if not ok:
        return value, ok

    return value.split(",")[0], True
