"""命名規則の変換関数。

各命名規則は独立した純粋関数として実装し、規則IDから関数への対応表を
モジュール読み込み時に一度だけ構築する。
"""

from collections.abc import Callable
from enum import StrEnum

from tagliatelle.models.errors import UnsupportedCaseError


class Convention(StrEnum):
    """サポートする命名規則ID。"""

    CAMEL = "camel"
    PASCAL = "pascal"
    KEBAB = "kebab"
    SNAKE = "snake"
    GO_CAMEL = "goCamel"
    GO_PASCAL = "goPascal"
    GO_KEBAB = "goKebab"
    GO_SNAKE = "goSnake"
    UPPER = "upper"
    LOWER = "lower"


# Go の識別子で全て大文字のまま扱う頭字語
COMMON_INITIALISMS: frozenset[str] = frozenset(
    {
        "ACL",
        "API",
        "ASCII",
        "CPU",
        "CSS",
        "DNS",
        "EOF",
        "GUID",
        "HTML",
        "HTTP",
        "HTTPS",
        "ID",
        "IP",
        "JSON",
        "LHS",
        "QPS",
        "RAM",
        "RHS",
        "RPC",
        "SLA",
        "SMTP",
        "SQL",
        "SSH",
        "TCP",
        "TLS",
        "TTL",
        "UDP",
        "UI",
        "UID",
        "UUID",
        "URI",
        "URL",
        "UTF8",
        "VM",
        "XML",
        "XMPP",
        "XSRF",
        "XSS",
    }
)

_SEPARATORS = frozenset("_-.")


def split_words(value: str) -> list[str]:
    """文字列を単語に分割する。

    区切り文字（``_`` ``-`` ``.`` 空白）は捨てる。小文字・数字の直後の大文字と、
    大文字の連続のうち小文字の直前にある大文字で新しい単語を始める
    （``HTTPServer`` は ``HTTP`` と ``Server``）。数字は直前の単語に含める。
    """
    words: list[str] = []
    current: list[str] = []
    for i, ch in enumerate(value):
        if ch in _SEPARATORS or ch.isspace():
            if current:
                words.append("".join(current))
                current = []
            continue
        if current and ch.isupper():
            prev = current[-1]
            following = value[i + 1] if i + 1 < len(value) else ""
            if prev.islower() or prev.isdigit() or (prev.isupper() and following.islower()):
                words.append("".join(current))
                current = []
        current.append(ch)
    if current:
        words.append("".join(current))
    return words


def _title(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def _is_initialism(word: str) -> bool:
    return word.upper() in COMMON_INITIALISMS


def _go_word(word: str) -> str:
    return word.upper() if _is_initialism(word) else _title(word)


_MAX_INITIALISM = max(len(w) for w in COMMON_INITIALISMS)


def _split_initialisms(word: str) -> list[str]:
    """大文字の連続を既知の頭字語の最長一致で分割する（``JSONURL`` は ``JSON`` と ``URL``）。

    一致しない残りは一つの単語とする。残りに英字が2文字以上ある場合は分割しない
    （``IDENTITY`` は ``ID`` と ``ENTITY`` にしない）。
    """
    if not word.isupper() or word in COMMON_INITIALISMS:
        return [word]
    parts: list[str] = []
    rest = word
    while rest:
        prefix = next(
            (rest[:n] for n in range(min(len(rest), _MAX_INITIALISM), 0, -1) if rest[:n] in COMMON_INITIALISMS),
            None,
        )
        if prefix is None:
            break
        parts.append(prefix)
        rest = rest[len(prefix) :]
    if not parts or sum(ch.isalpha() for ch in rest) > 1:
        return [word]
    if rest:
        parts.append(rest)
    return parts


def _go_words(value: str) -> list[str]:
    return [part for word in split_words(value) for part in _split_initialisms(word)]


def to_camel(value: str) -> str:
    """lowerCamelCase に変換する。"""
    words = split_words(value)
    if not words:
        return ""
    return words[0].lower() + "".join(_title(w) for w in words[1:])


def to_pascal(value: str) -> str:
    """UpperCamelCase に変換する。"""
    return "".join(_title(w) for w in split_words(value))


def to_kebab(value: str) -> str:
    """kebab-case に変換する。"""
    return "-".join(w.lower() for w in split_words(value))


def to_snake(value: str) -> str:
    """snake_case に変換する。"""
    return "_".join(w.lower() for w in split_words(value))


def to_go_camel(value: str) -> str:
    """頭字語を考慮した lowerCamelCase に変換する（``userID``）。

    先頭の単語は頭字語であっても小文字にする（``idToken``）。
    """
    words = _go_words(value)
    if not words:
        return ""
    return words[0].lower() + "".join(_go_word(w) for w in words[1:])


def to_go_pascal(value: str) -> str:
    """頭字語を考慮した UpperCamelCase に変換する（``UserID``）。"""
    return "".join(_go_word(w) for w in _go_words(value))


def to_go_kebab(value: str) -> str:
    """頭字語を大文字のまま残す kebab-case に変換する（``user-ID``）。"""
    return "-".join(w.upper() if _is_initialism(w) else w.lower() for w in _go_words(value))


def to_go_snake(value: str) -> str:
    """頭字語を大文字のまま残す snake_case に変換する（``user_ID``）。"""
    return "_".join(w.upper() if _is_initialism(w) else w.lower() for w in _go_words(value))


def to_upper(value: str) -> str:
    return value.upper()


def to_lower(value: str) -> str:
    return value.lower()


_CONVERTERS: dict[Convention, Callable[[str], str]] = {
    Convention.CAMEL: to_camel,
    Convention.PASCAL: to_pascal,
    Convention.KEBAB: to_kebab,
    Convention.SNAKE: to_snake,
    Convention.GO_CAMEL: to_go_camel,
    Convention.GO_PASCAL: to_go_pascal,
    Convention.GO_KEBAB: to_go_kebab,
    Convention.GO_SNAKE: to_go_snake,
    Convention.UPPER: to_upper,
    Convention.LOWER: to_lower,
}


def is_supported(convention: str) -> bool:
    """命名規則IDがサポート対象かどうかを返す。"""
    return convention in _CONVERTERS


def get_converter(convention: str) -> Callable[[str], str]:
    """命名規則IDに対応する変換関数を返す。

    Raises:
        UnsupportedCaseError: 未対応の命名規則IDの場合。
    """
    try:
        return _CONVERTERS[Convention(convention)]
    except ValueError:
        raise UnsupportedCaseError(convention) from None
