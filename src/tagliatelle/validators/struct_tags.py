"""構造体タグの命名規則チェックロジック。"""

import logging
from collections.abc import Iterator

from tagliatelle.config import LintConfig
from tagliatelle.models.diagnostic import Diagnostic
from tagliatelle.models.errors import AnalysisError, UnsupportedCaseError, UnsupportedTypeError
from tagliatelle.models.syntax import (
    ArrayType,
    BasicLit,
    ChanType,
    FieldDecl,
    MapType,
    SliceType,
    SourceFile,
    StarExpr,
    StructType,
)
from tagliatelle.naming.case import get_converter
from tagliatelle.tags.parser import lookup_tag_value
from tagliatelle.validators.fields import describe_type, get_field_name, get_field_types

logger = logging.getLogger(__name__)

# 値がこれと一致するタグはシリアライズ対象外を意味する
_SKIP_VALUE = "-"


def iter_struct_types(tree: SourceFile) -> Iterator[StructType]:
    """構文木の構造体型を前順で列挙する。

    フィールドの型に入れ子になった構造体型は、親の構造体の後に列挙する。
    """
    for struct in tree.structs:
        yield from _walk_struct(struct)


def _walk_struct(struct: StructType) -> Iterator[StructType]:
    yield struct
    for field in struct.fields:
        yield from _walk_expr(field.type)


def _walk_expr(expr: object) -> Iterator[StructType]:
    if isinstance(expr, StructType):
        yield from _walk_struct(expr)
    elif isinstance(expr, StarExpr):
        yield from _walk_expr(expr.x)
    elif isinstance(expr, ArrayType | SliceType):
        yield from _walk_expr(expr.elt)
    elif isinstance(expr, MapType):
        yield from _walk_expr(expr.key)
        yield from _walk_expr(expr.value)
    elif isinstance(expr, ChanType):
        yield from _walk_expr(expr.value)


class StructTagChecker:
    """設定されたルールに基づいて構造体タグの命名規則を検証する。"""

    def __init__(self, config: LintConfig) -> None:
        self._config = config

    def check(self, tree: SourceFile) -> list[Diagnostic]:
        """構文木内の全構造体のタグを検証する。

        Args:
            tree: 検証対象の構文木。

        Returns:
            検出された問題のリスト。問題がない場合は空リスト。

        Raises:
            AnalysisError: 構文木が渡されなかった場合。
        """
        if not self._config.rules:
            return []

        if not isinstance(tree, SourceFile):
            raise AnalysisError(f"missing syntax tree: got {type(tree).__name__}")

        results: list[Diagnostic] = []
        for struct in iter_struct_types(tree):
            if not struct.fields:
                # 空の構造体はスキップ
                continue
            logger.debug("Checking struct at %s (%d fields)", struct.pos, len(struct.fields))
            for field in struct.fields:
                results.extend(self._check_field(struct, field))

        return results

    def _check_field(self, struct: StructType, field: FieldDecl) -> list[Diagnostic]:
        """単一フィールドを全ルールで検証する。"""
        if field.tag is None:
            # タグのないフィールドは対象外
            return []

        try:
            field_name = get_field_name(field)
        except UnsupportedTypeError as e:
            return [Diagnostic(pos=struct.pos, message=f"unable to get field name: {e}")]

        if not get_field_types(field.type):
            return [Diagnostic(pos=struct.pos, message=f"unable to get field type: {describe_type(field.type)}")]

        results: list[Diagnostic] = []
        for key, convention in self._config.rules.items():
            if not convention:
                continue
            diagnostic = self._check_rule(struct, field.tag, field_name, key, convention)
            if diagnostic is not None:
                results.append(diagnostic)
        return results

    def _check_rule(
        self,
        struct: StructType,
        tag: BasicLit,
        field_name: str,
        key: str,
        convention: str,
    ) -> Diagnostic | None:
        """1つのルールでタグの値を検証する。

        Returns:
            違反または設定エラーがあればその診断結果、問題なければNone。
        """
        value, ok = lookup_tag_value(tag, key)
        if not ok:
            return None

        if value == _SKIP_VALUE:
            return None

        if value == "":
            # 空の値は将来設定される可能性があるため対象外
            return None

        try:
            converter = get_converter(convention)
        except UnsupportedCaseError as e:
            logger.debug("Skipping rule %s(%s): %s", key, convention, e)
            return Diagnostic(pos=struct.pos, message=f"{key}({convention}): {e}")

        source = field_name if self._config.use_field_name else value
        expected = converter(source)

        if value != expected:
            return Diagnostic(pos=tag.pos, message=f"{key}({convention}): got '{value}' want '{expected}'")
        return None
