"""Goソースに対する構造体タグチェックの実行を管理するサービス。"""

import asyncio
import logging
from collections.abc import Iterable
from pathlib import Path

from tagliatelle.config import LintConfig
from tagliatelle.models.diagnostic import Diagnostic, FileError, LintReport
from tagliatelle.models.errors import SourceParseError
from tagliatelle.models.syntax import SourceFile
from tagliatelle.parser.go import parse_source
from tagliatelle.validators.struct_tags import StructTagChecker

logger = logging.getLogger(__name__)

# ディレクトリ走査時に除外するディレクトリ名
_SKIP_DIRS = frozenset({"vendor", "testdata", "node_modules"})


def iter_go_files(paths: Iterable[Path]) -> list[Path]:
    """パスの一覧を ``*.go`` ファイルの一覧に展開する。

    ディレクトリは再帰的に走査し、vendor・testdata・隠しディレクトリは除外する。
    ファイルが直接指定された場合は拡張子に関係なく含める。
    """
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            for candidate in sorted(path.rglob("*.go")):
                relative = candidate.relative_to(path).parts[:-1]
                if any(part in _SKIP_DIRS or part.startswith(".") for part in relative):
                    continue
                if candidate.is_file():
                    files.append(candidate)
        else:
            files.append(path)
    return files


class LintService:
    """構造体タグチェックの実行を管理する。"""

    def __init__(self, config: LintConfig) -> None:
        self._config = config
        self._checker = StructTagChecker(config)

    @property
    def config(self) -> LintConfig:
        return self._config

    def check_tree(self, tree: SourceFile) -> list[Diagnostic]:
        """構文木を直接チェックする。"""
        return self._checker.check(tree)

    async def lint_source(self, source: str, filename: str = "<source>") -> LintReport:
        """ソース文字列をチェックする。

        Raises:
            SourceParseError: ソースの解析に失敗した場合。
        """
        return self._lint_source(source, filename)

    async def lint_file(self, path: Path) -> LintReport:
        """1ファイルをチェックする。

        読み込み・解析に失敗した場合はレポートのerrorsに記録する。
        """
        return await asyncio.to_thread(self._lint_file, path)

    async def lint_paths(self, paths: Iterable[Path]) -> LintReport:
        """複数のファイル・ディレクトリを並行してチェックする。

        結果は入力順（ディレクトリ内はパス順）に連結する。
        """
        files = iter_go_files(paths)
        logger.info("Linting %d Go files", len(files))

        reports = await asyncio.gather(*(self.lint_file(path) for path in files))

        merged = LintReport()
        for report in reports:
            merged.merge(report)
        return merged

    def _lint_source(self, source: str, filename: str) -> LintReport:
        if not self._config.rules:
            return LintReport(files_checked=1)
        tree = parse_source(source, filename)
        return LintReport(diagnostics=self._checker.check(tree), files_checked=1)

    def _lint_file(self, path: Path) -> LintReport:
        filename = str(path)
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Unable to read %s: %s", filename, e)
            return LintReport(errors=[FileError(filename=filename, message=str(e))])

        try:
            return self._lint_source(source, filename)
        except SourceParseError as e:
            logger.warning("Unable to parse %s: %s", filename, e)
            return LintReport(errors=[FileError(filename=filename, message=str(e))], files_checked=1)
