"""構造体タグチェックのMCPツール定義。"""

from pathlib import Path
from typing import Any

from fastmcp import FastMCP

from tagliatelle.config import LintConfig
from tagliatelle.models.diagnostic import LintReport
from tagliatelle.models.errors import TagliatelleError
from tagliatelle.naming.case import Convention, get_converter
from tagliatelle.services.lint import LintService


def _report_to_dict(report: LintReport) -> dict[str, Any]:
    return {
        "ok": report.ok,
        "files_checked": report.files_checked,
        "count": len(report.diagnostics),
        "diagnostics": [
            {
                "filename": d.pos.filename,
                "line": d.pos.line,
                "column": d.pos.column,
                "message": d.message,
            }
            for d in report.diagnostics
        ],
        "errors": [e.model_dump() for e in report.errors],
    }


def register_lint_tools(mcp: FastMCP, lint_service: LintService) -> None:
    """構造体タグチェック関連のMCPツールを登録する。"""

    def _service_for(rules: dict[str, str] | None, use_field_name: bool | None) -> LintService:
        if rules is None and use_field_name is None:
            return lint_service
        base = lint_service.config
        config = LintConfig(
            rules=base.rules if rules is None else rules,
            use_field_name=base.use_field_name if use_field_name is None else use_field_name,
        )
        config.ensure_supported()
        return LintService(config)

    @mcp.tool()
    async def check_source(
        source: str,
        filename: str = "main.go",
        rules: dict[str, str] | None = None,
        use_field_name: bool | None = None,
    ) -> dict[str, Any]:
        """Goソースの構造体タグが命名規則に従っているかチェックする。

        rules を省略するとサーバー設定のルールを使用します。
        rules はタグキーから命名規則ID（camel, snake, goCamel 等）への対応です。

        Args:
            source: チェック対象のGoソース。
            filename: 診断結果に表示するファイル名。
            rules: このチェックだけで使うルール。
            use_field_name: Trueの場合、期待値をフィールド名から導出する。
        """
        try:
            service = _service_for(rules, use_field_name)
            report = await service.lint_source(source, filename)
            return _report_to_dict(report)
        except TagliatelleError as e:
            return {"error": type(e).__name__, "message": str(e)}

    @mcp.tool()
    async def check_paths(paths: list[str]) -> dict[str, Any]:
        """サーバー側のGoファイル・ディレクトリをチェックする。

        ディレクトリは再帰的に走査します（vendor, testdata, 隠しディレクトリは除外）。

        Args:
            paths: チェック対象のファイルまたはディレクトリのパス。
        """
        try:
            report = await lint_service.lint_paths([Path(p) for p in paths])
            return _report_to_dict(report)
        except TagliatelleError as e:
            return {"error": type(e).__name__, "message": str(e)}

    @mcp.tool()
    async def convert_case(value: str, convention: str) -> dict[str, Any]:
        """文字列を指定した命名規則に変換する。

        Args:
            value: 変換対象の文字列。
            convention: 命名規則ID。
        """
        try:
            converter = get_converter(convention)
        except TagliatelleError as e:
            return {"error": type(e).__name__, "message": str(e)}
        return {"value": value, "convention": convention, "result": converter(value)}

    @mcp.tool()
    async def list_conventions() -> dict[str, Any]:
        """利用可能な命名規則IDの一覧を取得する。"""
        return {"conventions": [c.value for c in Convention]}

    @mcp.tool()
    async def get_config() -> dict[str, Any]:
        """サーバーに設定されているチェックルールを取得する。"""
        config = lint_service.config
        return {
            "rules": config.rules,
            "use_field_name": config.use_field_name,
            "unknown_conventions": config.unknown_conventions(),
        }
