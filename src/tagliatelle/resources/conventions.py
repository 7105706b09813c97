"""命名規則と設定のMCPリソース定義。"""

import yaml
from fastmcp import FastMCP

from tagliatelle.config import LintConfig
from tagliatelle.naming.case import Convention, get_converter

# リソースに載せる変換例の入力
_SAMPLE_INPUTS = ("user_id", "HTTPServer", "createdAt")


def register_convention_resources(mcp: FastMCP, config: LintConfig) -> None:
    """命名規則関連のMCPリソースを登録する。"""

    @mcp.resource("tagliatelle://conventions")
    async def conventions() -> str:
        """命名規則IDと変換例の一覧を取得する。"""
        data = {
            "conventions": {
                c.value: {sample: get_converter(c.value)(sample) for sample in _SAMPLE_INPUTS}
                for c in Convention
            }
        }
        return yaml.dump(data, allow_unicode=True, default_flow_style=False, sort_keys=False)

    @mcp.resource("tagliatelle://config")
    async def current_config() -> str:
        """サーバーに設定されているチェックルールを取得する。

        golangci-lint の設定ファイルと同じレイアウトで返します。
        """
        data = {"case": {"use-field-name": config.use_field_name, "rules": dict(config.rules)}}
        return yaml.dump(data, allow_unicode=True, default_flow_style=False, sort_keys=False)
