"""FastMCPベースのMCPサーバーエントリポイント。"""

import logging

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse

from tagliatelle.config import ServerConfig
from tagliatelle.resources.conventions import register_convention_resources
from tagliatelle.services.lint import LintService
from tagliatelle.tools.lint import register_lint_tools

logger = logging.getLogger(__name__)


def create_server(config: ServerConfig | None = None) -> FastMCP:
    """tagliatelle MCPサーバーを作成し、ツール・リソースを登録する。

    Args:
        config: サーバー設定。Noneの場合はデフォルト設定を使用。

    Returns:
        設定済みのFastMCPインスタンス。

    Raises:
        ConfigError: 設定ファイルの読み込みに失敗した場合。
    """
    if config is None:
        config = ServerConfig()

    lint_config = config.lint_config()
    for conv in lint_config.unknown_conventions():
        logger.warning("Rules reference unsupported case %r; matching fields will be reported", conv)

    mcp = FastMCP("tagliatelle")

    # サービス層
    lint_service = LintService(lint_config)

    # MCPインターフェース登録
    register_lint_tools(mcp, lint_service)
    register_convention_resources(mcp, lint_config)

    # ヘルスチェックエンドポイント
    @mcp.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> JSONResponse:
        return JSONResponse({"status": "ok", "rules": len(lint_config.active_rules())})

    return mcp
