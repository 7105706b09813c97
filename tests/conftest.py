"""テスト共通フィクスチャ。"""

from pathlib import Path

import pytest

from tagliatelle.config import LintConfig, ServerConfig
from tagliatelle.services.lint import LintService


@pytest.fixture
def config_dir() -> Path:
    """設定ファイルディレクトリ。"""
    return Path(__file__).parent.parent / "config"


@pytest.fixture
def testdata_dir() -> Path:
    """Goソースのテストデータディレクトリ。"""
    return Path(__file__).parent / "testdata" / "project"


@pytest.fixture
def lint_config() -> LintConfig:
    """jsonキーをcamelで検証するLintConfig。"""
    return LintConfig(rules={"json": "camel"})


@pytest.fixture
def lint_service(lint_config: LintConfig) -> LintService:
    """テスト用LintService。"""
    return LintService(lint_config)


@pytest.fixture
def server_config(config_dir: Path) -> ServerConfig:
    """テスト用ServerConfig。"""
    return ServerConfig(config_file=config_dir / "tagliatelle.yaml")
