"""tagliatelleの設定管理。"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import BaseSettings

from tagliatelle.models.errors import ConfigError
from tagliatelle.naming.case import is_supported

LOG_FORMAT = "%(levelname)s %(asctime)s [%(name)s:%(lineno)d] %(message)s"

logger = logging.getLogger(__name__)


class LintConfig(BaseModel):
    """チェック実行ごとの不変な設定。

    rules はタグキーから命名規則IDへの対応。命名規則IDが空のルールは無効扱い。
    """

    model_config = ConfigDict(frozen=True)

    rules: dict[str, str] = Field(default_factory=dict)
    use_field_name: bool = False

    def active_rules(self) -> dict[str, str]:
        """命名規則IDが設定されているルールのみを返す。"""
        return {key: conv for key, conv in self.rules.items() if conv}

    def unknown_conventions(self) -> list[str]:
        """未対応の命名規則IDを重複なしで返す。"""
        unknown: list[str] = []
        for conv in self.active_rules().values():
            if not is_supported(conv) and conv not in unknown:
                unknown.append(conv)
        return unknown

    def ensure_supported(self) -> None:
        """未対応の命名規則IDが含まれていれば例外を送出する。

        Raises:
            ConfigError: 未対応の命名規則IDがある場合。
        """
        unknown = self.unknown_conventions()
        if unknown:
            raise ConfigError(f"unsupported case: {', '.join(unknown)}")


def load_lint_config(path: Path) -> LintConfig:
    """YAML設定ファイルからLintConfigを読み込む。

    golangci-lint と同じ ``case:`` 配下のレイアウトと、トップレベルに
    ``rules`` / ``use-field-name`` を直接置くレイアウトの両方を受け付ける。

    Raises:
        ConfigError: ファイルが存在しない、またはYAMLの内容が不正な場合。
    """
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigError(f"config file not found: {path}") from None
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from None

    if data is None:
        return LintConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"invalid config in {path}: top-level mapping expected")

    section: Any = data.get("case", data)
    if not isinstance(section, dict):
        raise ConfigError(f"invalid config in {path}: 'case' must be a mapping")

    try:
        config = LintConfig.model_validate(
            {
                "rules": section.get("rules") or {},
                "use_field_name": section.get("use-field-name", section.get("use_field_name", False)),
            }
        )
    except ValidationError as e:
        raise ConfigError(f"invalid config in {path}: {e}") from None

    for conv in config.unknown_conventions():
        logger.warning("Unknown convention %r in %s", conv, path)
    return config


class ServerConfig(BaseSettings):
    """サーバー設定。環境変数から読み込み可能。"""

    model_config = {"env_prefix": "TAGLIATELLE_"}

    config_file: Path | None = None
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # 設定ファイルのルールをキー単位で上書きする (JSON形式の環境変数)
    rules: dict[str, str] = {}
    use_field_name: bool | None = None

    def lint_config(self) -> LintConfig:
        """設定ファイルと個別設定をマージしたLintConfigを返す。"""
        base = load_lint_config(self.config_file) if self.config_file is not None else LintConfig()
        use_field_name = base.use_field_name if self.use_field_name is None else self.use_field_name
        return LintConfig(rules={**base.rules, **self.rules}, use_field_name=use_field_name)


def configure_logging(level: str = "INFO") -> None:
    """ルートロガーの出力形式とレベルを設定する。"""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
