"""構造体タグチェックのコマンドラインインターフェース。

終了コード: 0 問題なし、1 違反または解析エラーあり、2 設定エラー。
"""

import argparse
import asyncio
import pathlib
import sys

from tagliatelle.config import LintConfig, configure_logging, load_lint_config
from tagliatelle.models.errors import ConfigError
from tagliatelle.services.lint import LintService

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_CONFIG_ERROR = 2


def _parse_rule(text: str) -> tuple[str, str]:
    key, sep, convention = text.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected KEY=CONVENTION, got {text!r}")
    return key, convention


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="tagliatelle-lint", description="Check struct tag naming conventions.")
    p.add_argument("paths", nargs="+", help="Go files or directories to check.")
    p.add_argument("--config", type=pathlib.Path, default=None, help="YAML config file (golangci-lint layout).")
    p.add_argument(
        "--rule",
        dest="rules",
        action="append",
        type=_parse_rule,
        default=[],
        metavar="KEY=CONVENTION",
        help="Rule for a tag key, e.g. json=camel. Overrides the config file. Repeatable.",
    )
    p.add_argument(
        "--use-field-name",
        action="store_true",
        default=None,
        help="Derive the expected tag value from the field name.",
    )
    p.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING).")
    return p


def load_config(args: argparse.Namespace) -> LintConfig:
    """コマンドライン引数と設定ファイルからLintConfigを組み立てる。

    Raises:
        ConfigError: 設定ファイルが不正、または未対応の命名規則IDがある場合。
    """
    base = load_lint_config(args.config) if args.config is not None else LintConfig()
    rules = {**base.rules, **dict(args.rules)}
    use_field_name = base.use_field_name if args.use_field_name is None else args.use_field_name
    config = LintConfig(rules=rules, use_field_name=use_field_name)
    config.ensure_supported()
    return config


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        config = load_config(args)
    except ConfigError as e:
        print(f"[error] {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    if not config.active_rules():
        print("[warn] No rules configured; nothing to check.", file=sys.stderr)

    service = LintService(config)
    report = asyncio.run(service.lint_paths([pathlib.Path(p) for p in args.paths]))

    for diagnostic in report.diagnostics:
        print(diagnostic)
    for error in report.errors:
        print(f"[error] {error.message}", file=sys.stderr)

    return EXIT_OK if report.ok else EXIT_FINDINGS


if __name__ == "__main__":
    raise SystemExit(main())
