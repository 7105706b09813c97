"""tagliatelleのカスタム例外クラス。"""


class TagliatelleError(Exception):
    """tagliatelleの基底例外クラス。"""


class UnsupportedCaseError(TagliatelleError):
    """未対応の命名規則が指定された場合の例外。"""

    def __init__(self, convention: str) -> None:
        super().__init__(f"unsupported case: {convention}")
        self.convention = convention


class UnsupportedTypeError(TagliatelleError):
    """フィールド名を解決できない型式の場合の例外。"""

    def __init__(self, kind: str, serialized: str) -> None:
        super().__init__(f"unexpected type {kind}: {serialized}")
        self.kind = kind
        self.serialized = serialized


class AnalysisError(TagliatelleError):
    """チェッカーの前提条件（構文木）が満たされない場合の例外。"""


class SourceParseError(TagliatelleError):
    """Goソースの字句解析・構文解析エラー。"""

    def __init__(self, message: str, filename: str, line: int, column: int) -> None:
        super().__init__(f"{filename}:{line}:{column}: {message}")
        self.filename = filename
        self.line = line
        self.column = column


class ConfigError(TagliatelleError):
    """設定ファイルや設定値が不正な場合の例外。"""
