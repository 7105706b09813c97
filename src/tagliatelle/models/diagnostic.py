"""診断結果関連のデータモデル。"""

from pydantic import BaseModel, Field

from tagliatelle.models.syntax import Position


class Diagnostic(BaseModel):
    """位置とメッセージからなる個別の診断結果。"""

    pos: Position
    message: str

    def __str__(self) -> str:
        return f"{self.pos}: {self.message}"


class FileError(BaseModel):
    """ファイル単位の読み込み・解析エラー。"""

    filename: str
    message: str


class LintReport(BaseModel):
    """1回のチェック実行の集計結果。"""

    diagnostics: list[Diagnostic] = Field(default_factory=list)
    errors: list[FileError] = Field(default_factory=list)
    files_checked: int = 0

    @property
    def ok(self) -> bool:
        return not self.diagnostics and not self.errors

    def merge(self, other: "LintReport") -> None:
        """別のレポートの内容を末尾に追加する。"""
        self.diagnostics.extend(other.diagnostics)
        self.errors.extend(other.errors)
        self.files_checked += other.files_checked
