"""LintServiceのユニットテスト。"""

from pathlib import Path

import pytest

from tagliatelle.config import LintConfig
from tagliatelle.models.errors import SourceParseError
from tagliatelle.parser.go import parse_source
from tagliatelle.services.lint import LintService, iter_go_files

SOURCE = """package p

type User struct {
	FirstName string `json:"first_name"`
	LastName  string `json:"lastName"`
}
"""


class TestLintSource:
    async def test_reports_mismatch(self, lint_service: LintService) -> None:
        report = await lint_service.lint_source(SOURCE, "user.go")
        assert report.files_checked == 1
        assert len(report.diagnostics) == 1
        diagnostic = report.diagnostics[0]
        assert diagnostic.message == "json(camel): got 'first_name' want 'firstName'"
        assert diagnostic.pos.filename == "user.go"
        assert diagnostic.pos.line == 4
        assert str(diagnostic).startswith("user.go:4:")

    async def test_use_field_name(self) -> None:
        service = LintService(LintConfig(rules={"json": "camel"}, use_field_name=True))
        report = await service.lint_source(SOURCE)
        assert [d.message for d in report.diagnostics] == ["json(camel): got 'first_name' want 'firstName'"]

    async def test_parse_error_raised(self, lint_service: LintService) -> None:
        with pytest.raises(SourceParseError):
            await lint_service.lint_source("package p\ntype A struct {\n")

    async def test_empty_rules_skip_parsing(self) -> None:
        service = LintService(LintConfig())
        report = await service.lint_source("package p\ntype A struct {\n")
        assert report.ok
        assert report.files_checked == 1


class TestLintPaths:
    async def test_directory(self, lint_service: LintService, testdata_dir: Path) -> None:
        report = await lint_service.lint_paths([testdata_dir])
        assert report.files_checked == 3
        assert [d.message for d in report.diagnostics] == ["json(camel): got 'first_name' want 'firstName'"]
        assert report.diagnostics[0].pos.filename.endswith("main.go")
        assert len(report.errors) == 1
        assert report.errors[0].filename.endswith("broken.go")
        assert not report.ok

    async def test_single_file(self, lint_service: LintService, testdata_dir: Path) -> None:
        report = await lint_service.lint_paths([testdata_dir / "pkg" / "models.go"])
        assert report.ok
        assert report.files_checked == 1

    async def test_yaml_rule(self, testdata_dir: Path) -> None:
        service = LintService(LintConfig(rules={"yaml": "snake"}))
        report = await service.lint_file(testdata_dir / "pkg" / "models.go")
        assert [d.message for d in report.diagnostics] == ["yaml(snake): got 'order-id' want 'order_id'"]

    async def test_missing_file(self, lint_service: LintService, tmp_path: Path) -> None:
        report = await lint_service.lint_file(tmp_path / "missing.go")
        assert report.files_checked == 0
        assert len(report.errors) == 1

    def test_check_tree(self, lint_service: LintService) -> None:
        diagnostics = lint_service.check_tree(parse_source(SOURCE))
        assert len(diagnostics) == 1


class TestIterGoFiles:
    def test_skips_vendor_and_testdata(self, testdata_dir: Path) -> None:
        files = iter_go_files([testdata_dir])
        names = [f.relative_to(testdata_dir).as_posix() for f in files]
        assert names == ["main.go", "pkg/broken.go", "pkg/models.go"]

    def test_explicit_file_kept(self, testdata_dir: Path) -> None:
        target = testdata_dir / "vendor" / "dep" / "dep.go"
        assert iter_go_files([target]) == [target]
