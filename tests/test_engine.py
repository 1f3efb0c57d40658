"""Tests for the compliance engine."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from repoguard.config import RepoguardConfig
from repoguard.engine import ComplianceEngine
from repoguard.fixers import InvalidFixKind
from repoguard.validators import BaseCategory, FixableIssue

MakeRepo = Callable[[dict[str, str]], Path]

CATEGORY_NAMES = ["Core Files", "Container Setup", "CI Workflows", "Documentation", "Security"]


@pytest.fixture
def engine() -> ComplianceEngine:
    return ComplianceEngine()


# -----------------------------------------------------------------------------
# Validation Scenario Tests
# -----------------------------------------------------------------------------


class TestValidateRepository:
    """End-to-end validation scenarios."""

    def test_empty_directory(self, engine: ComplianceEngine, tmp_path: Path) -> None:
        """Test that an empty directory fails every required check."""
        report = engine.validate_repository(tmp_path)

        assert report.is_valid is False
        error_files = [e.file for e in report.errors]
        assert error_files == [
            "VERSION.txt",
            "README.md",
            "LICENSE",
            "Dockerfile",
            ".github/workflows",
        ]
        assert report.files_checked >= 4
        assert list(report.categories) == CATEGORY_NAMES
        assert report.categories["Core Files"].passed is False
        assert report.categories["Container Setup"].passed is False
        assert report.categories["CI Workflows"].passed is False
        assert report.categories["Documentation"].passed is True
        assert report.categories["Security"].passed is True

    def test_empty_directory_fixable_issues(self, engine: ComplianceEngine, tmp_path: Path) -> None:
        """Test that fixable issues appear in rule evaluation order."""
        report = engine.validate_repository(tmp_path)

        assert [i.file for i in report.fixable_issues] == [
            "CHANGELOG.md",
            "CONTRIBUTING.md",
            "SECURITY.md",
            "Dockerfile",
        ]

    def test_workflow_missing_jobs(
        self,
        engine: ComplianceEngine,
        make_repo: MakeRepo,
        compliant_contents: dict[str, str],
    ) -> None:
        """Test that a workflow without jobs is the only error."""
        del compliant_contents[".github/workflows/build-and-notify.yml"]
        compliant_contents[".github/workflows/ci.yml"] = "name: CI\non:\n"
        root = make_repo(compliant_contents)

        report = engine.validate_repository(root)

        assert len(report.errors) == 1
        assert report.errors[0].file == ".github/workflows/ci.yml"
        assert "jobs" in report.errors[0].message
        assert report.is_valid is False
        for name in CATEGORY_NAMES:
            expected = name != "CI Workflows"
            assert report.categories[name].passed is expected

    def test_fully_compliant(self, engine: ComplianceEngine, compliant_repo: Path) -> None:
        """Test that a compliant repository is valid with nothing to fix."""
        report = engine.validate_repository(compliant_repo)

        assert report.is_valid is True
        assert report.errors == []
        assert report.warnings == []
        assert report.fixable_issues == []
        assert report.recommendations == []
        assert all(status.passed for status in report.categories.values())

    def test_compliant_without_extras(self, engine: ComplianceEngine, compliant_repo: Path) -> None:
        """Test that missing docs and examples only add recommendations."""
        for rel in ("docs/index.md", "examples/hello.py"):
            (compliant_repo / rel).unlink()
            (compliant_repo / rel).parent.rmdir()

        report = engine.validate_repository(compliant_repo)

        assert report.is_valid is True
        assert report.fixable_issues == []
        assert len(report.recommendations) == 2

    def test_warnings_do_not_affect_validity(
        self,
        engine: ComplianceEngine,
        make_repo: MakeRepo,
        compliant_contents: dict[str, str],
    ) -> None:
        """Test that a bad version string alone keeps the report valid."""
        compliant_contents["VERSION.txt"] = "latest\n"
        report = engine.validate_repository(make_repo(compliant_contents))

        assert report.is_valid is True
        assert [w.file for w in report.warnings] == ["VERSION.txt"]

    def test_reports_are_independent(self, engine: ComplianceEngine, tmp_path: Path) -> None:
        """Test that each pass builds a fresh report."""
        first = engine.validate_repository(tmp_path)
        second = engine.validate_repository(tmp_path)

        assert first is not second
        assert first.to_dict() == second.to_dict()

    def test_accepts_string_path(self, engine: ComplianceEngine, compliant_repo: Path) -> None:
        assert engine.validate_repository(str(compliant_repo)).is_valid is True


class TestSystemErrors:
    """Tests for failures of the pass itself."""

    def test_missing_root(self, engine: ComplianceEngine, tmp_path: Path) -> None:
        """Test that a missing root becomes a single system error."""
        report = engine.validate_repository(tmp_path / "nope")

        assert report.is_valid is False
        assert len(report.errors) == 1
        assert report.errors[0].category == "system"
        assert report.errors[0].message.startswith("Validation failed:")
        assert report.categories == {}

    def test_file_as_root(self, engine: ComplianceEngine, tmp_path: Path) -> None:
        """Test that a file path is not a valid root."""
        target = tmp_path / "file.txt"
        target.write_text("x")

        report = engine.validate_repository(target)

        assert [e.category for e in report.errors] == ["system"]

    def test_unreadable_required_file(
        self,
        engine: ComplianceEngine,
        make_repo: MakeRepo,
        required_contents: dict[str, str],
    ) -> None:
        """Test that an unreadable file does not hide the remaining rules."""
        del required_contents["README.md"]
        del required_contents["LICENSE"]
        root = make_repo(required_contents)
        (root / "README.md").mkdir()

        report = engine.validate_repository(root)

        core_errors = [e for e in report.errors if e.category == "core-files"]
        assert [e.file for e in core_errors] == ["README.md", "LICENSE"]
        assert core_errors[0].message.startswith("Cannot read README.md:")
        assert not any(e.category == "system" for e in report.errors)
        assert [i.file for i in report.fixable_issues] == [
            "CHANGELOG.md",
            "CONTRIBUTING.md",
            "SECURITY.md",
        ]
        assert report.categories["Core Files"].passed is False
        assert report.categories["Core Files"].message == "Missing required files"

    def test_unreadable_dockerfile(
        self,
        engine: ComplianceEngine,
        make_repo: MakeRepo,
        required_contents: dict[str, str],
    ) -> None:
        """Test that the devcontainer rule still runs after a failed read."""
        del required_contents["Dockerfile"]
        root = make_repo(required_contents)
        (root / "Dockerfile").mkdir()

        report = engine.validate_repository(root)

        docker_errors = [e for e in report.errors if e.category == "docker"]
        assert [e.file for e in docker_errors] == ["Dockerfile"]
        assert docker_errors[0].message.startswith("Cannot read Dockerfile:")
        assert any(".devcontainer/devcontainer.json" in r for r in report.recommendations)
        assert report.categories["Container Setup"].message == "Invalid Dockerfile"

    def test_category_os_error(self, tmp_path: Path) -> None:
        """Test that an OSError escaping a category fails only that category."""

        class BrokenCategory(BaseCategory):
            name = "Broken"

            def check(self) -> str | None:
                raise PermissionError("denied")

        class BrokenEngine(ComplianceEngine):
            CATEGORIES = {**ComplianceEngine.CATEGORIES, "broken": BrokenCategory}

        report = BrokenEngine().run_categories(tmp_path, ["broken", "security"])

        assert report.is_valid is False
        assert [e.category for e in report.errors] == ["system"]
        assert report.errors[0].message == "Validation failed: denied"
        assert report.categories["Broken"].passed is False
        assert report.categories["Broken"].message == "Check failed: denied"
        assert report.categories["Security"].passed is True


class TestRunCategories:
    """Tests for selective category runs."""

    def test_runs_selected_categories(self, engine: ComplianceEngine, tmp_path: Path) -> None:
        report = engine.run_categories(tmp_path, ["security", "documentation"])
        assert list(report.categories) == ["Security", "Documentation"]

    def test_unknown_names_ignored(self, engine: ComplianceEngine, tmp_path: Path) -> None:
        report = engine.run_categories(tmp_path, ["nope"])
        assert report.categories == {}
        assert report.is_valid is True


# -----------------------------------------------------------------------------
# Fix Pipeline Tests
# -----------------------------------------------------------------------------


class TestApplyFix:
    """Tests for the engine's fix surface."""

    def test_fix_round_trip(
        self,
        engine: ComplianceEngine,
        make_repo: MakeRepo,
        required_contents: dict[str, str],
    ) -> None:
        """Test that fixed optional files no longer show up."""
        del required_contents["Dockerfile"]
        root = make_repo(required_contents)

        report = engine.validate_repository(root)
        assert any(e.file == "Dockerfile" for e in report.errors)
        assert len(report.fixable_issues) == 4

        for issue in report.fixable_issues:
            assert engine.apply_fix(root, issue).success is True

        fixed = engine.validate_repository(root)
        assert fixed.fixable_issues == []
        assert not any("CHANGELOG.md" in r for r in fixed.recommendations)
        assert not any(e.file == "Dockerfile" for e in fixed.errors)
        assert fixed.warnings == []

    def test_unknown_kind_raises(self, engine: ComplianceEngine, tmp_path: Path) -> None:
        issue = FixableIssue(kind="delete-everything", description="d", fix="f", template="t")
        with pytest.raises(InvalidFixKind, match="delete-everything"):
            engine.apply_fix(tmp_path, issue)

    def test_config_is_kept(self) -> None:
        config = RepoguardConfig(auto_fix=True)
        assert ComplianceEngine(config).config is config
