"""Base models and category classes for the repoguard compliance framework.

Provides the report model that rules write into and the abstract rule
category that groups related checks against a repository root.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


SYSTEM_CATEGORY = "system"


@dataclass
class Finding:
    """A single error or warning emitted by a rule.

    Attributes:
        message: Human-readable description of the finding.
        category: Short tag for the concern (e.g., "core-files", "docker").
        file: Optional path of the offending file, relative to the target root.
        suggestion: Optional remediation hint.
    """

    message: str
    category: str
    file: str | None = None
    suggestion: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize the finding, omitting unset optional fields."""
        data: dict[str, Any] = {"message": self.message, "category": self.category}
        if self.file is not None:
            data["file"] = self.file
        if self.suggestion is not None:
            data["suggestion"] = self.suggestion
        return data


@dataclass
class FixableIssue:
    """A missing or malformed artifact with a canned remediation.

    A fixable issue is independent of the findings: a missing optional file
    produces a recommendation and a fixable issue, never an error.

    Attributes:
        kind: Fix kind, used to dispatch to a fixer ("create-file" or
            "create-dockerfile").
        description: Human-readable description of what the fix does.
        fix: Short label for the remediation shown to users.
        template: Name of the remediation template in the template catalog.
        file: Target path relative to the repository root.
    """

    kind: str
    description: str
    fix: str
    template: str
    file: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize the issue using the report's ``type`` key for the kind."""
        data: dict[str, Any] = {"type": self.kind}
        if self.file is not None:
            data["file"] = self.file
        data["description"] = self.description
        data["fix"] = self.fix
        data["template"] = self.template
        return data


@dataclass
class CategoryStatus:
    """Pass/fail state of one rule category within a single pass.

    ``passed`` starts True and only ever moves to False through
    :meth:`mark_failed`.
    """

    passed: bool = True
    message: str = ""

    def mark_failed(self) -> None:
        """Flip the category to failed for the rest of the pass."""
        self.passed = False

    def to_dict(self) -> dict[str, Any]:
        return {"passed": self.passed, "message": self.message}


@dataclass
class ValidationReport:
    """Structured output of one validation pass.

    Attributes:
        is_valid: True iff no errors were recorded. Computed once at the end.
        files_checked: Number of file probes made by rules (not deduplicated).
        errors: Findings that block validity, in rule evaluation order.
        warnings: Non-blocking findings.
        recommendations: Advisory messages.
        fixable_issues: Issues with a known remediation.
        categories: Status per category display name.
    """

    is_valid: bool = False
    files_checked: int = 0
    errors: list[Finding] = field(default_factory=list)
    warnings: list[Finding] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    fixable_issues: list[FixableIssue] = field(default_factory=list)
    categories: dict[str, CategoryStatus] = field(default_factory=dict)

    def add_system_error(self, message: str) -> None:
        """Record a failure of the validation pass itself."""
        self.errors.append(Finding(message=message, category=SYSTEM_CATEGORY))

    def finalize(self) -> None:
        """Compute overall validity from the recorded errors."""
        self.is_valid = len(self.errors) == 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize the report to the public mapping shape."""
        return {
            "isValid": self.is_valid,
            "filesChecked": self.files_checked,
            "errors": [e.to_dict() for e in self.errors],
            "warnings": [w.to_dict() for w in self.warnings],
            "recommendations": list(self.recommendations),
            "fixableIssues": [i.to_dict() for i in self.fixable_issues],
            "categories": {
                name: status.to_dict() for name, status in self.categories.items()
            },
        }


class BaseCategory(ABC):
    """Abstract base class for a group of related rules.

    A category instance is created for a single validation pass. Subclasses
    implement :meth:`check`, calling the recording helpers below; the base
    class registers the category status before the rules run and assigns its
    message exactly once afterwards.

    Attributes:
        name: Display name used as the key in ``ValidationReport.categories``.
        tag: Default finding category tag for this group's findings.
        pass_message: Status message when no rule failed.
        fail_message: Status message when a rule failed and ``check`` did not
            supply a more specific one.
        root: Root directory of the repository under inspection.
    """

    name: str = ""
    tag: str = ""
    pass_message: str = ""
    fail_message: str = ""

    def __init__(self, root: Path) -> None:
        """Initialize category.

        Args:
            root: Root directory of the repository under inspection.
        """
        self.root = root
        self._report: ValidationReport | None = None

    def validate(self, report: ValidationReport) -> CategoryStatus:
        """Run this category's rules, recording results into ``report``.

        Args:
            report: The in-progress report owned by the current pass.

        Returns:
            The category's final status.
        """
        status = CategoryStatus()
        report.categories[self.name] = status
        self._report = report
        try:
            message = self.check()
        finally:
            self._report = None

        if message is None:
            message = self.pass_message if status.passed else self.fail_message
        status.message = message
        return status

    @abstractmethod
    def check(self) -> str | None:
        """Run the rules of this category in order.

        Returns:
            An optional status message overriding the default pass/fail text,
            used where a rule short-circuits the category.
        """

    @property
    def report(self) -> ValidationReport:
        if self._report is None:
            raise RuntimeError(f"Category {self.name!r} is not running a pass")
        return self._report

    def error(
        self,
        message: str,
        *,
        file: str | None = None,
        suggestion: str | None = None,
        tag: str | None = None,
    ) -> None:
        """Record an error and fail this category."""
        self.report.errors.append(
            Finding(message=message, category=tag or self.tag, file=file, suggestion=suggestion)
        )
        self.report.categories[self.name].mark_failed()

    def warning(
        self,
        message: str,
        *,
        file: str | None = None,
        suggestion: str | None = None,
        tag: str | None = None,
    ) -> None:
        """Record a non-blocking warning."""
        self.report.warnings.append(
            Finding(message=message, category=tag or self.tag, file=file, suggestion=suggestion)
        )

    def recommend(self, message: str) -> None:
        """Record an advisory recommendation."""
        self.report.recommendations.append(message)

    def fixable(self, issue: FixableIssue) -> None:
        """Record an issue that has a canned remediation."""
        self.report.fixable_issues.append(issue)

    def probe(self, relative_path: str) -> Path:
        """Resolve a path under the root and count it as a checked file."""
        self.report.files_checked += 1
        return self.root / relative_path

    def read(self, path: Path) -> str | None:
        """Read a file under the root, recording an error if it is unreadable.

        The error is scoped to the file; the caller skips that file's content
        checks and the remaining rules still run.

        Args:
            path: File to read, located under the root.

        Returns:
            The file content, or None if it could not be read.
        """
        rel_path = path.relative_to(self.root).as_posix()
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            self.error(f"Cannot read {rel_path}: {e}", file=rel_path)
            return None
