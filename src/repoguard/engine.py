"""Compliance engine for orchestrating rule categories and fixes.

Provides a single entry point that runs every rule category against a
repository root and returns a fresh report, plus the fix application
surface used by auto-fix loops.
"""

from __future__ import annotations

import logging
from pathlib import Path

from repoguard.config import RepoguardConfig
from repoguard.fixers.base import FixResult
from repoguard.fixers.executor import FixExecutor
from repoguard.validators.base import BaseCategory, FixableIssue, ValidationReport
from repoguard.validators.container import ContainerCategory
from repoguard.validators.core_files import CoreFilesCategory
from repoguard.validators.documentation import DocumentationCategory
from repoguard.validators.security import SecurityCategory
from repoguard.validators.workflows import WorkflowsCategory

logger = logging.getLogger(__name__)


class ComplianceEngine:
    """Runs the repository policy and applies canned fixes.

    Categories run strictly one after another in ``DEFAULT_CATEGORIES``
    order. The engine keeps no state between passes; each call to
    :meth:`validate_repository` builds a new report.

    Attributes:
        config: Immutable engine configuration.
        executor: Executor used for :meth:`apply_fix`.
    """

    # Available category classes
    CATEGORIES: dict[str, type[BaseCategory]] = {
        "core-files": CoreFilesCategory,
        "container": ContainerCategory,
        "workflows": WorkflowsCategory,
        "documentation": DocumentationCategory,
        "security": SecurityCategory,
    }

    # Order in which findings appear in the report
    DEFAULT_CATEGORIES = ["core-files", "container", "workflows", "documentation", "security"]

    def __init__(
        self,
        config: RepoguardConfig | None = None,
        executor: FixExecutor | None = None,
    ) -> None:
        """Initialize compliance engine.

        Args:
            config: Engine configuration. Defaults to RepoguardConfig().
            executor: Fix executor. Defaults to one with the built-in fixers.
        """
        self.config = config or RepoguardConfig()
        self.executor = executor or FixExecutor()

    def validate_repository(self, target_root: Path | str) -> ValidationReport:
        """Run every rule category against a repository.

        Never raises for policy violations or I/O problems: an unreadable
        root becomes a single system error in the report.

        Args:
            target_root: Root directory of the repository.

        Returns:
            A new ValidationReport for this pass.
        """
        return self.run_categories(target_root, self.DEFAULT_CATEGORIES)

    def run_categories(
        self, target_root: Path | str, category_names: list[str]
    ) -> ValidationReport:
        """Run specific categories by name, in the order given.

        Unknown names are ignored.

        Args:
            target_root: Root directory of the repository.
            category_names: Category keys from ``CATEGORIES``.

        Returns:
            A new ValidationReport for this pass.
        """
        report = ValidationReport()
        root = Path(target_root)

        try:
            if not root.is_dir():
                raise NotADirectoryError(f"Not a directory: {root}")
            # Probe readability before any rule runs
            next(root.iterdir(), None)
        except OSError as e:
            report.add_system_error(f"Validation failed: {e}")
            report.finalize()
            return report

        for name in category_names:
            category_class = self.CATEGORIES.get(name)
            if category_class is None:
                continue
            self._run_category(category_class(root), report)

        report.finalize()
        logger.debug(
            "Validated %s: valid=%s errors=%d warnings=%d fixable=%d",
            root,
            report.is_valid,
            len(report.errors),
            len(report.warnings),
            len(report.fixable_issues),
        )
        return report

    def _run_category(self, category: BaseCategory, report: ValidationReport) -> None:
        """Run one category, turning I/O failures into a system error.

        Other categories still run after a failure here.
        """
        try:
            status = category.validate(report)
        except OSError as e:
            report.add_system_error(f"Validation failed: {e}")
            status = report.categories[category.name]
            status.mark_failed()
            status.message = f"Check failed: {e}"

        logger.debug(
            "Category %s: %s (%s)",
            category.name,
            "passed" if status.passed else "failed",
            status.message,
        )

    def apply_fix(self, target_root: Path | str, issue: FixableIssue) -> FixResult:
        """Apply a single fixable issue to the repository.

        Overwrites the target file unconditionally.

        Args:
            target_root: Root directory of the repository.
            issue: Issue taken from a report's ``fixable_issues``.

        Returns:
            FixResult from the executor.

        Raises:
            InvalidFixKind: If the issue's kind has no registered fixer.
        """
        return self.executor.apply(Path(target_root), issue)
