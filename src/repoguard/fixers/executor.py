"""Fix execution: writes resolved remediations to disk.

Writes overwrite the target unconditionally. Re-applying an issue produces
the same file, but any content already at the target path is replaced, so
callers should only pass issues for files that were absent at validation
time. Each issue is applied independently; there is no batch rollback.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from repoguard.fixers.base import FixResult
from repoguard.fixers.resolver import FixResolver, get_default_resolver
from repoguard.validators.base import FixableIssue

logger = logging.getLogger(__name__)


class FixExecutor:
    """Applies fixable issues to a repository tree.

    Attributes:
        resolver: Resolver used to turn issues into file content.
    """

    def __init__(self, resolver: FixResolver | None = None) -> None:
        self.resolver = resolver or get_default_resolver()

    def apply(self, root: Path, issue: FixableIssue) -> FixResult:
        """Apply a single fix, creating parent directories as needed.

        Args:
            root: Root directory of the repository.
            issue: The fixable issue to apply.

        Returns:
            FixResult describing the write. Filesystem failures are reported
            as an unsuccessful result rather than raised.

        Raises:
            InvalidFixKind: If the issue's kind has no registered fixer.
        """
        resolved = self.resolver.resolve(issue)
        target = root / resolved.path

        try:
            target.resolve().relative_to(root.resolve())
        except ValueError:
            return FixResult(
                success=False,
                message=f"Refusing to write outside repository root: {resolved.path}",
            )

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(resolved.content, encoding="utf-8")
        except OSError as e:
            logger.debug("Fix for %s failed: %s", resolved.path, e)
            return FixResult(
                success=False,
                message=f"Failed to write {resolved.path}: {e}",
            )

        logger.debug("Wrote %d bytes to %s", len(resolved.content), target)
        return FixResult(
            success=True,
            message=f"Created {resolved.path}",
            files_modified=[resolved.path],
        )


def apply_fixes(
    root: Path,
    issues: Iterable[FixableIssue],
    executor: FixExecutor | None = None,
) -> list[FixResult]:
    """Apply each issue independently, continuing past failed writes.

    Args:
        root: Root directory of the repository.
        issues: Fixable issues to apply, in order.
        executor: Executor to use. Defaults to one with the built-in fixers.

    Returns:
        One FixResult per issue, in input order.
    """
    executor = executor or FixExecutor()
    return [executor.apply(root, issue) for issue in issues]
