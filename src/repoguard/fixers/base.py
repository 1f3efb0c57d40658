"""Base classes for repoguard fixers.

Provides core abstractions for resolving fixable issues into concrete
file content that the executor writes to disk.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from repoguard.validators.base import FixableIssue


class InvalidFixKind(ValueError):
    """Raised when no fixer is registered for a fixable issue's kind."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"Unknown fix type: {kind}")


@dataclass(frozen=True)
class ResolvedFix:
    """Remediation content for a fixable issue.

    Attributes:
        path: Target path relative to the repository root.
        content: Full file content to write.
    """

    path: str
    content: str


@dataclass
class FixResult:
    """Result of applying a fix.

    Attributes:
        success: Whether the fix was applied successfully.
        message: Human-readable description of what happened.
        files_modified: List of file paths that were created or overwritten.
    """

    success: bool
    message: str
    files_modified: list[str] = field(default_factory=list)


class BaseFixer(ABC):
    """Abstract base class for all fixers.

    A fixer turns one kind of fixable issue into remediation content. It does
    not touch the filesystem; writing is left to the executor.
    """

    # The issue kind this fixer handles (must be set by subclasses)
    kind: str = ""

    @abstractmethod
    def resolve(self, issue: FixableIssue) -> ResolvedFix:
        """Produce the target path and content for the given issue.

        Args:
            issue: The fixable issue to resolve.

        Returns:
            ResolvedFix with the path and complete file content.
        """

    def can_fix(self, issue: FixableIssue) -> bool:
        """Check if this fixer handles the given issue's kind."""
        return issue.kind == self.kind
