"""Fixer framework for repairing repository compliance issues.

Provides the resolver that maps fixable issues to canned remediations and
the executor that writes them to disk.
"""

from __future__ import annotations

from repoguard.fixers.base import BaseFixer, FixResult, InvalidFixKind, ResolvedFix
from repoguard.fixers.executor import FixExecutor, apply_fixes
from repoguard.fixers.resolver import (
    CreateDockerfileFixer,
    CreateFileFixer,
    FixResolver,
    get_default_resolver,
)

__all__ = [
    # Base types
    "BaseFixer",
    "FixResult",
    "InvalidFixKind",
    "ResolvedFix",
    # Resolution
    "FixResolver",
    "get_default_resolver",
    # Fixers
    "CreateDockerfileFixer",
    "CreateFileFixer",
    # Execution
    "FixExecutor",
    "apply_fixes",
]
