"""Rule categories for repository compliance validation.

Provides the report model and the categories that check required files,
container setup, CI workflows, documentation and security.
"""

from __future__ import annotations

from repoguard.validators.base import (
    BaseCategory,
    CategoryStatus,
    Finding,
    FixableIssue,
    ValidationReport,
)
from repoguard.validators.container import ContainerCategory
from repoguard.validators.core_files import CoreFilesCategory
from repoguard.validators.documentation import DocumentationCategory
from repoguard.validators.security import SecurityCategory
from repoguard.validators.workflows import WorkflowsCategory

__all__ = [
    # Base types
    "BaseCategory",
    "CategoryStatus",
    "Finding",
    "FixableIssue",
    "ValidationReport",
    # Categories
    "ContainerCategory",
    "CoreFilesCategory",
    "DocumentationCategory",
    "SecurityCategory",
    "WorkflowsCategory",
]
