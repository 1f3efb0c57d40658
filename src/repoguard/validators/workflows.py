"""CI Workflows category.

Validates GitHub Actions workflows:
- .github/workflows exists (error, stops the category otherwise)
- The directory holds at least one .yml/.yaml file (error, stops otherwise)
- One workflow is named for the build-and-notify role (warning otherwise)
- Every workflow parses as YAML and declares a trigger and jobs
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from repoguard.validators.base import BaseCategory

WORKFLOWS_DIR = ".github/workflows"
WORKFLOW_SUFFIXES = (".yml", ".yaml")

# Filename substrings that mark a build-and-notify workflow
NOTIFY_KEYWORDS = ("build", "notify", "sdk")

# Required top-level keys: name -> (accepted spellings, description).
# YAML 1.1 loads a bare ``on:`` key as the boolean True.
REQUIRED_WORKFLOW_KEYS: dict[str, tuple[tuple[Any, ...], str]] = {
    "on": (("on", True), "trigger configuration"),
    "jobs": (("jobs",), "jobs configuration"),
}


def missing_workflow_keys(document: dict[Any, Any]) -> list[str]:
    """List the required top-level keys absent from a workflow document.

    Presence is key membership; a key with a null value counts as present.

    Args:
        document: Parsed workflow mapping.

    Returns:
        Names of missing keys, in declaration order.
    """
    return [
        key
        for key, (spellings, _) in REQUIRED_WORKFLOW_KEYS.items()
        if not any(spelling in document for spelling in spellings)
    ]


def is_notify_workflow(file_name: str) -> bool:
    """Check whether a workflow filename suggests the build-and-notify role."""
    lowered = file_name.lower()
    return any(keyword in lowered for keyword in NOTIFY_KEYWORDS)


class WorkflowsCategory(BaseCategory):
    """Validates the presence and shape of CI workflow files."""

    name = "CI Workflows"
    tag = "workflows"
    fail_message = "Invalid workflow configuration"

    def check(self) -> str | None:
        workflows_dir = self.probe(WORKFLOWS_DIR)
        if not workflows_dir.is_dir():
            self.error(
                f"Missing {WORKFLOWS_DIR} directory - required for CI/CD automation",
                file=WORKFLOWS_DIR,
                suggestion="Create GitHub Actions workflows for automated building and SDK updates",
            )
            return "No workflows found"

        workflow_files = sorted(
            path
            for path in workflows_dir.iterdir()
            if path.is_file() and path.suffix in WORKFLOW_SUFFIXES
        )
        if not workflow_files:
            self.error(
                "No GitHub Actions workflow files found",
                file=WORKFLOWS_DIR,
                suggestion="Add build-and-notify.yml workflow for SDK automation",
            )
            return "No workflow files"

        if not any(is_notify_workflow(path.name) for path in workflow_files):
            self.warning(
                "No build-and-notify workflow found - SDK updates may not be automated",
                suggestion="Add workflow that notifies downstream consumers on successful builds",
            )

        for path in workflow_files:
            self._check_workflow(path)

        if self.report.categories[self.name].passed:
            return f"Found {len(workflow_files)} valid workflow(s)"
        return None

    def _check_workflow(self, path: Path) -> None:
        """Parse one workflow file and check its required keys.

        Failures are scoped to this file; sibling files are still checked.
        """
        self.report.files_checked += 1
        rel_path = path.relative_to(self.root).as_posix()

        text = self.read(path)
        if text is None:
            return

        try:
            document = yaml.safe_load(text)
        except yaml.YAMLError as e:
            self.error(f"Invalid YAML in {path.name}: {e}", file=rel_path)
            return

        if not isinstance(document, dict):
            self.error(
                f"Workflow {path.name} must be a mapping of workflow settings",
                file=rel_path,
            )
            return

        for key in missing_workflow_keys(document):
            description = REQUIRED_WORKFLOW_KEYS[key][1]
            self.error(f"Workflow {path.name} missing {description}", file=rel_path)
