"""Container Setup category.

Validates the container definition:
- Dockerfile exists (error plus fixable issue otherwise)
- Dockerfile declares a base image with FROM
- Dockerfile does not leave the final execution user as root (warning)
- .devcontainer/devcontainer.json exists (recommendation only)
"""

from __future__ import annotations

import re

from repoguard.template_manager import DOCKERFILE_TEMPLATE
from repoguard.validators.base import BaseCategory, FixableIssue

DOCKERFILE = "Dockerfile"
DEVCONTAINER_FILE = ".devcontainer/devcontainer.json"

FROM_PATTERN = re.compile(r"^\s*FROM\s+\S+", re.IGNORECASE | re.MULTILINE)
USER_PATTERN = re.compile(r"^\s*USER\s+(\S+)", re.IGNORECASE | re.MULTILINE)

SUPERUSER_NAMES = {"root", "0"}


def runs_as_superuser(content: str) -> bool:
    """Return True if the effective USER directive selects the superuser.

    Only USER lines are inspected, in file order. A Dockerfile with no USER
    directive at all is not flagged.

    Args:
        content: Dockerfile text.

    Returns:
        True if any USER directive selects root and no later directive
        switches to a different user.
    """
    users = [match.group(1) for match in USER_PATTERN.finditer(content)]
    saw_root = False
    for user in users:
        # USER root:root and USER 0:0 carry a group after the colon
        name = user.split(":", 1)[0].lower()
        saw_root = name in SUPERUSER_NAMES
    return saw_root


class ContainerCategory(BaseCategory):
    """Validates the Dockerfile and development container setup."""

    name = "Container Setup"
    tag = "docker"
    pass_message = "Dockerfile present and valid"
    fail_message = "Invalid Dockerfile"

    def check(self) -> str | None:
        message = self._check_dockerfile()
        self._check_devcontainer()
        return message

    def _check_dockerfile(self) -> str | None:
        path = self.probe(DOCKERFILE)
        if not path.exists():
            self.error(
                "Missing Dockerfile - required for SDK containers",
                file=DOCKERFILE,
                suggestion="Create Dockerfile for your SDK environment",
            )
            self.fixable(
                FixableIssue(
                    kind="create-dockerfile",
                    file=DOCKERFILE,
                    description="Create basic Dockerfile template",
                    fix="Generate Dockerfile template",
                    template=DOCKERFILE_TEMPLATE,
                )
            )
            return "Missing Dockerfile"

        content = self.read(path)
        if content is None:
            return None

        if not FROM_PATTERN.search(content):
            self.error("Dockerfile missing FROM instruction", file=DOCKERFILE)

        if runs_as_superuser(content):
            self.warning(
                "Dockerfile runs as root - consider using non-root user for security",
                file=DOCKERFILE,
                tag="security",
            )

        return None

    def _check_devcontainer(self) -> None:
        if not (self.root / DEVCONTAINER_FILE).exists():
            self.recommend(
                f"Consider adding {DEVCONTAINER_FILE} for VS Code development"
            )
