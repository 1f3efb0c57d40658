"""Core Files category.

Checks the top-level files every repository must carry:
- Required: VERSION.txt, README.md, LICENSE (missing file is an error)
- VERSION.txt holds a semantic version (warning otherwise)
- README.md is substantial and has a main heading (warnings otherwise)
- Optional: CHANGELOG.md, CONTRIBUTING.md, SECURITY.md (recommendation plus
  a fixable issue when missing)
"""

from __future__ import annotations

import re

from repoguard.template_manager import template_for_file
from repoguard.validators.base import BaseCategory, FixableIssue

VERSION_FILE = "VERSION.txt"
README_FILE = "README.md"
LICENSE_FILE = "LICENSE"

# (path, description) pairs, in check order
REQUIRED_FILES = [
    (VERSION_FILE, "Version file"),
    (README_FILE, "Repository documentation"),
    (LICENSE_FILE, "License file"),
]

OPTIONAL_FILES = [
    ("CHANGELOG.md", "Change log"),
    ("CONTRIBUTING.md", "Contributing guidelines"),
    ("SECURITY.md", "Security policy"),
]

SEMVER_PATTERN = re.compile(r"^\d+\.\d+\.\d+(\.\d+)?$")
README_MIN_LENGTH = 100
README_HEADING_MARKER = "# "


class CoreFilesCategory(BaseCategory):
    """Validates required and optional top-level repository files."""

    name = "Core Files"
    tag = "core-files"
    pass_message = "All required files present"
    fail_message = "Missing required files"

    def check(self) -> str | None:
        for rel_path, description in REQUIRED_FILES:
            path = self.probe(rel_path)
            if not path.exists():
                self.error(
                    f"Missing required file: {rel_path}",
                    file=rel_path,
                    suggestion=f"Create {description.lower()}",
                )
                continue

            content = self.read(path)
            if content is None:
                continue

            if rel_path == VERSION_FILE:
                self._check_version(content)
            elif rel_path == README_FILE:
                self._check_readme(content)

        for rel_path, description in OPTIONAL_FILES:
            self._check_optional(rel_path, description)

        return None

    def _check_version(self, content: str) -> None:
        """Warn when the version marker is not a semantic version."""
        if not SEMVER_PATTERN.match(content.strip()):
            self.warning(
                f"{VERSION_FILE} should contain valid semantic version (e.g., 1.0.0)",
                file=VERSION_FILE,
                tag="versioning",
            )

    def _check_readme(self, content: str) -> None:
        """Warn when the readme is too short or has no main heading."""
        if len(content) < README_MIN_LENGTH:
            self.warning(
                f"{README_FILE} appears to be very short - consider adding more documentation",
                file=README_FILE,
                tag="documentation",
            )

        if README_HEADING_MARKER not in content:
            self.warning(
                f"{README_FILE} should include a main heading",
                file=README_FILE,
                tag="documentation",
            )

    def _check_optional(self, rel_path: str, description: str) -> None:
        """Recommend a missing optional file and offer its template."""
        if (self.root / rel_path).exists():
            return

        self.recommend(f"Consider adding {rel_path} for better {description.lower()}")
        self.fixable(
            FixableIssue(
                kind="create-file",
                file=rel_path,
                description=f"Create {description.lower()}",
                fix=f"Generate template {rel_path}",
                template=template_for_file(rel_path),
            )
        )
