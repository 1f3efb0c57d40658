"""Security category.

Checks:
- SECURITY.md exists (warning otherwise)
- No credential or private key files are committed (error per match)
"""

from __future__ import annotations

from repoguard.validators.base import BaseCategory
from repoguard.validators.path_filter import find_matching_files

SECURITY_POLICY_FILE = "SECURITY.md"

# Files that indicate leaked secrets
SENSITIVE_PATTERNS = (
    "**/.env",
    "**/*.key",
    "**/*.pem",
    "**/id_rsa",
    "**/secrets.yml",
)


class SecurityCategory(BaseCategory):
    """Validates the security policy and scans for committed secrets."""

    name = "Security"
    tag = "security"
    pass_message = "Basic security checks passed"
    fail_message = "Sensitive files found"

    def check(self) -> str | None:
        if not (self.root / SECURITY_POLICY_FILE).exists():
            self.warning(
                f"No {SECURITY_POLICY_FILE} file found",
                suggestion="Add security policy for responsible disclosure",
            )

        for path in find_matching_files(self.root, SENSITIVE_PATTERNS):
            rel_path = path.relative_to(self.root).as_posix()
            self.error(
                f"Sensitive file committed to repository: {rel_path}",
                file=rel_path,
                suggestion="Remove the file, rotate the credential, and add it to .gitignore",
            )

        return None
