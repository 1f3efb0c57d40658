"""Documentation category: informational checks for docs/ and examples/."""

from __future__ import annotations

from repoguard.validators.base import BaseCategory

DOCS_DIR = "docs"
EXAMPLES_DIR = "examples"


class DocumentationCategory(BaseCategory):
    """Recommends supplementary documentation directories.

    Never records errors, so the category always passes.
    """

    name = "Documentation"
    tag = "documentation"
    pass_message = "Basic documentation present"

    def check(self) -> str | None:
        if not (self.root / DOCS_DIR).is_dir():
            self.recommend(
                f"Consider creating a {DOCS_DIR}/ directory for additional documentation"
            )

        if not (self.root / EXAMPLES_DIR).is_dir():
            self.recommend(
                f"Consider adding {EXAMPLES_DIR}/ directory with sample code and usage examples"
            )

        return None
