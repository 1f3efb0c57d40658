"""Fix resolution: maps fixable issue kinds to remediation content.

The resolver provides a central lookup for the fixer that handles a given
issue kind. Fixers register themselves by their kind.
"""

from __future__ import annotations

from repoguard.fixers.base import BaseFixer, InvalidFixKind, ResolvedFix
from repoguard.template_manager import (
    DOCKERFILE_TEMPLATE,
    TEMPLATE_FILES,
    render_template,
    template_for_file,
)
from repoguard.validators.base import FixableIssue


class CreateFileFixer(BaseFixer):
    """Creates a missing repository document from its canned template.

    The issue's ``template`` names the catalog entry; when it is not a known
    template the file name decides, falling back to a generic stub.
    """

    kind = "create-file"

    def resolve(self, issue: FixableIssue) -> ResolvedFix:
        if not issue.file:
            raise ValueError("create-file issue has no target file")

        template = issue.template
        if template not in TEMPLATE_FILES:
            template = template_for_file(issue.file)

        content = render_template(template, file_name=issue.file)
        return ResolvedFix(path=issue.file, content=content)


class CreateDockerfileFixer(BaseFixer):
    """Creates a minimal, non-customized base Dockerfile."""

    kind = "create-dockerfile"

    def resolve(self, issue: FixableIssue) -> ResolvedFix:
        return ResolvedFix(
            path=issue.file or "Dockerfile",
            content=render_template(DOCKERFILE_TEMPLATE),
        )


class FixResolver:
    """Registry that maps issue kinds to fixers.

    Example:
        >>> resolver = FixResolver()
        >>> resolver.register(CreateFileFixer)
        >>> resolved = resolver.resolve(issue)
        >>> resolved.path, len(resolved.content)
    """

    def __init__(self) -> None:
        """Initialize an empty resolver."""
        self._fixers: dict[str, BaseFixer] = {}

    def register(self, fixer_class: type[BaseFixer]) -> None:
        """Register a fixer class by its kind.

        Args:
            fixer_class: A BaseFixer subclass to register.

        Raises:
            ValueError: If the fixer has no kind or if a fixer with the
                same kind is already registered.
        """
        kind = fixer_class.kind
        if not kind:
            raise ValueError(f"Fixer class {fixer_class.__name__} has no kind defined")
        if kind in self._fixers:
            raise ValueError(
                f"Fixer for kind '{kind}' already registered: "
                f"{type(self._fixers[kind]).__name__}"
            )
        self._fixers[kind] = fixer_class()

    def get_fixer(self, kind: str) -> BaseFixer | None:
        """Get the fixer registered for a kind, or None."""
        return self._fixers.get(kind)

    def has_fixer(self, kind: str) -> bool:
        return kind in self._fixers

    def list_kinds(self) -> list[str]:
        """List all registered kinds, sorted."""
        return sorted(self._fixers)

    def resolve(self, issue: FixableIssue) -> ResolvedFix:
        """Resolve an issue into its target path and remediation content.

        Args:
            issue: The fixable issue to resolve.

        Returns:
            ResolvedFix from the registered fixer.

        Raises:
            InvalidFixKind: If no fixer is registered for the issue's kind.
        """
        fixer = self.get_fixer(issue.kind)
        if fixer is None:
            raise InvalidFixKind(issue.kind)
        return fixer.resolve(issue)


_default_resolver: FixResolver | None = None


def get_default_resolver() -> FixResolver:
    """Get the shared resolver populated with the built-in fixers."""
    global _default_resolver
    if _default_resolver is None:
        resolver = FixResolver()
        resolver.register(CreateFileFixer)
        resolver.register(CreateDockerfileFixer)
        _default_resolver = resolver
    return _default_resolver
