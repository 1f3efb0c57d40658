"""Path filtering utilities for repoguard scans.

Provides functions to search a repository tree while filtering out paths
that are not part of the committed source (VCS metadata, virtual
environments, dependency caches).
"""

from __future__ import annotations

import fnmatch
import os
from collections.abc import Iterable
from pathlib import Path

# Directories to exclude when scanning the repository tree
IGNORED_DIRS = frozenset(
    {
        ".git",
        ".venv",
        "venv",
        "node_modules",
        "__pycache__",
        ".tox",
        ".nox",
        ".mypy_cache",
        ".pytest_cache",
        ".ruff_cache",
        "site-packages",
    }
)


def _matches(rel_path: str, patterns: list[str]) -> bool:
    """Check a relative POSIX path against glob patterns.

    A leading ``**/`` matches at any depth, including the root.
    """
    name = rel_path.rsplit("/", 1)[-1]
    for pattern in patterns:
        if fnmatch.fnmatchcase(rel_path, pattern):
            return True
        if pattern.startswith("**/") and fnmatch.fnmatchcase(name, pattern[3:]):
            return True
    return False


def find_matching_files(root: Path, patterns: Iterable[str]) -> list[Path]:
    """Find files under root matching any of the glob patterns.

    The tree is walked once. Ignored directories (.git/, .venv/, venv/,
    node_modules/, __pycache__/ and tool caches) are pruned before they are
    entered.

    Args:
        root: Directory to scan.
        patterns: Glob patterns relative to root (e.g., "**/*.pem").

    Returns:
        Sorted list of matching file paths.
    """
    pattern_list = list(patterns)
    matches: list[Path] = []

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if d not in IGNORED_DIRS]
        current = Path(dirpath)
        for filename in filenames:
            path = current / filename
            rel_path = path.relative_to(root).as_posix()
            if _matches(rel_path, pattern_list) and path.is_file():
                matches.append(path)

    return sorted(matches)
