"""Pytest configuration and fixtures for repoguard tests."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

import pytest

# Set a fixed terminal width to prevent line wrapping issues in CI
# This must be set before any Rich imports
os.environ.setdefault("COLUMNS", "200")
os.environ.setdefault("LINES", "50")
# Disable Rich's terminal detection to ensure consistent output
os.environ.setdefault("TERM", "dumb")

README_TEXT = (
    "# Sample SDK\n\n"
    "This repository packages the sample SDK together with its build container, "
    "CI workflows and release documentation.\n"
)

NOTIFY_WORKFLOW = """\
name: Build and Notify
on:
  push:
    branches: [main]
jobs:
  build:
    runs-on: ubuntu-latest
    steps:
      - uses: actions/checkout@v4
"""


def write_files(root: Path, files: dict[str, str]) -> None:
    """Write a mapping of relative paths to contents under root."""
    for rel_path, content in files.items():
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


def required_files() -> dict[str, str]:
    """Contents for the required core files and a valid Dockerfile."""
    return {
        "VERSION.txt": "1.2.3\n",
        "README.md": README_TEXT,
        "LICENSE": "MIT License\n",
        "Dockerfile": "FROM python:3.12-slim\nRUN useradd app\nUSER app\n",
    }


def compliant_files() -> dict[str, str]:
    """Contents for a repository that satisfies every rule."""
    files = required_files()
    files.update(
        {
            "CHANGELOG.md": "# Changelog\n",
            "CONTRIBUTING.md": "# Contributing\n",
            "SECURITY.md": "# Security Policy\n",
            ".devcontainer/devcontainer.json": "{}\n",
            ".github/workflows/build-and-notify.yml": NOTIFY_WORKFLOW,
            "docs/index.md": "# Docs\n",
            "examples/hello.py": "print('hello')\n",
        }
    )
    return files


@pytest.fixture
def compliant_repo(tmp_path: Path) -> Path:
    """Create a repository that passes every rule."""
    write_files(tmp_path, compliant_files())
    return tmp_path


@pytest.fixture
def compliant_contents() -> dict[str, str]:
    """Fresh mapping of every file in a compliant repository."""
    return compliant_files()


@pytest.fixture
def required_contents() -> dict[str, str]:
    """Fresh mapping of the required files only."""
    return required_files()


@pytest.fixture
def make_repo(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    """Return a factory that writes files into tmp_path and returns it."""

    def _make(files: dict[str, str]) -> Path:
        write_files(tmp_path, files)
        return tmp_path

    return _make
