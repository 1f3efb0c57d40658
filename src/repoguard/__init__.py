"""repoguard - Repository compliance validation and repair."""

__version__ = "0.1.0"
