"""Template catalog for repoguard remediations."""

from __future__ import annotations

import importlib.resources
from string import Template

# Template filenames in the templates directory, keyed by template name
TEMPLATE_FILES = {
    "changelog": "changelog.template.md",
    "contributing": "contributing.template.md",
    "security": "security.template.md",
    "dockerfile": "dockerfile.template",
    "generic": "generic.template.md",
}

# Repository files with a dedicated create-file template
FILE_TEMPLATES = {
    "CHANGELOG.md": "changelog",
    "CONTRIBUTING.md": "contributing",
    "SECURITY.md": "security",
}

GENERIC_TEMPLATE = "generic"
DOCKERFILE_TEMPLATE = "dockerfile"


def _get_template_path(name: str) -> str:
    """Get the filename for a template by name.

    Args:
        name: Template name (e.g., 'security', 'dockerfile')

    Returns:
        The template filename

    Raises:
        ValueError: If template name is invalid
    """
    if name not in TEMPLATE_FILES:
        raise ValueError(f"Unknown template: {name}")
    return TEMPLATE_FILES[name]


def template_for_file(file_name: str) -> str:
    """Get the template name used to create a repository file.

    Files without a dedicated template fall back to the generic stub.
    """
    return FILE_TEMPLATES.get(file_name, GENERIC_TEMPLATE)


def get_template(name: str) -> str:
    """Load a template file from package resources.

    Args:
        name: Template name (e.g., 'changelog', 'dockerfile')

    Returns:
        The template content as a string

    Raises:
        ValueError: If template name is invalid
        FileNotFoundError: If template file cannot be loaded
    """
    template_file = _get_template_path(name)

    try:
        templates_dir = importlib.resources.files("repoguard").joinpath("templates")
        return templates_dir.joinpath(template_file).read_text(encoding="utf-8")
    except (FileNotFoundError, AttributeError, TypeError) as e:
        raise FileNotFoundError(f"Cannot load template '{name}': {e}") from e


def list_templates() -> list[str]:
    """List all available templates.

    Returns:
        Sorted list of template names
    """
    return sorted(TEMPLATE_FILES)


def render_template(name: str, **variables: str) -> str:
    """Render a template with variable substitution.

    Supports both ``{Variable Name}`` placeholders and ``$var`` substitution.
    Unknown placeholders are left untouched.

    Args:
        name: Template name (e.g., 'generic')
        **variables: Variables to substitute in the template

    Returns:
        The rendered template

    Raises:
        ValueError: If template name is invalid
        FileNotFoundError: If template file cannot be loaded
    """
    content = get_template(name)
    if not variables:
        return content

    # Map both "file_name" and "File Name" spellings to the value
    format_vars: dict[str, str] = {}
    for key, value in variables.items():
        format_vars[key] = value
        title_key = " ".join(word.capitalize() for word in key.split("_"))
        format_vars[title_key] = value

    class SafeFormatter(dict[str, str]):
        """A dict subclass that returns the key itself for missing keys."""

        def __missing__(self, key: str) -> str:
            return "{" + key + "}"

    content = content.format_map(SafeFormatter(format_vars))
    return Template(content).safe_substitute(variables)
