"""Load and format AI prompts from the templates/ directory.

Prompts are stored as plain text files with {variable} placeholders
that are filled using Python's str.format().

Shared prompt partials can be defined in templates/_partials/*.txt
and are automatically available as {filename_without_extension} placeholders.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

# Templates ship inside the package so they survive a wheel install
PROMPTS_DIR = Path(__file__).parent / "templates"
PARTIALS_DIR = PROMPTS_DIR / "_partials"


@lru_cache(maxsize=1)
def _get_partial_vars() -> dict[str, str]:
    """Load shared prompt partials from _partials directory.

    Each .txt file in templates/_partials/ becomes available as a
    placeholder using its filename (without extension) as the key.

    Example: _partials/output_field_rules.txt -> {output_field_rules}

    Returns:
        Dict mapping partial names to their content.
    """
    partials: dict[str, str] = {}
    if PARTIALS_DIR.exists():
        for path in PARTIALS_DIR.glob("*.txt"):
            partials[path.stem] = path.read_text(encoding="utf-8")
    return partials


@lru_cache(maxsize=10)
def load_prompt(name: str) -> str:
    """Load a prompt template from templates/.

    Args:
        name: Prompt name without extension (e.g., "life_analysis")

    Returns:
        The prompt template as a string.

    Raises:
        FileNotFoundError: If the prompt file doesn't exist.
    """
    path = PROMPTS_DIR / f"{name}.txt"
    if not path.exists():
        raise FileNotFoundError(f"Prompt file not found: {path}")
    return path.read_text(encoding="utf-8")


def format_prompt(name: str, /, **kwargs: str) -> str:
    """Load and format a prompt with variable substitution.

    Partials are included automatically. Additional variables are
    passed via kwargs and take precedence over partials.

    Raises:
        FileNotFoundError: If the prompt file doesn't exist.
        KeyError: If a required variable is missing from kwargs.
    """
    template = load_prompt(name)
    all_vars = {**_get_partial_vars(), **kwargs}
    return template.format(**all_vars)


def clear_cache() -> None:
    """Clear the prompt cache. Useful for testing or hot-reloading."""
    load_prompt.cache_clear()
    _get_partial_vars.cache_clear()
