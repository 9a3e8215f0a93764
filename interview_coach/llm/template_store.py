"""
Prompt templates for LLM interactions.
Provides a centralized store for all prompt templates.
"""

from typing import Any

from interview_coach.llm.templates import ALL_TEMPLATES, ALL_SYSTEM_PROMPTS

TEMPLATES = ALL_TEMPLATES
SYSTEM_PROMPTS = ALL_SYSTEM_PROMPTS


def _render(store: dict, kind: str, name: str, **vars: Any) -> str:
    if name not in store:
        raise KeyError(f"Unknown {kind} '{name}'.")
    try:
        return store[name].format(**vars)
    except KeyError as miss:
        raise ValueError(f"Missing template variable {miss}") from None


def render_template(name: str, **vars: Any) -> str:
    """
    Format a template with provided variables or provide a helpful error message.

    Args:
        name: The name of the template to render
        **vars: Variables to insert into the template

    Returns:
        The formatted template string

    Raises:
        KeyError: If the template name doesn't exist
        ValueError: If a required template variable is missing
    """
    return _render(TEMPLATES, "template", name, **vars)


def render_system_prompt(name: str, **vars: Any) -> str:
    """Same as render_template, for the system prompt paired with a template."""
    return _render(SYSTEM_PROMPTS, "system prompt", name, **vars)
