"""Knowledge markup for Jira issue descriptions and comments.

ConDec classifies text in two notations:
- Macro tags: {issue}Which database?{issue}
- Jira icons: (!) Which database?

Icons are rewritten to macro tags by the plugin when the comment is saved.
"""

from __future__ import annotations

import re

MACRO_TAGS: dict[str, str] = {
    "Issue": "issue",
    "Decision": "decision",
    "Alternative": "alternative",
    "Pro": "pro",
    "Con": "con",
}

ICONS: dict[str, str] = {
    "Issue": "(!)",
    "Decision": "(/)",
    "Alternative": "(on)",
    "Pro": "(+)",
    "Con": "(-)",
}

# Image file names (without .png) the plugin renders for each type
ICON_IMAGES: dict[str, str] = {
    "Issue": "issue",
    "Decision": "decision",
    "Alternative": "alternative",
    "Pro": "argument_pro",
    "Con": "argument_con",
}

_TAG_PATTERN = re.compile(r"\{(" + "|".join(MACRO_TAGS.values()) + r")\}", re.IGNORECASE)


def tag(knowledge_type: str, text: str) -> str:
    """Wrap text in the macro tag for a knowledge type."""
    name = _lookup(MACRO_TAGS, knowledge_type)
    return f"{{{name}}}{text}{{{name}}}"


def icon(knowledge_type: str, text: str) -> str:
    """Prefix text with the Jira icon for a knowledge type."""
    return f"{_lookup(ICONS, knowledge_type)} {text}"


def tagged_comment(elements: list[tuple[str, str]]) -> str:
    """Build a comment body with one tagged element per line."""
    return "".join(f"{tag(t, text)}\n" for t, text in elements)


def icon_comment(elements: list[tuple[str, str]]) -> str:
    """Build a comment body with one icon-marked element per line."""
    return "".join(f"{icon(t, text)}\n" for t, text in elements)


def has_tags(text: str) -> bool:
    return bool(_TAG_PATTERN.search(text))


def strip_tags(text: str) -> str:
    """Remove macro tags, keeping the annotated text."""
    return _TAG_PATTERN.sub("", text)


def icon_image(knowledge_type: str) -> str:
    return f"{_lookup(ICON_IMAGES, knowledge_type)}.png"


def _lookup(table: dict[str, str], knowledge_type: str) -> str:
    try:
        return table[knowledge_type.capitalize()]
    except KeyError:
        raise ValueError(f"No markup for knowledge type: {knowledge_type}") from None
