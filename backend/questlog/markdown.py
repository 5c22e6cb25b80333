"""Markdown helpers for journal content: title derivation and entity mentions."""

import re

from questlog.models import EntityType, Mention

UNTITLED_ENTRY = "Untitled Entry"

_HEADING_RE = re.compile(r"^#{1,6}[ \t]+(.+)$", re.MULTILINE)

_ENTITY_TYPES = "|".join(t.value for t in EntityType)
_MENTION_RE = re.compile(
    rf"@?\[(?P<name>[^\]]*)\]\(entity/(?P<type>{_ENTITY_TYPES})/(?P<id>\d+)\)"
)


def derive_title(content: str) -> str:
    """
    Use the first markdown heading as the entry title.

    Examples:
        "# Hello\\nbody"       -> "Hello"
        "intro\\n### Day 3 "   -> "Day 3"
        "no heading here"      -> "Untitled Entry"
    """
    for match in _HEADING_RE.finditer(content or ""):
        title = match.group(1).strip()
        if title:
            return title
    return UNTITLED_ENTRY


def mention_markup(name: str, entity_type: EntityType, entity_id: int) -> str:
    """Markup the editor inserts when an entity is picked from the @ menu."""
    return f"@[{name}](entity/{EntityType(entity_type).value}/{entity_id})"


def extract_mentions(content: str) -> list[Mention]:
    """
    Find every entity link in journal content, in order of appearance.

    Repeated links to the same entity are all returned.
    """
    return [
        Mention(
            name=m.group("name"),
            type=EntityType(m.group("type")),
            entity_id=int(m.group("id")),
        )
        for m in _MENTION_RE.finditer(content or "")
    ]
