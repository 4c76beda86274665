"""Data models for decision knowledge as seen through the ConDec REST API."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field, replace
from typing import Any

KNOWLEDGE_TYPES = ("Issue", "Decision", "Alternative", "Pro", "Con", "Other")
KNOWLEDGE_STATUSES = (
    "unresolved",
    "resolved",
    "decided",
    "idea",
    "challenged",
    "rejected",
    "discarded",
    "irrelevant",
    "other",
)

JIRA_ISSUE = "i"
JIRA_ISSUE_TEXT = "s"
DOCUMENTATION_LOCATIONS = (JIRA_ISSUE, JIRA_ISSUE_TEXT)

DEFAULT_LINK_TYPE = "relates"

# Python attribute -> JSON field
_ELEMENT_FIELDS = {
    "id": "id",
    "summary": "summary",
    "description": "description",
    "type": "type",
    "status": "status",
    "documentation_location": "documentationLocation",
    "project_key": "projectKey",
    "key": "key",
    "relevant": "relevant",
}


@dataclass
class KnowledgeElement:
    id: int
    summary: str
    description: str = ""
    type: str = "Other"  # see KNOWLEDGE_TYPES; Jira issue types like "Task" also occur
    status: str = ""  # see KNOWLEDGE_STATUSES
    documentation_location: str = JIRA_ISSUE_TEXT  # "i" | "s"
    project_key: str = ""
    key: str = ""  # "CONDEC-3", or "CONDEC-3:7" for sentences
    relevant: bool = True
    raw: dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_json(cls, data: dict) -> KnowledgeElement:
        if not isinstance(data, dict):
            raise ValueError(f"Expected a knowledge element object, got {data!r}")
        return cls(
            id=_as_int(data.get("id")),
            summary=data.get("summary") or "",
            description=data.get("description") or "",
            type=data.get("type") or "Other",
            status=data.get("status") or "",
            documentation_location=data.get("documentationLocation") or JIRA_ISSUE_TEXT,
            project_key=data.get("projectKey") or "",
            key=data.get("key") or "",
            relevant=bool(data.get("relevant", True)),
            raw=dict(data),
        )

    def to_json(self) -> dict:
        """The full representation, with this object's fields overriding the raw body."""
        data = dict(self.raw)
        for attr, json_key in _ELEMENT_FIELDS.items():
            data[json_key] = getattr(self, attr)
        return data

    def with_changes(self, **changes: Any) -> KnowledgeElement:
        return replace(self, raw=dict(self.raw), **changes)

    def matches(self, **expected: Any) -> bool:
        """Partial comparison: every given attribute must be equal."""
        return all(getattr(self, name) == value for name, value in expected.items())

    @property
    def is_jira_issue(self) -> bool:
        return self.documentation_location == JIRA_ISSUE


@dataclass
class Link:
    source_id: int
    source_location: str
    destination_id: int
    destination_location: str
    type: str = DEFAULT_LINK_TYPE

    def to_json(self) -> dict:
        # The plugin deserializes this body positionally; keep the order.
        return {
            "idOfSourceElement": self.source_id,
            "idOfDestinationElement": self.destination_id,
            "documentationLocationOfSourceElement": self.source_location,
            "documentationLocationOfDestinationElement": self.destination_location,
        }


@dataclass
class FilterSettings:
    project_key: str
    search_term: str = ""
    selected_element: str | None = None  # Jira issue key the graph is rooted at
    knowledge_types: list[str] | None = None
    is_irrelevant_text_shown: bool | None = None
    documentation_locations: list[str] | None = None

    def to_json(self) -> dict:
        data: dict = {"projectKey": self.project_key, "searchTerm": self.search_term}
        if self.selected_element is not None:
            data["selectedElement"] = self.selected_element
        if self.knowledge_types is not None:
            data["knowledgeTypes"] = list(self.knowledge_types)
        if self.is_irrelevant_text_shown is not None:
            data["isIrrelevantTextShown"] = self.is_irrelevant_text_shown
        if self.documentation_locations is not None:
            data["documentationLocations"] = list(self.documentation_locations)
        return data


@dataclass
class TreantNode:
    """One node of the tree rendering (getTreant.json)."""

    title: str
    link_title: str = ""
    image: str = ""
    children: list[TreantNode] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict) -> TreantNode:
        text = data.get("text") or {}
        link = data.get("link") or {}
        return cls(
            title=text.get("title", "") if isinstance(text, dict) else str(text),
            link_title=link.get("title", "") if isinstance(link, dict) else "",
            image=data.get("image") or "",
            children=[cls.from_json(c) for c in data.get("children") or []],
        )

    def walk(self) -> Iterator[TreantNode]:
        """Yield this node and all descendants, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass
class VisGraph:
    """Node/edge rendering (getVis.json)."""

    nodes: list[dict] = field(default_factory=list)
    edges: list[dict] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: dict) -> VisGraph:
        return cls(nodes=list(data.get("nodes") or []), edges=list(data.get("edges") or []))


def _as_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0
