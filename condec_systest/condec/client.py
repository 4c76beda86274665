"""Client for the ConDec plugin's REST endpoints (/rest/condec/latest)."""

from __future__ import annotations

import logging

from condec_systest.condec.models import (
    DEFAULT_LINK_TYPE,
    JIRA_ISSUE_TEXT,
    FilterSettings,
    KnowledgeElement,
    Link,
    TreantNode,
    VisGraph,
)
from condec_systest.rest import CONDEC_API_PATH, RestSession

logger = logging.getLogger(__name__)

KNOWLEDGE = f"{CONDEC_API_PATH}/knowledge"
CONFIG = f"{CONDEC_API_PATH}/config"
VIEW = f"{CONDEC_API_PATH}/view"
JIRA_ISSUE_COMMENT = f"{CONDEC_API_PATH}/jira-issue-comment"


class ConDecClient:
    """One method per plugin endpoint the system tests drive.

    All methods raise RestError on a non-2xx response.

    Usage:
        condec = ConDecClient(session, project_key="CONDEC")
        issue = condec.create_element("Which database?", "Issue", "i")
    """

    def __init__(self, session: RestSession, project_key: str) -> None:
        self._session = session
        self._project_key = project_key

    @property
    def project_key(self) -> str:
        return self._project_key

    # -- project configuration -------------------------------------------

    def set_activated(self, active: bool = True) -> None:
        """Activate ConDec for the project.

        Only works if the plugin has been activated manually on the instance
        before, since this goes through the plugin's own REST API.
        """
        self._session.post(
            f"{CONFIG}/setActivated.json",
            params={"projectKey": self._project_key, "isActivated": _flag(active)},
        )

    def set_issue_strategy(self, enabled: bool) -> None:
        """Toggle storing decision knowledge as Jira issues of their own type."""
        self._session.post(
            f"{CONFIG}/setIssueStrategy.json",
            params={"projectKey": self._project_key, "isIssueStrategy": _flag(enabled)},
        )

    # -- knowledge elements ------------------------------------------------

    def create_element(
        self,
        summary: str,
        type: str,
        documentation_location: str,
        existing_id: int | str | None = None,
        existing_location: str | None = None,
        description: str = "",
    ) -> KnowledgeElement:
        """Create a knowledge element, optionally linked to an existing one.

        With documentation location "s" the element is written as a tagged
        comment on the existing element's Jira issue.
        """
        params: dict = {}
        if existing_id is not None:
            params["idOfExistingElement"] = existing_id
            if existing_location:
                params["documentationLocationOfExistingElement"] = existing_location
        payload = {
            "projectKey": self._project_key,
            "summary": summary,
            "type": type,
            "description": description,
            "documentationLocation": documentation_location,
        }
        data = self._session.post(
            f"{KNOWLEDGE}/createDecisionKnowledgeElement.json", json=payload, params=params
        )
        element = KnowledgeElement.from_json(data)
        logger.info(f"Created {element.type} {element.id} ({element.documentation_location})")
        return element

    def update_element(
        self,
        element: KnowledgeElement,
        parent_id: int | str = 0,
        parent_location: str | None = None,
    ) -> KnowledgeElement | None:
        """Send a full updated element. Parent id/location give the plugin context."""
        params: dict = {"idOfParentElement": parent_id}
        if parent_location:
            params["documentationLocationOfParentElement"] = parent_location
        payload = element.to_json()
        payload["projectKey"] = self._project_key
        data = self._session.post(
            f"{KNOWLEDGE}/updateDecisionKnowledgeElement.json", json=payload, params=params
        )
        if isinstance(data, dict) and "id" in data:
            return KnowledgeElement.from_json(data)
        return None

    def delete_element(self, id: int | str, documentation_location: str) -> None:
        self._session.delete(
            f"{KNOWLEDGE}/deleteDecisionKnowledgeElement.json",
            json={
                "id": id,
                "projectKey": self._project_key,
                "documentationLocation": documentation_location,
            },
        )

    def get_element(self, id: int | str, documentation_location: str) -> KnowledgeElement:
        data = self._session.get(
            f"{KNOWLEDGE}/getDecisionKnowledgeElement.json",
            params={
                "projectKey": self._project_key,
                "id": id,
                "documentationLocation": documentation_location,
            },
        )
        return KnowledgeElement.from_json(data)

    def get_elements(
        self, search_term: str = "", selected_element: str | None = None
    ) -> list[KnowledgeElement]:
        """All knowledge elements of the project matching a free-text search."""
        return self.filter_elements(
            FilterSettings(
                project_key=self._project_key,
                search_term=search_term,
                selected_element=selected_element,
            )
        )

    def filter_elements(self, settings: FilterSettings) -> list[KnowledgeElement]:
        payload = settings.to_json()
        payload.setdefault("projectKey", self._project_key)
        data = self._session.post(f"{KNOWLEDGE}/knowledgeElements.json", json=payload)
        return [KnowledgeElement.from_json(d) for d in data or []]

    def set_sentence_irrelevant(self, id: int | str) -> None:
        """Mark a sentence as irrelevant; the plugin strips its macro tags."""
        self._session.post(
            f"{JIRA_ISSUE_COMMENT}/setSentenceIrrelevant.json",
            json={
                "id": id,
                "documentationLocation": JIRA_ISSUE_TEXT,
                "projectKey": self._project_key,
            },
        )

    # -- links -------------------------------------------------------------

    def create_link(
        self,
        parent_id: int | str,
        parent_location: str,
        child_id: int | str,
        child_location: str,
        link_type: str = DEFAULT_LINK_TYPE,
    ) -> int:
        """Link two elements. Returns the id of the created link."""
        data = self._session.post(
            f"{KNOWLEDGE}/createLink.json",
            params={
                "projectKey": self._project_key,
                "documentationLocationOfParent": parent_location,
                "documentationLocationOfChild": child_location,
                "idOfParent": parent_id,
                "idOfChild": child_id,
                "linkTypeName": link_type,
            },
        )
        link_id = int(data["id"]) if isinstance(data, dict) and "id" in data else 0
        logger.info(f"Linked {parent_location}{parent_id} -> {child_location}{child_id} ({link_id})")
        return link_id

    def delete_link(
        self,
        source_id: int | str,
        source_location: str,
        destination_id: int | str,
        destination_location: str,
    ) -> None:
        link = Link(
            source_id=int(source_id),
            source_location=source_location,
            destination_id=int(destination_id),
            destination_location=destination_location,
        )
        self._session.delete(
            f"{KNOWLEDGE}/deleteLink.json",
            params={"projectKey": self._project_key},
            json=link.to_json(),
        )

    # -- graph views -------------------------------------------------------

    def get_treant(self, selected_element: str, search_term: str = "") -> TreantNode:
        """Tree rendering rooted at a Jira issue key."""
        data = self._session.post(f"{VIEW}/getTreant.json", json=self._view_payload(selected_element, search_term))
        return TreantNode.from_json((data or {}).get("nodeStructure") or {})

    def get_vis(self, selected_element: str, search_term: str = "") -> VisGraph:
        """Node/edge rendering rooted at a Jira issue key."""
        data = self._session.post(f"{VIEW}/getVis.json", json=self._view_payload(selected_element, search_term))
        return VisGraph.from_json(data or {})

    def _view_payload(self, selected_element: str, search_term: str) -> dict:
        return {
            "searchTerm": search_term,
            "selectedElement": selected_element,
            "projectKey": self._project_key,
        }


def _flag(value: bool) -> str:
    return "true" if value else "false"
