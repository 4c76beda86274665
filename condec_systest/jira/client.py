"""Thin wrapper around the Jira REST API v2 for issues, comments and projects."""

from __future__ import annotations

import logging

from condec_systest.rest import JIRA_API_PATH, RestError, RestSession

logger = logging.getLogger(__name__)


class JiraClient:
    """Jira client scoped to a single project.

    Every method is a pass-through to one REST call; there is no local
    validation or retry.

    Usage:
        client = JiraClient(session, project_key="CONDEC", username="admin")
        issue = client.create_issue("Task", "Enable persistence of user data")
    """

    def __init__(self, session: RestSession, project_key: str, username: str) -> None:
        self._session = session
        self._project_key = project_key
        self._username = username

    @property
    def project_key(self) -> str:
        return self._project_key

    # -- projects --------------------------------------------------------

    def list_projects(self) -> list[dict]:
        return self._session.get(f"{JIRA_API_PATH}/project") or []

    def create_project(
        self,
        key: str,
        name: str,
        project_type_key: str,
        template_key: str,
        description: str = "",
        lead: str | None = None,
    ) -> dict:
        payload = {
            "key": key,
            "name": name,
            "projectTypeKey": project_type_key,
            "projectTemplateKey": template_key,
            "description": description,
            "lead": lead or self._username,
        }
        project = self._session.post(f"{JIRA_API_PATH}/project", json=payload)
        logger.info(f"Created project: {key}")
        return project

    def delete_project(self, key_or_id: str) -> bool:
        """Delete a project. Returns False if it did not exist."""
        try:
            self._session.delete(f"{JIRA_API_PATH}/project/{key_or_id}")
        except RestError as e:
            if e.status_code == 404:
                logger.info(f"Project {key_or_id} not found, nothing to delete")
                return False
            raise
        logger.info(f"Deleted project: {key_or_id}")
        return True

    # -- issues ----------------------------------------------------------

    def create_issue(
        self, issue_type: str, summary: str, description: str | None = None
    ) -> dict:
        """Create an issue in the configured project, reported by the configured user.

        Args:
            issue_type: Must be a valid Jira issue type for the instance
                (e.g. "Task", or "Issue"/"Alternative" with the issue strategy).
            summary: Issue summary.
            description: Optional description; may contain knowledge markup.
        """
        fields: dict = {
            "project": {"key": self._project_key},
            "summary": summary,
            "issuetype": {"name": issue_type},
            "reporter": {"name": self._username},
        }
        if description is not None:
            fields["description"] = description
        issue = self._session.post(f"{JIRA_API_PATH}/issue", json={"fields": fields})
        logger.info(f"Created issue: {issue['key']}")
        return issue

    def find_issue(self, key_or_id: str | int) -> dict:
        return self._session.get(f"{JIRA_API_PATH}/issue/{key_or_id}")

    def update_issue(self, key_or_id: str | int, update: dict) -> None:
        """Apply a raw Jira edit payload, e.g. {"update": {"description": [{"set": "foo"}]}}."""
        self._session.put(f"{JIRA_API_PATH}/issue/{key_or_id}", json=update)

    def update_description(self, key_or_id: str | int, text: str) -> None:
        self.update_issue(key_or_id, {"update": {"description": [{"set": text}]}})

    def delete_issue(self, key_or_id: str | int) -> None:
        self._session.delete(f"{JIRA_API_PATH}/issue/{key_or_id}")
        logger.info(f"Deleted issue: {key_or_id}")

    # -- comments --------------------------------------------------------

    def add_comment(self, key_or_id: str | int, body: str) -> dict:
        return self._session.post(
            f"{JIRA_API_PATH}/issue/{key_or_id}/comment", json={"body": body}
        )

    def delete_comment(self, key_or_id: str | int, comment_id: str | int) -> None:
        self._session.delete(f"{JIRA_API_PATH}/issue/{key_or_id}/comment/{comment_id}")

    def comment_bodies(self, key_or_id: str | int) -> list[str]:
        """Bodies of all comments on an issue, oldest first."""
        issue = self.find_issue(key_or_id)
        comments = issue.get("fields", {}).get("comment", {}).get("comments", [])
        return [c.get("body", "") for c in comments]

    def issue_links(self, key_or_id: str | int) -> list[dict]:
        issue = self.find_issue(key_or_id)
        return issue.get("fields", {}).get("issuelinks", [])

    # -- instance --------------------------------------------------------

    def server_info(self) -> dict:
        return self._session.get(f"{JIRA_API_PATH}/serverInfo")
