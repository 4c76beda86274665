"""Reset the Jira test project to a known empty baseline.

Tests share one Jira project, so every scenario starts by deleting and
recreating it. Failures here abort the run instead of letting tests proceed
against an inconsistent fixture.
"""

from __future__ import annotations

import logging

from condec_systest.condec.client import ConDecClient
from condec_systest.jira.client import JiraClient

logger = logging.getLogger(__name__)

PROJECT_NAME = "ConDec Test"
PROJECT_TYPE_KEY = "business"
PROJECT_TEMPLATE_KEY = "com.atlassian.jira-core-project-templates:jira-core-project-management"
PROJECT_DESCRIPTION = "A project for testing the ConDec Jira plugin"


def set_up_jira(
    jira: JiraClient,
    condec: ConDecClient,
    use_issue_strategy: bool = False,
) -> None:
    """Delete and recreate the configured project, then configure ConDec.

    Args:
        jira: Client for the Jira REST API.
        condec: Client for the ConDec REST API, bound to the same project key.
        use_issue_strategy: Store new knowledge elements as Jira issues of
            their own type instead of tagged comment text.
    """
    key = jira.project_key
    try:
        if any(p.get("key") == key for p in jira.list_projects()):
            jira.delete_project(key)

        jira.create_project(
            key=key,
            name=PROJECT_NAME,
            project_type_key=PROJECT_TYPE_KEY,
            template_key=PROJECT_TEMPLATE_KEY,
            description=PROJECT_DESCRIPTION,
        )

        condec.set_activated(True)
        condec.set_issue_strategy(use_issue_strategy)
    except Exception as e:
        logger.error(f"Setting up Jira project {key} failed: {e}")
        raise

    logger.info(f"Project {key} reset (issue strategy {'on' if use_issue_strategy else 'off'})")
