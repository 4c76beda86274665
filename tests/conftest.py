"""Shared test fixtures for condec-systest."""

from __future__ import annotations

from pathlib import Path

import pytest

from condec_systest.condec.client import ConDecClient
from condec_systest.config import Config
from condec_systest.jira.client import JiraClient
from condec_systest.rest import RestSession

JIRA_URL = "http://jira.test/jira"


@pytest.fixture(autouse=True)
def activity_log(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep REST activity logging out of the working directory."""
    log_path = tmp_path / "activity.jsonl"
    monkeypatch.setenv("CONDEC_ACTIVITY_LOG", str(log_path))
    return log_path


@pytest.fixture
def config() -> Config:
    return Config(
        jira_url=JIRA_URL,
        username="admin",
        password="secret",
        project_key="CONDEC",
        default_issue_type="Task",
    )


@pytest.fixture
def session(config: Config) -> RestSession:
    s = RestSession.from_config(config)
    yield s
    s.close()


@pytest.fixture
def jira(session: RestSession) -> JiraClient:
    return JiraClient(session, project_key="CONDEC", username="admin")


@pytest.fixture
def condec(session: RestSession) -> ConDecClient:
    return ConDecClient(session, project_key="CONDEC")


@pytest.fixture
def alternative_json() -> dict:
    return {
        "id": 12,
        "key": "CONDEC-1:12",
        "summary": "Use Postgres to store user data!",
        "description": "",
        "type": "Alternative",
        "status": "idea",
        "documentationLocation": "s",
        "projectKey": "CONDEC",
        "url": "http://jira.test/jira/browse/CONDEC-1",
        "relevant": True,
    }


@pytest.fixture
def treant_json() -> dict:
    return {
        "nodeStructure": {
            "text": {"title": "Dummy task"},
            "link": {"title": "Dummy task"},
            "image": "/jira/images/task.png",
            "children": [
                {
                    "text": {"title": "How should we brew coffee?"},
                    "link": {"title": "How should we brew coffee?"},
                    "image": "/jira/download/resources/condec/images/issue.png",
                    "children": [
                        {
                            "text": {"title": "Use a french press to brew coffee!"},
                            "link": {"title": "Use a french press to brew coffee!"},
                            "image": "/jira/download/resources/condec/images/decision.png",
                            "children": [],
                        },
                        {
                            "text": {"title": "Use a filter coffee machine"},
                            "link": {"title": "Use a filter coffee machine"},
                            "image": "/jira/download/resources/condec/images/alternative.png",
                            "children": [],
                        },
                    ],
                }
            ],
        }
    }
