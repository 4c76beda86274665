"""Fixtures for the system tests against a live Jira + ConDec instance.

All system tests share the configured project and reset it, so they must
run sequentially (no pytest-xdist).
"""

from __future__ import annotations

import os

import pytest

from condec_systest.browser import firefox_session
from condec_systest.condec.client import ConDecClient
from condec_systest.config import Config
from condec_systest.harness import Harness
from condec_systest.jira.client import JiraClient

RUN_SYSTEM_TESTS = os.getenv("CONDEC_RUN_SYSTEM_TESTS") == "1"


@pytest.fixture(autouse=True)
def activity_log():
    """System runs keep their REST activity log where the CLI can read it."""
    return None


@pytest.fixture(scope="session")
def system_config() -> Config:
    if not RUN_SYSTEM_TESTS:
        pytest.skip("System tests disabled (set CONDEC_RUN_SYSTEM_TESTS=1)")
    config = Config.load()
    issues = config.validate()
    if issues:
        pytest.skip("; ".join(issues))
    return config


@pytest.fixture(scope="session")
def harness(system_config: Config) -> Harness:
    h = Harness.from_config(system_config)
    yield h
    h.close()


@pytest.fixture
def jira(harness: Harness) -> JiraClient:
    return harness.jira


@pytest.fixture
def condec(harness: Harness) -> ConDecClient:
    return harness.condec


@pytest.fixture
def default_issue_type(system_config: Config) -> str:
    return system_config.default_issue_type


@pytest.fixture
def browser(system_config: Config):
    if not system_config.firefox_profile_path:
        pytest.skip("No Firefox profile configured (CONDEC_FIREFOX_PROFILE)")
    with firefox_session(system_config) as driver:
        yield driver
