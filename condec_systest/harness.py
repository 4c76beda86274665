"""Wires config, REST session and both clients together."""

from __future__ import annotations

from dataclasses import dataclass

from condec_systest.condec.client import ConDecClient
from condec_systest.config import Config
from condec_systest.fixture import set_up_jira
from condec_systest.jira.client import JiraClient
from condec_systest.rest import RestSession


@dataclass
class Harness:
    config: Config
    session: RestSession
    jira: JiraClient
    condec: ConDecClient

    @classmethod
    def from_config(cls, config: Config) -> Harness:
        session = RestSession.from_config(config)
        return cls(
            config=config,
            session=session,
            jira=JiraClient(session, project_key=config.project_key, username=config.username),
            condec=ConDecClient(session, project_key=config.project_key),
        )

    def reset(self, use_issue_strategy: bool = False) -> None:
        set_up_jira(self.jira, self.condec, use_issue_strategy=use_issue_strategy)

    def close(self) -> None:
        self.session.close()
