"""Configuration loading for condec-systest.

Config sources (in priority order):
1. Explicit arguments passed to Config
2. Environment variables (CONDEC_JIRA_URL, etc.)
3. .env file in current directory
4. JSON config file (config.json, or CONDEC_CONFIG_PATH)
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

DEFAULT_CONFIG_PATH = Path("config.json")
DEFAULT_PROJECT_KEY = "CONDEC"
DEFAULT_ISSUE_TYPE = "Task"
DEFAULT_TIMEOUT = 30
JIRA_CONTEXT_PATH = "jira"

# Environment variable -> JSON key in config.json
_ENV_TO_JSON = {
    "CONDEC_JIRA_URL": "fullUrl",
    "CONDEC_JIRA_USERNAME": "localJiraUsername",
    "CONDEC_JIRA_PASSWORD": "localJiraPassword",
    "CONDEC_PROJECT_KEY": "projectKey",
    "CONDEC_DEFAULT_ISSUE_TYPE": "defaultIssueType",
    "CONDEC_FIREFOX_PROFILE": "firefoxProfilePath",
    "CONDEC_VERIFY_SSL": "strictSSL",
    "CONDEC_TIMEOUT": "timeout",
}


@dataclass
class Config:
    jira_url: str = ""  # "http://localhost:8080/jira"
    username: str = ""
    password: str = ""
    project_key: str = DEFAULT_PROJECT_KEY
    default_issue_type: str = DEFAULT_ISSUE_TYPE
    firefox_profile_path: str = ""
    verify_ssl: bool = False
    timeout: int = DEFAULT_TIMEOUT

    @classmethod
    def load(cls, path: Path | None = None) -> Config:
        if path is None:
            path = Path(os.getenv("CONDEC_CONFIG_PATH", str(DEFAULT_CONFIG_PATH)))
        data = read_config_file(path)

        def pick(env_var: str, default: object = "") -> object:
            value = os.getenv(env_var)
            if value:
                return value
            value = data.get(_ENV_TO_JSON[env_var])
            return default if value in (None, "") else value

        jira_url = pick("CONDEC_JIRA_URL") or _build_url(data)
        return cls(
            jira_url=str(jira_url).rstrip("/"),
            username=str(pick("CONDEC_JIRA_USERNAME")),
            password=str(pick("CONDEC_JIRA_PASSWORD")),
            project_key=str(pick("CONDEC_PROJECT_KEY", DEFAULT_PROJECT_KEY)),
            default_issue_type=str(pick("CONDEC_DEFAULT_ISSUE_TYPE", DEFAULT_ISSUE_TYPE)),
            firefox_profile_path=str(pick("CONDEC_FIREFOX_PROFILE")),
            verify_ssl=_as_bool(pick("CONDEC_VERIFY_SSL", False)),
            timeout=int(pick("CONDEC_TIMEOUT", DEFAULT_TIMEOUT)),
        )

    def validate(self) -> list[str]:
        """Return a list of missing config issues."""
        issues = []
        if not self.jira_url:
            issues.append("Jira URL not set (CONDEC_JIRA_URL or fullUrl in config.json)")
        if not self.username:
            issues.append("Jira username not set (CONDEC_JIRA_USERNAME)")
        if not self.password:
            issues.append("Jira password not set (CONDEC_JIRA_PASSWORD)")
        if not self.project_key:
            issues.append("Project key not set (CONDEC_PROJECT_KEY)")
        return issues


def read_config_file(path: Path) -> dict:
    """Read the JSON config file. A missing file yields an empty dict."""
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise ValueError(f"Malformed config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")
    return data


def _build_url(data: dict) -> str:
    """Build the Jira URL from baseUrl/usePort when fullUrl is absent."""
    base = str(data.get("baseUrl", "")).rstrip("/")
    if not base:
        return ""
    if "://" not in base:
        base = f"http://{base}"
    port = data.get("usePort")
    if port:
        base = f"{base}:{port}"
    return f"{base}/{JIRA_CONTEXT_PATH}"


def _as_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")
