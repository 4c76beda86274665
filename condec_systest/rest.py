"""Authenticated REST session shared by the Jira and ConDec clients."""

from __future__ import annotations

import logging
import time
from typing import Any

import requests
from requests.auth import HTTPBasicAuth

from condec_systest.activity import log_rest_call
from condec_systest.config import Config

logger = logging.getLogger(__name__)

JIRA_API_PATH = "/rest/api/2"
CONDEC_API_PATH = "/rest/condec/latest"


class RestError(Exception):
    """A non-2xx response from Jira or ConDec.

    The message mirrors what the suite has always asserted on
    ("Request failed with status code 404"). Plugin business errors come back
    as a JSON body with an ``error`` string, exposed as ``error``.
    """

    def __init__(self, status_code: int, body: Any = None, url: str = "") -> None:
        super().__init__(f"Request failed with status code {status_code}")
        self.status_code = status_code
        self.body = body
        self.url = url

    @property
    def error(self) -> str:
        if isinstance(self.body, dict):
            return str(self.body.get("error", ""))
        return ""


class RestSession:
    """requests.Session bound to one Jira base URL with Basic auth.

    Usage:
        session = RestSession.from_config(Config.load())
        projects = session.get(f"{JIRA_API_PATH}/project")
    """

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        verify_ssl: bool = False,
        timeout: int = 30,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = requests.Session()
        self._session.auth = HTTPBasicAuth(username, password)
        self._session.verify = verify_ssl
        self._session.headers.update(
            {"Accept": "application/json", "Content-Type": "application/json"}
        )

    @classmethod
    def from_config(cls, config: Config) -> RestSession:
        return cls(
            base_url=config.jira_url,
            username=config.username,
            password=config.password,
            verify_ssl=config.verify_ssl,
            timeout=config.timeout,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    def request(
        self,
        method: str,
        path: str,
        params: dict | None = None,
        json: Any = None,
    ) -> Any:
        """Send a request and return the decoded JSON body (None when empty).

        Raises RestError for any non-2xx status. Transport errors from
        requests propagate unchanged.
        """
        url = f"{self._base_url}{path}"
        # Includes the encoded query string
        logged_url = requests.Request(method, url, params=params).prepare().url
        start = time.monotonic()
        try:
            response = self._session.request(
                method, url, params=params, json=json, timeout=self._timeout
            )
        except requests.RequestException as e:
            log_rest_call(method, logged_url, None, str(e), _elapsed_ms(start))
            logger.warning(f"{method} {logged_url} failed: {e}")
            raise

        duration_ms = _elapsed_ms(start)
        body = _decode(response)
        if not response.ok:
            err = RestError(response.status_code, body, url)
            log_rest_call(method, logged_url, response.status_code, err.error or str(err), duration_ms)
            logger.warning(f"{method} {logged_url} -> {response.status_code} {err.error}")
            raise err

        log_rest_call(method, logged_url, response.status_code, None, duration_ms)
        logger.debug(f"{method} {logged_url} -> {response.status_code} ({duration_ms}ms)")
        return body

    def get(self, path: str, params: dict | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None, params: dict | None = None) -> Any:
        return self.request("POST", path, params=params, json=json)

    def put(self, path: str, json: Any = None, params: dict | None = None) -> Any:
        return self.request("PUT", path, params=params, json=json)

    def delete(self, path: str, json: Any = None, params: dict | None = None) -> Any:
        return self.request("DELETE", path, params=params, json=json)

    def close(self) -> None:
        self._session.close()


def _decode(response: requests.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)
