"""Activity logging for REST calls.

Logs every request the harness sends to Jira or ConDec to a JSONL file so a
failed system test run can be traced back to the exact calls it made. Each
line is a JSON object with timestamp, method, URL, status, error, and
duration.

The log file lives in the working directory by default.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from pathlib import Path

DEFAULT_LOG_NAME = "condec-rest-activity.jsonl"
ERROR_PREVIEW_LIMIT = 500

logger = logging.getLogger(__name__)


def _resolve_log_path() -> Path:
    """Find the log file path, checking env var then defaulting to the cwd."""
    env_path = os.getenv("CONDEC_ACTIVITY_LOG")
    if env_path:
        return Path(env_path)
    return Path(DEFAULT_LOG_NAME)


def log_rest_call(
    method: str,
    url: str,
    status: int | None,
    error: str | None,
    duration_ms: int,
) -> None:
    """Append a REST call entry to the activity log. Never raises."""
    try:
        entry = {
            "timestamp": datetime.now().isoformat(),
            "method": method.upper(),
            "url": url,
            "status": status,
            "error": error[:ERROR_PREVIEW_LIMIT] if error else None,
            "duration_ms": duration_ms,
        }
        log_path = _resolve_log_path()
        with open(log_path, "a") as f:
            f.write(json.dumps(entry, default=str) + "\n")
    except OSError as e:
        logger.debug(f"Could not write activity log: {e}")


def read_activity_log(
    limit: int = 20,
    method: str | None = None,
    failed_only: bool = False,
    log_path: Path | None = None,
) -> list[dict]:
    """Read recent activity log entries.

    Returns entries in reverse chronological order (most recent first).
    """
    path = log_path or _resolve_log_path()
    if not path.exists():
        return []

    entries: list[dict] = []
    for line in path.read_text().splitlines():
        if not line.strip():
            continue
        try:
            entry = json.loads(line)
        except json.JSONDecodeError:
            continue

        if method and entry.get("method") != method.upper():
            continue
        if failed_only and not entry.get("error"):
            continue

        entries.append(entry)

    entries.reverse()
    return entries[:limit]
