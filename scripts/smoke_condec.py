"""Manual verification: walk one decision through ConDec on a real instance.

Usage:
    CONDEC_JIRA_URL=http://localhost:2990/jira uv run python scripts/smoke_condec.py [--keep]

Resets the configured project (issue strategy on), documents an issue and an
alternative in a task's comments, promotes the alternative to a decision and
prints what ConDec reports afterwards.
"""

from __future__ import annotations

import sys

from condec_systest.config import Config
from condec_systest.harness import Harness
from condec_systest.rest import RestError


def main() -> None:
    config = Config.load()
    issues = config.validate()
    if issues:
        for issue in issues:
            print(f"ERROR: {issue}")
        sys.exit(1)

    print(f"Connecting to {config.jira_url} (project {config.project_key})...")
    harness = Harness.from_config(config)

    try:
        harness.reset(use_issue_strategy=True)
        print("Project reset")

        task = harness.jira.create_issue(config.default_issue_type, "Enable persistence of user data")
        print(f"  Task: {task['key']}")

        issue = harness.condec.create_element(
            "Which database should be used to store user data?", "Issue", "s", task["id"], "i"
        )
        alternative = harness.condec.create_element(
            "Use Postgres to store user data!", "Alternative", "s", task["id"], "i"
        )
        print(f"  Issue {issue.id}: {issue.status}")
        print(f"  Alternative {alternative.id}: {alternative.status}")

        harness.condec.update_element(alternative.with_changes(type="Decision"), issue.id, "i")

        print("\n--- Knowledge elements ---")
        for el in harness.condec.get_elements():
            print(f"  [{el.documentation_location}] {el.id} {el.type:<12} {el.status:<10} {el.summary}")

        print("\n--- Comments ---")
        for body in harness.jira.comment_bodies(task["key"]):
            print(f"  {body!r}")

        if "--keep" not in sys.argv:
            harness.jira.delete_issue(task["id"])
            remaining = harness.condec.get_elements()
            print(f"\nDeleted {task['key']}, {len(remaining)} knowledge elements left")

    except RestError as e:
        print(f"ERROR: {e} {e.error}")
        sys.exit(1)
    finally:
        harness.close()


if __name__ == "__main__":
    main()
