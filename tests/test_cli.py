"""Tests for condec_systest.cli: commands with the harness mocked out."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

from typer.testing import CliRunner

from condec_systest.activity import log_rest_call
from condec_systest.cli import app
from condec_systest.condec.models import KnowledgeElement
from condec_systest.config import Config
from condec_systest.rest import RestError

runner = CliRunner()


def _valid_config() -> Config:
    return Config(jira_url="http://jira.test/jira", username="admin", password="secret")


class TestConfigErrors:
    def test_invalid_config_exits(self):
        with patch("condec_systest.cli.Config.load", return_value=Config()):
            result = runner.invoke(app, ["check"])
        assert result.exit_code == 1
        assert "Config error" in result.output

    def test_malformed_config_exits(self):
        with patch("condec_systest.cli.Config.load", side_effect=ValueError("Malformed config file")):
            result = runner.invoke(app, ["setup"])
        assert result.exit_code == 1
        assert "Malformed" in result.output


class TestCheck:
    def test_prints_server_info(self):
        harness = MagicMock()
        harness.jira.server_info.return_value = {"version": "8.5.0", "serverTitle": "Local"}
        with patch("condec_systest.cli.Config.load", return_value=_valid_config()), \
                patch("condec_systest.cli.Harness.from_config", return_value=harness):
            result = runner.invoke(app, ["check"])
        assert result.exit_code == 0
        assert "8.5.0" in result.output
        harness.close.assert_called_once()

    def test_unreachable(self):
        harness = MagicMock()
        harness.jira.server_info.side_effect = RestError(401)
        with patch("condec_systest.cli.Config.load", return_value=_valid_config()), \
                patch("condec_systest.cli.Harness.from_config", return_value=harness):
            result = runner.invoke(app, ["check"])
        assert result.exit_code == 1
        assert "status code 401" in result.output


class TestSetup:
    def test_resets_with_issue_strategy(self):
        harness = MagicMock()
        with patch("condec_systest.cli.Config.load", return_value=_valid_config()), \
                patch("condec_systest.cli.Harness.from_config", return_value=harness):
            result = runner.invoke(app, ["setup", "--issue-strategy"])
        assert result.exit_code == 0
        harness.reset.assert_called_once_with(use_issue_strategy=True)
        assert "reset" in result.output

    def test_shows_plugin_error(self):
        harness = MagicMock()
        harness.reset.side_effect = RestError(500, {"error": "ConDec is not activated."})
        with patch("condec_systest.cli.Config.load", return_value=_valid_config()), \
                patch("condec_systest.cli.Harness.from_config", return_value=harness):
            result = runner.invoke(app, ["setup"])
        assert result.exit_code == 1
        assert "ConDec is not activated." in result.output


class TestElements:
    def test_lists_elements(self):
        harness = MagicMock()
        harness.condec.filter_elements.return_value = [
            KnowledgeElement(id=3, summary="Which database?", type="Issue", status="unresolved"),
        ]
        with patch("condec_systest.cli.Config.load", return_value=_valid_config()), \
                patch("condec_systest.cli.Harness.from_config", return_value=harness):
            result = runner.invoke(app, ["elements", "--search", "database", "--irrelevant"])
        assert result.exit_code == 0
        assert "Which database?" in result.output
        settings = harness.condec.filter_elements.call_args.args[0]
        assert settings.search_term == "database"
        assert settings.is_irrelevant_text_shown is True

    def test_no_elements(self):
        harness = MagicMock()
        harness.condec.filter_elements.return_value = []
        with patch("condec_systest.cli.Config.load", return_value=_valid_config()), \
                patch("condec_systest.cli.Harness.from_config", return_value=harness):
            result = runner.invoke(app, ["elements"])
        assert result.exit_code == 0
        assert "No knowledge elements" in result.output


class TestActivity:
    def test_empty(self):
        result = runner.invoke(app, ["activity"])
        assert result.exit_code == 0
        assert "No REST activity" in result.output

    def test_shows_failed_calls(self):
        log_rest_call("GET", "http://jira.test/ok", 200, None, 3)
        log_rest_call("DELETE", "http://jira.test/bad", 500, "boom", 7)
        result = runner.invoke(app, ["activity", "--failed"])
        assert result.exit_code == 0
        assert "boom" in result.output
        assert "DELETE" in result.output
        assert "/ok" not in result.output
