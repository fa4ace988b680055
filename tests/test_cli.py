"""Tests for the feedbackctl command-line client."""

from __future__ import annotations

import httpx
import pytest
from fastapi.testclient import TestClient
from typer.testing import CliRunner

from feedback_backend import cli

runner = CliRunner()


@pytest.fixture
def api(app, monkeypatch):
    """Point the CLI at the in-process application."""
    monkeypatch.setattr(cli, "get_client", lambda: TestClient(app, base_url="http://testserver/api"))
    return app


def _add(title="Login Issue"):
    return runner.invoke(cli.app, [
        "add",
        "--title", title,
        "--platform", "Web",
        "--module", "Authentication",
        "--description", "Users cannot log in",
        "--tags", "bug",
    ])


class TestFeedbackCommands:
    def test_add_and_list(self, api):
        result = _add()

        assert result.exit_code == 0, result.output
        assert "Feedback created successfully" in result.output

        listed = runner.invoke(cli.app, ["list"])
        assert listed.exit_code == 0
        assert "Login Issue (Web / Authentication)" in listed.output
        assert "1 feedback(s)" in listed.output

    def test_list_filters(self, api):
        _add("Alpha")
        _add("Beta")

        result = runner.invoke(cli.app, ["list", "--search", "beta"])

        assert "Beta" in result.output
        assert "Alpha" not in result.output

    def test_show_edit_delete(self, api):
        _add()

        shown = runner.invoke(cli.app, ["show", "1"])
        assert shown.exit_code == 0
        assert "Users cannot log in" in shown.output
        assert "tags: bug" in shown.output

        edited = runner.invoke(cli.app, [
            "edit", "1",
            "--title", "Renamed",
            "--platform", "Web",
            "--module", "Dashboard",
            "--description", "still broken",
        ])
        assert edited.exit_code == 0
        assert "Renamed (Web / Dashboard)" in edited.output

        deleted = runner.invoke(cli.app, ["delete", "1"])
        assert deleted.exit_code == 0
        assert "Feedback deleted successfully" in deleted.output

    def test_missing_feedback_exits_1(self, api):
        result = runner.invoke(cli.app, ["delete", "999"])

        assert result.exit_code == 1
        assert "Feedback not found (404)" in result.output

    def test_add_validates_locally(self, api):
        result = runner.invoke(cli.app, [
            "add",
            "--title", "",
            "--platform", "Web",
            "--module", "Authentication",
            "--description", "x",
        ])

        assert result.exit_code == 1
        assert '"title" is not allowed to be empty' in result.output


class TestLogCommands:
    def test_activities_and_requests(self, api):
        _add()

        activities = runner.invoke(cli.app, ["logs", "activities"])
        requests = runner.invoke(cli.app, ["logs", "requests"])

        assert activities.exit_code == 0
        assert "CREATE feedbacks#1 Created feedback: Login Issue" in activities.output
        assert requests.exit_code == 0
        assert "POST /api/feedbacks 201" in requests.output


class TestConnectionErrors:
    def test_unreachable_api(self, monkeypatch):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        monkeypatch.setattr(
            cli, "get_client",
            lambda: httpx.Client(base_url="http://api.test/api", transport=httpx.MockTransport(handler)),
        )

        result = runner.invoke(cli.app, ["list"])

        assert result.exit_code == 1
        assert "Request failed" in result.output
