"""Tests for the command-line interface."""

import json

import pytest
from unittest.mock import patch

from tdreport import cli
from tdreport.errors import TodoistAPIError
from tdreport.models.project import Project


@pytest.fixture
def patched_client(fake_client):
    """Make cli.main use the fake Todoist client."""
    fake_client.__enter__.return_value = fake_client
    with patch("tdreport.cli.TodoistClient", return_value=fake_client) as client_cls:
        yield client_cls


class TestDefaultCommand:
    def test_report_is_default(self):
        assert cli.with_default_command([]) == ["report"]
        assert cli.with_default_command(["--label", "x"]) == ["report", "--label", "x"]

    def test_global_options_stay_in_front(self):
        assert cli.with_default_command(["-v", "--token", "t.json", "--html"]) == [
            "-v", "--token", "t.json", "report", "--html",
        ]

    def test_explicit_command_untouched(self):
        assert cli.with_default_command(["--token=t", "labels"]) == ["--token=t", "labels"]
        assert cli.with_default_command(["--help"]) == ["--help"]


def test_report_text(patched_client, capsys):
    assert cli.main([]) == cli.EXIT_OK
    out = capsys.readouterr().out
    assert out.index("#Work") < out.index("#Home")


def test_report_html(patched_client, capsys):
    assert cli.main(["report", "--html", "--label", "urgent"]) == cli.EXIT_OK
    out = capsys.readouterr().out
    assert "<h1" in out
    assert "Water plants" in out
    assert "Ship release" not in out


def test_report_passes_filter_to_server(patched_client, fake_client):
    cli.main(["--filter", "today", "--ids", "1, 2"])
    query = fake_client.get_active_tasks.call_args[0][0]
    assert query.filter == "today"
    assert query.ids == ["1", "2"]


def test_unknown_label(patched_client, capsys):
    assert cli.main(["--label", "nope"]) == cli.EXIT_RESOLUTION
    assert "Label 'nope' not found" in capsys.readouterr().err


def test_fetch_failure(patched_client, fake_client, capsys):
    fake_client.get_all_projects.side_effect = TodoistAPIError("Todoist returned HTTP 401", status_code=401)
    assert cli.main([]) == cli.EXIT_FETCH
    assert "HTTP 401" in capsys.readouterr().err


def test_cycle(patched_client, fake_client, capsys):
    fake_client.get_all_projects.return_value = [
        Project(id="1", name="A", parent_id="2"),
        Project(id="2", name="B", parent_id="1"),
    ]
    assert cli.main(["projects", "--tree"]) == cli.EXIT_CYCLE


def test_invalid_priorities_is_a_usage_error(patched_client):
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--priorities", "1,7"])
    assert exc_info.value.code == cli.EXIT_USAGE


def test_missing_token(monkeypatch, capsys):
    monkeypatch.delenv("TODOIST_API_TOKEN")
    assert cli.main([]) == cli.EXIT_CONFIG
    assert "Cannot get credentials" in capsys.readouterr().err


def test_token_file(monkeypatch, tmp_path, patched_client):
    monkeypatch.delenv("TODOIST_API_TOKEN")
    token_file = tmp_path / "token.json"
    token_file.write_text(json.dumps({"access_token": "file_token_value", "token_type": "Bearer"}))
    assert cli.main(["--token", str(token_file), "labels"]) == cli.EXIT_OK
    patched_client.assert_called_once_with(api_token="file_token_value", timeout=10.0)


def test_token_file_option_beats_environment(monkeypatch, tmp_path, patched_client):
    monkeypatch.setenv("TODOIST_API_TOKEN", "env_token_value")
    token_file = tmp_path / "token.json"
    token_file.write_text(json.dumps({"access_token": "file_token_value"}))
    assert cli.main(["--token", str(token_file), "labels"]) == cli.EXIT_OK
    assert patched_client.call_args.kwargs["api_token"] == "file_token_value"


def test_malformed_timeout_is_a_config_error(monkeypatch, patched_client, capsys):
    monkeypatch.setenv("TODOIST_TIMEOUT_SEC", "soon")
    assert cli.main(["labels"]) == cli.EXIT_CONFIG
    assert "TODOIST_TIMEOUT_SEC" in capsys.readouterr().err
    patched_client.assert_not_called()


def test_projects_json(patched_client, capsys):
    assert cli.main(["projects"]) == cli.EXIT_OK
    projects = json.loads(capsys.readouterr().out)
    assert [project["name"] for project in projects] == ["Work", "Home"]


def test_projects_tree(patched_client, fake_client, capsys):
    fake_client.get_all_projects.return_value = [
        Project(id="1", name="Work"),
        Project(id="2", name="Reports", parent_id="1"),
    ]
    assert cli.main(["projects", "--tree"]) == cli.EXIT_OK
    assert capsys.readouterr().out.splitlines() == ["Work", "  Reports"]


def test_shared_labels(patched_client, capsys):
    assert cli.main(["labels", "--shared"]) == cli.EXIT_OK
    assert capsys.readouterr().out.splitlines() == ["Shared Label 1", "Shared Label 2"]


def test_comments(patched_client, fake_client, capsys):
    assert cli.main(["comments", "2995104339"]) == cli.EXIT_OK
    fake_client.get_task_comments.assert_called_once_with("2995104339")
    assert json.loads(capsys.readouterr().out) == []
