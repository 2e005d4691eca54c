"""CLI tests for categories, stats, export, notifications and templates."""

from __future__ import annotations

import asyncio
import json
from datetime import datetime, timedelta
from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from taskdeck_cli.main import app
from taskdeck_cli.models import CategoryCreate, TaskCreate, TaskUpdate
from taskdeck_cli.utils import exit_codes

runner = CliRunner()

_COMMAND_MODULES = ("categories", "stats", "export_command", "notifications", "templates")


@pytest.fixture(autouse=True)
def wired_storage(storage):
    mock = AsyncMock(return_value=storage)
    patchers = [
        patch(f"taskdeck_cli.commands.{name}.get_storage_context", mock)
        for name in _COMMAND_MODULES
    ]
    for patcher in patchers:
        patcher.start()
    yield storage
    for patcher in patchers:
        patcher.stop()


@pytest.fixture()
def seeded(wired_storage):
    """Three tasks: one overdue in Work, one completed, one due tomorrow."""
    work = asyncio.run(wired_storage.category_repository.create(CategoryCreate(name="Work")))
    repo = wired_storage.task_repository
    overdue = asyncio.run(
        repo.add(
            TaskCreate(
                title="File taxes",
                priority="high",
                due_date=datetime.now() - timedelta(days=3),
                category_id=work.id,
            )
        )
    )
    done = asyncio.run(repo.add(TaskCreate(title="Buy bread", priority="low")))
    asyncio.run(repo.update(done.id, TaskUpdate(completed=True)))
    soon = asyncio.run(
        repo.add(TaskCreate(title="Book dentist", due_date=datetime.now() + timedelta(hours=30)))
    )
    return {"work": work, "overdue": overdue, "done": done, "soon": soon}


# ---------------------------------------------------------------------------
# categories
# ---------------------------------------------------------------------------


def test_category_lifecycle(wired_storage):
    result = runner.invoke(app, ["categories", "create", "Errands", "--color", "#22c55e"])
    assert result.exit_code == 0, result.output

    data = json.loads(runner.invoke(app, ["categories", "list", "--json"]).output)
    assert [(c["name"], c["color"]) for c in data["categories"]] == [("Errands", "#22c55e")]

    result = runner.invoke(app, ["categories", "update", "errands", "--name", "Chores"])
    assert result.exit_code == 0, result.output

    result = runner.invoke(app, ["categories", "delete", "Chores", "--yes"])
    assert result.exit_code == 0, result.output
    assert asyncio.run(wired_storage.category_repository.list_all()) == []


def test_duplicate_category():
    runner.invoke(app, ["categories", "create", "Work"])
    result = runner.invoke(app, ["categories", "create", "Work"])
    assert result.exit_code == exit_codes.ERROR_INVALID_ARGS
    assert "already exists" in result.output


def test_delete_category_keeps_tasks(seeded, wired_storage):
    result = runner.invoke(app, ["categories", "delete", "Work", "--yes"])
    assert result.exit_code == 0, result.output

    task = asyncio.run(wired_storage.task_repository.get(seeded["overdue"].id))
    assert task.category_id is None


# ---------------------------------------------------------------------------
# stats
# ---------------------------------------------------------------------------


def test_stats_json(seeded):
    result = runner.invoke(app, ["stats", "--json"])
    assert result.exit_code == 0, result.output

    data = json.loads(result.output)
    assert (data["total"], data["completed"], data["pending"], data["percent"]) == (3, 1, 2, 33)
    assert data["overdue_count"] == 1
    assert data["recent_count"] == 3
    assert data["by_priority"]["low"] == {"total": 1, "completed": 1, "percent": 100}
    assert [c["name"] for c in data["by_category"]] == ["Work"]
    assert data["uncategorized"]["total"] == 2


def test_stats_pretty(seeded):
    result = runner.invoke(app, ["stats"])
    assert result.exit_code == 0, result.output
    assert "Task Statistics" in result.output
    assert "33%" in result.output


# ---------------------------------------------------------------------------
# export
# ---------------------------------------------------------------------------


def test_export_csv(seeded, tmp_path):
    target = tmp_path / "tasks.csv"
    result = runner.invoke(app, ["export", "--format", "csv", "--output-file", str(target)])
    assert result.exit_code == 0, result.output
    assert "Exported 3 task(s)" in result.output

    lines = target.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "Title,Description,Status,Priority,Category,Due Date,Created Date"
    assert len(lines) == 4


def test_export_filtered_json(seeded, tmp_path):
    target = tmp_path / "work.json"
    result = runner.invoke(
        app, ["export", "-f", "json", "-c", "Work", "--status", "pending", "-O", str(target)]
    )
    assert result.exit_code == 0, result.output
    data = json.loads(target.read_text(encoding="utf-8"))
    assert [t["title"] for t in data["tasks"]] == ["File taxes"]


def test_export_nothing_matches(tmp_path):
    result = runner.invoke(app, ["export", "-O", str(tmp_path / "x.csv")])
    assert result.exit_code == exit_codes.ERROR_GENERAL
    assert "No tasks match the selected filters." in result.output
    assert not (tmp_path / "x.csv").exists()


# ---------------------------------------------------------------------------
# notifications
# ---------------------------------------------------------------------------


def test_notifications_check(seeded):
    result = runner.invoke(app, ["notifications", "check", "--json"])
    assert result.exit_code == 0, result.output

    events = json.loads(result.output)
    assert [(e["task_title"], e["type"]) for e in events] == [("File taxes", "overdue")]


def test_notifications_pretty(seeded):
    result = runner.invoke(app, ["notifications", "check"])
    assert result.exit_code == 0, result.output
    assert 'Task "File taxes" is overdue!' in result.output


def test_notification_settings_change_results(seeded, tmp_config):
    result = runner.invoke(
        app, ["notifications", "settings", "--no-overdue-reminders", "--reminder-hours", "48"]
    )
    assert result.exit_code == 0, result.output
    assert tmp_config.notification_preferences.overdue_reminders is False
    assert tmp_config.notification_preferences.reminder_hours == 48

    events = json.loads(runner.invoke(app, ["notifications", "check", "--json"]).output)
    assert [(e["task_title"], e["type"]) for e in events] == [("Book dentist", "due_soon")]


def test_notifications_disabled(seeded, tmp_config):
    runner.invoke(app, ["notifications", "settings", "--disable"])
    result = runner.invoke(app, ["notifications", "check"])
    assert result.exit_code == 0
    assert "turned off" in result.output


# ---------------------------------------------------------------------------
# templates
# ---------------------------------------------------------------------------


def test_templates_list():
    result = runner.invoke(app, ["templates", "list", "--json"])
    assert result.exit_code == 0, result.output
    assert len(json.loads(result.output)) == 6


def test_templates_apply(seeded, wired_storage):
    result = runner.invoke(app, ["templates", "apply", "1"])
    assert result.exit_code == 0, result.output

    created = [
        t for t in asyncio.run(wired_storage.task_repository.list_all())
        if t.title == "Daily Standup Meeting"
    ]
    assert len(created) == 1
    assert created[0].category_id == seeded["work"].id


def test_templates_apply_out_of_range():
    result = runner.invoke(app, ["templates", "apply", "9"])
    assert result.exit_code == exit_codes.ERROR_NOT_FOUND
