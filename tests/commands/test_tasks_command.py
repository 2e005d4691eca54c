"""CLI tests for the tasks command group.

Commands run against a real in-memory store injected through the
storage context, so the whole command -> service -> repository path is
exercised. Commands drive their own event loop, so these tests are sync
and seed data with asyncio.run.
"""

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


@pytest.fixture(autouse=True)
def wired_storage(storage):
    with patch(
        "taskdeck_cli.commands.tasks.get_storage_context", AsyncMock(return_value=storage)
    ):
        yield storage


@pytest.fixture()
def repo(wired_storage):
    return wired_storage.task_repository


def _run(*args: str, **kwargs):
    return runner.invoke(app, ["tasks", *args], **kwargs)


def _json(result) -> dict:
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


def _titles(*args: str) -> list[str]:
    return [t["title"] for t in _json(_run("list", "--json", *args))["tasks"]]


def test_add_then_list_as_json():
    result = _run("add", "Buy milk", "--priority", "high", "--due", "2030-01-01")
    assert result.exit_code == 0, result.output
    assert "Created task" in result.output

    data = _json(_run("list", "--json"))
    assert [t["title"] for t in data["tasks"]] == ["Buy milk"]
    assert data["tasks"][0]["priority"] == "high"
    assert data["tasks"][0]["due_date"].startswith("2030-01-01")


def test_add_rejects_blank_title():
    result = _run("add", "  ")
    assert result.exit_code == exit_codes.ERROR_INVALID_ARGS
    assert "must not be empty" in result.output


def test_add_with_unknown_category():
    result = _run("add", "Buy milk", "--category", "Groceries")
    assert result.exit_code == exit_codes.ERROR_NOT_FOUND


def test_list_filters_and_sorts(wired_storage, repo):
    work = asyncio.run(wired_storage.category_repository.create(CategoryCreate(name="Work")))
    asyncio.run(repo.add(TaskCreate(title="b-task", priority="low", category_id=work.id)))
    asyncio.run(repo.add(TaskCreate(title="a-task", priority="high")))
    late = asyncio.run(
        repo.add(TaskCreate(title="c-task", due_date=datetime.now() - timedelta(days=2)))
    )

    assert _titles("--sort", "title", "--order", "asc") == ["a-task", "b-task", "c-task"]
    assert _titles("--category", "Work") == ["b-task"]
    assert _titles("--category", "none", "--sort", "title", "--order", "asc") == [
        "a-task",
        "c-task",
    ]
    assert _titles("--priority", "high") == ["a-task"]
    assert _titles("--due", "overdue") == ["c-task"]
    assert _titles("--search", "A-TASK") == ["a-task"]

    asyncio.run(repo.update(late.id, TaskUpdate(completed=True)))
    assert _titles("--status", "completed") == ["c-task"]
    assert _titles("--due", "overdue") == []


def test_list_uses_configured_sort(tmp_config, repo):
    asyncio.run(repo.add(TaskCreate(title="zebra")))
    asyncio.run(repo.add(TaskCreate(title="aardvark")))
    tmp_config.set("ui.sort_by", "title")
    tmp_config.set("ui.sort_order", "asc")

    assert _titles() == ["aardvark", "zebra"]


def test_list_pretty_shows_empty_message():
    result = _run("list")
    assert result.exit_code == 0
    assert "No tasks match" in result.output


def test_list_pretty_shows_tasks(repo):
    asyncio.run(repo.add(TaskCreate(title="Renew passport", priority="high")))
    result = _run("list")
    assert result.exit_code == 0, result.output
    assert "Renew passport" in result.output
    assert "1 pending" in result.output


def test_unknown_output_format():
    result = _run("list", "--output", "xml")
    assert result.exit_code == exit_codes.ERROR_INVALID_ARGS


def test_get_edit_complete_reopen_delete(repo):
    task = asyncio.run(repo.add(TaskCreate(title="Draft post")))
    prefix = task.id[:8]

    assert _json(_run("get", prefix, "--json"))["title"] == "Draft post"

    result = _run("edit", prefix, "--title", "Publish post", "--due", "2030-05-01")
    assert result.exit_code == 0, result.output
    edited = asyncio.run(repo.get(task.id))
    assert edited.title == "Publish post"
    assert edited.due_date == datetime(2030, 5, 1)

    assert _run("edit", prefix, "--clear-due").exit_code == 0
    assert asyncio.run(repo.get(task.id)).due_date is None

    assert _run("complete", prefix).exit_code == 0
    assert asyncio.run(repo.get(task.id)).completed is True

    assert _run("reopen", prefix).exit_code == 0
    assert asyncio.run(repo.get(task.id)).completed is False

    result = _run("delete", prefix, "--yes")
    assert result.exit_code == 0
    assert asyncio.run(repo.list_all()) == []


def test_edit_without_options_is_rejected():
    result = _run("edit", "abcd1234")
    assert result.exit_code == exit_codes.ERROR_INVALID_ARGS
    assert "Nothing to update" in result.output


def test_short_prefix_is_rejected():
    result = _run("get", "ab")
    assert result.exit_code == exit_codes.ERROR_INVALID_ARGS
    assert "at least 4 characters" in result.output


def test_missing_task():
    result = _run("get", "ffffffff")
    assert result.exit_code == exit_codes.ERROR_NOT_FOUND
    assert "Task not found" in result.output


def test_delete_can_be_cancelled(repo):
    task = asyncio.run(repo.add(TaskCreate(title="Keep me")))
    result = _run("delete", task.id[:8], input="n\n")
    assert result.exit_code == 0
    assert len(asyncio.run(repo.list_all())) == 1


def test_bulk_actions(repo):
    first = asyncio.run(repo.add(TaskCreate(title="One")))
    second = asyncio.run(repo.add(TaskCreate(title="Two")))

    result = _run("bulk", "complete", first.id[:8], second.id[:8])
    assert result.exit_code == 0, result.output
    assert "Completed 2 task(s)" in result.output
    assert all(t.completed for t in asyncio.run(repo.list_all()))

    assert _run("bulk", "reopen", first.id[:8]).exit_code == 0
    assert not asyncio.run(repo.get(first.id)).completed

    result = _run("bulk", "delete", first.id[:8], second.id[:8], "--yes")
    assert "Deleted 2 task(s)" in result.output
    assert asyncio.run(repo.list_all()) == []


def test_store_failure_is_reported(db_connection):
    db_connection.execute("DROP TABLE tasks")
    result = _run("list")
    assert result.exit_code == exit_codes.ERROR_GENERAL
    assert "Failed to load tasks" in result.output
