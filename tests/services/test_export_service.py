"""Tests for the CSV / JSON / TXT exporters."""

from __future__ import annotations

import csv
import io
import json
from datetime import UTC, datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from taskdeck_cli.exceptions import ExportError, ValidationError
from taskdeck_cli.models import Category, Task
from taskdeck_cli.services.export_service import (
    CSV_HEADERS,
    ExportService,
    default_filename,
    render_csv,
    render_json,
    render_txt,
    select_tasks,
)

NOW = datetime(2024, 6, 15, 12, 0, 0)
WORK = Category(id="cat-work-0001", name="Work")

SHIPPED = Task(
    id="t1",
    title='Ship "v2", finally',
    description="Tag, build\nand publish",
    completed=True,
    priority="high",
    due_date=datetime(2024, 6, 10),
    category_id=WORK.id,
    category=WORK,
    created_at=datetime(2024, 6, 1, 8, 0),
)
PLANTS = Task(
    id="t2",
    title="Water plants",
    created_at=datetime(2024, 6, 2, 8, 0),
)


def test_select_tasks_by_status_and_category():
    tasks = [SHIPPED, PLANTS]
    assert select_tasks(tasks, "completed") == [SHIPPED]
    assert select_tasks(tasks, "pending") == [PLANTS]
    assert select_tasks(tasks, "all", [WORK.id]) == [SHIPPED]
    assert select_tasks(tasks, "pending", [WORK.id]) == []


def test_default_filename():
    assert default_filename("csv", NOW) == "tasks-2024-06-15.csv"


def test_csv_layout():
    lines = render_csv([PLANTS]).split("\n")
    assert lines[0] == ",".join(CSV_HEADERS)
    assert lines[1] == '"Water plants","","Pending","Medium","Uncategorized","","2024-06-02"'


def test_csv_round_trips_title_and_status():
    rows = list(csv.DictReader(io.StringIO(render_csv([SHIPPED, PLANTS]))))

    assert [(r["Title"], r["Status"] == "Completed") for r in rows] == [
        (SHIPPED.title, True),
        (PLANTS.title, False),
    ]
    assert rows[0]["Description"] == SHIPPED.description
    assert rows[0]["Priority"] == "High"
    assert rows[0]["Category"] == "Work"
    assert rows[0]["Due Date"] == "2024-06-10"


def test_dates_are_written_in_local_time():
    late = Task(id="t3", title="Night shift", created_at=datetime(2024, 6, 1, 23, 30, tzinfo=UTC))
    now = datetime(2024, 6, 15, 12, tzinfo=timezone(timedelta(hours=2)))

    row = next(csv.DictReader(io.StringIO(render_csv([late], now))))
    assert row["Created Date"] == "2024-06-02"
    assert "   Created: 2024-06-02" in render_txt([late], now).splitlines()


def test_json_layout():
    data = json.loads(render_json([SHIPPED, PLANTS], NOW))

    assert data["exportDate"] == NOW.isoformat()
    assert data["totalTasks"] == 2
    assert data["tasks"][0] == {
        "id": "t1",
        "title": SHIPPED.title,
        "description": SHIPPED.description,
        "completed": True,
        "priority": "high",
        "category": "Work",
        "dueDate": "2024-06-10T00:00:00",
        "createdAt": "2024-06-01T08:00:00",
    }
    assert data["tasks"][1]["category"] is None
    assert data["tasks"][1]["dueDate"] is None


def test_txt_layout():
    text = render_txt([SHIPPED, PLANTS], NOW)
    lines = text.split("\n")

    assert lines[:4] == ["TASK EXPORT", "=" * 50, "Export Date: 2024-06-15", "Total Tasks: 2"]
    assert "1. " + SHIPPED.title in lines
    assert "   Status: ✓ Completed" in lines
    assert "   Priority: HIGH" in lines
    assert "   Due Date: 2024-06-10" in lines
    assert "2. Water plants" in lines
    assert "   Status: ○ Pending" in lines
    assert "   Category: Uncategorized" in lines
    # Undated task without description has no optional lines
    block = text.split("2. Water plants\n")[1]
    assert "Description" not in block
    assert "Due Date" not in block


# ---------------------------------------------------------------------------
# ExportService
# ---------------------------------------------------------------------------


@pytest.fixture()
def service():
    task_repo = MagicMock()
    task_repo.list_all = AsyncMock(return_value=[SHIPPED, PLANTS])
    category_repo = MagicMock()
    category_repo.list_all = AsyncMock(return_value=[WORK])
    return ExportService(task_repo, category_repo)


@pytest.mark.asyncio
async def test_export_writes_file(service, tmp_path):
    target = tmp_path / "out.json"
    path, count = await service.export_tasks("json", target, status="completed", now=NOW)

    assert path == target
    assert count == 1
    assert json.loads(target.read_text(encoding="utf-8"))["tasks"][0]["id"] == "t1"


@pytest.mark.asyncio
async def test_export_default_filename(service, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    path, _ = await service.export_tasks("txt", now=NOW)
    assert path.name == "tasks-2024-06-15.txt"
    assert (tmp_path / path).exists()


@pytest.mark.asyncio
async def test_export_filters_by_category_name(service):
    content, count = await service.render("csv", categories=["work"], now=NOW)
    assert count == 1
    assert "Water plants" not in content


@pytest.mark.asyncio
async def test_export_with_no_matches(service):
    with pytest.raises(ExportError, match="No tasks match the selected filters."):
        await service.render("csv", status="pending", categories=["Work"])


@pytest.mark.asyncio
async def test_export_rejects_unknown_format(service):
    with pytest.raises(ValidationError, match="Unknown export format"):
        await service.render("xml")
