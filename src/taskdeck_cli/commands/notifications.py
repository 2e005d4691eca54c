"""Notification commands - due-date reminders and their settings."""

import asyncio
import time
from typing import Annotated

import typer
from rich.text import Text

from taskdeck_cli.config import get_config_manager
from taskdeck_cli.core import NotificationTracker
from taskdeck_cli.models import NotificationEvent, NotificationPreferences
from taskdeck_cli.services.storage import get_storage_context
from taskdeck_cli.services.task_service import TaskService
from taskdeck_cli.utils.typer_helpers import SuggestingGroup
from taskdeck_cli.utils.ui.console import get_console
from taskdeck_cli.utils.ui.formatters import format_due_date, format_output, format_success

from .decorators import command_wrapper
from .utils import resolve_output

app = typer.Typer(cls=SuggestingGroup, help="Due-date notifications")
console = get_console()

NOTIFICATION_STYLES = {
    "overdue": ("⚠️ ", "overdue"),
    "due_today": ("📅", "bold yellow"),
    "due_soon": ("⏰", "due"),
}


def render_events(events: list[NotificationEvent]) -> None:
    for event in events:
        icon, style = NOTIFICATION_STYLES.get(event.type, ("•", ""))
        line = Text(f"{icon} ")
        line.append(event.message, style=style)
        line.append(f"  ({format_due_date(event.due_date)})", style="dim")
        line.append(f"  [{event.task_id[:8]}]", style="dim")
        console.print(line)


async def _load_events(profile: str, preferences: NotificationPreferences) -> list[NotificationEvent]:
    storage = await get_storage_context(profile)
    service = TaskService(storage.task_repository, storage.category_repository)
    return await service.get_notifications(preferences)


@app.command("check")
@command_wrapper
def check_notifications(
    repeat: Annotated[
        int,
        typer.Option("--repeat", min=0, help="Check again every N seconds, showing only new notices (0 = once)"),
    ] = 0,
    output: Annotated[str | None, typer.Option("--output", "-o", help="Output format")] = None,
    json_opt: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    profile: Annotated[str, typer.Option("--profile", help="Profile name")] = "default",
) -> None:
    """Show overdue, due-today and due-soon tasks."""
    output = resolve_output(output, json_opt, profile)
    preferences = get_config_manager(profile).notification_preferences

    events = asyncio.run(_load_events(profile, preferences))
    if output != "pretty":
        format_output([e.model_dump(mode="json") for e in events], output)
        return
    if not preferences.browser_notifications:
        console.print("[dim]Notifications are turned off (notifications.browser_notifications).[/dim]")
        return

    if not events:
        console.print("[green]✓ Nothing due. You're all caught up.[/green]")
    render_events(events)
    if repeat == 0:
        return

    tracker = NotificationTracker()
    tracker.filter_new(events)
    console.print(f"[dim]Watching for new notifications every {repeat}s (Ctrl+C to stop)[/dim]")
    try:
        while True:
            time.sleep(repeat)
            events = asyncio.run(_load_events(profile, preferences))
            render_events(tracker.filter_new(events))
    except KeyboardInterrupt:
        console.print("\n[dim]Stopped.[/dim]")


@app.command("settings")
@command_wrapper(auth_required=False)
def notification_settings(
    due_date_reminders: Annotated[
        bool | None,
        typer.Option("--due-date-reminders/--no-due-date-reminders", help="Due today / due soon notices"),
    ] = None,
    overdue_reminders: Annotated[
        bool | None,
        typer.Option("--overdue-reminders/--no-overdue-reminders", help="Overdue notices"),
    ] = None,
    reminder_hours: Annotated[
        int | None, typer.Option("--reminder-hours", min=0, help="Hours before due to remind")
    ] = None,
    enabled: Annotated[
        bool | None, typer.Option("--enable/--disable", help="Show notifications at all")
    ] = None,
    email: Annotated[
        bool | None, typer.Option("--email/--no-email", help="Email notifications flag")
    ] = None,
    profile: Annotated[str, typer.Option("--profile", help="Profile name")] = "default",
) -> None:
    """View or change notification preferences."""
    config_manager = get_config_manager(profile)
    updates = {
        key: value
        for key, value in (
            ("due_date_reminders", due_date_reminders),
            ("overdue_reminders", overdue_reminders),
            ("reminder_hours", reminder_hours),
            ("browser_notifications", enabled),
            ("email_notifications", email),
        )
        if value is not None
    }
    preferences = config_manager.notification_preferences
    if updates:
        preferences = preferences.model_copy(update=updates)
        config_manager.save_notification_preferences(preferences)
        format_success("Notification settings saved")
    format_output(preferences.model_dump(), "table")
