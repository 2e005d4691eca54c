"""Migration 001: users, categories and tasks."""

from taskdeck_cli.adapters.sqlite import schema

from .runner import Migration

initial_migration = Migration(
    version=1,
    description="Create users, categories and tasks",
    statements=(
        schema.CREATE_USERS_TABLE,
        schema.CREATE_CATEGORIES_TABLE,
        schema.CREATE_TASKS_TABLE,
        *schema.ALL_INDEXES,
    ),
)
