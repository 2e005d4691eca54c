"""Service layer for TaskDeck CLI.

Services sit between commands and repositories: they validate input at the
boundary, resolve references, and hand in-memory snapshots to the pure
derivations in :mod:`taskdeck_cli.core`.
"""

from .auth_service import AuthService
from .category_service import CategoryService
from .export_service import ExportService
from .task_service import TaskService
from .template_service import TemplateService

__all__ = [
    "AuthService",
    "CategoryService",
    "ExportService",
    "TaskService",
    "TemplateService",
]
