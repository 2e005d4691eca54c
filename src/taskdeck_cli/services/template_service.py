"""Template service - Quick task templates."""

from __future__ import annotations

from taskdeck_cli.exceptions import NotFoundError
from taskdeck_cli.models import Category, Task, TaskTemplate
from taskdeck_cli.services.task_service import TaskService

DEFAULT_TEMPLATES: tuple[TaskTemplate, ...] = (
    TaskTemplate(
        title="Daily Standup Meeting",
        description="Attend the daily team standup meeting",
        priority="medium",
        category="Work",
    ),
    TaskTemplate(
        title="Review Pull Requests",
        description="Review and provide feedback on pending pull requests",
        priority="high",
        category="Work",
    ),
    TaskTemplate(
        title="Grocery Shopping",
        description="Buy groceries for the week",
        priority="medium",
        category="Personal",
    ),
    TaskTemplate(
        title="Exercise",
        description="30 minutes of physical activity",
        priority="medium",
        category="Health",
    ),
    TaskTemplate(
        title="Read Documentation",
        description="Read and study technical documentation",
        priority="low",
        category="Work",
    ),
    TaskTemplate(
        title="Plan Weekend Activities",
        description="Plan activities and outings for the weekend",
        priority="low",
        category="Personal",
    ),
)


def match_category(template: TaskTemplate, categories: list[Category]) -> Category | None:
    """Find the owner's category whose name equals the template's, if any."""
    if template.category is None:
        return None
    return next((c for c in categories if c.name == template.category), None)


class TemplateService:
    """Create tasks from the built-in templates."""

    def __init__(self, task_service: TaskService, templates: tuple[TaskTemplate, ...] = DEFAULT_TEMPLATES):
        self.task_service = task_service
        self.templates = templates

    def list_templates(self) -> list[TaskTemplate]:
        return list(self.templates)

    def get_template(self, index: int) -> TaskTemplate:
        """Return the template at 1-based ``index``."""
        if not 1 <= index <= len(self.templates):
            raise NotFoundError(
                f"Template not found: {index} (choose 1-{len(self.templates)})"
            )
        return self.templates[index - 1]

    async def apply(self, index: int) -> Task:
        """Create a task from a template.

        The task is filed under the owner's category with the template's
        category name; when there is none it stays uncategorized.
        """
        template = self.get_template(index)
        categories = []
        if self.task_service.category_repository is not None:
            categories = await self.task_service.category_repository.list_all()
        category = match_category(template, categories)
        return await self.task_service.add_task(
            template.title,
            description=template.description,
            priority=template.priority,
            category=category.id if category else None,
        )
