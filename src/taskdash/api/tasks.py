"""Task endpoints."""

from __future__ import annotations

from ..models.project import Task
from . import routes
from .resources import ResourceService


class TaskService(ResourceService[Task]):
    path = routes.TASKS
    item_model = Task
