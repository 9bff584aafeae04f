"""Project endpoints."""

from __future__ import annotations

from ..models.project import Project
from . import routes
from .resources import ResourceService


class ProjectService(ResourceService[Project]):
    path = routes.PROJECTS
    item_model = Project
