#!/usr/bin/env python3
"""``taskdash`` command line interface."""

from __future__ import annotations

import asyncio
import sys
from enum import Enum
from typing import Any, Optional

import typer
from loguru import logger
from pydantic import ValidationError
from rich import print as rprint
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm
from rich.table import Table

from .dashboard import Dashboard
from .models.outcome import Failure
from .models.page import Page, ProjectFilters, TaskFilters, UserFilters
from .models.project import ProjectCreate, ProjectStatus, ProjectUpdate, TaskCreate, TaskStatus, TaskUpdate, Team, TeamCreate
from .models.user import UserCreate, UserRole, UserUpdate
from .storage.config import API_URL_ENV, AppSettings
from .storage.session import get_credential_store
from .stores import messages
from .stores.collection import PagedCollectionStore

app = typer.Typer(help="Work with the task dashboard API from the terminal.")
console = Console()

settings: dict[str, Any] = {}


class Resource(str, Enum):
    projects = "projects"
    tasks = "tasks"
    users = "users"


def configure_logging(debug: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if debug else "WARNING")


def get_dashboard() -> Dashboard:
    return Dashboard.from_settings(settings)


def _exit_with(dash: Dashboard, fallback: str | None = None) -> None:
    """Print the banner (or *fallback*) and exit non-zero."""
    if dash.session_expired:
        rprint("[bold red]Session expired. Run 'taskdash login' again.[/bold red]")
    else:
        rprint(f"[bold red]{dash.banner.message or fallback or 'Request failed.'}[/bold red]")
    raise typer.Exit(code=1)


def _print_page(page: Page[Any], title: str, columns: list[str]) -> None:
    if not page.items:
        rprint(f"[bold red]No {title.lower()} found.[/bold red]")
    else:
        table = Table(title=title)
        for column in columns:
            table.add_column(column, style="cyan" if column == "id" else None)
        for item in page.items:
            data = item.model_dump(mode="json")
            table.add_row(*("" if data.get(c) is None else str(data.get(c)) for c in columns))
        console.print(table)
    if page.prev_cursor:
        rprint(f"[yellow]Previous page:[/] --cursor {page.prev_cursor}")
    if page.next_cursor:
        rprint(f"[yellow]Next page:[/] --cursor {page.next_cursor}")


async def _list(resource: Resource, filters: Any, columns: list[str]) -> None:
    async with get_dashboard() as dash:
        store: PagedCollectionStore[Any, Any] = getattr(dash, resource.value)
        await dash.fetch(store, filters)
        if store.error:
            _exit_with(dash)
        _print_page(store.page, resource.value.capitalize(), columns)


async def _email_taken(dash: Dashboard, email: str) -> bool:
    outcome = await dash.users_api.email_exists(email)
    return not isinstance(outcome, Failure) and isinstance(outcome.data, dict) and bool(outcome.data.get("exists"))


async def _mutate(
    resource: Resource,
    operation: str,
    body: Any,
    table: messages.MessageTable,
    unique_email: str | None = None,
) -> int:
    """Run a store mutation, optionally refusing an e-mail that is already registered."""
    async with get_dashboard() as dash:
        if unique_email and await _email_taken(dash, unique_email):
            rprint(f"[bold red]{messages.CREATE_USER.message_for(409)}[/bold red]")
            raise typer.Exit(code=1)
        store: PagedCollectionStore[Any, Any] = getattr(dash, resource.value)
        status = await getattr(store, operation)(body)
        if store.error:
            dash.banner.show_status(table, status)
            _exit_with(dash)
        return status


@app.callback()
def main(
    api_url: Optional[str] = typer.Option(
        None, "--api-url", "-u", envvar=API_URL_ENV, help="Base URL of the API"
    ),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug logging"),
):
    configure_logging(debug)
    settings.clear()
    settings.update(AppSettings.load())
    if api_url:
        settings["api_url"] = api_url


# ----------------------------------------------------------------------
# Session
# ----------------------------------------------------------------------


@app.command()
def login(
    email: str = typer.Option(..., prompt=True, help="Account e-mail"),
    password: str = typer.Option(..., prompt=True, hide_input=True, help="Account password"),
):
    """Log in and store the session locally."""

    async def _run() -> None:
        async with get_dashboard() as dash:
            status = await dash.log_in(email, password)
            if status >= 300:
                _exit_with(dash)
            user = dash.auth.user
            name = user.username if user else email
            rprint(f"[bold green]Logged in as {name}.[/bold green]")

    asyncio.run(_run())


@app.command(name="register-admin")
def register_admin(
    username: str = typer.Option(..., prompt=True),
    email: str = typer.Option(..., prompt=True),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True),
):
    """Create an admin account and log in with it."""

    async def _run() -> None:
        async with get_dashboard() as dash:
            if await _email_taken(dash, email):
                rprint("[bold red]An account with that email already exists.[/bold red]")
                raise typer.Exit(code=1)
            status = await dash.register_admin(username, email, password)
            if status >= 300:
                _exit_with(dash)
            rprint(f"[bold green]Admin {username} registered and logged in.[/bold green]")

    asyncio.run(_run())


@app.command()
def logout():
    """Revoke the session and forget the local credentials."""

    async def _run() -> None:
        async with get_dashboard() as dash:
            await dash.log_out()

    asyncio.run(_run())
    typer.echo("Logged out.")


@app.command()
def whoami():
    """Show the stored session."""
    credentials = get_credential_store()
    if not credentials.is_logged_in or credentials.user is None:
        rprint("[bold red]Not logged in.[/bold red]")
        raise typer.Exit(code=1)
    user = credentials.user
    rprint(
        Panel.fit(
            f"[bold magenta]{user.username}[/bold magenta]\n"
            f"[cyan]Email:[/] {user.email}\n"
            f"[green]Role:[/] {user.role.value}\n"
            f"[blue]Team:[/] {credentials.team_id or '-'}",
            title="[bold green]Session[/bold green]",
            subtitle=f"[bold cyan]{user.id}[/bold cyan]",
        )
    )


@app.command()
def team(
    create: Optional[str] = typer.Option(None, "--create", help="Create a team with this name"),
):
    """Show the team owned by the logged in admin, or create it."""

    async def _run() -> None:
        async with get_dashboard() as dash:
            if create:
                outcome = await dash.teams.create(TeamCreate(name=create))
                table = messages.CREATE_TEAM
            else:
                outcome = await dash.teams.get_by_owner()
                table = messages.FETCH
            if isinstance(outcome, Failure):
                dash.banner.show_status(table, outcome.status_code)
                _exit_with(dash)
            data = outcome.data if isinstance(outcome.data, dict) else {}
            if not create:
                # GET /teams/owner answers {"exists": bool, "team": Team | null}
                if not data.get("exists") or not data.get("team"):
                    rprint("[yellow]No team yet. Create one with 'taskdash team --create NAME'.[/yellow]")
                    return
                data = data["team"]
            try:
                owned = Team.model_validate(data)
            except ValidationError as exc:
                logger.error(f"Unexpected team payload: {exc}")
                raise typer.Exit(code=1)
            dash.credentials.set_active_team(owned.id)
            rprint(Panel.fit(f"[bold magenta]{owned.name}[/bold magenta]", subtitle=f"[bold cyan]{owned.id}[/bold cyan]"))

    asyncio.run(_run())


# ----------------------------------------------------------------------
# Lists
# ----------------------------------------------------------------------


@app.command()
def projects(
    name: Optional[str] = typer.Option(None, help="Filter by name substring"),
    team_id: Optional[str] = typer.Option(None, help="Filter by team"),
    manager_id: Optional[str] = typer.Option(None, help="Filter by manager"),
    with_stats: bool = typer.Option(False, help="Include task counters"),
    cursor: str = typer.Option("", help="Page cursor from a previous listing"),
    limit: Optional[int] = typer.Option(None, help="Items per page"),
):
    """List projects."""
    filters = ProjectFilters(
        name=name,
        teamId=team_id,
        managerId=manager_id,
        withStats=with_stats or None,
        cursor=cursor,
        limit=limit or settings["page_limit"],
    )
    columns = ["id", "name", "status", "managerId"]
    if with_stats:
        columns += ["toDoTasks", "inProgressTasks", "doneTasks"]
    asyncio.run(_list(Resource.projects, filters, columns))


@app.command()
def tasks(
    project_id: Optional[str] = typer.Option(None, help="Filter by project"),
    title: Optional[str] = typer.Option(None, help="Filter by title substring"),
    cursor: str = typer.Option("", help="Page cursor from a previous listing"),
    limit: Optional[int] = typer.Option(None, help="Items per page"),
):
    """List tasks."""
    filters = TaskFilters(
        projectId=project_id, title=title, cursor=cursor, limit=limit or settings["page_limit"]
    )
    asyncio.run(_list(Resource.tasks, filters, ["id", "title", "status", "projectName", "userName"]))


@app.command()
def users(
    email: Optional[str] = typer.Option(None, help="Filter by e-mail"),
    team_id: Optional[str] = typer.Option(None, help="Filter by team (defaults to the active team)"),
    role: Optional[UserRole] = typer.Option(None, help="Filter by role"),
    cursor: str = typer.Option("", help="Page cursor from a previous listing"),
    limit: Optional[int] = typer.Option(None, help="Items per page"),
):
    """List users."""
    filters = UserFilters(
        email=email,
        teamId=team_id or get_credential_store().team_id,
        role=role,
        cursor=cursor,
        limit=limit or settings["page_limit"],
    )
    asyncio.run(_list(Resource.users, filters, ["id", "username", "email", "role"]))


# ----------------------------------------------------------------------
# Mutations
# ----------------------------------------------------------------------


@app.command(name="create-project")
def create_project(name: str = typer.Argument(..., help="Project name")):
    """Create a project in the active team."""
    asyncio.run(_mutate(Resource.projects, "create", ProjectCreate(name=name), messages.CREATE_PROJECT))
    typer.echo("Project created.")


@app.command(name="update-project")
def update_project(
    project_id: str,
    name: str = typer.Option(..., help="New name"),
    status: ProjectStatus = typer.Option(..., help="New status"),
):
    """Rename a project or change its status."""
    body = ProjectUpdate(id=project_id, name=name, status=status)
    asyncio.run(_mutate(Resource.projects, "update", body, messages.UPDATE_PROJECT))
    typer.echo("Project updated.")


@app.command(name="create-task")
def create_task(
    title: str = typer.Argument(..., help="Task title"),
    project_id: str = typer.Option(..., help="Project the task belongs to"),
    description: Optional[str] = typer.Option(None, help="Task description"),
):
    """Create a task."""
    body = TaskCreate(title=title, projectId=project_id, description=description)
    asyncio.run(_mutate(Resource.tasks, "create", body, messages.CREATE_TASK))
    typer.echo("Task created.")


@app.command(name="update-task")
def update_task(
    task_id: str,
    title: str = typer.Option(..., help="Task title"),
    status: TaskStatus = typer.Option(..., help="Task status"),
    user_id: Optional[str] = typer.Option(None, help="Assignee"),
    description: Optional[str] = typer.Option(None, help="Task description"),
):
    """Update a task."""
    body = TaskUpdate(id=task_id, title=title, status=status, userId=user_id, description=description)
    asyncio.run(_mutate(Resource.tasks, "update", body, messages.UPDATE_TASK))
    typer.echo("Task updated.")


@app.command(name="create-user")
def create_user(
    username: str = typer.Argument(..., help="Username"),
    email: str = typer.Option(..., help="Account e-mail"),
    password: str = typer.Option(..., prompt=True, hide_input=True, confirmation_prompt=True),
    role: UserRole = typer.Option(UserRole.MEMBER, help="Role in the team"),
    team_id: Optional[str] = typer.Option(None, help="Team (defaults to the active team)"),
):
    """Add a user to a team."""
    body = UserCreate(
        username=username,
        email=email,
        password=password,
        role=role,
        teamId=team_id or get_credential_store().team_id,
    )
    asyncio.run(_mutate(Resource.users, "create", body, messages.CREATE_USER, unique_email=email))
    typer.echo("User created.")


@app.command(name="update-user")
def update_user(
    user_id: str,
    username: str = typer.Option(..., help="New username"),
    email: str = typer.Option(..., help="New e-mail"),
):
    """Change a user's name or e-mail."""
    body = UserUpdate(id=user_id, username=username, email=email)
    asyncio.run(_mutate(Resource.users, "update", body, messages.UPDATE_USER))
    typer.echo("User updated.")


_DELETE_MESSAGES = {
    Resource.projects: messages.DELETE_PROJECT,
    Resource.tasks: messages.DELETE_TASK,
    Resource.users: messages.DELETE_USER,
}


@app.command()
def delete(
    resource: Resource,
    item_id: str,
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
):
    """Delete a project, task or user by ID."""
    if not yes and not Confirm.ask(
        f"Are you sure you want to delete {resource.value[:-1]} '{item_id}'?", default=False
    ):
        typer.echo("Deletion cancelled.")
        return
    asyncio.run(_mutate(resource, "delete", item_id, _DELETE_MESSAGES[resource]))
    typer.echo("Deleted.")


if __name__ == "__main__":
    app()
