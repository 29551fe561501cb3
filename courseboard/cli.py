"""courseboard CLI — operate a course board from the shell."""

from __future__ import annotations

import logging
import sys

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from courseboard import __version__
from courseboard.config import COURSEBOARD_CALLER, COURSEBOARD_LOG_LEVEL
from courseboard.errors import CourseBoardError
from courseboard.models import (
    Course,
    CoursePayload,
    CourseUpdatePayload,
    FilterCriteria,
    FilterMode,
    MUTABLE_FIELDS,
)

console = Console()


def _board(ctx: click.Context):
    from courseboard.board import CourseBoard

    return CourseBoard(base_dir=ctx.obj["home"])


def _caller(ctx: click.Context) -> str:
    caller = ctx.obj["caller"]
    if not caller:
        raise click.UsageError("No caller identity: pass --as or set COURSEBOARD_CALLER")
    return caller


def _fail(exc: CourseBoardError) -> None:
    console.print(f"[red]{exc.kind}:[/] {escape(exc.msg)}")
    sys.exit(1)


def _courses_table(courses: list[Course], title: str) -> Table:
    table = Table(title=title)
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Creator")
    table.add_column("Category")
    table.add_column("Keyword")
    for course in courses:
        table.add_row(
            str(course.id),
            escape(course.title),
            escape(f"{course.creator_name} ({course.creator_address})"),
            escape(course.category),
            escape(course.keyword),
        )
    return table


def _load_payload_file(path: str) -> dict:
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise click.BadParameter("payload file must hold a mapping", param_hint="--file")
    return {k: str(v) for k, v in data.items() if k in MUTABLE_FIELDS and v is not None}


@click.group()
@click.version_option(version=__version__)
@click.option("--home", envvar="COURSEBOARD_HOME", default=None, help="Data directory")
@click.option("--as", "caller", default=COURSEBOARD_CALLER, help="Caller identity")
@click.option("--verbose", "-v", is_flag=True, help="Log at INFO level")
@click.pass_context
def main(ctx: click.Context, home: str | None, caller: str, verbose: bool):
    """courseboard — a permissioned record store for courses."""
    logging.basicConfig(
        level="INFO" if verbose else COURSEBOARD_LOG_LEVEL,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    ctx.ensure_object(dict)
    ctx.obj["home"] = home
    ctx.obj["caller"] = caller


# ── Courses ──────────────────────────────────────────────────────────


@main.group()
def course():
    """Create, read, update and delete courses."""


_FIELD_OPTIONS = [
    click.option("--title", default=None),
    click.option("--creator-name", default=None),
    click.option("--body", default=None),
    click.option("--attachment-url", default=None),
    click.option("--keyword", default=None),
    click.option("--category", default=None),
    click.option("--contact", default=None),
    click.option(
        "--file",
        "-f",
        "payload_file",
        type=click.Path(exists=True, dir_okay=False),
        default=None,
        help="YAML file with course fields",
    ),
]


def _field_options(func):
    for option in reversed(_FIELD_OPTIONS):
        func = option(func)
    return func


def _collect_fields(payload_file: str | None, **fields: str | None) -> dict:
    data = _load_payload_file(payload_file) if payload_file else {}
    data.update({k: v for k, v in fields.items() if v is not None})
    return data


@course.command(name="add")
@_field_options
@click.pass_context
def add_course(ctx: click.Context, payload_file: str | None, **fields: str | None):
    """Create a course owned by the caller."""
    data = _collect_fields(payload_file, **fields)
    payload = CoursePayload(
        title=data.get("title", ""),
        creator_name=data.get("creator_name", ""),
        body=data.get("body", ""),
        attachment_url=data.get("attachment_url", ""),
        keyword=data.get("keyword", ""),
        category=data.get("category", ""),
        contact=data.get("contact", ""),
    )
    try:
        created = _board(ctx).add_course(_caller(ctx), payload)
    except CourseBoardError as e:
        _fail(e)
        return
    console.print(f"[green]Created course[/] {created.id}: {escape(created.title)}")


@course.command(name="get")
@click.argument("course_id", type=int)
@click.pass_context
def get_course(ctx: click.Context, course_id: int):
    """Show a single course."""
    try:
        found = _board(ctx).get_course(course_id)
    except CourseBoardError as e:
        _fail(e)
        return
    console.print(f"[bold cyan]{escape(found.title)}[/] (#{found.id})")
    console.print(escape(f"  by {found.creator_name} <{found.creator_address}>"))
    console.print(escape(f"  category: {found.category}  keyword: {found.keyword}"))
    console.print(escape(f"  created: {found.created_at}  updated: {found.updated_at or '-'}"))
    if found.attachment_url:
        console.print(escape(f"  attachment: {found.attachment_url}"))
    if found.contact:
        console.print(escape(f"  contact: {found.contact}"))
    console.print()
    console.print(escape(found.body))


@course.command(name="update")
@click.argument("course_id", type=int)
@_field_options
@click.pass_context
def update_course(ctx: click.Context, course_id: int, payload_file: str | None, **fields: str | None):
    """Overwrite the given fields of a course."""
    data = _collect_fields(payload_file, **fields)
    payload = CourseUpdatePayload(**data)
    try:
        updated = _board(ctx).update_course(_caller(ctx), course_id, payload)
    except CourseBoardError as e:
        _fail(e)
        return
    console.print(f"[green]Updated course[/] {updated.id}")


@course.command(name="delete")
@click.argument("course_id", type=int)
@click.pass_context
def delete_course(ctx: click.Context, course_id: int):
    """Delete a course."""
    try:
        deleted = _board(ctx).delete_course(_caller(ctx), course_id)
    except CourseBoardError as e:
        _fail(e)
        return
    console.print(f"[green]Deleted course[/] {deleted.id}: {escape(deleted.title)}")


@course.command(name="list")
@click.pass_context
def list_courses(ctx: click.Context):
    """List every course."""
    courses = _board(ctx).list_courses()
    if not courses:
        console.print("[yellow]No courses.[/]")
        return
    console.print(_courses_table(courses, f"Courses ({len(courses)})"))


@course.command(name="filter")
@click.option("--keyword", default=None)
@click.option("--category", default=None)
@click.option("--creator", "creator_address", default=None, help="Creator address")
@click.option("--mode", type=click.Choice(["and", "or"]), default="and")
@click.pass_context
def filter_courses(
    ctx: click.Context,
    keyword: str | None,
    category: str | None,
    creator_address: str | None,
    mode: str,
):
    """Find courses matching all (and) or any (or) of the given criteria."""
    criteria = FilterCriteria(keyword=keyword, category=category, creator_address=creator_address)
    courses = _board(ctx).filter_courses(criteria, FilterMode(mode))
    if not courses:
        console.print("[yellow]No matching courses.[/]")
        return
    console.print(_courses_table(courses, f"Matches ({len(courses)}, {mode.upper()})"))


@course.command(name="purge-mine")
@click.pass_context
def purge_mine(ctx: click.Context):
    """Delete every course the caller created."""
    count = _board(ctx).delete_my_courses(_caller(ctx))
    console.print(f"Deleted {count} course(s)")


@course.command(name="purge-creator")
@click.argument("address")
@click.pass_context
def purge_creator(ctx: click.Context, address: str):
    """Delete every course created by ADDRESS (admin or moderator only)."""
    try:
        count = _board(ctx).delete_courses_by_creator(_caller(ctx), address)
    except CourseBoardError as e:
        _fail(e)
        return
    console.print(f"Deleted {count} course(s) by {escape(address)}")


# ── Roles ────────────────────────────────────────────────────────────


@main.group()
def admin():
    """Manage the admin identity."""


@admin.command(name="set")
@click.argument("address")
@click.pass_context
def set_admin(ctx: click.Context, address: str):
    """Set the admin (open while unset, then only the admin may change it)."""
    try:
        _board(ctx).set_admin(_caller(ctx), address)
    except CourseBoardError as e:
        _fail(e)
        return
    console.print(f"[green]Admin is now[/] {escape(address)}")


@admin.command(name="show")
@click.pass_context
def show_admin(ctx: click.Context):
    """Print the current admin."""
    current = _board(ctx).identity.admin
    console.print(escape(current) if current else "[yellow]No admin set.[/]")


@main.group()
def moderator():
    """Manage moderators (admin only)."""


@moderator.command(name="add")
@click.argument("address")
@click.pass_context
def add_moderator(ctx: click.Context, address: str):
    try:
        _board(ctx).add_moderator(_caller(ctx), address)
    except CourseBoardError as e:
        _fail(e)
        return
    console.print(f"[green]Moderator added:[/] {escape(address)}")


@moderator.command(name="remove")
@click.argument("address")
@click.pass_context
def remove_moderator(ctx: click.Context, address: str):
    try:
        _board(ctx).remove_moderator(_caller(ctx), address)
    except CourseBoardError as e:
        _fail(e)
        return
    console.print(f"[green]Moderator removed:[/] {escape(address)}")


@moderator.command(name="list")
@click.pass_context
def list_moderators(ctx: click.Context):
    moderators = _board(ctx).identity.list_moderators()
    if not moderators:
        console.print("[yellow]No moderators.[/]")
        return
    for address in moderators:
        console.print(f"  {escape(address)}")


@main.group()
def ban():
    """Ban and unban creators (admin or moderator only)."""


@ban.command(name="add")
@click.argument("address")
@click.pass_context
def ban_creator(ctx: click.Context, address: str):
    """Ban ADDRESS and delete all of its courses."""
    try:
        removed = _board(ctx).ban_creator(_caller(ctx), address)
    except CourseBoardError as e:
        _fail(e)
        return
    console.print(f"[green]Banned[/] {escape(address)}, {len(removed)} course(s) deleted")


@ban.command(name="remove")
@click.argument("address")
@click.pass_context
def unban_creator(ctx: click.Context, address: str):
    try:
        _board(ctx).unban_creator(_caller(ctx), address)
    except CourseBoardError as e:
        _fail(e)
        return
    console.print(f"[green]Unbanned[/] {escape(address)}")


@ban.command(name="list")
@click.pass_context
def list_banned(ctx: click.Context):
    banned = _board(ctx).bans.list_banned()
    if not banned:
        console.print("[yellow]Nobody is banned.[/]")
        return
    for address in banned:
        console.print(f"  {escape(address)}")


# ── Audit ────────────────────────────────────────────────────────────


@main.command()
@click.option("--actor", default=None, help="Only events by this caller")
@click.option("--action", default=None, help="Only this action")
@click.option("--format", "fmt", type=click.Choice(["table", "json", "csv"]), default="table")
@click.option("--limit", default=50, show_default=True)
@click.pass_context
def audit(ctx: click.Context, actor: str | None, action: str | None, fmt: str, limit: int):
    """Show the audit trail of mutations."""
    trail = _board(ctx).audit
    if fmt != "table":
        click.echo(trail.export_events(fmt, actor=actor, action=action, limit=limit))
        return

    events = trail.get_events(actor=actor, action=action, limit=limit)
    if not events:
        console.print("[yellow]No audit events.[/]")
        return
    table = Table(title=f"Audit ({len(events)} events)")
    table.add_column("Time", style="dim")
    table.add_column("Actor", style="cyan")
    table.add_column("Action")
    table.add_column("Resource")
    table.add_column("OK", justify="center")
    for e in events:
        ok = "[green]Y[/]" if e.success else "[red]N[/]"
        table.add_row(e.timestamp, escape(e.actor), e.action, escape(f"{e.resource_type}:{e.resource_id}"), ok)
    console.print(table)


if __name__ == "__main__":
    main()
