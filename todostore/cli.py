import json

import click
from rich.console import Console
from rich.markup import escape

from .codec import decode_create, decode_update, encode_task
from .config import configure_logging
from .exceptions import TodoStoreError
from .formatters import RichFormatter
from .repository import TaskRepository
from .store import build_store

console = Console()


def _repository(ctx: click.Context) -> TaskRepository:
    return ctx.obj["repository"]


def _fail(ctx: click.Context, message: str) -> None:
    console.print(f"[red]{escape(message)}[/red]", soft_wrap=True)
    ctx.exit(1)


@click.group()
@click.option('--backend', type=click.Choice(['redis', 'dynamodb', 'memory']),
              default=None, help='Store backend (default: TODOSTORE_BACKEND)')
@click.option('--log-level', default=None, help='Logging level (default: LOG_LEVEL)')
@click.pass_context
def cli(ctx: click.Context, backend: str, log_level: str):
    """todostore - per-owner task records"""
    configure_logging(log_level)
    ctx.ensure_object(dict)
    if "repository" not in ctx.obj:
        try:
            ctx.obj["repository"] = TaskRepository(build_store(backend))
        except TodoStoreError as e:
            _fail(ctx, str(e))


@cli.command()
@click.option('--owner', required=True, help='Owner of the task')
@click.option('--title', required=True, help='Task title')
@click.option('--description', default='', help='Task description')
@click.option('--json-output', is_flag=True, help='Output in JSON format')
@click.pass_context
def create(ctx: click.Context, owner: str, title: str, description: str, json_output: bool):
    """Create a task"""
    try:
        request = decode_create({'owner': owner, 'title': title, 'description': description})
        task = _repository(ctx).create(request.owner, request.title, request.description)
    except TodoStoreError as e:
        _fail(ctx, f"Error creating task: {e}")
        return

    if json_output:
        click.echo(json.dumps(encode_task(task), indent=2))
    else:
        console.print(RichFormatter.create_task_panel(task, title="CREATED"))


@cli.command(name='list')
@click.option('--owner', required=True, help='Owner whose tasks to list')
@click.option('--json-output', is_flag=True, help='Output in JSON format')
@click.pass_context
def list_tasks(ctx: click.Context, owner: str, json_output: bool):
    """List all tasks of an owner"""
    try:
        tasks = _repository(ctx).list_by_owner(owner)
    except TodoStoreError as e:
        _fail(ctx, f"Error listing tasks: {e}")
        return

    if json_output:
        click.echo(json.dumps([encode_task(task) for task in tasks], indent=2))
        return

    if not tasks:
        console.print(f"[yellow]No tasks found for {escape(owner)}[/yellow]")
        return

    console.print(RichFormatter.create_task_table(owner, tasks))


@cli.command()
@click.argument('owner')
@click.argument('task_id')
@click.option('--title', default=None, help='New title')
@click.option('--description', default=None, help='New description')
@click.option('--status', default=None, help='New status, e.g. completed')
@click.option('--json-output', is_flag=True, help='Output in JSON format')
@click.pass_context
def update(ctx: click.Context, owner: str, task_id: str, title: str,
           description: str, status: str, json_output: bool):
    """Update fields of an existing task"""
    try:
        supplied = {'title': title, 'description': description, 'status': status}
        request = decode_update({k: v for k, v in supplied.items() if v is not None})
        task = _repository(ctx).update_partial(owner, task_id, request.fields)
    except TodoStoreError as e:
        _fail(ctx, f"Error updating task: {e}")
        return

    if json_output:
        click.echo(json.dumps(encode_task(task), indent=2))
    else:
        console.print(RichFormatter.create_task_panel(task, title="UPDATED"))


@cli.command()
@click.argument('owner')
@click.argument('task_id')
@click.pass_context
def delete(ctx: click.Context, owner: str, task_id: str):
    """Delete a task"""
    try:
        deleted = _repository(ctx).delete(owner, task_id)
    except TodoStoreError as e:
        _fail(ctx, f"Error deleting task: {e}")
        return

    console.print(f"[green]{escape(deleted.message)}[/green]", soft_wrap=True)


@cli.command()
@click.pass_context
def ping(ctx: click.Context):
    """Check the store is reachable"""
    if _repository(ctx).store.ping():
        console.print("[green]Store reachable[/green]")
    else:
        _fail(ctx, "Store unreachable")


@cli.command()
@click.option('--host', default='127.0.0.1', help='Bind address')
@click.option('--port', default=8000, type=int, help='Port to listen on')
@click.pass_context
def serve(ctx: click.Context, host: str, port: int):
    """Run the HTTP API"""
    from .api import create_app

    app = create_app(_repository(ctx).store)
    console.print(f"[blue]Serving todostore on http://{host}:{port}[/blue]")
    app.run(host=host, port=port)
