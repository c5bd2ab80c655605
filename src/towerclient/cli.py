import pydantic
import typer
from typing import Optional
from rich.console import Console
from rich.table import Table

from .config import Config, load_config
from .connection import Connection
from .exceptions import TowerClientError

app = typer.Typer()


def _connect(config: Config) -> Connection:
    return Connection.from_config(config)


def _fail(message: str) -> None:
    typer.secho(message, fg=typer.colors.RED)
    raise typer.Exit(1)


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(None, help="API root URL."),
    username: Optional[str] = typer.Option(None),
    password: Optional[str] = typer.Option(None),
    log_level: Optional[str] = typer.Option(None),
) -> None:
    overrides = {
        "base_url": base_url,
        "username": username,
        "password": password,
        "log_level": log_level,
    }
    try:
        config = load_config(**{k: v for k, v in overrides.items() if v is not None})
    except pydantic.ValidationError:
        _fail("Missing base URL; pass --base-url or set env[towerclient_base_url]")
    ctx.obj = _connect(config)
    ctx.call_on_close(ctx.obj.close)


@app.command("list")
def list_(ctx: typer.Context, resource: str) -> None:
    try:
        items = list(ctx.obj.collection(resource))
    except (ValueError, TowerClientError) as e:
        _fail(str(e))

    table = Table(title=resource)
    table.add_column("ID", justify="right")
    table.add_column("Name")
    for item in items:
        table.add_row(str(item.get("id", "")), str(item.get("name", "")))
    Console().print(table)


@app.command()
def show(ctx: typer.Context, resource: str, id: int) -> None:
    try:
        item = ctx.obj.collection(resource).find(id)
    except (ValueError, TowerClientError) as e:
        _fail(str(e))
    typer.echo(item.to_json(indent=2))


@app.command()
def launch(
    ctx: typer.Context,
    template_id: int,
    extra_vars: Optional[str] = typer.Option(
        None, help="Variables as JSON or YAML text."
    ),
) -> None:
    try:
        job = ctx.obj.job_templates.find(template_id).launch(extra_vars)
    except TowerClientError as e:
        _fail(str(e))
    typer.secho(
        f"Launched job {job.id} ({job.get('status', 'unknown')})",
        fg=typer.colors.GREEN,
    )


@app.command()
def relaunch(ctx: typer.Context, resource: str, id: int) -> None:
    if resource not in ("jobs", "ad_hoc_commands"):
        _fail(f"{resource} cannot be relaunched; use jobs or ad_hoc_commands")
    try:
        item = ctx.obj.collection(resource).find(id).relaunch()
    except TowerClientError as e:
        _fail(str(e))
    typer.secho(f"Relaunched {resource} {id} as {item.id}", fg=typer.colors.GREEN)


if __name__ == "__main__":
    app()
