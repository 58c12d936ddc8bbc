"""CLI: ptaas config show|set"""

import json

import click
from pydantic import ValidationError
from rich.console import Console

from ptaas.config import ClientConfig, config_path, load_config, save_config

console = Console()


@click.group()
def config():
    """Client configuration."""


@config.command("show")
def config_show():
    """Print the active configuration."""
    cfg = load_config()
    click.echo(json.dumps(cfg.model_dump(), indent=2))
    console.print(f"[dim]{config_path()}[/dim]")


@config.command("set")
@click.argument("key")
@click.argument("value")
def config_set(key: str, value: str):
    """Set one configuration value."""
    if key not in ClientConfig.model_fields:
        console.print(f"[red]Unknown setting {key!r}. Known: {', '.join(ClientConfig.model_fields)}[/red]")
        raise SystemExit(1)
    cfg = load_config()
    try:
        updated = ClientConfig.model_validate({**cfg.model_dump(), key: value})
    except ValidationError as e:
        console.print(f"[red]Invalid value for {key}: {e.errors()[0]['msg']}[/red]")
        raise SystemExit(1)
    path = save_config(updated)
    console.print(f"[green]{key} = {getattr(updated, key)}[/green] [dim]({path})[/dim]")
