"""CLI: ptaas decode response|variant|message"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import click
from rich.console import Console
from rich.table import Table

from ptaas.codec.dialects import DIALECTS, get_dialect
from ptaas.codec.envelope import all_projects_codec, all_scripts_codec, decode_reply, general_codec
from ptaas.codec.messages import parse_client_message
from ptaas.codec.variants import DEFAULT_SCHEMA
from ptaas.codec.wire import loads
from ptaas.config import ClientConfig, load_config
from ptaas.errors import DecodeError, is_forward_compatible
from ptaas.models.entities import AllProjectsResponseData, AllScriptsResponseData, APIError
from ptaas.models.failures import APIResponseType
from ptaas.models.messages import Subscribe, Unsubscribe
from ptaas.models.variants import Processed

logger = logging.getLogger(__name__)
console = Console()

CODECS = {
    "all-projects": all_projects_codec,
    "all-scripts": all_scripts_codec,
    "general": general_codec,
}


@contextmanager
def _decode_errors(cfg: ClientConfig) -> Iterator[None]:
    try:
        yield
    except DecodeError as e:
        if cfg.tolerate_unknown_symbols and is_forward_compatible(e):
            logger.warning("Ignoring payload with unknown symbol: %s", e)
            console.print(f"[yellow]Unrecognized: {e}[/yellow]")
            raise SystemExit(0)
        console.print(f"[red]{type(e).__name__}: {e}[/red]")
        raise SystemExit(1)


def _print_payload(data: Any) -> None:
    if isinstance(data, AllProjectsResponseData):
        table = Table(title=f"Projects ({len(data.projects)})")
        table.add_column("ID", style="bold")
        table.add_column("Installed")
        table.add_column("Scripts")
        for p in data.projects:
            table.add_row(p.id, "yes" if p.installed else "no", ", ".join(s.id for s in p.scripts))
        console.print(table)
    elif isinstance(data, AllScriptsResponseData):
        table = Table(title=f"Scripts ({len(data.scripts)})")
        table.add_column("ID", style="bold")
        for s in data.scripts:
            table.add_row(s.id)
        console.print(table)
    elif data is not None:
        console.print(data)


def _print_failure(reason: str, message: Optional[str], detail: Optional[APIError] = None) -> None:
    console.print(f"[red]Failed: {reason}[/red]")
    if message:
        console.print(f"  {message}")
    if detail is not None:
        console.print(f"  {detail.message}" + (f" [dim]({detail.reason})[/dim]" if detail.reason else ""))


@click.group()
def decode():
    """Decode a payload and print what it resolves to."""


@decode.command("response")
@click.argument("source", type=click.File("rb"), default="-")
@click.option("--kind", type=click.Choice(sorted(CODECS)), required=True, help="Request the reply belongs to")
@click.option("--dialect", type=click.Choice(sorted(DIALECTS)), default=None)
@click.option("--json-output", "--json", is_flag=True)
def decode_response_cmd(source, kind: str, dialect: Optional[str], json_output: bool):
    """Decode a generic envelope reply."""
    cfg = load_config()
    codec = CODECS[kind](get_dialect(dialect or cfg.dialect))
    with _decode_errors(cfg):
        response = decode_reply(loads(source.read()), codec)

    if json_output:
        if response.response_type is APIResponseType.GENERAL_RESPONSE:
            codec = general_codec(codec.dialect)
        click.echo(codec.dumps(response, indent=2))
        return
    console.print(f"[bold]{response.response_type.value}[/bold] success={response.success}")
    if response.success:
        _print_payload(response.data)
    elif response.error is not None:
        _print_failure(response.error.error_type.value, response.error.error_message)
    else:
        console.print("[yellow]Failed without error detail[/yellow]")


@decode.command("variant")
@click.argument("source", type=click.File("rb"), default="-")
def decode_variant_cmd(source):
    """Decode a nested-variant envelope reply."""
    cfg = load_config()
    with _decode_errors(cfg):
        resolution = DEFAULT_SCHEMA.resolve(loads(source.read()))

    console.print(f"[bold]{' > '.join(resolution.path)}[/bold]")
    if isinstance(resolution.outcome, Processed):
        _print_payload(resolution.outcome.value)
    else:
        _print_failure(resolution.path[-1], None, resolution.outcome.detail)


@decode.command("message")
@click.argument("source", type=click.File("rb"), default="-")
@click.option("--strict", is_flag=True, help="Reject messages that are neither subscribe nor unsubscribe")
def decode_message_cmd(source, strict: bool):
    """Decode a client websocket message."""
    cfg = load_config()
    with _decode_errors(cfg):
        message = parse_client_message(loads(source.read()), require_known=strict)

    if isinstance(message, Subscribe):
        console.print(f"[green]subscribe[/green] {message.project_id}")
    elif isinstance(message, Unsubscribe):
        console.print(f"[green]unsubscribe[/green] {message.project_id}")
    else:
        console.print("[yellow]Unrecognized message[/yellow]")
