"""CLI: ptaas samples"""

import json

import click
from rich.console import Console

from ptaas.codec.dialects import DIALECTS, get_dialect
from ptaas.samples import envelope_samples, message_samples, variant_samples

console = Console()


@click.command("samples")
@click.option("--dialect", type=click.Choice(sorted(DIALECTS)), default="camel",
              help="Wire dialect of the generic envelope samples")
def samples(dialect: str):
    """Print example payloads of every envelope shape."""
    groups = {
        "generic envelope": envelope_samples(get_dialect(dialect)),
        "nested-variant envelope": variant_samples(),
        "websocket messages": message_samples(),
    }
    for title, payloads in groups.items():
        console.rule(title)
        for name, payload in payloads.items():
            console.print(f"[bold]{name}[/bold]")
            click.echo(json.dumps(payload))
