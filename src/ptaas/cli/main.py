"""
PTaaS CLI, the `ptaas` command.

Commands:
  ptaas decode response FILE   Generic envelope reply
  ptaas decode variant FILE    Nested-variant envelope reply
  ptaas decode message FILE    Client websocket message
  ptaas samples                Print example payloads
  ptaas config show|set        Client configuration
"""

import logging

try:
    import click
    from rich.console import Console
    from rich.logging import RichHandler
except ImportError:
    raise SystemExit("CLI requires extras: pip install ptaas-client[cli]")


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_time=False)],
        force=True,
    )


@click.group()
@click.version_option("0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Log decode decisions")
def main(verbose: bool):
    """PTaaS CLI: inspect API replies and websocket messages."""
    _setup_logging(verbose)


# Register subcommands from separate modules
from ptaas.cli.config import config
from ptaas.cli.decode import decode
from ptaas.cli.samples import samples

main.add_command(config)
main.add_command(decode)
main.add_command(samples)


if __name__ == "__main__":
    main()
