import logging
import os

import click

from pack.cli.commands.update import update_cmd
from pack.cli.output import user_output
from pack.core.context import create_context
from pack.core.errors import ConfigError

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="pack")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Manage Vim plugins installed as packages."""
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        try:
            ctx.obj = create_context()
        except ConfigError as e:
            user_output(f"Err: {e}")
            raise SystemExit(1) from e


cli.add_command(update_cmd)


def main() -> None:
    """CLI entry point used by the `pack` console script."""
    # Enable debug logging if PACK_DEBUG environment variable is set
    if os.environ.get("PACK_DEBUG"):
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")
    cli()
