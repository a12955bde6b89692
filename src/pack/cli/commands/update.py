import logging
import os

import click

from pack.cli.ensure import Ensure
from pack.cli.output import print_update_summary, user_output
from pack.core.batch import BatchExecutor
from pack.core.context import PackContext
from pack.core.errors import RegistryError
from pack.core.plugin import Plugin
from pack.core.update_ops import parse_skip_list, update_packfile, update_plugins

logger = logging.getLogger(__name__)


def _default_threads(ctx: PackContext) -> int:
    if ctx.config.threads is not None:
        return ctx.config.threads
    return os.cpu_count() or 1


@click.command("update")
@click.option(
    "-p",
    "--packfile",
    is_flag=True,
    help="Regenerate the '_pack' file combining all plugin configurations, then exit.",
)
@click.option(
    "-s",
    "--skip",
    "skip_raw",
    metavar="SKIP",
    help="Comma separated list of plugins to skip.",
)
@click.option(
    "-j",
    "--threads",
    type=int,
    metavar="THREADS",
    help="Update plugins concurrently with this many workers.",
)
@click.argument("plugins", nargs=-1)
@click.pass_obj
def update_cmd(
    ctx: PackContext,
    packfile: bool,
    skip_raw: str | None,
    threads: int | None,
    plugins: tuple[str, ...],
) -> None:
    """Update plugins.

    With PLUGINS, only the named plugins are updated and --skip is ignored.
    Otherwise every plugin is updated except those whose name contains one
    of the --skip substrings.

    The packfile and the combined '_pack' config are always rewritten in
    name order afterwards, even if individual plugins fail.
    """
    if packfile:
        try:
            update_packfile(ctx.registry, ctx.feedback)
        except RegistryError as e:
            user_output(f"Err: {e}")
            raise SystemExit(1) from e
        return

    if threads is None:
        threads = _default_threads(ctx)
    Ensure.positive_int(threads, "Threads should be greater than 0")

    skip = parse_skip_list(skip_raw)
    logger.debug("Updating with threads=%d, plugins=%s, skip=%s", threads, plugins, skip)

    executor: BatchExecutor[Plugin] = BatchExecutor(worker_count=threads, feedback=ctx.feedback)
    try:
        outcomes = update_plugins(
            ctx.registry,
            ctx.git,
            executor,
            requested=list(plugins),
            skip=skip,
            feedback=ctx.feedback,
        )
    except RegistryError as e:
        user_output(f"Err: {e}")
        raise SystemExit(1) from e

    print_update_summary(outcomes)
