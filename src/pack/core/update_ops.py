"""Plugin update orchestration.

Composes the registry, the git adapter and the batch executor:

1. fetch every declared plugin
2. select the plugins to update (explicit names, or everything minus skips)
3. run one update job per selected plugin on the executor
4. persist the full plugin list in name order, whatever the job outcomes

Only RegistryError escapes from here. Per-plugin errors are contained in the
executor and surface as outcomes.
"""

import logging

from pack.core.batch import BatchExecutor
from pack.core.errors import LocalPluginError, PluginNotInstalledError
from pack.core.git.abc import Git
from pack.core.plugin import JobOutcome, Plugin, sort_by_name
from pack.core.registry.abc import Registry
from pack.core.user_feedback import UserFeedback

logger = logging.getLogger(__name__)


def parse_skip_list(raw: str | None) -> list[str]:
    """Split a comma-separated skip option into trimmed, non-empty substrings.

    Example:
        >>> parse_skip_list(" vim-go, ,fzf ")
        ['vim-go', 'fzf']
    """
    if raw is None:
        return []
    return [part.strip() for part in raw.split(",") if part.strip()]


def select_plugins(
    plugins: list[Plugin],
    requested: list[str],
    skip: list[str],
    feedback: UserFeedback,
) -> list[Plugin]:
    """Choose which plugins a batch updates.

    With explicit names, exactly the plugins with those names are selected and
    the skip list is ignored. Without names, every plugin is selected except
    those whose name contains one of the skip substrings.

    Args:
        plugins: All declared plugins
        requested: Plugin names given on the command line (may be empty)
        skip: Substrings excluding plugins when no names are given
        feedback: Receives one notice per skipped plugin

    Returns:
        Selected plugins, in registry order
    """
    if requested:
        wanted = set(requested)
        selected = [p for p in plugins if p.name in wanted]
        unknown = wanted - {p.name for p in selected}
        if unknown:
            logger.debug("Requested plugins not in packfile: %s", sorted(unknown))
        return selected

    selected = []
    for plugin in plugins:
        if any(sub in plugin.name for sub in skip):
            feedback.info(f"Skip {plugin.name}")
            continue
        selected.append(plugin)
    return selected


def update_plugin(git: Git, plugin: Plugin) -> None:
    """Update one plugin, applying the skip policy first.

    Raises:
        PluginNotInstalledError: If the install directory does not exist
        LocalPluginError: If the plugin is local-only
        GitUpdateError: If git fails
    """
    path = plugin.path
    if not path.is_dir():
        raise PluginNotInstalledError(plugin.name)
    if plugin.local:
        raise LocalPluginError(plugin.name)
    git.update(plugin.name, path)


def update_plugins(
    registry: Registry,
    git: Git,
    executor: BatchExecutor[Plugin],
    requested: list[str],
    skip: list[str],
    feedback: UserFeedback,
) -> list[JobOutcome]:
    """Update the selected plugins concurrently, then persist the registry.

    The persisted list is always the full registry sorted by name, even
    when only a subset was selected or every job failed.

    Returns:
        One outcome per selected plugin

    Raises:
        RegistryError: If fetching or persisting the registry fails
    """
    plugins = registry.fetch()

    for plugin in select_plugins(plugins, requested, skip, feedback):
        executor.add(plugin.name, plugin)

    outcomes = executor.run(lambda plugin: update_plugin(git, plugin))

    registry.persist(sort_by_name(plugins))
    return outcomes


def update_packfile(registry: Registry, feedback: UserFeedback) -> None:
    """Regenerate the packfile and combined config without updating anything.

    Raises:
        RegistryError: If fetching or persisting the registry fails
    """
    feedback.info("Update _pack file for all plugins.")
    plugins = registry.fetch()
    registry.persist(sort_by_name(plugins))
