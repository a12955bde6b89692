"""Exception hierarchy for pack.

Fatal errors (config, registry) propagate to the CLI command, which reports
them and exits. Per-plugin errors never leave the batch executor: SkipPlugin
subclasses become Skipped outcomes, everything else becomes Failed.
"""


class PackError(Exception):
    """Base class for all pack errors."""


class ConfigError(PackError):
    """Global config file is unreadable or malformed."""


class RegistryError(PackError):
    """Packfile could not be fetched or persisted."""


class PluginError(PackError):
    """Error scoped to a single plugin within a batch."""

    def __init__(self, name: str, message: str) -> None:
        super().__init__(message)
        self.name = name


class SkipPlugin(PluginError):
    """Plugin was intentionally not updated."""

    reason = "skipped"

    def __init__(self, name: str) -> None:
        super().__init__(name, self.reason)


class PluginNotInstalledError(SkipPlugin):
    reason = "not installed"


class LocalPluginError(SkipPlugin):
    reason = "local plugin"


class GitUpdateError(PluginError):
    """Git failed to bring a plugin up to date."""

    def __init__(self, name: str, cause: str) -> None:
        super().__init__(name, cause)
        self.cause = cause
