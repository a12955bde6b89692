"""Plugin registry subpackage."""

from pack.core.registry.abc import Registry
from pack.core.registry.real import FilesystemRegistry

__all__ = ["Registry", "FilesystemRegistry"]
