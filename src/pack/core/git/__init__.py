"""Git operations subpackage.

Abstracts the version-control update behind an interface so batch logic can
be tested with fakes instead of a real git binary.
"""

from pack.core.git.abc import Git
from pack.core.git.real import RealGit

__all__ = ["Git", "RealGit"]
