"""Keep Vim package directories in sync with their upstream remotes."""
