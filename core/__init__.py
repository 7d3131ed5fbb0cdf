"""Shared core utilities for running external tools and loading configuration."""

from .command_runner import (
    CommandError,
    CommandResult,
    CommandRunner,
    LAUNCH_FAILURE_RETURNCODE,
    LineObserver,
    SubprocessCommandRunner,
    shell_prefix_for,
)
from .config_loader import (
    ConfigLoader,
    FILE_LOADERS,
    load_config_file,
    normalize_string_list,
    select_section,
)

__all__ = [
    "CommandError",
    "CommandResult",
    "CommandRunner",
    "LAUNCH_FAILURE_RETURNCODE",
    "LineObserver",
    "SubprocessCommandRunner",
    "shell_prefix_for",
    "ConfigLoader",
    "FILE_LOADERS",
    "load_config_file",
    "normalize_string_list",
    "select_section",
]
