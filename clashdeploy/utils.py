"""Utility functions for Clashdeploy.

Status messages go to stderr; stdout is reserved for the deployment result.
"""

import sys

# ANSI color codes
RESET = "\033[0m"
BOLD = "\033[1m"
RED = "\033[31m"
YELLOW = "\033[33m"
GREEN = "\033[32m"
BLUE = "\033[34m"

_quiet = False


def set_quiet(quiet: bool) -> None:
    """Suppress info messages (warnings and errors are always shown)."""
    global _quiet
    _quiet = quiet


def _emit(message: str) -> None:
    print(message, file=sys.stderr)


def error(message: str) -> None:
    """Print an error message in red."""
    _emit(f"{RED}[error]{RESET} {message}")


def warn(message: str) -> None:
    """Print a warning message in yellow."""
    _emit(f"{YELLOW}[warn]{RESET} {message}")


def info(message: str) -> None:
    """Print an info message in blue."""
    if not _quiet:
        _emit(f"{BLUE}[info]{RESET} {message}")


def success(message: str) -> None:
    """Print a success message in green."""
    if not _quiet:
        _emit(f"{GREEN}[success]{RESET} {message}")


def bold(message: str) -> str:
    """Return a bold formatted message."""
    return f"{BOLD}{message}{RESET}"
