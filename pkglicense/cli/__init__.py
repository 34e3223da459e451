"""Command-line commands for pkglicense."""

from pkglicense.cli.check import check_command

__all__ = ["check_command"]
