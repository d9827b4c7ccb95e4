"""CLI command implementations for the drawerzen application.

This package contains the subcommands of the drawerzen CLI:
- validate: Validate a layout file
- sort: Auto-sort the placed bins of a layout
- fill: Fill the free space of a layout with standard bins
- show: Print an ASCII diagram of a layout
"""

from drawerzen.cli.commands.layout import fill_command, show_command, sort_command
from drawerzen.cli.commands.validate import validate_command

__all__ = ["fill_command", "show_command", "sort_command", "validate_command"]
