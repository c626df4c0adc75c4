"""
Command handlers for the famledger CLI.

Each handler takes the parsed argparse namespace.
"""

from .init import cmd_init
from .add import cmd_add
from .show import cmd_list
from .edit import cmd_edit
from .delete import cmd_delete
from .budget import cmd_budget
from .goals import cmd_goals
from .summary import cmd_summary

__all__ = [
    'cmd_init', 'cmd_add', 'cmd_list', 'cmd_edit', 'cmd_delete',
    'cmd_budget', 'cmd_goals', 'cmd_summary',
]
