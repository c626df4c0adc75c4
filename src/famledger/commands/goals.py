"""
famledger 'goals' command - Progress toward goals this month.
"""

import sys
from datetime import date

from ..colors import C
from ..cli_utils import load_config_or_exit, open_ledger
from ..errors import LedgerError
from ..finance_calcs import calculate_goal_progress, format_goal_summary


def cmd_goals(args):
    """Handle the 'goals' subcommand."""
    config = load_config_or_exit(args)

    try:
        transactions = open_ledger(config).transactions()
    except LedgerError as e:
        print(f"{C.RED}Error:{C.RESET} {e}", file=sys.stderr)
        sys.exit(1)

    progress = calculate_goal_progress(config['goals'], config['categories'], transactions, date.today())
    print(format_goal_summary(progress, config['currency_format']))
