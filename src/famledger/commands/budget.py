"""
famledger 'budget' command - Monthly spending against category budgets.
"""

import json
import sys

from ..colors import C
from ..cli_utils import load_config_or_exit, open_ledger, parse_month_arg, print_config_warnings
from ..errors import LedgerError
from ..finance_calcs import calculate_budget_status, format_budget_summary


def cmd_budget(args):
    """Handle the 'budget' subcommand."""
    config = load_config_or_exit(args)
    month = parse_month_arg(args.month)

    try:
        transactions = open_ledger(config).transactions()
    except LedgerError as e:
        print(f"{C.RED}Error:{C.RESET} {e}", file=sys.stderr)
        sys.exit(1)

    status = calculate_budget_status(config['budgets'], config['categories'], transactions, month)

    if args.format == 'json':
        print(json.dumps({'month': month.strftime('%Y-%m'), 'categories': status}, indent=2))
        return

    print(format_budget_summary(status, month, config['currency_format']))

    over = [row['name'] for row in status if row['level'] == 'over']
    if over:
        print()
        print(f"{C.RED}⚠ Over budget:{C.RESET} {', '.join(over)}")

    print_config_warnings(config)
