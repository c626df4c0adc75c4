"""
famledger 'summary' command - Income, expenses, and balance for a period.
"""

import sys
from datetime import date

from ..colors import C
from ..cli_utils import load_config_or_exit, open_ledger, parse_month_arg
from ..errors import LedgerError
from ..finance_calcs import calculate_period_summary, format_currency, month_bounds


def cmd_summary(args):
    """Handle the 'summary' subcommand."""
    config = load_config_or_exit(args)
    currency_format = config['currency_format']

    if args.year:
        year = args.year
        start, end = date(year, 1, 1), date(year, 12, 31)
        label = str(year)
    else:
        start, end = month_bounds(parse_month_arg(args.month))
        label = start.strftime('%B %Y')

    try:
        transactions = open_ledger(config).transactions(start=start, end=end)
    except LedgerError as e:
        print(f"{C.RED}Error:{C.RESET} {e}", file=sys.stderr)
        sys.exit(1)

    summary = calculate_period_summary(transactions, start, end)
    balance_color = C.GREEN if summary['balance'] >= 0 else C.RED

    print(f"{C.BOLD}{config['title']}{C.RESET} - {label}")
    print("=" * 40)
    print(f"{'Income':<20} {format_currency(summary['income'], currency_format):>18}")
    print(f"{'Expenses':<20} {format_currency(summary['expense'], currency_format):>18}")
    print("-" * 40)
    print(f"{'Balance':<20} {balance_color}{format_currency(summary['balance'], currency_format):>18}{C.RESET}")
    print(f"{C.DIM}{summary['count']} transactions{C.RESET}")
