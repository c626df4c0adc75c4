"""
famledger 'list' command - List transactions.
"""

import json
import sys

from ..colors import C
from ..cli_utils import load_config_or_exit, open_ledger, parse_month_arg, print_config_warnings
from ..errors import LedgerError
from ..finance_calcs import month_bounds, format_currency, calculate_period_summary


def _to_json(record):
    return {
        'id': record.id,
        'date': record.date.isoformat(),
        'description': record.description,
        'amount': record.amount,
        'type': record.kind.value,
        'category': record.category_id,
        'merchant': record.merchant,
        'recurring': record.is_recurring,
        'series': record.series_id,
    }


def cmd_list(args):
    """Handle the 'list' subcommand."""
    config = load_config_or_exit(args)
    currency_format = config['currency_format']
    category_names = {c.id: c.name for c in config['categories']}

    try:
        ledger = open_ledger(config)
        if args.series:
            records = ledger.series(args.series)
            start = end = None
        else:
            month = parse_month_arg(args.month)
            start, end = month_bounds(month)
            records = ledger.transactions(start=start, end=end, category_id=args.category)
    except LedgerError as e:
        print(f"{C.RED}Error:{C.RESET} {e}", file=sys.stderr)
        sys.exit(1)

    if args.format == 'json':
        print(json.dumps([_to_json(r) for r in records], indent=2))
        return

    if args.series:
        print(f"Series {args.series}")
    else:
        print(f"Transactions for {start.strftime('%B %Y')}")
    print("=" * 80)

    if not records:
        print(f"{C.DIM}No transactions.{C.RESET}")
        return

    for record in records:
        amount = format_currency(record.signed_amount, currency_format)
        color = C.GREEN if record.signed_amount > 0 else ''
        marker = '↻' if record.is_recurring else ' '
        category = category_names.get(record.category_id, record.category_id)
        print(f"{C.DIM}{record.id[:8]}{C.RESET}  {record.date.isoformat()}  {marker} "
              f"{record.description[:30]:<30} {category[:16]:<16} {color}{amount:>12}{C.RESET}")

    if not args.series:
        summary = calculate_period_summary(records, start, end)
        print("-" * 80)
        print(f"Income {format_currency(summary['income'], currency_format)}   "
              f"Expenses {format_currency(summary['expense'], currency_format)}   "
              f"Balance {format_currency(summary['balance'], currency_format)}")

    print_config_warnings(config)
