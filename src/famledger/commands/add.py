"""
famledger 'add' command - Add a single or recurring transaction.
"""

import sys
from datetime import date

from ..colors import C
from ..cli_utils import load_config_or_exit, open_ledger, parse_date_arg
from ..domain import TransactionRecord, RecurringIntent, TransactionKind
from ..errors import LedgerError
from ..finance_calcs import format_currency


def cmd_add(args):
    """Handle the 'add' subcommand."""
    config = load_config_or_exit(args)
    currency_format = config['currency_format']

    tx_date = parse_date_arg(args.date) or date.today()
    until = parse_date_arg(args.until, 'end date')
    kind = TransactionKind.INCOME if args.income else TransactionKind.EXPENSE

    if until and not args.recurring:
        print(f"{C.RED}Error:{C.RESET} --until only applies with --recurring", file=sys.stderr)
        sys.exit(1)

    try:
        ledger = open_ledger(config)
        if args.recurring:
            entry = RecurringIntent(
                description=args.description,
                amount=args.amount,
                kind=kind,
                category_id=args.category,
                start_date=tx_date,
                recurrence_end_date=until,
                merchant=args.merchant,
            )
        else:
            entry = TransactionRecord(
                description=args.description,
                amount=args.amount,
                date=tx_date,
                kind=kind,
                category_id=args.category,
                merchant=args.merchant,
            )
        result = ledger.add_transaction(entry)
    except LedgerError as e:
        print(f"{C.RED}Error:{C.RESET} {e}", file=sys.stderr)
        sys.exit(1)

    amount_str = format_currency(args.amount, currency_format)
    if args.recurring:
        first, last = result.records[0], result.records[-1]
        print(f"{C.GREEN}✓{C.RESET} Added recurring {kind.value} {C.BOLD}{args.description}{C.RESET} "
              f"({amount_str} monthly)")
        print(f"  {len(result.records)} occurrences, {first.date.isoformat()} to {last.date.isoformat()}")
        print(f"  Series: {C.DIM}{result.series_id}{C.RESET}")
        print(f"  First:  {C.CYAN}{result.representative_id}{C.RESET}")
    else:
        print(f"{C.GREEN}✓{C.RESET} Added {kind.value} {C.BOLD}{args.description}{C.RESET} "
              f"({amount_str} on {result.date.isoformat()})")
        print(f"  ID: {C.CYAN}{result.id}{C.RESET}")
