"""
famledger 'edit' command - Edit one transaction (never its series siblings).
"""

import sys

from ..colors import C
from ..cli_utils import (
    load_config_or_exit, open_ledger, parse_date_arg, find_transaction, describe_transaction,
)
from ..domain import TransactionKind
from ..errors import LedgerError


def cmd_edit(args):
    """Handle the 'edit' subcommand."""
    config = load_config_or_exit(args)

    fields = {}
    if args.description is not None:
        fields['description'] = args.description
    if args.amount is not None:
        fields['amount'] = args.amount
    if args.date is not None:
        fields['date'] = parse_date_arg(args.date)
    if args.category is not None:
        fields['category_id'] = args.category
    if args.merchant is not None:
        fields['merchant'] = args.merchant or None
    if args.kind is not None:
        fields['kind'] = TransactionKind(args.kind)

    if not fields:
        print(f"{C.YELLOW}Nothing to change.{C.RESET} Pass at least one of "
              f"--description, --amount, --date, --category, --merchant, --income, --expense.",
              file=sys.stderr)
        sys.exit(1)

    try:
        ledger = open_ledger(config)
        record = find_transaction(ledger, args.id)
        updated = ledger.update_transaction(record.id, **fields)
    except LedgerError as e:
        print(f"{C.RED}Error:{C.RESET} {e}", file=sys.stderr)
        sys.exit(1)

    print(f"{C.GREEN}✓{C.RESET} Updated {describe_transaction(updated, config['currency_format'])}")
    if updated.is_recurring:
        print(f"  {C.DIM}Only this occurrence changed; the rest of the series is untouched.{C.RESET}")
