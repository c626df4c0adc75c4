"""
famledger 'delete' command - Delete a transaction, or part of its series.
"""

import sys

from ..colors import C
from ..cli_utils import load_config_or_exit, open_ledger, find_transaction, describe_transaction
from ..domain import DeletionScope
from ..errors import LedgerError


SCOPE_CHOICES = [
    (DeletionScope.ONE, 'Only this occurrence'),
    (DeletionScope.FUTURE, 'This and future occurrences'),
    (DeletionScope.ALL, 'The entire series'),
]


def prompt_scope():
    """Ask which part of a series to delete. Returns None if cancelled."""
    print("This is a recurring transaction. What do you want to delete?")
    for i, (_, label) in enumerate(SCOPE_CHOICES, start=1):
        print(f"  {C.BOLD}{i}{C.RESET}) {label}")
    try:
        answer = input("Choice [1-3, Enter to cancel]: ").strip()
    except EOFError:
        return None
    if answer in ('1', '2', '3'):
        return SCOPE_CHOICES[int(answer) - 1][0]
    return None


def confirm(question):
    try:
        answer = input(f"{question} [y/N]: ").strip().lower()
    except EOFError:
        return False
    return answer in ('y', 'yes')


def cmd_delete(args):
    """Handle the 'delete' subcommand."""
    config = load_config_or_exit(args)
    currency_format = config['currency_format']

    try:
        ledger = open_ledger(config)
        record = find_transaction(ledger, args.id)
    except LedgerError as e:
        print(f"{C.RED}Error:{C.RESET} {e}", file=sys.stderr)
        sys.exit(1)

    print(describe_transaction(record, currency_format))

    scope = DeletionScope(args.scope) if args.scope else None
    if scope is None:
        if record.series_id and not args.yes:
            scope = prompt_scope()
            if scope is None:
                print("Cancelled.")
                return
        else:
            scope = DeletionScope.ONE
            if not args.yes and not confirm("Delete this transaction?"):
                print("Cancelled.")
                return
    elif not args.yes and not confirm(f"Delete ({scope.value})?"):
        print("Cancelled.")
        return

    try:
        deleted = ledger.delete_transaction(record.id, scope)
    except LedgerError as e:
        print(f"{C.RED}Error:{C.RESET} {e}", file=sys.stderr)
        sys.exit(1)

    noun = 'transaction' if len(deleted) == 1 else 'transactions'
    print(f"{C.GREEN}✓{C.RESET} Deleted {len(deleted)} {noun}")
    if len(deleted) > 1:
        print(f"  {deleted[0].date.isoformat()} through {deleted[-1].date.isoformat()}")
