"""
famledger CLI - Command-line interface.

Usage:
    famledger init                                  # Create ./famledger with starter config
    famledger add "Rent" 1500 --category housing --recurring
    famledger list --month 2025-01
    famledger delete 3f9a2c1e --scope future
    famledger budget                                # This month's budgets
"""

import argparse
import sys

from ._version import VERSION, REPO_URL
from .colors import C


def _add_config_args(parser):
    parser.add_argument(
        '--config', '-c',
        dest='config_dir',
        help='Path to config directory (default: ./config or ./famledger/config)'
    )
    parser.add_argument(
        '--settings', '-s',
        default='settings.yaml',
        help='Settings file name (default: settings.yaml)'
    )


def build_parser():
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog='famledger',
        description='Track family income, expenses, recurring bills, budgets, and goals.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''Run 'famledger init' to create a budget folder.'''
    )

    subparsers = parser.add_subparsers(dest='command', title='commands', metavar='<command>')

    # init subcommand
    init_parser = subparsers.add_parser(
        'init',
        help='Set up a new budget folder with config files (run once to get started)'
    )
    init_parser.add_argument(
        'dir',
        nargs='?',
        default='famledger',
        help='Directory to initialize (default: ./famledger)'
    )

    # add subcommand
    add_parser = subparsers.add_parser(
        'add',
        help='Add a transaction (use --recurring for a monthly series)',
        description='Add an expense (default) or income. With --recurring, one transaction '
                    'is created per month from --date until --until (default: 5 years).'
    )
    add_parser.add_argument('description', help='What the transaction is for')
    add_parser.add_argument('amount', type=float, help='Positive amount')
    add_parser.add_argument(
        '--category',
        required=True,
        help='Category id (see config/categories.yaml)'
    )
    add_parser.add_argument(
        '--date', '-d',
        help='Transaction date, YYYY-MM-DD (default: today)'
    )
    add_parser.add_argument(
        '--income',
        action='store_true',
        help='Record income instead of an expense'
    )
    add_parser.add_argument(
        '--merchant', '-m',
        help='Merchant name'
    )
    add_parser.add_argument(
        '--recurring', '-r',
        action='store_true',
        help='Repeat monthly on the same day of month'
    )
    add_parser.add_argument(
        '--until',
        help='Last date of a recurring series, YYYY-MM-DD (default: 5 years after --date)'
    )
    _add_config_args(add_parser)

    # list subcommand
    list_parser = subparsers.add_parser(
        'list',
        help='List transactions for a month or a recurring series'
    )
    list_parser.add_argument(
        '--month',
        help='Month to list, YYYY-MM (default: this month)'
    )
    list_parser.add_argument(
        '--series',
        help='List every occurrence of a recurring series instead'
    )
    list_parser.add_argument(
        '--category',
        help='Filter to a category id'
    )
    list_parser.add_argument(
        '--format', '-f',
        choices=['text', 'json'],
        default='text',
        help='Output format: text (default), json'
    )
    _add_config_args(list_parser)

    # edit subcommand
    edit_parser = subparsers.add_parser(
        'edit',
        help='Change one transaction (other occurrences of its series are untouched)'
    )
    edit_parser.add_argument('id', help='Transaction id (or unique prefix)')
    edit_parser.add_argument('--description')
    edit_parser.add_argument('--amount', type=float)
    edit_parser.add_argument('--date', help='YYYY-MM-DD')
    edit_parser.add_argument('--category')
    edit_parser.add_argument('--merchant', help='Merchant name (empty string clears it)')
    kind_group = edit_parser.add_mutually_exclusive_group()
    kind_group.add_argument('--income', dest='kind', action='store_const', const='income')
    kind_group.add_argument('--expense', dest='kind', action='store_const', const='expense')
    _add_config_args(edit_parser)

    # delete subcommand
    delete_parser = subparsers.add_parser(
        'delete',
        help='Delete a transaction, or part of its recurring series',
        description='For recurring transactions, choose what to delete with --scope: '
                    'one (only this occurrence), future (this and later), all (entire series). '
                    'Without --scope you are asked.'
    )
    delete_parser.add_argument('id', help='Transaction id (or unique prefix)')
    delete_parser.add_argument(
        '--scope',
        choices=['one', 'future', 'all'],
        help='What to delete for recurring transactions'
    )
    delete_parser.add_argument(
        '-y', '--yes',
        action='store_true',
        help='Skip confirmation prompts'
    )
    _add_config_args(delete_parser)

    # budget subcommand
    budget_parser = subparsers.add_parser(
        'budget',
        help='Show spending against monthly budgets'
    )
    budget_parser.add_argument(
        '--month',
        help='Month to report, YYYY-MM (default: this month)'
    )
    budget_parser.add_argument(
        '--format', '-f',
        choices=['text', 'json'],
        default='text',
        help='Output format: text (default), json'
    )
    _add_config_args(budget_parser)

    # goals subcommand
    goals_parser = subparsers.add_parser(
        'goals',
        help="Show this month's progress toward goals"
    )
    _add_config_args(goals_parser)

    # summary subcommand
    summary_parser = subparsers.add_parser(
        'summary',
        help='Show income, expenses, and balance for a month or year'
    )
    period_group = summary_parser.add_mutually_exclusive_group()
    period_group.add_argument('--month', help='Month, YYYY-MM (default: this month)')
    period_group.add_argument('--year', type=int, help='Whole calendar year')
    _add_config_args(summary_parser)

    # version subcommand
    subparsers.add_parser(
        'version',
        help='Show version information'
    )

    return parser


def main(argv=None):
    """Main entry point for famledger CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # If no command specified, show help
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    # Commands are imported lazily so 'version' and '--help' stay fast
    if args.command == 'init':
        from .commands import cmd_init
        cmd_init(args)
    elif args.command == 'add':
        from .commands import cmd_add
        cmd_add(args)
    elif args.command == 'list':
        from .commands import cmd_list
        cmd_list(args)
    elif args.command == 'edit':
        from .commands import cmd_edit
        cmd_edit(args)
    elif args.command == 'delete':
        from .commands import cmd_delete
        cmd_delete(args)
    elif args.command == 'budget':
        from .commands import cmd_budget
        cmd_budget(args)
    elif args.command == 'goals':
        from .commands import cmd_goals
        cmd_goals(args)
    elif args.command == 'summary':
        from .commands import cmd_summary
        cmd_summary(args)
    elif args.command == 'version':
        print(f"famledger {VERSION}")
        print(f"{C.DIM}{REPO_URL}{C.RESET}")


if __name__ == '__main__':
    main()
