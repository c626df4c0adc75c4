"""
CLI utility functions for famledger commands.

This module contains shared utilities used by command modules,
keeping them separate from the main CLI argument parsing.
"""

import os
import sys
from datetime import date, datetime

from .colors import C
from .config_loader import load_config
from .ledger import Ledger
from .store import open_store
from .templates import STARTER_SETTINGS, STARTER_CATEGORIES, STARTER_BUDGETS, STARTER_GOALS


def find_config_dir():
    """Find the config directory, checking environment and both layouts.

    Resolution order:
    1. FAMLEDGER_CONFIG environment variable (if set and exists)
    2. ./config (config in current directory)
    3. ./famledger/config (config in famledger subdirectory)

    Returns None if no config directory is found.
    """
    env_config = os.environ.get('FAMLEDGER_CONFIG')
    if env_config:
        env_path = os.path.abspath(env_config)
        if os.path.isdir(env_path):
            return env_path

    local_layout = os.path.abspath('config')
    if os.path.isdir(local_layout):
        return local_layout

    nested_layout = os.path.abspath(os.path.join('famledger', 'config'))
    if os.path.isdir(nested_layout):
        return nested_layout

    return None


def resolve_config_dir(args, required=True):
    """Resolve config directory from args or auto-detect.

    Args:
        args: Parsed argparse namespace with optional 'config_dir' attribute
        required: If True, exit with error when no config found

    Returns:
        Absolute path to config directory, or None if not found and not required
    """
    if getattr(args, 'config_dir', None):
        config_dir = os.path.abspath(args.config_dir)
    else:
        config_dir = find_config_dir()

    if required and (config_dir is None or not os.path.isdir(config_dir)):
        print("Error: Config directory not found.", file=sys.stderr)
        print("Looked for: ./config and ./famledger/config", file=sys.stderr)
        print(f"\nRun '{C.GREEN}famledger init{C.RESET}' to create a new budget directory.", file=sys.stderr)
        sys.exit(1)

    return config_dir


def load_config_or_exit(args):
    """Load configuration for a command, exiting with a message on errors."""
    config_dir = resolve_config_dir(args, required=True)

    try:
        config = load_config(config_dir, args.settings)
    except Exception as e:
        print(f"{C.RED}Error loading configuration:{C.RESET} {e}", file=sys.stderr)
        sys.exit(1)

    errors = [w for w in config['_warnings'] if w['type'] == 'error']
    if errors:
        print(f"{C.RED}Configuration errors:{C.RESET}", file=sys.stderr)
        for error in errors:
            print(f"  • {error['message']}", file=sys.stderr)
        sys.exit(1)

    return config


def open_ledger(config):
    """Ledger over the configured transactions file."""
    store = open_store(config['transactions_path'])
    return Ledger(store, categories=config['categories'] or None)


def parse_date_arg(value, label='date'):
    """Parse a YYYY-MM-DD argument, exiting with a message if invalid."""
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        print(f"{C.RED}Invalid {label}:{C.RESET} {value}", file=sys.stderr)
        print("Use YYYY-MM-DD format (e.g., 2025-01-31)", file=sys.stderr)
        sys.exit(1)


def parse_month_arg(value):
    """Parse a YYYY-MM argument into the first day of that month (default: this month)."""
    if value is None:
        return date.today().replace(day=1)
    try:
        return datetime.strptime(value, '%Y-%m').date()
    except ValueError:
        print(f"{C.RED}Invalid month:{C.RESET} {value}", file=sys.stderr)
        print("Use YYYY-MM format (e.g., 2025-01)", file=sys.stderr)
        sys.exit(1)


def print_config_warnings(config):
    """Print non-fatal configuration warnings."""
    warnings = [w for w in config.get('_warnings', []) if w['type'] == 'warning']
    if warnings:
        print()
        print(f"{C.YELLOW}Configuration Warnings:{C.RESET}")
        for warning in warnings:
            print(f"  • {warning['message']}")


def init_config(target_dir):
    """Initialize a new budget directory with starter files."""
    config_dir = os.path.join(target_dir, 'config')
    data_dir = os.path.join(target_dir, 'data')

    os.makedirs(config_dir, exist_ok=True)
    os.makedirs(data_dir, exist_ok=True)

    current_year = datetime.now().year
    files_created = []
    files_skipped = []

    starter_files = [
        ('config/settings.yaml', STARTER_SETTINGS.format(year=current_year)),
        ('config/categories.yaml', STARTER_CATEGORIES),
        ('config/budgets.yaml', STARTER_BUDGETS),
        ('config/goals.yaml', STARTER_GOALS),
    ]
    for rel_path, content in starter_files:
        path = os.path.join(target_dir, rel_path)
        if not os.path.exists(path):
            with open(path, 'w', encoding='utf-8') as f:
                f.write(content)
            files_created.append(rel_path)
        else:
            files_skipped.append(rel_path)

    # Create .gitignore for data privacy
    gitignore_path = os.path.join(target_dir, '.gitignore')
    if not os.path.exists(gitignore_path):
        with open(gitignore_path, 'w', encoding='utf-8') as f:
            f.write('''# famledger - Ignore transaction data
data/
''')
        files_created.append('.gitignore')

    return files_created, files_skipped


def find_transaction(ledger, ref):
    """Look up a transaction by full id or unique id prefix.

    Exits with a message when nothing (or more than one record) matches.
    """
    record = ledger.store.get(ref)
    if record is not None:
        return record

    matches = [r for r in ledger.transactions() if r.id.startswith(ref)]
    if len(matches) == 1:
        return matches[0]

    if not matches:
        print(f"{C.RED}Error:{C.RESET} No transaction with id '{ref}'", file=sys.stderr)
    else:
        print(f"{C.RED}Error:{C.RESET} '{ref}' matches {len(matches)} transactions. "
              f"Use more characters of the id.", file=sys.stderr)
    sys.exit(1)


def describe_transaction(record, currency_format='${amount}'):
    """One-line description used in prompts and confirmations."""
    from .finance_calcs import format_currency

    amount = format_currency(record.signed_amount, currency_format)
    return f"{record.date.isoformat()}  {record.description}  {amount}"
