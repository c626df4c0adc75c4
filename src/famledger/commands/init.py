"""
famledger 'init' command - Initialize a new budget directory.
"""

import os

from ..colors import C
from ..cli_utils import init_config


def cmd_init(args):
    """Handle the 'init' subcommand."""
    # Already inside a budget directory: upgrade in place instead of nesting
    if args.dir == 'famledger' and os.path.isdir('./config'):
        target_dir = os.path.abspath('.')
        print(f"{C.CYAN}Found existing config/ directory{C.RESET}")
        print("  Filling in missing files in place (won't create nested famledger/)")
        print()
    else:
        target_dir = os.path.abspath(args.dir)

    rel_target = os.path.relpath(target_dir)
    if rel_target == '.':
        rel_target = './'

    print(f"Initializing budget directory: {C.BOLD}{rel_target}{C.RESET}")
    print()

    created, skipped = init_config(target_dir)

    file_descriptions = {
        'config/settings.yaml': 'currency format and file locations',
        'config/categories.yaml': 'income and expense categories',
        'config/budgets.yaml': 'monthly spending limits',
        'config/goals.yaml': 'savings targets',
    }

    all_files = [(f, True) for f in created] + [(f, False) for f in skipped]
    all_files.sort(key=lambda x: x[0])

    for f, was_created in all_files:
        desc = file_descriptions.get(f, '')
        desc_str = f" {C.DIM}- {desc}{C.RESET}" if desc else ""
        if was_created:
            print(f"  {C.GREEN}✓{C.RESET} {f}{desc_str}")
        else:
            print(f"  {C.YELLOW}→{C.RESET} {C.DIM}{f} (exists){C.RESET}")

    print()
    print(f"""{C.BOLD}Next steps:{C.RESET}

  {C.BOLD}1.{C.RESET} Review your categories in {C.CYAN}config/categories.yaml{C.RESET}

  {C.BOLD}2.{C.RESET} Add transactions:
     {C.GREEN}famledger add "Rent" 1500 --category housing --recurring{C.RESET}
     {C.GREEN}famledger add "Groceries" 84.20 --category groceries{C.RESET}

  {C.BOLD}3.{C.RESET} Check where the month stands:
     {C.GREEN}famledger budget{C.RESET}
""")
