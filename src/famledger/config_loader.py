"""
Configuration loader for famledger.

Reads settings.yaml and the household files it points at. Problems found
while cross-checking the files are collected in config['_warnings'] as
{'type': 'error' | 'warning', 'message': str} entries; commands refuse to
run while any 'error' entry is present.
"""

import os

import yaml

from .categories_loader import load_household_config
from .path_utils import resolve_budget_path


DEFAULT_SETTINGS = {
    'title': 'Family Ledger',
    'currency_format': '${amount}',
    'transactions_file': 'data/transactions.yaml',
    'categories_file': 'config/categories.yaml',
    'budgets_file': 'config/budgets.yaml',
    'goals_file': 'config/goals.yaml',
}


def load_settings(config_dir: str, settings_file: str = 'settings.yaml') -> dict:
    """
    Load settings.yaml merged over DEFAULT_SETTINGS.

    Raises:
        FileNotFoundError: If the settings file doesn't exist
        ValueError: If the file is malformed
    """
    if os.path.isabs(settings_file):
        path = settings_file
    else:
        path = os.path.join(config_dir, settings_file)

    if not os.path.exists(path):
        raise FileNotFoundError(f"Settings file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Malformed YAML in {path}: {e}")

    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping of settings")

    settings = dict(DEFAULT_SETTINGS)
    settings.update({k: v for k, v in data.items() if v is not None})

    if '{amount}' not in str(settings['currency_format']):
        raise ValueError(f"currency_format must contain '{{amount}}' (got {settings['currency_format']!r})")

    return settings


def load_config(config_dir: str, settings_file: str = 'settings.yaml') -> dict:
    """
    Load the complete configuration for a budget directory.

    Args:
        config_dir: Path to config directory
        settings_file: Settings file name (relative to config_dir) or absolute path

    Returns:
        Settings dict plus:
        - categories, budgets, goals: Loaded domain objects
        - transactions_path: Absolute path of the transactions data file
        - config_dir: Absolute config directory
        - _warnings: Cross-check errors and warnings
    """
    config = load_settings(config_dir, settings_file)
    config['config_dir'] = os.path.abspath(config_dir)
    config['transactions_path'] = resolve_budget_path(config_dir, config['transactions_file'])

    household = load_household_config(config_dir, config)
    config['categories'] = household['categories']
    config['budgets'] = household['budgets']
    config['goals'] = household['goals']

    config['_warnings'] = (
        [{'type': 'error', 'message': m} for m in household['errors']]
        + [{'type': 'warning', 'message': m} for m in household['warnings']]
    )

    return config
