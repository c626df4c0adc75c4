"""
Configuration loader for famledger categories, budgets, and goals.

Loads household finance definitions from YAML files.
"""

import os
from datetime import date, datetime

import yaml

from .domain import (
    Category, Budget, Goal,
    TransactionKind,
    validate_category_references
)
from .path_utils import resolve_budget_path


def _read_yaml(path: str):
    """Load a YAML file, returning None if it doesn't exist."""
    if not os.path.exists(path):
        return None
    with open(path, 'r', encoding='utf-8') as f:
        try:
            return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Malformed YAML in {path}: {e}")


def load_categories(path: str) -> list[Category]:
    """
    Load categories from categories.yaml.

    Args:
        path: Path to the categories file

    Returns:
        List of Category objects (empty if file doesn't exist)

    Raises:
        ValueError: If YAML is malformed or validation fails
    """
    data = _read_yaml(path)
    if not data:
        return []

    categories = []
    seen_ids = set()
    for i, cat_data in enumerate(data.get('categories') or []):
        try:
            # Validate required fields
            if 'id' not in cat_data:
                raise ValueError(f"Category #{i+1}: 'id' is required")
            if 'name' not in cat_data:
                raise ValueError(f"Category #{i+1}: 'name' is required")
            if 'type' not in cat_data:
                raise ValueError(f"Category #{i+1}: 'type' is required")

            category = Category(
                id=str(cat_data['id']),
                name=cat_data['name'],
                type=TransactionKind(cat_data['type'].lower()),
                icon=cat_data.get('icon'),
                color=cat_data.get('color')
            )
            if category.id in seen_ids:
                raise ValueError(f"Category #{i+1}: duplicate id '{category.id}'")
            seen_ids.add(category.id)
            categories.append(category)

        except (ValueError, KeyError, AttributeError) as e:
            raise ValueError(f"Error loading category #{i+1} from {path}: {e}")

    return categories


def load_budgets(path: str) -> list[Budget]:
    """
    Load monthly budgets from budgets.yaml.

    Args:
        path: Path to the budgets file

    Returns:
        List of Budget objects (empty if file doesn't exist)

    Raises:
        ValueError: If YAML is malformed or validation fails
    """
    data = _read_yaml(path)
    if not data:
        return []

    budgets = []
    for i, budget_data in enumerate(data.get('budgets') or []):
        try:
            if 'category' not in budget_data:
                raise ValueError(f"Budget #{i+1}: 'category' is required")
            if 'limit' not in budget_data:
                raise ValueError(f"Budget #{i+1}: 'limit' is required")

            budget = Budget(
                category_id=str(budget_data['category']),
                limit=float(budget_data['limit'])
            )
            budgets.append(budget)

        except (ValueError, KeyError, TypeError) as e:
            raise ValueError(f"Error loading budget #{i+1} from {path}: {e}")

    return budgets


def load_goals(path: str) -> list[Goal]:
    """
    Load goals from goals.yaml.

    Args:
        path: Path to the goals file

    Returns:
        List of Goal objects (empty if file doesn't exist)

    Raises:
        ValueError: If YAML is malformed or validation fails
    """
    data = _read_yaml(path)
    if not data:
        return []

    goals = []
    for i, goal_data in enumerate(data.get('goals') or []):
        try:
            required_fields = ['id', 'name', 'target', 'category']
            for field in required_fields:
                if field not in goal_data:
                    raise ValueError(f"Goal #{i+1}: '{field}' is required")

            # YAML parser returns datetime.date for unquoted dates
            deadline = goal_data.get('deadline')
            if isinstance(deadline, str):
                try:
                    deadline = datetime.strptime(deadline, '%Y-%m-%d').date()
                except ValueError:
                    raise ValueError(f"Invalid date format: {deadline}. Use YYYY-MM-DD")
            elif deadline is not None and not isinstance(deadline, date):
                raise ValueError(f"Invalid deadline: {deadline!r}")

            goal = Goal(
                id=str(goal_data['id']),
                name=goal_data['name'],
                target_amount=float(goal_data['target']),
                category_id=str(goal_data['category']),
                deadline=deadline
            )
            goals.append(goal)

        except (ValueError, KeyError, TypeError) as e:
            raise ValueError(f"Error loading goal #{i+1} from {path}: {e}")

    return goals


def load_household_config(config_dir: str, settings: dict) -> dict:
    """
    Load all household finance configuration (categories, budgets, goals).

    Args:
        config_dir: Path to config directory
        settings: Loaded settings dict from settings.yaml

    Returns:
        Dict with 'categories', 'budgets', 'goals', and validation errors/warnings
    """
    result = {
        'categories': [],
        'budgets': [],
        'goals': [],
        'errors': [],
        'warnings': [],
    }

    try:
        categories_file = settings.get('categories_file', 'config/categories.yaml')
        result['categories'] = load_categories(resolve_budget_path(config_dir, categories_file))

        budgets_file = settings.get('budgets_file', 'config/budgets.yaml')
        result['budgets'] = load_budgets(resolve_budget_path(config_dir, budgets_file))

        goals_file = settings.get('goals_file', 'config/goals.yaml')
        result['goals'] = load_goals(resolve_budget_path(config_dir, goals_file))

    except (ValueError, OSError) as e:
        result['errors'].append(str(e))
        return result

    # Budgets and goals must point at known categories
    result['errors'].extend(validate_category_references(
        result['budgets'], result['goals'], result['categories']
    ))

    if not result['categories']:
        result['warnings'].append(
            "No categories defined. Add some to config/categories.yaml before adding transactions."
        )

    return result
