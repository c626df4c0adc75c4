"""
Starter template strings for famledger init command.
"""

STARTER_SETTINGS = '''# famledger Settings
title: "{year} Family Ledger"

# How amounts are printed. {{amount}} is replaced by the number.
currency_format: "${{amount}}"

# Where transactions are stored (relative to this budget folder)
transactions_file: data/transactions.yaml

# Household definitions
categories_file: config/categories.yaml
budgets_file: config/budgets.yaml
goals_file: config/goals.yaml
'''

STARTER_CATEGORIES = '''# Categories
# Every transaction belongs to exactly one category.
# type: income | expense
categories:
  - id: salary
    name: Salary
    type: income
    icon: briefcase

  - id: housing
    name: Housing
    type: expense
    icon: home

  - id: groceries
    name: Groceries
    type: expense
    icon: shopping-cart

  - id: utilities
    name: Utilities
    type: expense
    icon: zap

  - id: savings
    name: Savings
    type: income
    icon: piggy-bank
'''

STARTER_BUDGETS = '''# Monthly budgets (expense categories only)
budgets:
  - category: groceries
    limit: 600

  - category: utilities
    limit: 250
'''

STARTER_GOALS = '''# Goals track this month's activity in a category against a target
goals:
  # - id: emergency-fund
  #   name: Emergency Fund
  #   target: 500
  #   category: savings
  #   deadline: 2026-12-31
'''
