"""
Financial calculations for family finance tracking.

Provides period income/expense summaries, monthly budget status per
category, and goal progress.
"""

from datetime import date
from typing import Optional
from collections import defaultdict

from dateutil.relativedelta import relativedelta

from .domain import TransactionRecord, Category, Budget, Goal, TransactionKind


# Progress thresholds (percent of budget spent)
WARNING_THRESHOLD = 75
OVER_THRESHOLD = 100


def format_currency(amount: float, currency_format: str = '${amount}') -> str:
    """
    Format an amount with a currency format string.

    Negative amounts get a leading minus sign outside the format
    (e.g. -$12.50).
    """
    formatted = currency_format.replace('{amount}', f'{abs(amount):,.2f}')
    return f'-{formatted}' if amount < 0 else formatted


def month_bounds(d: date) -> tuple[date, date]:
    """Return (first_day, last_day) of the month containing d."""
    first = date(d.year, d.month, 1)
    last = first + relativedelta(months=1, days=-1)
    return first, last


def _in_range(record: TransactionRecord, start: date, end: date) -> bool:
    return start <= record.date <= end


def calculate_period_summary(transactions: list[TransactionRecord],
                             start: date, end: date) -> dict:
    """
    Sum income and expenses within [start, end].

    Returns:
        Dict with:
        - income: Total income amount
        - expense: Total expense amount
        - balance: income - expense
        - count: Number of transactions in the period
    """
    result = {
        'income': 0.0,
        'expense': 0.0,
        'balance': 0.0,
        'count': 0,
    }

    for record in transactions:
        if not _in_range(record, start, end):
            continue
        result['count'] += 1
        if record.kind == TransactionKind.INCOME:
            result['income'] += record.amount
        else:
            result['expense'] += record.amount

    result['balance'] = result['income'] - result['expense']
    return result


def _budget_level(progress: Optional[float]) -> str:
    if progress is None:
        return 'unbudgeted'
    if progress >= OVER_THRESHOLD:
        return 'over'
    if progress > WARNING_THRESHOLD:
        return 'warning'
    return 'ok'


def calculate_budget_status(budgets: list[Budget], categories: list[Category],
                            transactions: list[TransactionRecord],
                            month: date) -> list[dict]:
    """
    Compare this month's expense spending with the category budgets.

    Args:
        budgets: List of Budget objects
        categories: List of Category objects
        transactions: List of TransactionRecord objects
        month: Any date within the month to report

    Returns:
        List of dicts, one per expense category that has spending or a budget:
        - category_id, name
        - spent: Expense total for the month
        - limit: Budget limit (None if unbudgeted)
        - remaining: limit - spent (None if unbudgeted)
        - progress: Percent of limit spent (None if unbudgeted)
        - level: 'over', 'warning', 'ok', or 'unbudgeted'

        Over-budget categories come first, then budgeted categories by
        progress, then unbudgeted categories by spend.
    """
    start, end = month_bounds(month)

    spent_by_category = defaultdict(float)
    for record in transactions:
        if record.kind == TransactionKind.EXPENSE and _in_range(record, start, end):
            spent_by_category[record.category_id] += record.amount

    budgets_by_category = {b.category_id: b for b in budgets}
    category_map = {c.id: c for c in categories}

    rows = []
    for category_id in set(spent_by_category) | set(budgets_by_category):
        category = category_map.get(category_id)
        if not category or category.type != TransactionKind.EXPENSE:
            continue

        spent = spent_by_category.get(category_id, 0.0)
        budget = budgets_by_category.get(category_id)
        if budget:
            progress = spent / budget.limit * 100
            limit = budget.limit
            remaining = budget.limit - spent
        else:
            progress = limit = remaining = None

        rows.append({
            'category_id': category_id,
            'name': category.name,
            'spent': spent,
            'limit': limit,
            'remaining': remaining,
            'progress': progress,
            'level': _budget_level(progress),
        })

    def sort_key(row):
        if row['progress'] is None:
            return (2, -row['spent'], row['name'])
        if row['progress'] >= OVER_THRESHOLD:
            return (0, -row['progress'], row['name'])
        return (1, -row['progress'], row['name'])

    return sorted(rows, key=sort_key)


def calculate_goal_progress(goals: list[Goal], categories: list[Category],
                            transactions: list[TransactionRecord],
                            as_of: date) -> list[dict]:
    """
    Measure each goal against the current month's activity in its category.

    Only transactions whose kind matches the category type count.

    Returns:
        List of dicts sorted by deadline (goals without one last):
        - id, name, category_name
        - target, current, progress (percent), deadline
    """
    start, end = month_bounds(as_of)
    category_map = {c.id: c for c in categories}

    rows = []
    for goal in goals:
        category = category_map.get(goal.category_id)
        current = 0.0
        if category:
            current = sum(
                r.amount for r in transactions
                if r.category_id == goal.category_id
                and r.kind == category.type
                and _in_range(r, start, end)
            )

        rows.append({
            'id': goal.id,
            'name': goal.name,
            'category_name': category.name if category else 'Unknown',
            'target': goal.target_amount,
            'current': current,
            'progress': current / goal.target_amount * 100,
            'deadline': goal.deadline,
        })

    return sorted(rows, key=lambda g: (g['deadline'] is None, g['deadline'] or date.max))


def format_budget_summary(status: list[dict], month: date,
                          currency_format: str = '${amount}') -> str:
    """
    Format budget status as human-readable text.

    Args:
        status: Result from calculate_budget_status()
        month: Month reported
        currency_format: Currency format string

    Returns:
        Formatted string with one line per category
    """
    lines = []
    lines.append(f"Budgets for {month.strftime('%B %Y')}")
    lines.append("=" * 72)

    if not status:
        lines.append("No spending or budgets this month.")
        return '\n'.join(lines)

    lines.append(f"{'Category':<24} {'Spent':>12} {'Limit':>12} {'Progress':>9}  Status")
    lines.append("-" * 72)

    for row in status:
        spent = format_currency(row['spent'], currency_format)
        if row['limit'] is None:
            lines.append(f"{row['name']:<24} {spent:>12} {'-':>12} {'-':>9}  no budget set")
            continue

        limit = format_currency(row['limit'], currency_format)
        if row['remaining'] >= 0:
            note = f"{format_currency(row['remaining'], currency_format)} left"
        else:
            note = f"{format_currency(-row['remaining'], currency_format)} over"
        lines.append(
            f"{row['name']:<24} {spent:>12} {limit:>12} {row['progress']:>8.0f}%  {note}"
        )

    return '\n'.join(lines)


def format_goal_summary(progress: list[dict], currency_format: str = '${amount}') -> str:
    """Format goal progress as human-readable text."""
    lines = []
    lines.append("Goals")
    lines.append("=" * 72)

    if not progress:
        lines.append("No goals configured.")
        return '\n'.join(lines)

    for goal in progress:
        current = format_currency(goal['current'], currency_format)
        target = format_currency(goal['target'], currency_format)
        deadline = f"  due {goal['deadline'].isoformat()}" if goal['deadline'] else ''
        lines.append(
            f"{goal['name']:<24} {current:>12} of {target:>12} "
            f"({goal['progress']:.0f}%)  [{goal['category_name']}]{deadline}"
        )

    return '\n'.join(lines)
