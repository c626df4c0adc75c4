"""
Path resolution helpers for config and data files.
"""

import os


def resolve_budget_path(config_dir, file_spec):
    """Resolve a file spec from settings.yaml into an absolute path.

    Relative specs are resolved against the budget directory (the parent of
    the config directory), so 'config/categories.yaml' and
    'data/transactions.yaml' work as written. '~' and environment
    variables are expanded.

    Returns:
        Absolute, normalized path, or None for an empty spec
    """
    if not file_spec:
        return None

    base_dir = os.path.dirname(os.path.abspath(config_dir))
    spec = os.path.expandvars(os.path.expanduser(str(file_spec)))
    if not os.path.isabs(spec):
        spec = os.path.join(base_dir, spec)

    return os.path.normpath(spec)
