"""
famledger - family finance ledger with recurring transaction series.
"""

from ._version import VERSION

__version__ = VERSION
