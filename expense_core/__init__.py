"""
Expense Core - Source Package

Local data layer for a personal-finance app: a generic persistent
key-value store, the expense/category model it serializes, and the
computations used to summarize spending.

DESIGN PRINCIPLES:
1. The store knows nothing about expenses
2. Writes fail loudly, reads degrade to "absent"
3. The persistence backend is injected, never global
4. Formatting and date math are pure functions
"""

__version__ = "1.0.0"
__author__ = "Expense Core Team"
