"""Summary computation package."""

from expense_core.queries.summary import SummaryEngine

__all__ = ["SummaryEngine"]
