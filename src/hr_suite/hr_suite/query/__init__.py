from .pipeline import compare_values, run_query
from .model import ListQuery, Page, QueryProfile

__all__ = ["ListQuery", "Page", "QueryProfile", "compare_values", "run_query"]
