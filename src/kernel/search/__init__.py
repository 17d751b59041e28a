"""
Article search and help requests.
"""

from src.kernel.search.help_request_store import HelpRequestStore
from src.kernel.search.search_engine import SEARCH_FIELDS, SearchEngine

__all__ = [
    "HelpRequestStore",
    "SEARCH_FIELDS",
    "SearchEngine",
]
