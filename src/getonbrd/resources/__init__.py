"""Resource module exports."""

from .categories import Categories
from .companies import Companies
from .fetcher import RestFetcher
from .jobs import Jobs
from .tags import Tags

__all__ = [
    "Categories",
    "Companies",
    "Jobs",
    "RestFetcher",
    "Tags",
]
