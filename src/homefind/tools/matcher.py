"""
Query matching over the file index.

Matching is a plain ordered scan: every path that contains all query terms is
collected in index order until the result cap is reached. There is no ranking.
"""

from typing import Iterable, List

from ..models.config import MAX_SEARCH_RESULTS
from ..models.search_query import SearchQuery


def find_matches(paths: Iterable[str], query_text: str,
                 limit: int = MAX_SEARCH_RESULTS) -> List[str]:
    """
    Collect the paths matching a query.

    Args:
        paths: Indexed paths in traversal order
        query_text: Query as typed by the user
        limit: Maximum number of matches to collect

    Returns:
        Matching paths, in the same order as ``paths``
    """
    query = SearchQuery(text=query_text, max_results=limit)
    return search(paths, query)


def search(paths: Iterable[str], query: SearchQuery) -> List[str]:
    """Collect the paths matching an already-built query."""
    terms = query.terms
    if not terms:
        return []

    matches: List[str] = []
    for path in paths:
        lowered = path.lower()
        if all(term in lowered for term in terms):
            matches.append(path)
            if len(matches) >= query.max_results:
                break

    return matches
