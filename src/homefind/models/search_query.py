"""
Search query data model for homefind.

This module defines how the text typed by the user is turned into match terms
and how a single indexed path is tested against them.
"""

from typing import List
from pydantic import BaseModel, ConfigDict, Field, computed_field

from .config import MAX_SEARCH_RESULTS


class SearchQuery(BaseModel):
    """
    Represents one query against the file index.

    The text is kept exactly as typed. Matching is case-insensitive: the text is
    lowercased and split on whitespace into terms, and a path matches when it
    contains every term as a substring, in any order.

    Attributes:
        text: Query text as typed by the user (may be empty)
        max_results: Maximum number of matches to collect (default: 1000)
    """

    model_config = ConfigDict(frozen=True)

    text: str = Field("", description="Query text as typed")
    max_results: int = Field(
        MAX_SEARCH_RESULTS, gt=0, le=MAX_SEARCH_RESULTS,
        description="Maximum number of matches"
    )

    @computed_field
    @property
    def terms(self) -> List[str]:
        """Lowercased, non-empty whitespace-delimited terms."""
        return self.text.lower().split()

    def has_terms(self) -> bool:
        """Check if the query contains anything to match."""
        return bool(self.terms)

    def matches(self, path: str) -> bool:
        """
        Check whether a path satisfies every term.

        A query without terms matches nothing.
        """
        terms = self.terms
        if not terms:
            return False
        lowered = path.lower()
        return all(term in lowered for term in terms)

    def __str__(self) -> str:
        """String representation of the search query."""
        return f"Query: '{self.text}' | Terms: {len(self.terms)} | Max results: {self.max_results}"
