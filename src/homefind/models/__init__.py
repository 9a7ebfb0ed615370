"""
Data models for homefind.

This module contains the core data structures used throughout the system.
"""

from .config import LocatorConfig
from .index_report import IndexBuildReport
from .search_query import SearchQuery
from .session import EventType, SessionEvent, SessionState, SessionStatus

__all__ = [
    'LocatorConfig',
    'IndexBuildReport',
    'SearchQuery',
    'EventType',
    'SessionEvent',
    'SessionState',
    'SessionStatus',
]
