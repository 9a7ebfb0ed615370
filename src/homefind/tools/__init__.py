"""
Indexing and search tools for homefind.

This package contains the filesystem walker, the on-disk index store, the query
matcher and the platform file-manager integration.
"""
