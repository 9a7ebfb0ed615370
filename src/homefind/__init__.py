"""
homefind - Core Package

A personal file locator: indexes every regular file under the home directory
and narrows the cached list interactively with a multi-term substring query.
"""

__version__ = "0.1.0"
