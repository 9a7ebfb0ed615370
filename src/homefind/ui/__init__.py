"""
Terminal front-end for homefind.
"""
