"""
boolsearch - boolean full-text search with TF-IDF ranking.
"""

__version__ = "0.1.0"
