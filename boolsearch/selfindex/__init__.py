"""
SelfIndex - Custom inverted index and query evaluation.
"""

from .postings import PostingEntry, PostingsList
from .inverted_index import InvertedIndex, DocumentStore, CollectionStatistics
from .boolean_ops import Operator, BooleanOperations, KEYWORDS
from .query_processor import (
    QueryResult,
    QueryDepthError,
    EvaluationState,
    BooleanQueryEvaluator,
    TfIdfRanker,
    ranking_terms,
)

__all__ = [
    'PostingEntry',
    'PostingsList',
    'InvertedIndex',
    'DocumentStore',
    'CollectionStatistics',
    
    'Operator',
    'BooleanOperations',
    'KEYWORDS',
    'QueryResult',
    'QueryDepthError',
    'EvaluationState',
    'BooleanQueryEvaluator',
    'TfIdfRanker',
    'ranking_terms',
]
