"""
Query processing: boolean evaluation over posting sets and TF-IDF ranking.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Set, Tuple
import logging
import math

from ..index_base import IndexBase
from ..preprocessing.query_tokenizer import PARENS
from .boolean_ops import Operator

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 100


class QueryDepthError(ValueError):
    """Raised when parentheses nest deeper than the evaluator allows."""


class QueryResult:
    """Container for query results with scores."""
    
    def __init__(self, doc_id: int, score: float):
        self.doc_id = doc_id
        self.score = score
    
    def __repr__(self):
        return f"QueryResult(doc_id={self.doc_id}, score={self.score:.4f})"
    
    def __lt__(self, other):
        # Descending score, ties broken by ascending doc_id
        return (-self.score, self.doc_id) < (-other.score, other.doc_id)


@dataclass
class EvaluationState:
    """
    Working state for one parenthesis level: a stack of document-id sets
    and at most one pending operator.
    """
    results: List[Set[int]] = field(default_factory=list)
    operator: Optional[Operator] = None
    
    def push(self, doc_ids: Set[int]):
        self.results.append(doc_ids)
        self.reduce()
    
    def reduce(self):
        """Apply the pending operator to the top two sets, if possible."""
        if self.operator is None or len(self.results) < 2:
            return
        right = self.results.pop()
        left = self.results.pop()
        self.results.append(self.operator.apply(left, right))
        self.operator = None
    
    def top(self) -> Set[int]:
        return self.results[-1] if self.results else set()


class BooleanQueryEvaluator:
    """
    Recursive-descent evaluator for boolean queries.
    
    Operators have no precedence: each one is applied as soon as a right
    operand is available, so "a OR b AND c" means "(a OR b) AND c".
    Keywords are matched case-insensitively.
    """
    
    def __init__(self, index: IndexBase, stem: Callable[[str], str],
                 max_depth: int = DEFAULT_MAX_DEPTH):
        """
        Args:
            index: Index accessor used for posting lookups
            stem: Function mapping a query word to its index term
            max_depth: Maximum parenthesis nesting depth
        """
        self.index = index
        self.stem = stem
        self.max_depth = max_depth
    
    def evaluate(self, tokens: List[str]) -> Set[int]:
        """
        Evaluate a token stream to the set of matching document ids.
        
        A closing parenthesis at the top level ends evaluation; tokens after
        it are ignored. An unclosed group is closed at the end of input.
        """
        result, position = self._evaluate_group(tokens, 0, depth=0)
        if position < len(tokens):
            logger.debug(f"Ignoring {len(tokens) - position} tokens after unmatched ')'")
        return result
    
    def _evaluate_group(self, tokens: List[str], position: int,
                        depth: int) -> Tuple[Set[int], int]:
        """
        Evaluate tokens from ``position`` until the closing parenthesis of
        this level or the end of input.
        
        Returns:
            (document-id set, position after the last consumed token)
        """
        if depth > self.max_depth:
            raise QueryDepthError(f"Query nesting exceeds maximum depth of {self.max_depth}")
        
        state = EvaluationState()
        
        while position < len(tokens):
            token = tokens[position]
            
            if token == '(':
                sub_result, position = self._evaluate_group(tokens, position + 1, depth + 1)
                state.push(sub_result)
                continue
            
            if token == ')':
                position += 1
                break
            
            operator = Operator.from_token(token)
            if operator is not None:
                state.operator = operator
            else:
                state.push(self.index.postings_for(self.stem(token)))
            position += 1
        
        # Trailing operator with two operands left on the stack
        state.reduce()
        
        return state.top(), position


class TfIdfRanker:
    """
    Rank documents by the sum of TF-IDF weights of the query terms.
    
    TF = frequency / document length (length clamped to at least 1)
    IDF = ln(N / df), or 0 when no document contains the term
    """
    
    def __init__(self, index: IndexBase, stem: Callable[[str], str]):
        self.index = index
        self.stem = stem
    
    def idf(self, term: str) -> float:
        df = self.index.document_frequency(term)
        if df <= 0:
            return 0.0
        return math.log(self.index.total_document_count() / df)
    
    def score(self, doc_ids: Iterable[int], query_terms: List[str]) -> List[QueryResult]:
        """
        Score every candidate document.
        
        Args:
            doc_ids: Candidate documents; all of them appear in the output
            query_terms: Unstemmed query words, duplicates count twice
            
        Returns:
            QueryResult objects sorted by descending score, then doc id
        """
        terms = [self.stem(term) for term in query_terms]
        idf_cache: Dict[str, float] = {}
        results = []
        
        for doc_id in doc_ids:
            doc_length = max(self.index.document_length(doc_id), 1)
            doc_score = 0.0
            
            for term in terms:
                freq = self.index.frequency_of(term, doc_id)
                if freq <= 0:
                    continue
                if term not in idf_cache:
                    idf_cache[term] = self.idf(term)
                doc_score += (freq / doc_length) * idf_cache[term]
            
            results.append(QueryResult(doc_id, doc_score))
        
        results.sort()  # Uses __lt__ for descending score order
        return results
    
    def rank(self, doc_ids: Iterable[int], query_terms: List[str]) -> List[int]:
        """Document ids ordered by descending TF-IDF score."""
        return [result.doc_id for result in self.score(doc_ids, query_terms)]


def ranking_terms(tokens: List[str]) -> List[str]:
    """Tokens that are neither parentheses nor operator keywords."""
    return [t for t in tokens if t not in PARENS and Operator.from_token(t) is None]
