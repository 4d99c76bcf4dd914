"""
Query orchestration: tokenization, boolean evaluation or implicit AND,
then TF-IDF ranking.
"""

import json
import logging
import time
from typing import List, Optional, Set

from .index_base import IndexBase
from .preprocessing import QueryTokenizer, TextPreprocessor
from .preprocessing.query_tokenizer import PARENS
from .selfindex import (
    KEYWORDS,
    BooleanOperations,
    BooleanQueryEvaluator,
    QueryResult,
    TfIdfRanker,
    ranking_terms,
)
from .selfindex.query_processor import DEFAULT_MAX_DEPTH

logger = logging.getLogger(__name__)


class SearchEngine:
    """
    Answer boolean queries against an index and rank the matches.
    
    Queries containing an uppercase AND, OR or NOT are evaluated as boolean
    expressions. Any other query is an implicit AND of its words; in that
    path a lowercase "and" is an ordinary search word.
    """
    
    def __init__(self, index: IndexBase, config, preprocessor: Optional[TextPreprocessor] = None):
        """
        Args:
            index: Loaded index accessor
            config: Hydra configuration object
            preprocessor: Supplies the stemmer; defaults to the index's own
        """
        self.index = index
        self.config = config
        self.preprocessor = preprocessor or getattr(index, 'preprocessor', None) or TextPreprocessor(config)
        
        query_config = config.get('query', {}) or {}
        self.max_results = query_config.get('max_results', None)
        
        self.tokenizer = QueryTokenizer(config.preprocessing.get('punctuation', '.,!?'))
        self.evaluator = BooleanQueryEvaluator(
            index,
            self.preprocessor.stem,
            max_depth=query_config.get('max_depth', DEFAULT_MAX_DEPTH)
        )
        self.ranker = TfIdfRanker(index, self.preprocessor.stem)
    
    def search(self, query: str) -> List[int]:
        """
        Run a query.
        
        Args:
            query: Raw query string, e.g. "(dog AND lazy) OR cats"
            
        Returns:
            Matching document ids, best first
        """
        return [result.doc_id for result in self.search_with_scores(query)]
    
    def search_with_scores(self, query: str) -> List[QueryResult]:
        """Run a query and keep the TF-IDF score of each match."""
        tokens = self.tokenizer.tokenize(query)
        
        if self._uses_implicit_and(query, tokens):
            logger.debug(f"Implicit AND for query {query!r}: {tokens}")
            doc_ids = self._implicit_and(tokens)
        else:
            logger.debug(f"Boolean evaluation for query {query!r}: {tokens}")
            doc_ids = self.evaluator.evaluate(tokens)
        
        return self.ranker.score(doc_ids, ranking_terms(tokens))
    
    def _uses_implicit_and(self, query: str, tokens: List[str]) -> bool:
        if len(tokens) <= 1:
            return True
        # Case-sensitive: only uppercase keywords in the raw query select boolean evaluation
        raw_tokens = self.tokenizer.tokenize(query, lowercase=False)
        return not any(token in KEYWORDS for token in raw_tokens)
    
    def _implicit_and(self, tokens: List[str]) -> Set[int]:
        terms = [t for t in tokens if t not in PARENS and t not in KEYWORDS]
        if not terms:
            return set()
        return BooleanOperations.intersect_many(
            self.index.postings_for(self.preprocessor.stem(term)) for term in terms
        )
    
    def get_document(self, doc_id: int) -> Optional[str]:
        """Retrieve document content by id."""
        return self.index.content_of(doc_id)
    
    def query(self, query: str, max_results: Optional[int] = None) -> str:
        """
        Query the index and return results as a JSON string.
        
        Args:
            query: Raw query string
            max_results: Limit on returned results; defaults to config
            
        Returns:
            JSON string with ranked results
        """
        start_time = time.time()
        k = max_results or self.max_results
        
        results = self.search_with_scores(query)
        
        output_results = [
            {
                'rank': i + 1,
                'doc_id': result.doc_id,
                'score': result.score,
                'content': self.get_document(result.doc_id),
            }
            for i, result in enumerate(results[:k] if k else results)
        ]
        
        query_time = time.time() - start_time
        logger.info(f"Query '{query}' returned {len(output_results)} results in {query_time:.3f}s")
        
        return json.dumps({
            'query': query,
            'results': output_results,
            'total_results': len(results),
            'query_time': query_time
        })
