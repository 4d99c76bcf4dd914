"""Text and query preprocessing."""

from .text_preprocessor import TextPreprocessor, SuffixStemmer
from .query_tokenizer import QueryTokenizer

__all__ = ['TextPreprocessor', 'SuffixStemmer', 'QueryTokenizer']
