"""
Query string tokenizer.
"""

from typing import List

from .text_preprocessor import DEFAULT_PUNCTUATION

PARENS = ('(', ')')


class QueryTokenizer:
    """
    Split a raw query into words, parentheses and operator keywords.
    
    Parentheses are always standalone tokens. Whitespace ends a word and is
    dropped. Punctuation characters are removed without ending the word, so
    "do.g" yields "dog".
    """
    
    def __init__(self, punctuation: str = DEFAULT_PUNCTUATION):
        self.punctuation = set(punctuation)
    
    def tokenize(self, query: str, lowercase: bool = True) -> List[str]:
        """
        Tokenize a query string.
        
        Args:
            query: Raw query text
            lowercase: Fold the whole query to lowercase before scanning
            
        Returns:
            Ordered list of non-empty tokens
        """
        query = query.strip()
        if lowercase:
            query = query.lower()
        
        tokens = []
        current = []
        
        for char in query:
            if char in PARENS:
                if current:
                    tokens.append(''.join(current))
                    current = []
                tokens.append(char)
            elif char.isspace():
                if current:
                    tokens.append(''.join(current))
                    current = []
            elif char in self.punctuation:
                continue
            else:
                current.append(char)
        
        if current:
            tokens.append(''.join(current))
        
        return [t for t in tokens if t]
