"""
Boolean operators and set operations over posting document-id sets.
"""

from enum import Enum
from typing import Iterable, Optional, Set


class Operator(Enum):
    """Binary boolean query operators."""
    AND = 'AND'
    OR = 'OR'
    NOT = 'NOT'
    
    @classmethod
    def from_token(cls, token: str) -> Optional['Operator']:
        """
        Map a query token to an operator, ignoring case.
        
        Returns:
            The matching Operator, or None if the token is not a keyword
        """
        return cls.__members__.get(token.upper())
    
    def apply(self, left: Set[int], right: Set[int]) -> Set[int]:
        """
        Combine two document-id sets.
        
        NOT is binary: documents in ``left`` that are not in ``right``.
        """
        if self is Operator.AND:
            return BooleanOperations.intersect(left, right)
        if self is Operator.OR:
            return BooleanOperations.union(left, right)
        return BooleanOperations.difference(left, right)


KEYWORDS = frozenset(op.value for op in Operator)


class BooleanOperations:
    """Implements boolean operations on document-id sets."""
    
    @staticmethod
    def intersect(left: Set[int], right: Set[int]) -> Set[int]:
        """Documents present in both sets (AND)."""
        return left & right
    
    @staticmethod
    def union(left: Set[int], right: Set[int]) -> Set[int]:
        """Documents present in either set (OR)."""
        return left | right
    
    @staticmethod
    def difference(left: Set[int], right: Set[int]) -> Set[int]:
        """Documents in ``left`` but not in ``right`` (NOT)."""
        return left - right
    
    @staticmethod
    def intersect_many(doc_sets: Iterable[Set[int]]) -> Set[int]:
        """
        Intersect multiple document-id sets.
        
        Stops at the first empty intermediate result. Sets are consumed
        lazily, so a generator of posting lookups is not exhausted once
        the result is known to be empty.
        
        Args:
            doc_sets: Iterable of document-id sets
            
        Returns:
            Set of documents present in every input set (empty if no input)
        """
        result: Optional[Set[int]] = None
        
        for doc_set in doc_sets:
            result = set(doc_set) if result is None else result & doc_set
            if not result:
                return set()
        
        return result if result is not None else set()
