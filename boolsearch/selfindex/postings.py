"""
Postings list data structures for SelfIndex.
"""

from typing import List, Optional, Set
from dataclasses import dataclass
import bisect


@dataclass
class PostingEntry:
    """
    Single posting entry for a term in a document.
    
    Attributes:
        doc_id: Document identifier
        term_freq: Number of times the term's stem appears in the document
    """
    doc_id: int
    term_freq: int = 1
    
    def __post_init__(self):
        if self.term_freq < 1:
            raise ValueError(
                f"Posting for doc {self.doc_id} must have term_freq >= 1, got {self.term_freq}"
            )
    
    def __lt__(self, other):
        """Compare by doc_id for sorting."""
        return self.doc_id < other.doc_id
    
    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'doc_id': self.doc_id,
            'term_freq': self.term_freq,
        }
    
    @classmethod
    def from_dict(cls, data: dict) -> 'PostingEntry':
        """Create from dictionary."""
        return cls(doc_id=int(data['doc_id']), term_freq=data['term_freq'])


class PostingsList:
    """
    Postings list for a single term.
    Maintains sorted list of documents containing the term.
    """
    
    def __init__(self):
        """Initialize empty postings list."""
        self.postings: List[PostingEntry] = []
        self._doc_id_set: Optional[Set[int]] = None  # Cache for fast lookup
    
    def add_posting(self, doc_id: int, term_freq: int = 1):
        """
        Add occurrences of the term in a document.
        
        Args:
            doc_id: Document identifier
            term_freq: Number of occurrences to add
        """
        idx = bisect.bisect_left([p.doc_id for p in self.postings], doc_id)
        
        if idx < len(self.postings) and self.postings[idx].doc_id == doc_id:
            # Document exists, update it
            self.postings[idx].term_freq += term_freq
        else:
            self.postings.insert(idx, PostingEntry(doc_id=doc_id, term_freq=term_freq))
        
        # Invalidate cache
        self._doc_id_set = None
    
    def get_doc_ids(self) -> List[int]:
        """Get list of all document IDs containing this term."""
        return [p.doc_id for p in self.postings]
    
    def get_doc_id_set(self) -> Set[int]:
        """Get set of document IDs for fast membership testing."""
        if self._doc_id_set is None:
            self._doc_id_set = {p.doc_id for p in self.postings}
        return self._doc_id_set
    
    def get_posting(self, doc_id: int) -> Optional[PostingEntry]:
        """
        Get posting entry for a specific document.
        
        Args:
            doc_id: Document identifier
            
        Returns:
            PostingEntry if found, None otherwise
        """
        idx = bisect.bisect_left([p.doc_id for p in self.postings], doc_id)
        if idx < len(self.postings) and self.postings[idx].doc_id == doc_id:
            return self.postings[idx]
        return None
    
    def get_term_frequency(self, doc_id: int) -> int:
        """Get term frequency in a specific document."""
        posting = self.get_posting(doc_id)
        return posting.term_freq if posting else 0
    
    def document_frequency(self) -> int:
        """Get number of documents containing this term."""
        return len(self.postings)
    
    def total_term_frequency(self) -> int:
        """Get total occurrences of term across all documents."""
        return sum(p.term_freq for p in self.postings)
    
    def __len__(self) -> int:
        return len(self.postings)
    
    def __iter__(self):
        return iter(self.postings)
    
    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'postings': [p.to_dict() for p in self.postings],
            'df': self.document_frequency(),
            'total_tf': self.total_term_frequency()
        }
    
    @classmethod
    def from_dict(cls, data: dict) -> 'PostingsList':
        """Create from dictionary."""
        pl = cls()
        pl.postings = sorted(PostingEntry.from_dict(p) for p in data['postings'])
        return pl
