"""
Core inverted index data structures for SelfIndex.
"""

from typing import Dict, List, Optional, Set
from collections import Counter
import logging

from .postings import PostingsList

logger = logging.getLogger(__name__)


class InvertedIndex:
    """
    Core inverted index structure.
    Maps stemmed terms to postings lists.
    """
    
    def __init__(self):
        # Term -> PostingsList mapping
        self.dictionary: Dict[str, PostingsList] = {}
        
        # Statistics
        self.num_documents = 0
        self.total_tokens = 0
    
    def add_document(self, doc_id: int, terms: List[str]):
        """
        Add a document to the index.
        
        Args:
            doc_id: Document identifier
            terms: Stemmed terms of the document, duplicates included
        """
        for term, freq in Counter(terms).items():
            if term not in self.dictionary:
                self.dictionary[term] = PostingsList()
            self.dictionary[term].add_posting(doc_id, freq)
        
        self.num_documents += 1
        self.total_tokens += len(terms)
    
    def get_postings(self, term: str) -> Optional[PostingsList]:
        """
        Get postings list for a term.
        
        Args:
            term: The term to look up
            
        Returns:
            PostingsList if term exists, None otherwise
        """
        return self.dictionary.get(term)
    
    def get_document_frequency(self, term: str) -> int:
        """Number of documents containing the term."""
        postings = self.get_postings(term)
        return postings.document_frequency() if postings else 0
    
    def get_term_frequency(self, term: str, doc_id: int) -> int:
        """Number of times the term appears in a document (0 if absent)."""
        postings = self.get_postings(term)
        return postings.get_term_frequency(doc_id) if postings else 0
    
    def contains_term(self, term: str) -> bool:
        """Check if term exists in vocabulary."""
        return term in self.dictionary
    
    def get_vocabulary(self) -> Set[str]:
        """Get all terms in the index."""
        return set(self.dictionary.keys())
    
    def get_vocabulary_size(self) -> int:
        """Get size of vocabulary (number of unique terms)."""
        return len(self.dictionary)
    
    def get_statistics(self) -> Dict:
        """Get index statistics."""
        avg_postings_length = (
            sum(len(postings) for postings in self.dictionary.values()) / len(self.dictionary)
            if self.dictionary else 0
        )
        
        return {
            'num_documents': self.num_documents,
            'vocabulary_size': len(self.dictionary),
            'total_tokens': self.total_tokens,
            'avg_document_length': self.total_tokens / self.num_documents if self.num_documents > 0 else 0,
            'avg_postings_length': avg_postings_length
        }
    
    def to_dict(self) -> dict:
        """Convert index to dictionary for serialization."""
        return {
            'dictionary': {
                term: postings.to_dict() for term, postings in self.dictionary.items()
            },
            'statistics': self.get_statistics(),
        }
    
    @classmethod
    def from_dict(cls, data: dict) -> 'InvertedIndex':
        """Create index from dictionary."""
        index = cls()
        
        for term, postings_data in data['dictionary'].items():
            index.dictionary[term] = PostingsList.from_dict(postings_data)
        
        stats = data['statistics']
        index.num_documents = stats['num_documents']
        index.total_tokens = stats['total_tokens']
        
        return index


class DocumentStore:
    """
    Store document content.
    Separate from inverted index; documents are immutable once added.
    """
    
    def __init__(self):
        self.documents: Dict[int, str] = {}
    
    def add_document(self, doc_id: int, content: str):
        """
        Add document content.
        
        Args:
            doc_id: Document identifier
            content: Original document text
        """
        if doc_id in self.documents:
            raise ValueError(f"Document {doc_id} already exists")
        self.documents[doc_id] = content
    
    def get_content(self, doc_id: int) -> Optional[str]:
        """Get document content, or None if unknown."""
        return self.documents.get(doc_id)
    
    def contains(self, doc_id: int) -> bool:
        return doc_id in self.documents
    
    def get_all_ids(self) -> Set[int]:
        """Get set of all document IDs."""
        return set(self.documents.keys())
    
    def get_document_count(self) -> int:
        """Get total number of documents."""
        return len(self.documents)
    
    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {'documents': self.documents}
    
    @classmethod
    def from_dict(cls, data: dict) -> 'DocumentStore':
        """Create from dictionary."""
        store = cls()
        # JSON turns integer keys into strings
        store.documents = {int(k): v for k, v in data['documents'].items()}
        return store


class CollectionStatistics:
    """
    Collection-level statistics for ranking.
    Holds the document length table used for TF normalization.
    """
    
    def __init__(self):
        self.num_documents = 0
        self.total_terms = 0
        self.avg_document_length = 0.0
        self.document_lengths: Dict[int, int] = {}
    
    def add_document(self, doc_id: int, doc_length: int):
        """
        Add document statistics.
        
        Args:
            doc_id: Document ID
            doc_length: Number of tokens in document, duplicates included
        """
        if doc_id in self.document_lengths:
            raise ValueError(f"Length already recorded for document {doc_id}")
        
        self.document_lengths[doc_id] = doc_length
        self.num_documents += 1
        self.total_terms += doc_length
        
        # Recalculate average
        self.avg_document_length = self.total_terms / self.num_documents
    
    def get_document_length(self, doc_id: int) -> Optional[int]:
        """Recorded token count for a document, or None if unknown."""
        return self.document_lengths.get(doc_id)
    
    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'num_documents': self.num_documents,
            'total_terms': self.total_terms,
            'avg_document_length': self.avg_document_length,
            'document_lengths': self.document_lengths
        }
    
    @classmethod
    def from_dict(cls, data: dict) -> 'CollectionStatistics':
        """Create from dictionary."""
        stats = cls()
        stats.num_documents = data['num_documents']
        stats.total_terms = data['total_terms']
        stats.avg_document_length = data['avg_document_length']
        stats.document_lengths = {int(k): v for k, v in data['document_lengths'].items()}
        return stats
