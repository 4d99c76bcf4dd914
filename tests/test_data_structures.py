"""
Unit tests for the core data structures: postings, inverted index,
document store and collection statistics.
Run with: pytest tests/test_data_structures.py -v
"""

import pytest

from boolsearch.selfindex.postings import PostingEntry, PostingsList
from boolsearch.selfindex.inverted_index import InvertedIndex, DocumentStore, CollectionStatistics


class TestPostingEntry:
    """Test PostingEntry class."""
    
    def test_create_posting_entry(self):
        entry = PostingEntry(doc_id=1, term_freq=3)
        assert entry.doc_id == 1
        assert entry.term_freq == 3
    
    def test_zero_frequency_rejected(self):
        """Postings with frequency 0 are never stored."""
        with pytest.raises(ValueError):
            PostingEntry(doc_id=1, term_freq=0)
    
    def test_posting_entry_ordering(self):
        assert PostingEntry(doc_id=1) < PostingEntry(doc_id=2)
        assert not PostingEntry(doc_id=2) < PostingEntry(doc_id=1)
    
    def test_posting_entry_serialization(self):
        entry = PostingEntry(doc_id=5, term_freq=2)
        restored = PostingEntry.from_dict(entry.to_dict())
        
        assert restored.doc_id == 5
        assert restored.term_freq == 2


class TestPostingsList:
    """Test PostingsList class."""
    
    def test_create_empty_postings_list(self):
        pl = PostingsList()
        assert len(pl) == 0
        assert pl.document_frequency() == 0
        assert pl.get_term_frequency(1) == 0
    
    def test_postings_kept_sorted(self):
        pl = PostingsList()
        pl.add_posting(doc_id=5, term_freq=1)
        pl.add_posting(doc_id=1, term_freq=2)
        pl.add_posting(doc_id=3, term_freq=1)
        
        assert pl.get_doc_ids() == [1, 3, 5]
        assert pl.get_doc_id_set() == {1, 3, 5}
    
    def test_add_to_existing_document(self):
        pl = PostingsList()
        pl.add_posting(doc_id=1)
        pl.add_posting(doc_id=1, term_freq=2)
        
        assert len(pl) == 1
        assert pl.get_term_frequency(1) == 3
        assert pl.total_term_frequency() == 3
    
    def test_doc_id_cache_invalidated(self):
        pl = PostingsList()
        pl.add_posting(doc_id=1)
        assert pl.get_doc_id_set() == {1}
        
        pl.add_posting(doc_id=2)
        assert pl.get_doc_id_set() == {1, 2}
    
    def test_serialization(self):
        pl = PostingsList()
        pl.add_posting(doc_id=2, term_freq=4)
        pl.add_posting(doc_id=7, term_freq=1)
        
        data = pl.to_dict()
        assert data['df'] == 2
        assert data['total_tf'] == 5
        
        restored = PostingsList.from_dict(data)
        assert restored.get_doc_ids() == [2, 7]
        assert restored.get_term_frequency(2) == 4


class TestInvertedIndex:
    """Test InvertedIndex class."""
    
    def setup_method(self):
        self.index = InvertedIndex()
        self.index.add_document(1, ["the", "dog", "dog", "bark"])
        self.index.add_document(2, ["the", "cat"])
    
    def test_term_frequencies_counted(self):
        assert self.index.get_term_frequency("dog", 1) == 2
        assert self.index.get_term_frequency("the", 2) == 1
        assert self.index.get_term_frequency("dog", 2) == 0
    
    def test_document_frequency(self):
        assert self.index.get_document_frequency("the") == 2
        assert self.index.get_document_frequency("dog") == 1
        assert self.index.get_document_frequency("unicorn") == 0
    
    def test_unknown_term(self):
        assert self.index.get_postings("unicorn") is None
        assert not self.index.contains_term("unicorn")
    
    def test_vocabulary_only_contains_seen_terms(self):
        assert self.index.get_vocabulary() == {"the", "dog", "bark", "cat"}
        assert self.index.get_vocabulary_size() == 4
    
    def test_statistics(self):
        stats = self.index.get_statistics()
        assert stats['num_documents'] == 2
        assert stats['total_tokens'] == 6
        assert stats['avg_document_length'] == 3
    
    def test_round_trip(self):
        restored = InvertedIndex.from_dict(self.index.to_dict())
        
        assert restored.get_vocabulary() == self.index.get_vocabulary()
        assert restored.get_term_frequency("dog", 1) == 2
        assert restored.num_documents == 2


class TestDocumentStore:
    """Test DocumentStore class."""
    
    def test_add_and_get(self):
        store = DocumentStore()
        store.add_document(1, "A cat sleeps on the mat")
        
        assert store.get_content(1) == "A cat sleeps on the mat"
        assert store.get_content(2) is None
        assert store.get_document_count() == 1
        assert store.get_all_ids() == {1}
    
    def test_duplicate_id_rejected(self):
        store = DocumentStore()
        store.add_document(1, "first")
        
        with pytest.raises(ValueError):
            store.add_document(1, "second")
        assert store.get_content(1) == "first"
    
    def test_from_dict_restores_integer_ids(self):
        restored = DocumentStore.from_dict({'documents': {'3': 'text'}})
        assert restored.get_content(3) == 'text'


class TestCollectionStatistics:
    """Test CollectionStatistics class."""
    
    def test_lengths_and_average(self):
        stats = CollectionStatistics()
        stats.add_document(1, 10)
        stats.add_document(2, 6)
        
        assert stats.num_documents == 2
        assert stats.total_terms == 16
        assert stats.avg_document_length == 8
        assert stats.get_document_length(2) == 6
        assert stats.get_document_length(3) is None
    
    def test_one_length_per_document(self):
        stats = CollectionStatistics()
        stats.add_document(1, 10)
        
        with pytest.raises(ValueError):
            stats.add_document(1, 4)
    
    def test_from_dict_restores_integer_ids(self):
        stats = CollectionStatistics()
        stats.add_document(4, 5)
        data = stats.to_dict()
        data['document_lengths'] = {str(k): v for k, v in data['document_lengths'].items()}
        
        restored = CollectionStatistics.from_dict(data)
        assert restored.get_document_length(4) == 5
