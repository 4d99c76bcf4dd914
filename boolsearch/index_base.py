from abc import ABC, abstractmethod
from typing import Iterable, Optional, Set, Tuple
from enum import Enum


class DataStore(Enum):
    MEMORY = 'm'
    ROCKSDB = 'r'

class StemmerType(Enum):
    NONE = 'n'
    PORTER = 'p'
    SUFFIX = 's'


class IndexBase(ABC):
    """
    Base index class. Subclasses own the document table, the inverted index
    and the document length table; the query engine only uses the read-only
    accessor methods.
    """
    def __init__(self, core, dstore, stemmer):
        """
        Initialize index identifiers.
        
        Sample usage:
            idx = SelfIndex(config)
            print(idx)  # SelfIndex_dmsp: core=SelfIndex|datastore=DataStore.MEMORY|...
        
        Args:
            core: Core index type ('SelfIndex' or 'RocksDBIndex')
            dstore: Datastore type (MEMORY, ROCKSDB)
            stemmer: Stemmer used at ingestion (NONE, PORTER, SUFFIX)
        """
        assert core in ('SelfIndex', 'RocksDBIndex'), f"Invalid core: {core}"
        
        # Convert string to enum if needed
        if isinstance(dstore, str):
            dstore = DataStore[dstore.upper()]
        if isinstance(stemmer, str):
            stemmer = StemmerType[stemmer.upper()]
        
        self.identifier_long = "core={}|datastore={}|stemmer={}".format(core, dstore, stemmer)
        self.identifier_short = "{}_d{}s{}".format(core, dstore.value, stemmer.value)
    
    def __repr__(self):
        return f"{self.identifier_short}: {self.identifier_long}"
    
    @abstractmethod
    def create_index(self, index_id: str, files: Iterable[Tuple[int, str]]) -> None:
        """
        Creates an index for the given documents.
        
        Args:
            index_id: The unique identifier for the index.
            files: An iterable of (document id, text) tuples.
        """
        pass
    
    @abstractmethod
    def load_index(self, serialized_index_dump: str) -> None:
        """
        Loads an already created index from disk.
        
        Args:
            serialized_index_dump: Path to the stored index
        """
        pass
    
    @abstractmethod
    def delete_index(self, index_id: str) -> None:
        """Deletes the index with the given index_id."""
        pass
    
    @abstractmethod
    def list_indices(self) -> Iterable[str]:
        """Lists the ids of all stored indices."""
        pass
    
    @abstractmethod
    def list_documents(self) -> Iterable[int]:
        """Lists the document ids of the loaded index, ascending."""
        pass
    
    # Read-only accessors used by query evaluation and ranking
    
    @abstractmethod
    def postings_for(self, term: str) -> Set[int]:
        """Document ids containing the (stemmed) term; empty for unknown terms."""
        pass
    
    @abstractmethod
    def frequency_of(self, term: str, doc_id: int) -> int:
        """Occurrences of the term in the document; 0 if absent."""
        pass
    
    @abstractmethod
    def document_length(self, doc_id: int) -> int:
        """Token count of the document, never less than 1."""
        pass
    
    @abstractmethod
    def document_frequency(self, term: str) -> int:
        """Number of documents containing the term."""
        pass
    
    @abstractmethod
    def total_document_count(self) -> int:
        """Number of documents in the index."""
        pass
    
    @abstractmethod
    def content_of(self, doc_id: int) -> Optional[str]:
        """Original text of the document, or None if unknown."""
        pass
