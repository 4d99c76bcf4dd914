"""
In-memory index with file persistence.

Integrates InvertedIndex, DocumentStore and CollectionStatistics behind the
IndexBase accessor interface.
"""

import json
import logging
import pickle
import shutil
import time
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from ..index_base import IndexBase
from ..preprocessing.text_preprocessor import TextPreprocessor
from ..selfindex import CollectionStatistics, DocumentStore, InvertedIndex

logger = logging.getLogger(__name__)


class SelfIndex(IndexBase):
    """
    Custom inverted index kept in memory.
    
    Each index is saved to ``<paths.index_storage>/selfindex/<index_id>`` as
    a metadata file plus one file per component, in json or pickle format.
    """
    
    def __init__(self, config, preprocessor: Optional[TextPreprocessor] = None):
        """
        Initialize SelfIndex with configuration.
        
        Args:
            config: Hydra configuration object
            preprocessor: Document preprocessor; built from config if omitted
        """
        self.config = config
        self.preprocessor = preprocessor or TextPreprocessor(config)
        self.storage_format = config.index.get('format', 'json')
        
        super().__init__(
            core='SelfIndex',
            dstore='MEMORY',
            stemmer=self.preprocessor.stemmer_name
        )
        
        self.storage_dir = Path(config.paths.index_storage) / 'selfindex'
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        
        # Core components
        self.inverted_index: Optional[InvertedIndex] = None
        self.doc_store: Optional[DocumentStore] = None
        self.stats: Optional[CollectionStatistics] = None
        
        # Metadata
        self.index_name: Optional[str] = None
        self.created_at: Optional[datetime] = None
        self.document_count = 0
        
        logger.info(f"Initialized SelfIndex with stemmer={self.preprocessor.stemmer_name}, "
                    f"format={self.storage_format}")
    
    def create_index(self, index_id: str, files: Iterable[Tuple[int, str]]) -> None:
        """
        Create a new index from documents.
        
        Args:
            index_id: The unique identifier for the index
            files: Iterable of (doc_id, text) tuples
        """
        start_time = time.time()
        self.index_name = index_id
        
        index_path = self._get_index_path(index_id)
        if index_path.exists():
            logger.warning(f"Index {index_id} already exists. Overwriting.")
            shutil.rmtree(index_path)
        
        logger.info(f"Creating index: {index_id}")
        
        self.inverted_index = InvertedIndex()
        self.doc_store = DocumentStore()
        self.stats = CollectionStatistics()
        
        processed_count = 0
        
        for doc_id, content in files:
            if not content:
                logger.warning(f"Skipping document {doc_id}: no content")
                continue
            
            try:
                self._add_document(int(doc_id), content)
            except Exception as e:
                logger.error(f"Error processing document {doc_id}: {e}")
                continue
            
            processed_count += 1
            if processed_count % 1000 == 0:
                logger.info(f"Processed {processed_count} documents...")
        
        self.document_count = processed_count
        self.created_at = datetime.now()
        
        self._save_index()
        
        duration = time.time() - start_time
        logger.info(f"Index creation complete. Processed {processed_count} documents in {duration:.2f}s")
    
    def _add_document(self, doc_id: int, content: str):
        terms = self.preprocessor.preprocess(content)
        
        # DocumentStore rejects duplicate ids before anything else is touched
        self.doc_store.add_document(doc_id, content)
        self.stats.add_document(doc_id, len(terms))
        self.inverted_index.add_document(doc_id, terms)
    
    def load_index(self, serialized_index_dump: str) -> None:
        """
        Load an existing index from disk.
        
        Args:
            serialized_index_dump: Path to the index directory
        """
        index_path = Path(serialized_index_dump)
        
        if not index_path.exists():
            logger.error(f"Index not found at {index_path}")
            raise FileNotFoundError(f"Index not found at {index_path}")
        
        logger.info(f"Loading index from: {index_path}")
        
        with open(index_path / 'metadata.json', 'r') as f:
            metadata = json.load(f)
        
        self.index_name = metadata['index_name']
        self.document_count = metadata['document_count']
        self.storage_format = metadata.get('format', self.storage_format)
        
        created_at_str = metadata.get('created_at')
        self.created_at = datetime.fromisoformat(created_at_str) if created_at_str else None
        
        self.inverted_index = self._load_component(index_path / 'inverted_index.dat', InvertedIndex)
        self.doc_store = self._load_component(index_path / 'doc_store.dat', DocumentStore)
        self.stats = self._load_component(index_path / 'statistics.dat', CollectionStatistics)
        
        if metadata.get('stemmer') != self.preprocessor.stemmer_name:
            logger.warning(f"Index was built with stemmer={metadata.get('stemmer')}, "
                           f"querying with stemmer={self.preprocessor.stemmer_name}")
        
        logger.info(f"Successfully loaded index: {self.index_name}")
        logger.info(f"Documents: {self.document_count}, "
                    f"Vocabulary: {self.inverted_index.get_vocabulary_size()}")
    
    def delete_index(self, index_id: str) -> None:
        """
        Delete an index from disk.
        
        Args:
            index_id: Name of the index to delete
        """
        index_path = self._get_index_path(index_id)
        
        if not index_path.exists():
            logger.warning(f"Index {index_id} not found")
            raise FileNotFoundError(f"Index {index_id} not found")
        
        shutil.rmtree(index_path)
        logger.info(f"Deleted index: {index_id}")
    
    def list_indices(self) -> List[str]:
        """List all stored index ids."""
        return sorted(d.name for d in self.storage_dir.iterdir() if d.is_dir())
    
    def list_documents(self) -> List[int]:
        self._require_loaded()
        return sorted(self.doc_store.get_all_ids())
    
    # Accessors
    
    def postings_for(self, term: str) -> Set[int]:
        self._require_loaded()
        postings = self.inverted_index.get_postings(term)
        # Copy so callers cannot mutate the cached set
        return set(postings.get_doc_id_set()) if postings else set()
    
    def frequency_of(self, term: str, doc_id: int) -> int:
        self._require_loaded()
        return self.inverted_index.get_term_frequency(term, doc_id)
    
    def document_length(self, doc_id: int) -> int:
        self._require_loaded()
        length = self.stats.get_document_length(doc_id)
        return max(length, 1) if length is not None else 1
    
    def document_frequency(self, term: str) -> int:
        self._require_loaded()
        return self.inverted_index.get_document_frequency(term)
    
    def total_document_count(self) -> int:
        self._require_loaded()
        return self.doc_store.get_document_count()
    
    def content_of(self, doc_id: int) -> Optional[str]:
        self._require_loaded()
        return self.doc_store.get_content(doc_id)
    
    def get_statistics(self) -> Dict[str, Any]:
        """Get index statistics."""
        if not self.inverted_index:
            return {}
        
        return {
            'index_name': self.index_name,
            'document_count': self.document_count,
            'vocabulary_size': self.inverted_index.get_vocabulary_size(),
            'total_tokens': self.stats.total_terms,
            'avg_document_length': self.stats.avg_document_length,
            'stemmer': self.preprocessor.stemmer_name,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }
    
    # Helper methods
    
    def _require_loaded(self):
        if self.inverted_index is None:
            raise ValueError("No index loaded. Call create_index() or load_index() first.")
    
    def _get_index_path(self, index_name: str) -> Path:
        """Get path to index directory."""
        return self.storage_dir / index_name
    
    def _save_index(self):
        """Save index to disk."""
        index_path = self._get_index_path(self.index_name)
        index_path.mkdir(parents=True, exist_ok=True)
        
        metadata = {
            'index_name': self.index_name,
            'document_count': self.document_count,
            'vocabulary_size': self.inverted_index.get_vocabulary_size(),
            'created_at': self.created_at.isoformat() if self.created_at else datetime.now().isoformat(),
            'format': self.storage_format,
            'stemmer': self.preprocessor.stemmer_name,
        }
        
        with open(index_path / 'metadata.json', 'w') as f:
            json.dump(metadata, f, indent=2)
        
        self._save_component(self.inverted_index, index_path / 'inverted_index.dat')
        self._save_component(self.doc_store, index_path / 'doc_store.dat')
        self._save_component(self.stats, index_path / 'statistics.dat')
        
        logger.info(f"Index saved to {index_path}")
    
    def _save_component(self, component, file_path: Path):
        data = component.to_dict()
        
        if self.storage_format == 'json':
            with open(file_path, 'w') as f:
                json.dump(data, f)
        else:  # pickle
            with open(file_path, 'wb') as f:
                pickle.dump(data, f)
    
    def _load_component(self, file_path: Path, component_class):
        if self.storage_format == 'json':
            with open(file_path, 'r') as f:
                data = json.load(f)
        else:
            with open(file_path, 'rb') as f:
                data = pickle.load(f)
        
        return component_class.from_dict(data)
