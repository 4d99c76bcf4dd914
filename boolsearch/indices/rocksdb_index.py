"""
RocksDB-backed index using rocksdict.
Stores postings, documents and lengths in a RocksDB key-value store.
"""

import json
import logging
import shutil
from collections import Counter
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set, Tuple

from rocksdict import AccessType, Options, Rdict

from ..index_base import IndexBase
from ..preprocessing.text_preprocessor import TextPreprocessor

logger = logging.getLogger(__name__)

METADATA_KEY = '__metadata__'
TERM_PREFIX = 'term:'
DOC_PREFIX = 'doc:'


class RocksDBIndex(IndexBase):
    """
    Index using RocksDB as datastore.
    
    Keys:
        term:<term>   -> JSON {doc_id: term_freq}
        doc:<doc_id>  -> JSON {"content": str, "length": int}
        __metadata__  -> JSON {"index_id", "doc_count", "term_count", "doc_ids"}
    """
    
    def __init__(self, config, preprocessor: Optional[TextPreprocessor] = None):
        self.config = config
        self.preprocessor = preprocessor or TextPreprocessor(config)
        
        super().__init__(
            core='RocksDBIndex',
            dstore='ROCKSDB',
            stemmer=self.preprocessor.stemmer_name
        )
        
        self.storage_dir = Path(config.paths.index_storage) / 'rocksdb'
        self.db: Optional[Rdict] = None
        self.db_path: Optional[Path] = None
        self.metadata: Dict = {}
    
    def create_index(self, index_id: str, files: Iterable[Tuple[int, str]]) -> None:
        """Create index and store it in RocksDB."""
        logger.info(f"Creating RocksDB index: {index_id}")
        
        self.close()
        self.db_path = self.storage_dir / index_id
        if self.db_path.exists():
            logger.warning(f"Index {index_id} already exists. Overwriting.")
            shutil.rmtree(self.db_path)
        self.db_path.mkdir(parents=True, exist_ok=True)
        
        opts = Options()
        opts.create_if_missing(True)
        self.db = Rdict(str(self.db_path), options=opts)
        
        # Build postings in memory first, then write one key per term
        inverted_index: Dict[str, Dict[int, int]] = {}
        doc_ids: List[int] = []
        
        for doc_id, content in files:
            if not content:
                logger.warning(f"Skipping document {doc_id}: no content")
                continue
            
            try:
                doc_id = int(doc_id)
                if self.db.get(f"{DOC_PREFIX}{doc_id}") is not None:
                    raise ValueError(f"Document {doc_id} already exists")
                terms = self.preprocessor.preprocess(content)
            except Exception as e:
                logger.error(f"Error processing document {doc_id}: {e}")
                continue
            
            self.db[f"{DOC_PREFIX}{doc_id}"] = json.dumps({'content': content, 'length': len(terms)})
            
            for term, freq in Counter(terms).items():
                inverted_index.setdefault(term, {})[doc_id] = freq
            
            doc_ids.append(doc_id)
            if len(doc_ids) % 1000 == 0:
                logger.info(f"Processed {len(doc_ids)} documents...")
        
        logger.info(f"Writing {len(inverted_index)} terms to RocksDB...")
        
        for term, postings in inverted_index.items():
            self.db[f"{TERM_PREFIX}{term}"] = json.dumps(postings)
        
        self.metadata = {
            'index_id': index_id,
            'doc_count': len(doc_ids),
            'term_count': len(inverted_index),
            'doc_ids': sorted(doc_ids),
            'stemmer': self.preprocessor.stemmer_name,
        }
        self.db[METADATA_KEY] = json.dumps(self.metadata)
        
        logger.info(f"Created RocksDB index with {len(doc_ids)} documents, {len(inverted_index)} terms")
    
    def load_index(self, serialized_index_dump: str) -> None:
        """Open a stored RocksDB index read-only."""
        db_path = Path(serialized_index_dump)
        
        if not db_path.exists():
            raise FileNotFoundError(f"RocksDB not found: {db_path}")
        
        self.close()
        self.db_path = db_path
        self.db = Rdict(str(db_path), options=Options(), access_type=AccessType.read_only())
        
        raw = self.db.get(METADATA_KEY)
        if raw is None:
            raise ValueError(f"No index metadata found in {db_path}")
        self.metadata = json.loads(raw)
        
        logger.info(f"Loaded RocksDB index from {db_path}")
    
    def close(self):
        """Close the underlying database handle."""
        if self.db is not None:
            self.db.close()
            self.db = None
    
    def delete_index(self, index_id: str) -> None:
        """Delete a RocksDB index."""
        db_path = self.storage_dir / index_id
        if self.db_path == db_path:
            self.close()
        
        if not db_path.exists():
            raise FileNotFoundError(f"Index {index_id} not found")
        
        shutil.rmtree(db_path)
        logger.info(f"Deleted RocksDB index: {index_id}")
    
    def list_indices(self) -> List[str]:
        if not self.storage_dir.exists():
            return []
        return sorted(d.name for d in self.storage_dir.iterdir() if d.is_dir())
    
    def list_documents(self) -> List[int]:
        self._require_loaded()
        return list(self.metadata['doc_ids'])
    
    # Accessors
    
    def _postings(self, term: str) -> Dict[int, int]:
        self._require_loaded()
        raw = self.db.get(f"{TERM_PREFIX}{term}")
        if raw is None:
            return {}
        return {int(doc_id): freq for doc_id, freq in json.loads(raw).items()}
    
    def _document(self, doc_id: int) -> Optional[Dict]:
        self._require_loaded()
        raw = self.db.get(f"{DOC_PREFIX}{doc_id}")
        return json.loads(raw) if raw is not None else None
    
    def postings_for(self, term: str) -> Set[int]:
        return set(self._postings(term))
    
    def frequency_of(self, term: str, doc_id: int) -> int:
        return self._postings(term).get(doc_id, 0)
    
    def document_length(self, doc_id: int) -> int:
        doc = self._document(doc_id)
        return max(doc['length'], 1) if doc else 1
    
    def document_frequency(self, term: str) -> int:
        return len(self._postings(term))
    
    def total_document_count(self) -> int:
        self._require_loaded()
        return self.metadata['doc_count']
    
    def content_of(self, doc_id: int) -> Optional[str]:
        doc = self._document(doc_id)
        return doc['content'] if doc else None
    
    def _require_loaded(self):
        if self.db is None:
            raise ValueError("No index loaded. Call create_index() or load_index() first.")
