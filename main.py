#!/usr/bin/env python
"""
Command line entry point for boolsearch.
Uses Fire for CLI and Hydra for configuration management.
"""

import os
import json
import logging
from pathlib import Path
from datetime import datetime
import fire
import hydra
from omegaconf import OmegaConf
from dotenv import load_dotenv

# Load .env variables and register resolver
load_dotenv()
OmegaConf.register_new_resolver("env", os.getenv, replace=True)

from boolsearch.data import DataLoader, SAMPLE_DOCUMENTS
from boolsearch.indices import create_index_instance
from boolsearch.search_engine import SearchEngine

DEMO_QUERIES = [
    "(dog AND lazy) OR cats",
    "dogs NOT (cat OR mat)",
    "barking AND dog",
]


class SearchCLI:
    """CLI for building and querying boolean search indices."""
    
    def __init__(self, config_path: str = "conf", config_name: str = "config"):
        """
        Initialize CLI with configuration.
        
        Args:
            config_path: Path to config directory
            config_name: Name of main config file
        """
        self.config_path = config_path
        self.config_name = config_name
        self.config = None
        self.index_instance = None
        self.logger = None
    
    def _init_config(self, overrides=None):
        """Initialize Hydra configuration."""
        with hydra.initialize(version_base=None, config_path=self.config_path):
            self.config = hydra.compose(config_name=self.config_name, overrides=overrides or [])
        
        logging.basicConfig(
            level=getattr(logging, self.config.logging.level),
            format=self.config.logging.format
        )
        self.logger = logging.getLogger(__name__)
        
        Path(self.config.paths.index_storage).mkdir(parents=True, exist_ok=True)
    
    def _overrides(self, implementation: str = None):
        return [f"index={implementation}"] if implementation else []
    
    def _get_index_instance(self):
        """Get or create index instance."""
        if self.index_instance is None:
            self.index_instance = create_index_instance(self.config)
            self.logger.info(f"Using {self.index_instance!r}")
        return self.index_instance
    
    def _load(self, index_name: str):
        index = self._get_index_instance()
        index.load_index(str(index.storage_dir / index_name))
        return index
    
    def create_index(self, dataset_file: str = None, index_name: str = None,
                     sample: bool = False, implementation: str = None):
        """
        Create an index from a JSONL dataset or the built-in sample corpus.
        
        Args:
            dataset_file: JSONL file with id/text fields (defaults to config)
            index_name: Name for the index (defaults to a timestamped name)
            sample: Index the three-document sample corpus instead
            implementation: Index implementation (self, rocksdb)
        """
        overrides = self._overrides(implementation)
        if dataset_file:
            overrides.append(f"dataset.source_file={dataset_file}")
        self._init_config(overrides)
        
        if index_name is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            name = 'sample' if sample else self.config.dataset.name
            index_name = f"{name}_{timestamp}"
        
        self.logger.info("=" * 60)
        self.logger.info("CREATING INDEX")
        self.logger.info("=" * 60)
        self.logger.info(f"Index Name: {index_name}")
        
        documents = SAMPLE_DOCUMENTS if sample else list(DataLoader(self.config).load_dataset())
        self.logger.info(f"Loaded {len(documents)} documents")
        
        index = self._get_index_instance()
        index.create_index(index_name, documents)
        
        self.logger.info(f"Index '{index_name}' created successfully")
        return index_name
    
    def search(self, query: str, index_name: str, max_results: int = None,
               implementation: str = None):
        """
        Query an existing index.
        
        Args:
            query: Boolean query, e.g. "(dog AND lazy) OR cats"
            index_name: Name of the index to query
            max_results: Maximum number of results to return
            implementation: Index implementation (self, rocksdb)
        """
        self._init_config(self._overrides(implementation))
        
        engine = SearchEngine(self._load(index_name), self.config)
        results = json.loads(engine.query(query, max_results))
        
        self.logger.info("=" * 60)
        self.logger.info("QUERY RESULTS")
        self.logger.info("=" * 60)
        self.logger.info(f"Query: {results['query']}")
        self.logger.info(f"Total Hits: {results['total_results']}")
        
        for doc in results['results']:
            self.logger.info(f"{doc['rank']}. Document {doc['doc_id']} "
                             f"(score: {doc['score']:.4f}): {doc['content']}")
        
        return [doc['doc_id'] for doc in results['results']]
    
    def show_document(self, doc_id: int, index_name: str, implementation: str = None):
        """Print the content of a document."""
        self._init_config(self._overrides(implementation))
        content = self._load(index_name).content_of(int(doc_id))
        
        if content is None:
            self.logger.error(f"Document {doc_id} not found in {index_name}")
            return None
        
        print(content)
        return content
    
    def demo(self):
        """Index the sample corpus in a scratch index and run the demo queries."""
        self._init_config()
        
        index = self._get_index_instance()
        index.create_index('demo', SAMPLE_DOCUMENTS)
        engine = SearchEngine(index, self.config)
        
        for query in DEMO_QUERIES:
            doc_ids = engine.search(query)
            print(f"Query '{query}' found in documents: "
                  f"{', '.join(map(str, doc_ids)) if doc_ids else 'None'}")
            for doc_id in doc_ids:
                print(f"Document {doc_id}: {engine.get_document(doc_id)}")
        
        index.delete_index('demo')
    
    def list_indices(self, implementation: str = None):
        """List all available indices."""
        self._init_config(self._overrides(implementation))
        indices = self._get_index_instance().list_indices()
        
        self.logger.info("=" * 60)
        self.logger.info("AVAILABLE INDICES")
        self.logger.info("=" * 60)
        
        if not indices:
            self.logger.info("No indices found.")
        for i, idx in enumerate(indices, 1):
            self.logger.info(f"{i}. {idx}")
        
        return indices
    
    def delete_index(self, index_name: str, implementation: str = None):
        """Delete an index."""
        self._init_config(self._overrides(implementation))
        self.logger.info(f"Deleting index: {index_name}")
        self._get_index_instance().delete_index(index_name)
        self.logger.info(f"Index '{index_name}' deleted successfully")
    
    def show_config(self, implementation: str = None):
        """Display current configuration."""
        self._init_config(self._overrides(implementation))
        print(OmegaConf.to_yaml(self.config))


def main():
    """Main entry point."""
    fire.Fire(SearchCLI)


if __name__ == "__main__":
    main()
