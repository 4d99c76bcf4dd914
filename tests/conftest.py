"""
Shared fixtures: configurations and the three-document sample corpus.
"""

import sys
from pathlib import Path

import pytest
from omegaconf import OmegaConf

# Add repository root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from boolsearch.data import SAMPLE_DOCUMENTS
from boolsearch.indices import SelfIndex
from boolsearch.search_engine import SearchEngine


def make_config(index_storage, stemmer='porter', remove_stopwords=False, stopwords=None,
                implementation='self', storage_format='json', max_depth=100):
    """Build a configuration equivalent to conf/config.yaml for tests."""
    return OmegaConf.create({
        'preprocessing': {
            'lowercase': True,
            'punctuation': '.,!?',
            'remove_stopwords': remove_stopwords,
            'stopwords': stopwords or [],
            'stemming': True,
            'stemmer': stemmer,
        },
        'query': {'max_depth': max_depth, 'max_results': None},
        'index': {'implementation': implementation, 'format': storage_format},
        'dataset': {
            'name': 'test',
            'source_file': str(Path(index_storage) / 'documents.jsonl'),
            'sample_size': None,
            'fields': {'id_field': 'id', 'text_field': 'text'},
        },
        'indexing': {'show_progress': False},
        'paths': {'index_storage': str(index_storage)},
        'logging': {'level': 'INFO', 'format': '%(message)s'},
    })


@pytest.fixture
def config(tmp_path):
    return make_config(tmp_path)


@pytest.fixture
def sample_documents():
    """The demonstration corpus: (doc_id, text) tuples."""
    return list(SAMPLE_DOCUMENTS)


@pytest.fixture
def sample_index(config, sample_documents):
    """SelfIndex built over the sample corpus."""
    index = SelfIndex(config)
    index.create_index('sample', sample_documents)
    return index


@pytest.fixture
def engine(sample_index, config):
    return SearchEngine(sample_index, config)
