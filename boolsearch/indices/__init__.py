"""Index implementations."""

from .self_index import SelfIndex

__all__ = ['SelfIndex', 'create_index_instance']


def create_index_instance(config, preprocessor=None):
    """Build the index implementation named by ``config.index.implementation``."""
    implementation = config.index.get('implementation', 'self')
    
    if implementation == 'self':
        return SelfIndex(config, preprocessor)
    if implementation == 'rocksdb':
        from .rocksdb_index import RocksDBIndex
        return RocksDBIndex(config, preprocessor)
    
    raise NotImplementedError(f"Index implementation {implementation} not yet implemented")
