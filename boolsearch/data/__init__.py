"""Document loading."""

from .data_loader import DataLoader, SAMPLE_DOCUMENTS

__all__ = ['DataLoader', 'SAMPLE_DOCUMENTS']
