import json
import logging
from pathlib import Path
from typing import Iterator, List, Tuple
from tqdm import tqdm

logger = logging.getLogger(__name__)

# Demonstration corpus
SAMPLE_DOCUMENTS: List[Tuple[int, str]] = [
    (1, "The quick brown fox jumps over the lazy dog dogs"),
    (2, "A cat sleeps on the mat"),
    (3, "The dog barking loudly dogs"),
]


class DataLoader:
    """Loads documents from a JSON Lines file."""
    
    def __init__(self, config):
        """
        Initialize data loader.
        
        Args:
            config: Hydra configuration object
        """
        self.config = config
    
    def load_dataset(self) -> Iterator[Tuple[int, str]]:
        """
        Load dataset based on configuration.
        
        Each line is a JSON object; the id field defaults to the 1-based
        line number when absent.
        
        Yields:
            Tuples of (doc_id, text)
        """
        dataset_path = Path(self.config.dataset.source_file)
        
        if not dataset_path.exists():
            raise FileNotFoundError(f"Dataset file not found: {dataset_path}")
        
        logger.info(f"Loading dataset from: {dataset_path}")
        
        fields = self.config.dataset.fields
        max_docs = self.config.dataset.get('sample_size', None)
        show_progress = self.config.get('indexing', {}).get('show_progress', False)
        
        with open(dataset_path, 'r', encoding='utf-8') as f:
            with tqdm(total=max_docs, desc="Loading documents", disable=not show_progress) as pbar:
                for i, line in enumerate(f):
                    if max_docs is not None and i >= max_docs:
                        break
                    if not line.strip():
                        continue
                    
                    try:
                        doc = json.loads(line)
                        doc_id = int(doc.get(fields.id_field, i + 1))
                    except (json.JSONDecodeError, AttributeError, TypeError, ValueError) as e:
                        logger.warning(f"Error parsing line {i + 1}: {e}")
                        continue
                    
                    yield (doc_id, doc.get(fields.text_field, ''))
                    pbar.update(1)
