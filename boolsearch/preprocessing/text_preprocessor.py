import logging
from typing import List, Optional

import nltk
from nltk.corpus import stopwords
from nltk.stem import PorterStemmer

logger = logging.getLogger(__name__)

DEFAULT_PUNCTUATION = ".,!?"


class SuffixStemmer:
    """
    Simplified suffix-stripping stemmer.
    
    Words longer than two characters lose a trailing 'ing', else 'ed',
    else a single 's' unless the word ends in 'ss'.
    """
    
    def stem(self, word: str) -> str:
        word = word.lower()
        if len(word) > 2:
            if word.endswith('ing'):
                return word[:-3]
            if word.endswith('ed'):
                return word[:-2]
            if word.endswith('s') and not word.endswith('ss'):
                return word[:-1]
        return word


class TextPreprocessor:
    """Handles document cleaning and term stemming."""
    
    def __init__(self, config):
        """
        Initialize preprocessor with configuration.
        
        Args:
            config: Hydra config object with preprocessing settings
        """
        self.config = config
        prep = config.preprocessing
        
        self.lowercase = prep.get('lowercase', True)
        self.punctuation = prep.get('punctuation', DEFAULT_PUNCTUATION)
        self._strip_table = str.maketrans('', '', self.punctuation)
        
        self.stemmer_name = prep.get('stemmer', 'porter') if prep.get('stemming', True) else 'none'
        self.stemmer = self._build_stemmer(self.stemmer_name)
        
        if prep.get('remove_stopwords', False):
            configured = prep.get('stopwords') or []
            self.stopwords = set(configured) if configured else self._load_nltk_stopwords()
        else:
            self.stopwords = set()
    
    @staticmethod
    def _build_stemmer(name: str):
        if name == 'porter':
            return PorterStemmer()
        if name == 'suffix':
            return SuffixStemmer()
        if name == 'none':
            return None
        raise ValueError(f"Unknown stemmer: {name}")
    
    def _load_nltk_stopwords(self) -> set:
        """Load English stopwords, downloading the corpus if needed."""
        try:
            nltk.data.find('corpora/stopwords')
        except LookupError:
            logger.info("Downloading nltk stopwords corpus")
            nltk.download('stopwords', quiet=True)
        return set(stopwords.words('english'))
    
    def stem(self, token: str) -> str:
        """Normalize a single token to its index term."""
        if self.stemmer is None:
            return token.lower()
        return self.stemmer.stem(token)
    
    def tokenize(self, text: Optional[str]) -> List[str]:
        """
        Clean and split document text, without stemming.
        
        Args:
            text: Input text string
            
        Returns:
            List of tokens, duplicates preserved
        """
        if not text:
            return []
        
        if self.lowercase:
            text = text.lower()
        
        text = text.translate(self._strip_table)
        tokens = [token for token in text.split() if token]
        
        if self.stopwords:
            tokens = [token for token in tokens if token not in self.stopwords]
        
        return tokens
    
    def preprocess(self, text: Optional[str]) -> List[str]:
        """
        Clean, split and stem document text.
        
        The length of the result is the document's token length.
        """
        return [self.stem(token) for token in self.tokenize(text)]
