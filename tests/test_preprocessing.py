"""
Unit tests for query tokenization and document preprocessing.
Run with: pytest tests/test_preprocessing.py -v
"""

import pytest
from nltk.stem import PorterStemmer

from boolsearch.preprocessing import QueryTokenizer, SuffixStemmer, TextPreprocessor
from conftest import make_config


class TestQueryTokenizer:
    """Test QueryTokenizer."""
    
    def setup_method(self):
        self.tokenizer = QueryTokenizer()
    
    def test_boolean_query(self):
        tokens = self.tokenizer.tokenize("(dog AND lazy) OR cats")
        assert tokens == ['(', 'dog', 'and', 'lazy', ')', 'or', 'cats']
    
    def test_parentheses_split_words(self):
        assert self.tokenizer.tokenize("((a)b)") == ['(', '(', 'a', ')', 'b', ')']
    
    def test_any_whitespace_separates(self):
        assert self.tokenizer.tokenize("a\tb\nc  d") == ['a', 'b', 'c', 'd']
    
    def test_punctuation_dropped_without_splitting(self):
        assert self.tokenizer.tokenize("Hello, World!") == ['hello', 'world']
        assert self.tokenizer.tokenize("do.g") == ['dog']
    
    def test_other_symbols_kept(self):
        assert self.tokenizer.tokenize("don't e-mail") == ["don't", 'e-mail']
    
    @pytest.mark.parametrize("query", ["", "   ", ".,!?", " ! ? . , "])
    def test_empty_results(self, query):
        assert self.tokenizer.tokenize(query) == []
    
    def test_case_preserved_on_request(self):
        tokens = self.tokenizer.tokenize("Dog AND (Cat)", lowercase=False)
        assert tokens == ['Dog', 'AND', '(', 'Cat', ')']
    
    def test_custom_punctuation(self):
        tokenizer = QueryTokenizer(punctuation=";")
        assert tokenizer.tokenize("a;b c.") == ['ab', 'c.']


class TestSuffixStemmer:
    """Test the simplified suffix stemmer."""
    
    @pytest.mark.parametrize("word,expected", [
        ("barking", "bark"),
        ("jumped", "jump"),
        ("dogs", "dog"),
        ("Cats", "cat"),
        ("glass", "glass"),
        ("is", "is"),
        ("ing", ""),
        ("dog", "dog"),
    ])
    def test_stem(self, word, expected):
        assert SuffixStemmer().stem(word) == expected


class TestTextPreprocessor:
    """Test TextPreprocessor with different configurations."""
    
    def test_tokenize_counts_duplicates(self, tmp_path):
        prep = TextPreprocessor(make_config(tmp_path))
        tokens = prep.tokenize("The quick brown fox jumps over the lazy dog dogs")
        
        assert len(tokens) == 10
        assert tokens.count('the') == 2
    
    def test_punctuation_removed(self, tmp_path):
        prep = TextPreprocessor(make_config(tmp_path))
        assert prep.tokenize("Stop! Who goes there?") == ['stop', 'who', 'goes', 'there']
    
    def test_porter_stemming(self, tmp_path):
        prep = TextPreprocessor(make_config(tmp_path))
        porter = PorterStemmer()
        
        assert prep.stemmer_name == 'porter'
        assert prep.stem('dogs') == 'dog'
        assert prep.stem('lazy') == porter.stem('lazy')
        assert prep.preprocess("Dogs barking") == ['dog', 'bark']
    
    def test_suffix_stemming(self, tmp_path):
        prep = TextPreprocessor(make_config(tmp_path, stemmer='suffix'))
        assert prep.preprocess("The dog barking loudly dogs") == ['the', 'dog', 'bark', 'loudly', 'dog']
    
    def test_stemming_disabled(self, tmp_path):
        config = make_config(tmp_path)
        config.preprocessing.stemming = False
        prep = TextPreprocessor(config)
        
        assert prep.stemmer_name == 'none'
        assert prep.stem('Dogs') == 'dogs'
    
    def test_unknown_stemmer(self, tmp_path):
        with pytest.raises(ValueError):
            TextPreprocessor(make_config(tmp_path, stemmer='snowball'))
    
    def test_configured_stopwords(self, tmp_path):
        config = make_config(tmp_path, remove_stopwords=True, stopwords=['the', 'a', 'on'])
        prep = TextPreprocessor(config)
        
        assert prep.tokenize("A cat sleeps on the mat") == ['cat', 'sleeps', 'mat']
    
    @pytest.mark.parametrize("text", [None, "", "?!", "   "])
    def test_empty_text(self, tmp_path, text):
        prep = TextPreprocessor(make_config(tmp_path))
        assert prep.preprocess(text) == []
