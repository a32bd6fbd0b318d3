"""
wordshield: Detect and redact sensitive words in text.

This package builds a keyword automaton from a dictionary and scans text in a
single pass, catching overlapping matches and words split by ignored
separator characters.
"""

__version__ = "0.1.0"

from wordshield.engine import SensitiveWordFilter, build
from wordshield.dictionary import load_dictionary, WordDictionary
from wordshield.models import FilterResult, Match

__all__ = [
    "SensitiveWordFilter",
    "build",
    "load_dictionary",
    "WordDictionary",
    "FilterResult",
    "Match",
]
