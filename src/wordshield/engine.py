"""Sensitive word filter facade."""

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Optional, Union

from wordshield.automaton import Automaton
from wordshield.models import FilterResult
from wordshield.scanner import scan

if TYPE_CHECKING:
    from wordshield.dictionary import WordDictionary

logger = logging.getLogger(__name__)


class SensitiveWordFilter:
    """
    Detects and redacts dictionary words in text.

    Words are added with ``insert`` and the automaton is finalized with
    ``create_failure_table``; ``build`` does both. Until the failure table
    exists every scan reports the text as clean.
    """

    def __init__(
        self,
        fold_case: bool = False,
        replacement: str = "*",
        window: Optional[int] = None,
    ) -> None:
        """
        Initialize an empty filter.

        Args:
            fold_case: Upper-case dictionary words on insertion. Scanned text is
                       always upper-cased, so without this only words that are
                       already upper-case (or caseless, e.g. CJK) can match.
            replacement: Character used to overwrite matched positions
            window: Largest gap allowed between two matched characters of one
                    candidate. Defaults to the trie depth.
        """
        self.automaton = Automaton(fold_case=fold_case)
        self.window = window
        self._neglect_words: set[str] = set()
        self._replacement = "*"
        self.configure_replacement(replacement)

    @classmethod
    def from_dictionary(
        cls,
        dictionary: "WordDictionary",
        fold_case: bool = False,
        replacement: str = "*",
        window: Optional[int] = None,
    ) -> "SensitiveWordFilter":
        """Build a filter from every word and neglect character of a dictionary."""
        word_filter = build(
            dictionary.get_all_words(),
            fold_case=fold_case,
            replacement=replacement,
            window=window,
        )
        word_filter.set_neglect_words(dictionary.neglect_words)
        return word_filter

    def insert(self, word: str) -> bool:
        """Add a word; returns False for empty input or after the build."""
        return self.automaton.insert(word)

    def create_failure_table(self) -> int:
        """Finalize the automaton and return the trie depth."""
        return self.automaton.build_failure_links()

    @property
    def is_ready(self) -> bool:
        """Return True once the failure table is built."""
        return self.automaton.is_built

    @property
    def depth(self) -> int:
        return self.automaton.depth

    @property
    def neglect_words(self) -> frozenset[str]:
        return frozenset(self._neglect_words)

    @property
    def replacement(self) -> str:
        return self._replacement

    def set_neglect_words(self, words: Union[str, Iterable[str]]) -> None:
        """
        Register characters to skip while scanning.

        Registration is additive. Characters are compared against the
        upper-cased scan key, so alphabetic characters only take effect when
        given in upper case.

        Args:
            words: A string (each character is registered) or an iterable of
                   single-character strings
        """
        for word in words:
            if len(word) != 1:
                logger.warning(f"Ignoring neglect word longer than one character: {word!r}")
                continue
            self._neglect_words.add(word)

    def configure_replacement(self, char: str) -> None:
        """
        Set the redaction character.

        Raises:
            ValueError: If char is not a single character
        """
        if not isinstance(char, str) or len(char) != 1:
            raise ValueError(f"Replacement must be a single character, got {char!r}")
        self._replacement = char

    def every(self, text: str) -> bool:
        """
        Check text for dictionary words.

        Returns:
            True if the text is clean, False as soon as one word matches
        """
        return scan(
            self.automaton,
            text,
            neglect_words=self._neglect_words,
            replacement=self._replacement,
            short_circuit=True,
            redact=False,
            window=self.window,
        ).all_clear

    def filter(self, text: str, redact: bool = True) -> FilterResult:
        """
        Find and optionally redact dictionary words in text.

        Args:
            text: Text to filter
            redact: Whether to overwrite matched positions. When False the
                    original text is returned alongside the matches.

        Returns:
            FilterResult with the (redacted) text and matches
        """
        return scan(
            self.automaton,
            text,
            neglect_words=self._neglect_words,
            replacement=self._replacement,
            short_circuit=False,
            redact=redact,
            window=self.window,
        )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"SensitiveWordFilter(nodes={len(self.automaton)}, depth={self.depth}, "
            f"neglect_words={len(self._neglect_words)})"
        )


def build(
    patterns: Iterable[str],
    fold_case: bool = False,
    neglect_words: Optional[Union[str, Iterable[str]]] = None,
    replacement: str = "*",
    window: Optional[int] = None,
) -> SensitiveWordFilter:
    """
    Create a ready-to-use filter from a dictionary.

    Args:
        patterns: Dictionary words. Empty entries are skipped.
        fold_case: Upper-case words on insertion
        neglect_words: Characters to skip while scanning
        replacement: Redaction character
        window: Staleness window override

    Returns:
        SensitiveWordFilter with its failure table built
    """
    word_filter = SensitiveWordFilter(fold_case=fold_case, replacement=replacement, window=window)

    inserted = 0
    for word in patterns:
        if word_filter.insert(word):
            inserted += 1
        else:
            logger.debug(f"Skipping invalid dictionary entry: {word!r}")

    depth = word_filter.create_failure_table()
    if neglect_words:
        word_filter.set_neglect_words(neglect_words)

    logger.info(f"Built filter from {inserted} words (depth {depth})")
    return word_filter
