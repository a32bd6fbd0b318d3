"""Dictionary loading for sensitive word lists."""

import json
import logging
from pathlib import Path
from typing import Any, Optional

import yaml
import jsonschema

logger = logging.getLogger(__name__)

PACKAGE_DIR = Path(__file__).parent
DEFAULT_DICTIONARY = PACKAGE_DIR / "dictionaries" / "default.yml"
SCHEMA_PATH = PACKAGE_DIR / "schemas" / "dictionary-schema.json"


class WordDictionary:
    """Sensitive words grouped by namespace."""

    def __init__(self) -> None:
        """Initialize empty dictionary."""
        self.namespaces: dict[str, list[str]] = {}  # namespace -> [word]
        self.neglect_words: list[str] = []
        self._version: int = 0

    def add_word(self, namespace: str, word: str) -> bool:
        """Add a word to a namespace; returns False for empty or repeated words."""
        word = word.strip()
        if not word:
            return False

        words = self.namespaces.setdefault(namespace, [])
        if word in words:
            return False

        for other, other_words in self.namespaces.items():
            if other != namespace and word in other_words:
                logger.warning(f"Word {word!r} already listed in namespace {other}")
                break

        words.append(word)
        self._version += 1
        return True

    def add_neglect_word(self, char: str) -> None:
        """Register a neglect character."""
        if char not in self.neglect_words:
            self.neglect_words.append(char)
            self._version += 1

    def get_namespace_words(self, namespace: str) -> list[str]:
        """Get all words for a namespace."""
        return self.namespaces.get(namespace, [])

    def get_all_words(self) -> list[str]:
        """Get all words, deduplicated, in first-seen order."""
        return list(dict.fromkeys(w for words in self.namespaces.values() for w in words))

    @property
    def version(self) -> int:
        """Get current dictionary version (increments on changes)."""
        return self._version

    def __len__(self) -> int:
        """Return number of distinct words."""
        return len(self.get_all_words())

    def __repr__(self) -> str:
        """String representation."""
        return f"WordDictionary(words={len(self)}, namespaces={list(self.namespaces.keys())})"


def load_dictionary(
    paths: Optional[list[str]] = None,
    validate_schema: bool = True,
) -> WordDictionary:
    """
    Load sensitive words from YAML or plain-text files.

    YAML files hold a namespace, a word list and optional neglect characters.
    Any other file is read as one word per line, with the file stem as the
    namespace.

    Args:
        paths: List of file paths to load. If None, loads the bundled default.
        validate_schema: Whether to validate YAML files against the JSON schema

    Returns:
        WordDictionary with loaded words

    Raises:
        ValueError: If a YAML file fails validation
    """
    dictionary = WordDictionary()

    if paths is None:
        paths = [str(DEFAULT_DICTIONARY)]

    for path_str in paths:
        path = Path(path_str)
        if not path.exists():
            logger.warning(f"Dictionary file not found: {path}")
            continue

        logger.info(f"Loading words from {path}")
        if path.suffix in (".yml", ".yaml"):
            data = _load_yaml_file(path)
            if validate_schema:
                _validate_schema(data)
            _parse_dictionary_file(dictionary, data)
        else:
            for word in _load_text_file(path):
                dictionary.add_word(path.stem, word)

    logger.info(
        f"Loaded {len(dictionary)} words from {len(dictionary.namespaces)} namespaces"
    )
    return dictionary


def _load_yaml_file(path: Path) -> dict[str, Any]:
    """Load YAML file."""
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def _load_text_file(path: Path) -> list[str]:
    """Load one word per line, skipping blank lines."""
    with open(path, "r", encoding="utf-8") as f:
        return [line.strip() for line in f if line.strip()]


def _validate_schema(data: dict[str, Any]) -> None:
    """Validate dictionary data against JSON schema."""
    if not SCHEMA_PATH.exists():
        logger.warning("Dictionary schema not found, skipping validation")
        return

    with open(SCHEMA_PATH, "r", encoding="utf-8") as f:
        schema = json.load(f)

    try:
        jsonschema.validate(data, schema)
    except jsonschema.ValidationError as e:
        raise ValueError(f"Dictionary schema validation failed: {e.message}") from e


def _parse_dictionary_file(dictionary: WordDictionary, data: dict[str, Any]) -> None:
    """Add the words and neglect characters of one YAML file."""
    namespace = data["namespace"]

    added = 0
    for word in data.get("words", []):
        if dictionary.add_word(namespace, str(word)):
            added += 1

    for char in data.get("neglect_words", []):
        dictionary.add_neglect_word(str(char))

    logger.debug(f"Namespace {namespace}: {added} words added")
