"""Data models for wordshield."""

from dataclasses import dataclass, field
from typing import Optional

ROOT_KEY = "root"


@dataclass
class Node:
    """Single automaton state.

    ``parent`` and ``failure`` are handles into the owning automaton's node
    list, never references, so the graph holds no cycles.
    """

    key: str
    terminal: bool = False
    parent: Optional[int] = None
    failure: Optional[int] = None
    depth: int = 0
    children: dict[str, int] = field(default_factory=dict)


@dataclass
class PartialMatch:
    """In-flight candidate match, local to one scan."""

    start_index: int
    last_match_index: int
    current_node: int
    matched_indices: list[int] = field(default_factory=list)
    matched_text: str = ""


@dataclass
class Match:
    """Single keyword match result."""

    keyword: str  # Matched characters, original casing
    indices: tuple[int, ...] = ()

    @property
    def span(self) -> tuple[int, int]:
        """Return (start, end) tuple covering every matched position."""
        if not self.indices:
            return (0, 0)
        return (self.indices[0], self.indices[-1] + 1)


@dataclass
class FilterResult:
    """Result from a filter or check operation."""

    original_text: str
    text: str
    matches: list[Match] = field(default_factory=list)
    all_clear: bool = True

    @property
    def matched_keywords(self) -> list[str]:
        """Return matched keywords in completion order."""
        return [m.keyword for m in self.matches]

    @property
    def has_matches(self) -> bool:
        """Return True if any matches found."""
        return len(self.matches) > 0

    @property
    def match_count(self) -> int:
        """Return number of matches."""
        return len(self.matches)
