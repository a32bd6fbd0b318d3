"""Keyword trie with Aho-Corasick failure links."""

import logging
from typing import Optional

from wordshield.models import Node, ROOT_KEY

logger = logging.getLogger(__name__)

ROOT = 0


def fold_char(char: str) -> str:
    """
    Upper-case a single character.

    Characters whose upper-case form is longer than one character (e.g. "ß")
    are returned unchanged so that scan positions stay aligned with the input.
    """
    upper = char.upper()
    if len(upper) != 1:
        return char
    return upper


class Automaton:
    """
    Keyword trie plus failure table.

    Words are inserted first, then ``build_failure_links`` finalizes the
    automaton. After that the automaton is read-only and may be shared by
    concurrent scans.
    """

    def __init__(self, fold_case: bool = False) -> None:
        """
        Initialize an empty automaton.

        Args:
            fold_case: Upper-case dictionary words on insertion so that they
                       match the upper-cased scan keys
        """
        self.fold_case = fold_case
        self.nodes: list[Node] = [Node(ROOT_KEY)]
        self._depth: Optional[int] = None

    @property
    def root(self) -> Node:
        """Return the root node."""
        return self.nodes[ROOT]

    @property
    def is_built(self) -> bool:
        """Return True once the failure table exists."""
        return self._depth is not None

    @property
    def depth(self) -> int:
        """Return the trie depth, 0 while the failure table is not built."""
        return self._depth or 0

    def insert(self, word: str) -> bool:
        """
        Insert a word into the trie.

        Args:
            word: Dictionary word

        Returns:
            False for empty or non-string input, or once the failure table
            is built; True otherwise
        """
        if not word or not isinstance(word, str):
            return False
        if self.is_built:
            logger.warning(f"Automaton already built, ignoring word: {word!r}")
            return False

        if self.fold_case:
            word = "".join(fold_char(c) for c in word)

        current = ROOT
        for char in word:
            child = self.nodes[current].children.get(char)
            if child is None:
                child = len(self.nodes)
                self.nodes.append(
                    Node(char, parent=current, depth=self.nodes[current].depth + 1)
                )
                self.nodes[current].children[char] = child
            current = child

        self.nodes[current].terminal = True
        return True

    def build_failure_links(self) -> int:
        """
        Build the failure table breadth-first, one trie level at a time.

        Returns:
            Number of levels processed, i.e. the length of the longest word
        """
        if self._depth is not None:
            logger.debug("Failure table already built")
            return self._depth

        depth = 0
        level = list(self.root.children.values())
        while level:
            depth += 1
            next_level: list[int] = []
            for handle in level:
                node = self.nodes[handle]
                node.failure = ROOT
                next_level.extend(node.children.values())

                parent = self.nodes[node.parent] if node.parent is not None else None
                if parent is None:
                    continue
                failure = parent.failure
                while failure is not None:
                    target = self.nodes[failure].children.get(node.key)
                    if target is not None:
                        node.failure = target
                        break
                    failure = self.nodes[failure].failure
            level = next_level

        self._depth = depth
        logger.debug(f"Built failure table: {len(self.nodes)} nodes, depth {depth}")
        return depth

    def transition(self, handle: int, key: str) -> Optional[int]:
        """Return the child of ``handle`` keyed by ``key``, if any."""
        return self.nodes[handle].children.get(key)

    def follow_failure(self, handle: int, key: str) -> Optional[tuple[int, int]]:
        """
        Walk the failure chain of ``handle`` looking for a transition on ``key``.

        Returns:
            (chain node, transition target) for the first chain node that has
            the transition, or None when the chain is exhausted
        """
        failure = self.nodes[handle].failure
        while failure is not None:
            target = self.nodes[failure].children.get(key)
            if target is not None:
                return failure, target
            failure = self.nodes[failure].failure
        return None

    def __len__(self) -> int:
        """Return number of nodes, root included."""
        return len(self.nodes)

    def __repr__(self) -> str:
        """String representation."""
        return f"Automaton(nodes={len(self.nodes)}, depth={self.depth}, built={self.is_built})"
