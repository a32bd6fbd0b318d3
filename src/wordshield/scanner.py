"""Single-pass keyword scanner."""

import logging
from collections.abc import Collection
from typing import Optional

from wordshield.automaton import ROOT, Automaton, fold_char
from wordshield.models import FilterResult, Match, PartialMatch

logger = logging.getLogger(__name__)


class _Scan:
    """Per-call scanning state: candidates, output buffer and results."""

    def __init__(
        self,
        automaton: Automaton,
        text: str,
        replacement: str,
        short_circuit: bool,
        redact: bool,
    ) -> None:
        self.automaton = automaton
        self.text = text
        self.replacement = replacement
        self.short_circuit = short_circuit
        self.redact = redact
        self.buffer = list(text)
        self.matches: list[Match] = []
        self.all_clear = True

    def complete(self, candidate: PartialMatch) -> bool:
        """
        Record a complete match.

        Returns:
            True when the scan must stop (short-circuit mode)
        """
        self.all_clear = False
        if self.short_circuit:
            return True

        self.matches.append(
            Match(keyword=candidate.matched_text, indices=tuple(candidate.matched_indices))
        )
        if self.redact:
            for index in candidate.matched_indices:
                self.buffer[index] = self.replacement
        return False

    def restart(
        self, candidate: PartialMatch, index: int, char: str, key: str, stale: bool
    ) -> Optional[PartialMatch]:
        """
        Open a candidate from the failure chain of ``candidate``, if any.

        A stale candidate carries no positions, so it may only restart from
        the root.
        """
        if stale:
            target = self.automaton.transition(ROOT, key)
            if target is None:
                return None
            return PartialMatch(
                start_index=index,
                last_match_index=index,
                current_node=target,
                matched_indices=[index],
                matched_text=char,
            )

        found = self.automaton.follow_failure(candidate.current_node, key)
        if found is None:
            return None

        chain_node, target = found
        # The chain node's path is a suffix of the candidate's path
        carried = self.automaton.nodes[chain_node].depth
        indices = candidate.matched_indices[len(candidate.matched_indices) - carried :]
        text = candidate.matched_text[len(candidate.matched_text) - carried :]
        return PartialMatch(
            start_index=index,
            last_match_index=index,
            current_node=target,
            matched_indices=indices + [index],
            matched_text=text + char,
        )

    def result(self) -> FilterResult:
        return FilterResult(
            original_text=self.text,
            text="".join(self.buffer) if self.redact else self.text,
            matches=self.matches,
            all_clear=self.all_clear,
        )


def scan(
    automaton: Automaton,
    text: str,
    neglect_words: Collection[str] = (),
    replacement: str = "*",
    short_circuit: bool = False,
    redact: bool = True,
    window: Optional[int] = None,
) -> FilterResult:
    """
    Scan text for dictionary words in a single left-to-right pass.

    Every input character is upper-cased (see ``fold_char``) before it is
    matched. Neglect characters are copied through and never touch an
    in-flight candidate, but they still count toward the staleness window
    because gaps are measured on absolute positions.

    Args:
        automaton: Built automaton
        text: Text to scan
        neglect_words: Characters skipped transparently, compared against the
                       upper-cased key
        replacement: Character written over matched positions
        short_circuit: Stop at the first complete match without recording it
        redact: Whether to produce redacted text
        window: Largest allowed gap between two characters of one candidate.
                Defaults to the trie depth.

    Returns:
        FilterResult. An unbuilt automaton matches nothing.
    """
    state = _Scan(automaton, text, replacement, short_circuit, redact)
    if not text or not automaton.is_built:
        return state.result()

    if window is None:
        window = automaton.depth

    candidates: dict[int, PartialMatch] = {}

    for index, char in enumerate(text):
        key = fold_char(char)
        if key in neglect_words:
            continue

        if not candidates:
            target = automaton.transition(ROOT, key)
            if target is None:
                continue

            candidate = PartialMatch(
                start_index=index,
                last_match_index=index,
                current_node=target,
                matched_indices=[index],
                matched_text=char,
            )
            node = automaton.nodes[target]
            if node.terminal and state.complete(candidate):
                return state.result()
            if node.children:
                candidates[index] = candidate
            continue

        survivors: dict[int, PartialMatch] = {}
        restarts: dict[int, PartialMatch] = {}
        for start, candidate in candidates.items():
            target = automaton.transition(candidate.current_node, key)
            stale = index - candidate.last_match_index > window
            if target is None:
                restarted = state.restart(candidate, index, char, key, stale)
                previous = restarts.get(index)
                # Keep the deepest restart opened at this position
                if restarted is not None and (
                    previous is None
                    or len(previous.matched_indices) < len(restarted.matched_indices)
                ):
                    restarts[index] = restarted

            if stale:
                continue

            if target is not None:
                candidate.matched_indices.append(index)
                candidate.matched_text += char
                candidate.last_match_index = index
                candidate.current_node = target
                if automaton.nodes[target].terminal and state.complete(candidate):
                    return state.result()

            survivors[start] = candidate

        for start, candidate in restarts.items():
            if automaton.nodes[candidate.current_node].terminal and state.complete(
                candidate
            ):
                return state.result()
            survivors.setdefault(start, candidate)

        candidates = survivors

    return state.result()
