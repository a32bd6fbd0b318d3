"""Tests for trie construction and the failure table."""

import pytest

from wordshield.automaton import ROOT, Automaton, fold_char


def node_at(automaton, path):
    """Follow a path of characters from the root and return the handle."""
    handle = ROOT
    for char in path:
        handle = automaton.nodes[handle].children[char]
    return handle


@pytest.fixture
def automaton():
    """Classic he/she/his/hers automaton."""
    automaton = Automaton()
    for word in ["HE", "SHE", "HIS", "HERS"]:
        automaton.insert(word)
    automaton.build_failure_links()
    return automaton


class TestInsert:
    """Tests for trie insertion."""

    def test_insert_marks_terminal(self):
        """Test that the last node of a word is terminal."""
        automaton = Automaton()
        assert automaton.insert("AB") is True

        assert automaton.nodes[node_at(automaton, "AB")].terminal is True
        assert automaton.nodes[node_at(automaton, "A")].terminal is False

    def test_insert_empty_word(self):
        """Test that empty input is rejected without mutation."""
        automaton = Automaton()
        assert automaton.insert("") is False
        assert automaton.insert(None) is False
        assert len(automaton) == 1

    def test_shared_prefix_only_adds_suffix(self):
        """Test that overlapping words share their prefix nodes."""
        automaton = Automaton()
        automaton.insert("多")
        automaton.insert("多特")
        automaton.insert("多特")

        assert len(automaton) == 3
        assert automaton.nodes[node_at(automaton, "多")].terminal is True
        assert automaton.nodes[node_at(automaton, "多特")].terminal is True

    def test_terminal_never_cleared(self):
        """Test that a shorter word stays terminal after a longer insert."""
        automaton = Automaton()
        automaton.insert("多特")
        automaton.insert("多")
        automaton.insert("多特别")

        assert automaton.nodes[node_at(automaton, "多")].terminal is True
        assert automaton.nodes[node_at(automaton, "多特")].terminal is True

    def test_parent_and_depth(self):
        """Test parent handles and depths."""
        automaton = Automaton()
        automaton.insert("ABC")

        c = automaton.nodes[node_at(automaton, "ABC")]
        assert c.depth == 3
        assert c.parent == node_at(automaton, "AB")
        assert automaton.root.key == "root"
        assert automaton.root.parent is None

    def test_fold_case_insert(self):
        """Test that fold_case upper-cases dictionary words."""
        automaton = Automaton(fold_case=True)
        automaton.insert("test")

        assert "T" in automaton.root.children
        assert "t" not in automaton.root.children

    def test_insert_after_build_rejected(self):
        """Test that the automaton is frozen once built."""
        automaton = Automaton()
        automaton.insert("AB")
        automaton.build_failure_links()

        assert automaton.insert("CD") is False
        assert "C" not in automaton.root.children


class TestFailureTable:
    """Tests for failure link construction."""

    def test_depth(self, automaton):
        """Test that the build returns the longest word length."""
        assert automaton.depth == 4
        assert automaton.is_built is True

    def test_first_level_fails_to_root(self, automaton):
        """Test that root children fail to the root."""
        for handle in automaton.root.children.values():
            assert automaton.nodes[handle].failure == ROOT

    def test_failure_links(self, automaton):
        """Test failure links point at the longest proper suffix in the trie."""
        assert automaton.nodes[node_at(automaton, "SH")].failure == node_at(automaton, "H")
        assert automaton.nodes[node_at(automaton, "SHE")].failure == node_at(automaton, "HE")
        assert automaton.nodes[node_at(automaton, "HIS")].failure == node_at(automaton, "S")
        assert automaton.nodes[node_at(automaton, "HERS")].failure == node_at(automaton, "S")
        assert automaton.nodes[node_at(automaton, "HER")].failure == ROOT

    def test_root_has_no_failure(self, automaton):
        """Test that the root keeps no failure link."""
        assert automaton.root.failure is None

    def test_empty_trie(self):
        """Test building an empty trie."""
        automaton = Automaton()
        assert automaton.build_failure_links() == 0
        assert automaton.is_built is True

    def test_unbuilt_depth(self):
        """Test that depth is 0 before the build."""
        automaton = Automaton()
        automaton.insert("ABC")
        assert automaton.is_built is False
        assert automaton.depth == 0

    def test_second_build_is_noop(self, automaton):
        """Test that building twice keeps the first result."""
        nodes = len(automaton)
        assert automaton.build_failure_links() == 4
        assert len(automaton) == nodes

    def test_follow_failure(self, automaton):
        """Test walking the failure chain for a transition."""
        # SHE -> HE, and HE has an R child
        found = automaton.follow_failure(node_at(automaton, "SHE"), "R")
        assert found == (node_at(automaton, "HE"), node_at(automaton, "HER"))

        assert automaton.follow_failure(node_at(automaton, "SHE"), "Q") is None


class TestFoldChar:
    """Tests for per-character upper-casing."""

    def test_ascii(self):
        assert fold_char("a") == "A"
        assert fold_char("A") == "A"

    def test_caseless(self):
        assert fold_char("淘") == "淘"
        assert fold_char("&") == "&"

    def test_length_changing_upper_kept(self):
        """Test that characters upper-casing to several characters are kept."""
        assert fold_char("ß") == "ß"
