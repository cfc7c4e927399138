"""Tests for pi.console.trie -- completion prefix tree."""

from __future__ import annotations

import pytest

from pi.console.trie import (
    DEFAULT_ALPHABET,
    INVALID_INDEX,
    AlphabetIndex,
    Completion,
    CompletionTrie,
    InvalidCharacterError,
    StructuralCorruptionError,
)


def make_trie(*words: str) -> CompletionTrie:
    trie = CompletionTrie()
    for word in words:
        trie.insert(word)
    return trie


class TestAlphabetIndex:
    def test_default_alphabet_size(self) -> None:
        assert len(AlphabetIndex()) == 26 + 26 + 10 + 2

    def test_indices_follow_ascii_order(self) -> None:
        index = AlphabetIndex("ba-")
        assert index.index("-") == 0
        assert index.index("a") == 1
        assert index.index("b") == 2
        assert index.char(1) == "a"

    def test_rejected_characters_map_to_invalid(self) -> None:
        index = AlphabetIndex()
        for char in (" ", "!", ".", "\t", "\x7f", "é"):
            assert index.index(char) == INVALID_INDEX

    def test_accepted_set_is_default_alphabet(self) -> None:
        index = AlphabetIndex()
        assert all(index.index(c) != INVALID_INDEX for c in DEFAULT_ALPHABET)


class TestInsert:
    def test_insert_adds_word(self) -> None:
        trie = make_trie("help")
        assert "help" in trie
        assert len(trie) == 1

    def test_prefix_of_word_is_not_a_word(self) -> None:
        trie = make_trie("help")
        assert "hel" not in trie

    def test_insert_is_idempotent(self) -> None:
        once = make_trie("quit", "quick")
        twice = make_trie("quit", "quick", "quit", "quick")
        assert len(twice) == 2
        for prefix in ("", "q", "qui", "quit", "quick"):
            assert twice.query(prefix) == once.query(prefix)
            assert twice.list_completions(prefix) == once.list_completions(prefix)

    def test_invalid_character_raises(self) -> None:
        trie = CompletionTrie()
        with pytest.raises(InvalidCharacterError) as exc_info:
            trie.insert("bad word")
        assert exc_info.value.char == " "
        assert exc_info.value.word == "bad word"

    def test_invalid_character_is_a_value_error(self) -> None:
        with pytest.raises(ValueError):
            CompletionTrie().insert("café")

    def test_rejected_word_leaves_trie_unchanged(self) -> None:
        trie = make_trie("quit")
        with pytest.raises(InvalidCharacterError):
            trie.insert("quick!")
        assert len(trie) == 1
        assert trie.query("q") == Completion(1, "quit")

    def test_custom_alphabet(self) -> None:
        trie = CompletionTrie("ab")
        trie.insert("abba")
        with pytest.raises(InvalidCharacterError):
            trie.insert("abc")


class TestQuery:
    def test_empty_trie_has_no_match(self) -> None:
        assert CompletionTrie().query("") == Completion(0, "")
        assert CompletionTrie().query("a") == Completion(0, "")

    def test_missing_edge_has_no_match(self) -> None:
        trie = make_trie("help")
        result = trie.query("hex")
        assert result == Completion(0, "")
        assert not result.is_match

    def test_prefix_with_invalid_character_has_no_match(self) -> None:
        trie = make_trie("help")
        assert trie.query("he lp") == Completion(0, "")

    def test_unique_prefix_extends_to_word(self) -> None:
        trie = make_trie("help", "history")
        assert trie.query("he") == Completion(1, "help")
        assert trie.query("hi") == Completion(1, "history")

    def test_ambiguous_prefix_stops_at_branch(self) -> None:
        trie = make_trie("quit", "quick")
        assert trie.query("qui") == Completion(2, "qui")

    def test_short_prefix_extends_to_branch(self) -> None:
        trie = make_trie("quit", "quick")
        assert trie.query("q") == Completion(2, "qui")

    def test_exact_word_is_single_match(self) -> None:
        trie = make_trie("quit", "quick")
        assert trie.query("quit") == Completion(1, "quit")

    def test_terminal_node_stops_descent(self) -> None:
        trie = make_trie("quit", "quitter")
        assert trie.query("qu") == Completion(1, "quit")

    def test_count_is_number_of_branches(self) -> None:
        trie = make_trie("apple", "append", "apply")
        # Only 'e' and 'l' hang off "app"
        assert trie.query("app") == Completion(2, "app")
        assert trie.query("appl") == Completion(2, "appl")

    def test_empty_prefix_on_populated_trie(self) -> None:
        trie = make_trie("help", "history", "quit")
        assert trie.query("") == Completion(2, "")


class TestListCompletions:
    def test_lists_all_words_in_alphabet_order(self) -> None:
        trie = make_trie("apply", "apple", "append")
        assert trie.list_completions("app") == ["append", "apple", "apply"]

    def test_order_ignores_insertion_order(self) -> None:
        first = make_trie("quit", "quick")
        second = make_trie("quick", "quit")
        assert first.list_completions("q") == ["quick", "quit"]
        assert second.list_completions("q") == ["quick", "quit"]

    def test_no_match_is_empty(self) -> None:
        assert make_trie("quit").list_completions("x") == []
        assert CompletionTrie().list_completions("") == []

    def test_terminal_ambiguity_node_includes_descendants(self) -> None:
        trie = make_trie("quit", "quitter", "quick")
        assert trie.list_completions("quit") == ["quit", "quitter"]

    def test_lists_from_ambiguity_node_not_prefix(self) -> None:
        trie = make_trie("quit", "quick")
        assert trie.list_completions("q") == ["quick", "quit"]

    def test_mixed_alphabet_order(self) -> None:
        trie = make_trie("a_b", "a-b", "aZ", "a1", "ab")
        assert trie.list_completions("a") == ["a-b", "a1", "aZ", "a_b", "ab"]


class TestWordsAndDump:
    def test_words_lists_vocabulary(self) -> None:
        trie = make_trie("quit", "help", "history")
        assert trie.words() == ["help", "history", "quit"]

    def test_dump_empty(self) -> None:
        assert CompletionTrie().dump() == "Empty!"

    def test_dump_shows_edges_and_terminals(self) -> None:
        dump = make_trie("ab", "ac").dump()
        assert "Live children: [b] [c]" in dump
        assert "Word to here: ab" in dump
        assert "Is terminal: true" in dump
        assert dump.count("----- Begin Node -----") == 4


class TestStructuralCorruption:
    def test_childless_non_terminal_node_raises(self) -> None:
        trie = make_trie("quit")
        # Break the invariant by hand: unmark the only leaf
        node = trie._walk("quit")
        assert node is not None
        node.is_terminal = False
        with pytest.raises(StructuralCorruptionError):
            trie.query("q")

    def test_is_an_assertion_error(self) -> None:
        assert issubclass(StructuralCorruptionError, AssertionError)
