"""Tests for the vocabulary text parser."""

from fynix.domain.vocabulary.entities.vocab_list import VocabPair
from fynix.domain.vocabulary.services.vocab_parser import normalize_line, parse_vocab_pairs


class TestParseVocabPairs:
    def test_mixed_notations(self):
        pairs = parse_vocab_pairs("Hund - dog\nKatze : cat\nBaum (tree)")
        assert pairs == [
            VocabPair(term="Hund", translation="dog"),
            VocabPair(term="Katze", translation="cat"),
            VocabPair(term="Baum", translation="tree"),
        ]

    def test_splits_on_first_separator_only(self):
        pairs = parse_vocab_pairs("E-Mail - e-mail - message")
        assert pairs == [VocabPair(term="E-Mail", translation="e-mail - message")]

    def test_dash_variants_and_equals_are_normalized(self):
        pairs = parse_vocab_pairs("Apfel – apple\nBirne = pear\nHaus\thouse")
        assert [pair.term for pair in pairs] == ["Apfel", "Birne", "Haus"]
        assert [pair.translation for pair in pairs] == ["apple", "pear", "house"]

    def test_bullets_are_stripped(self):
        pairs = parse_vocab_pairs("• Tisch - table\n* Stuhl - chair")
        assert pairs == [
            VocabPair(term="Tisch", translation="table"),
            VocabPair(term="Stuhl", translation="chair"),
        ]

    def test_alternating_lines_fallback(self):
        pairs = parse_vocab_pairs("Sonne\nsun\nMond\nmoon")
        assert pairs == [
            VocabPair(term="Sonne", translation="sun"),
            VocabPair(term="Mond", translation="moon"),
        ]

    def test_alternating_lines_skip_numeric_terms(self):
        pairs = parse_vocab_pairs("12\npage\nStern\nstar")
        assert pairs == [VocabPair(term="Stern", translation="star")]

    def test_blank_lines_are_ignored(self):
        assert parse_vocab_pairs("\n\nRot - red\n\n") == [VocabPair(term="Rot", translation="red")]

    def test_nothing_recognizable(self):
        assert parse_vocab_pairs("") == []
        assert parse_vocab_pairs("just one line") == []

    def test_overlong_terms_are_rejected(self):
        assert parse_vocab_pairs("x" * 250 + " - y") == []


class TestNormalizeLine:
    def test_collapses_whitespace(self):
        assert normalize_line("  Hund    -   dog  ") == "Hund - dog"
