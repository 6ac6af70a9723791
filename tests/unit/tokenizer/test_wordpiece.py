"""
Unit tests for WordPieceTokenizer.

Covers fixed-length output, greedy longest-match splitting, unknown-token
fallbacks, truncation with separator preservation and padding.
"""

import pytest

from toxicity_filter.tokenizer.vocabulary import SpecialTokens, Vocabulary
from toxicity_filter.tokenizer.wordpiece import (
    MAX_CHARS_PER_WORD,
    WordPieceTokenizer,
)

CLS, SEP, PAD, UNK = 0, 1, 2, 3


class TestWordPieceTokenizer:
    """Tests for tokenize() on the seven-token vocabulary."""

    def test_worked_example(self, small_vocabulary: Vocabulary):
        """'testing' splits into test + ##ing and pads to max_length."""
        tokenizer = WordPieceTokenizer(small_vocabulary, max_length=8)

        encoded = tokenizer.tokenize("testing")

        assert encoded.token_ids == [0, 5, 6, 1, 2, 2, 2, 2]
        assert encoded.attention_mask == [1, 1, 1, 1, 0, 0, 0, 0]

    @pytest.mark.parametrize("text", ["", "   ", "\n\t "])
    def test_empty_input_is_cls_sep_then_padding(self, small_vocabulary: Vocabulary, text: str):
        tokenizer = WordPieceTokenizer(small_vocabulary, max_length=6)

        encoded = tokenizer.tokenize(text)

        assert encoded.token_ids == [CLS, SEP, PAD, PAD, PAD, PAD]
        assert encoded.attention_mask == [1, 1, 0, 0, 0, 0]

    def test_overlong_word_is_single_unknown(self, small_vocabulary: Vocabulary):
        tokenizer = WordPieceTokenizer(small_vocabulary, max_length=6)

        encoded = tokenizer.tokenize("t" * (MAX_CHARS_PER_WORD + 1))

        assert encoded.token_ids[:3] == [CLS, UNK, SEP]
        assert encoded.real_token_count == 3

    def test_word_at_length_cap_is_still_split(self, small_vocabulary: Vocabulary):
        tokenizer = WordPieceTokenizer(small_vocabulary, max_length=6)

        assert tokenizer.wordpiece("x" * MAX_CHARS_PER_WORD) == ["<unk>"]
        assert tokenizer.wordpiece("test") == ["test"]

    def test_unmatched_word_is_unknown(self, small_vocabulary: Vocabulary):
        tokenizer = WordPieceTokenizer(small_vocabulary, max_length=6)

        encoded = tokenizer.tokenize("xyz")

        assert encoded.token_ids[:3] == [CLS, UNK, SEP]

    def test_unmatched_suffix_ends_word_with_unknown(self, small_vocabulary: Vocabulary):
        """Once a position has no match the rest of the word is one unknown token."""
        tokenizer = WordPieceTokenizer(small_vocabulary, max_length=8)

        assert tokenizer.wordpiece("testxyz") == ["test", "<unk>"]
        assert tokenizer.tokenize("testxyz test").token_ids[:5] == [CLS, 5, UNK, 5, SEP]

    def test_tokenizer_is_case_sensitive(self, small_vocabulary: Vocabulary):
        tokenizer = WordPieceTokenizer(small_vocabulary, max_length=6)

        assert tokenizer.wordpiece("Test") == ["<unk>"]

    def test_truncation_keeps_separator_last(self, small_vocabulary: Vocabulary):
        tokenizer = WordPieceTokenizer(small_vocabulary, max_length=4)

        encoded = tokenizer.tokenize("test test test")

        assert encoded.token_ids == [CLS, 5, 5, SEP]
        assert encoded.attention_mask == [1, 1, 1, 1]

    def test_exact_fit_is_not_truncated(self, small_vocabulary: Vocabulary):
        tokenizer = WordPieceTokenizer(small_vocabulary, max_length=4)

        encoded = tokenizer.tokenize("testing")

        assert encoded.token_ids == [CLS, 5, 6, SEP]
        assert encoded.attention_mask == [1, 1, 1, 1]

    def test_input_is_cut_before_splitting(self, small_vocabulary: Vocabulary):
        """1000 characters of 'test ' keep only the first 500 (100 words)."""
        tokenizer = WordPieceTokenizer(small_vocabulary, max_length=128)

        encoded = tokenizer.tokenize("test " * 200)

        assert encoded.real_token_count == 102
        assert encoded.token_ids[101] == SEP
        assert encoded.token_ids[102:] == [PAD] * 26

    @pytest.mark.parametrize(
        "text",
        [
            "testing",
            "a" * 5000,
            "test " * 300,
            "emoji 🙂 and ünïcödé",
            "  leading and trailing  ",
        ],
    )
    def test_output_shape_and_id_range(self, small_vocabulary: Vocabulary, text: str):
        tokenizer = WordPieceTokenizer(small_vocabulary, max_length=10)

        encoded = tokenizer.tokenize(text)

        assert len(encoded.token_ids) == 10
        assert len(encoded.attention_mask) == 10
        assert all(0 <= token_id < small_vocabulary.size for token_id in encoded.token_ids)
        assert encoded.token_ids[0] == CLS

    def test_max_length_below_two_rejected(self, small_vocabulary: Vocabulary):
        with pytest.raises(ValueError, match="max_length"):
            WordPieceTokenizer(small_vocabulary, max_length=1)

    def test_minimum_length_tokenizer(self, small_vocabulary: Vocabulary):
        tokenizer = WordPieceTokenizer(small_vocabulary, max_length=2)

        assert tokenizer.tokenize("testing").token_ids == [CLS, SEP]
        assert tokenizer.tokenize("").token_ids == [CLS, SEP]


class TestFixtureVocabulary:
    """Tests against the on-disk fixture vocabulary."""

    def test_multi_piece_words(self, tokenizer: WordPieceTokenizer):
        encoded = tokenizer.tokenize("unbreakable hellos")

        assert encoded.token_ids[:7] == [CLS, 11, 12, 13, 14, 15, SEP]

    def test_from_files(self, fixtures_dir):
        tokenizer = WordPieceTokenizer.from_files(
            fixtures_dir / "vocab.txt",
            fixtures_dir / "special_tokens.txt",
            max_length=12,
        )

        encoded = tokenizer.tokenize("have a nice day")

        assert encoded.token_ids[:6] == [CLS, 7, 8, 9, 10, SEP]
        assert encoded.length == 12
        assert "max_length=12" in repr(tokenizer)


class TestOutOfRangeIds:
    """A corrupt vocabulary (negative ids) must still yield ids in [0, size)."""

    @pytest.fixture
    def corrupt_vocabulary(self, special_tokens: SpecialTokens) -> Vocabulary:
        # size is 6; </s>, <pad> and "bad" carry ids outside [0, 6)
        return Vocabulary(
            {"<s>": 0, "</s>": -1, "<pad>": -2, "<unk>": 3, "<mask>": 4, "test": 5, "bad": -7},
            special_tokens,
        )

    def test_word_id_clamped_to_unknown(self, corrupt_vocabulary: Vocabulary):
        tokenizer = WordPieceTokenizer(corrupt_vocabulary, max_length=3)

        encoded = tokenizer.tokenize("bad")

        assert corrupt_vocabulary.size == 6
        # "bad" and the separator both resolve to <unk>
        assert encoded.token_ids == [CLS, UNK, UNK]

    def test_padding_falls_back_to_zero(self, corrupt_vocabulary: Vocabulary):
        tokenizer = WordPieceTokenizer(corrupt_vocabulary, max_length=6)

        encoded = tokenizer.tokenize("test")

        assert encoded.token_ids == [CLS, 5, UNK, 0, 0, 0]
        assert encoded.attention_mask == [1, 1, 1, 0, 0, 0]

    def test_truncation_separator_falls_back_to_unknown(self, corrupt_vocabulary: Vocabulary):
        tokenizer = WordPieceTokenizer(corrupt_vocabulary, max_length=4)

        encoded = tokenizer.tokenize("test test test")

        assert encoded.token_ids == [CLS, 5, 5, UNK]
        assert encoded.attention_mask == [1, 1, 1, 1]

    @pytest.mark.parametrize(
        "text,max_length",
        [("", 4), ("bad test", 8), ("test bad test bad test", 4), ("x" * 200, 5)],
    )
    def test_all_ids_within_vocabulary_size(
        self, corrupt_vocabulary: Vocabulary, text: str, max_length: int
    ):
        encoded = WordPieceTokenizer(corrupt_vocabulary, max_length=max_length).tokenize(text)

        assert len(encoded.token_ids) == max_length
        assert all(0 <= token_id < corrupt_vocabulary.size for token_id in encoded.token_ids)
