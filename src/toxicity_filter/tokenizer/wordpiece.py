"""
WordPiece tokenizer compatible with BERT-style classifiers.

Encodes text into fixed-length token ids and an attention mask using greedy
longest-match subword splitting, with continuation pieces marked by `##`.
Tokenization is a pure function of the vocabulary and never raises.
"""

from pathlib import Path

import structlog

from toxicity_filter.models.classifier_models import EncodedInput
from toxicity_filter.tokenizer.vocabulary import Vocabulary

logger = structlog.get_logger(__name__)

# Pre-processing cut applied before splitting, bounds worst-case cost
MAX_INPUT_CHARS = 500
# Longer words are mapped straight to the unknown token
MAX_CHARS_PER_WORD = 100
CONTINUATION_PREFIX = "##"
DEFAULT_MAX_LENGTH = 128


class WordPieceTokenizer:
    """
    Offline WordPiece tokenizer.

    Output layout: [CLS] pieces... [SEP] [PAD]... with exactly `max_length`
    positions. When the sequence is truncated the separator is kept as the
    last position and the attention mask is all ones.
    """

    def __init__(self, vocabulary: Vocabulary, max_length: int = DEFAULT_MAX_LENGTH):
        """
        Args:
            vocabulary: Loaded vocabulary with resolved special tokens
            max_length: Output sequence length (>= 2, room for CLS and SEP)
        """
        if max_length < 2:
            raise ValueError(f"max_length must be at least 2, got {max_length}")

        self.vocabulary = vocabulary
        self.max_length = max_length

        special = vocabulary.special_tokens
        self._cls_token = special.cls_token
        self._sep_token = special.sep_token
        self._unk_token = special.unk_token

    @classmethod
    def from_files(
        cls,
        vocab_path: str | Path,
        special_tokens_path: str | Path,
        max_length: int = DEFAULT_MAX_LENGTH,
    ) -> "WordPieceTokenizer":
        vocabulary = Vocabulary.from_files(vocab_path, special_tokens_path)
        return cls(vocabulary, max_length=max_length)

    def tokenize(self, text: str) -> EncodedInput:
        """
        Encode text into `max_length` token ids and attention mask.

        Args:
            text: Arbitrary input text (may be empty)

        Returns:
            EncodedInput with both sequences exactly `max_length` long
        """
        cleaned = text.strip()[:MAX_INPUT_CHARS]

        tokens = [self._cls_token]
        for word in cleaned.split():
            tokens.extend(self.wordpiece(word))
        tokens.append(self._sep_token)

        token_ids = [self._to_id(token) for token in tokens]

        if len(token_ids) > self.max_length:
            sep_id = self.vocabulary.sep_id
            if not self.vocabulary.is_valid_id(sep_id):
                sep_id = self.vocabulary.unk_id
            token_ids = token_ids[: self.max_length - 1] + [sep_id]

        attention_mask = [1] * len(token_ids)

        padding = self.max_length - len(token_ids)
        if padding > 0:
            pad_id = self.vocabulary.pad_id
            if not self.vocabulary.is_valid_id(pad_id):
                pad_id = 0
            token_ids.extend([pad_id] * padding)
            attention_mask.extend([0] * padding)

        return EncodedInput(token_ids=token_ids, attention_mask=attention_mask)

    def wordpiece(self, word: str) -> list[str]:
        """
        Split a single word into vocabulary pieces (greedy longest match).

        If some position has no matching piece, the unknown token is emitted
        for the rest of the word and matching stops.
        """
        if len(word) > MAX_CHARS_PER_WORD:
            return [self._unk_token]

        pieces: list[str] = []
        start = 0
        while start < len(word):
            end = len(word)
            match = None
            while start < end:
                candidate = word[start:end]
                if start > 0:
                    candidate = CONTINUATION_PREFIX + candidate
                if candidate in self.vocabulary:
                    match = candidate
                    break
                end -= 1

            if match is None:
                pieces.append(self._unk_token)
                break

            pieces.append(match)
            start = end

        return pieces

    def _to_id(self, token: str) -> int:
        token_id = self.vocabulary.get(token)
        if token_id is None or not self.vocabulary.is_valid_id(token_id):
            return self.vocabulary.unk_id
        return token_id

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"vocabulary_size={self.vocabulary.size}, "
            f"max_length={self.max_length})"
        )
