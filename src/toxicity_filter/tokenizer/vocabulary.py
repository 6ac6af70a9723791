"""
WordPiece vocabulary and special tokens.

The vocabulary file is newline-delimited: the n-th non-empty line is the token
with id n. The special-tokens file holds `key=value` lines naming the
classification-start, separator, padding, unknown and mask tokens.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping, Optional

import structlog

from toxicity_filter.resources import read_resource_lines
from toxicity_filter.tokenizer.exceptions import MissingSpecialTokensError, VocabularyError

logger = structlog.get_logger(__name__)

DEFAULT_MASK_TOKEN = "<mask>"


@dataclass(frozen=True)
class SpecialTokens:
    """Names of the five distinguished tokens."""

    cls_token: str
    sep_token: str
    pad_token: str
    unk_token: str
    mask_token: str = DEFAULT_MASK_TOKEN

    REQUIRED_KEYS = ("cls_token", "sep_token", "pad_token", "unk_token")

    def as_dict(self) -> dict[str, str]:
        return {
            "cls_token": self.cls_token,
            "sep_token": self.sep_token,
            "pad_token": self.pad_token,
            "unk_token": self.unk_token,
            "mask_token": self.mask_token,
        }

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "SpecialTokens":
        """
        Parse `key=value` lines.

        Raises:
            MissingSpecialTokensError: cls/sep/pad/unk not declared
        """
        values: dict[str, str] = {}
        for line in lines:
            key, sep, value = line.strip().partition("=")
            if sep and key.strip() and value.strip():
                values[key.strip()] = value.strip()

        missing = [key for key in cls.REQUIRED_KEYS if key not in values]
        if missing:
            raise MissingSpecialTokensError(
                f"Special tokens file is missing required keys: {', '.join(missing)}",
                missing=missing,
            )

        return cls(
            cls_token=values["cls_token"],
            sep_token=values["sep_token"],
            pad_token=values["pad_token"],
            unk_token=values["unk_token"],
            mask_token=values.get("mask_token", DEFAULT_MASK_TOKEN),
        )

    @classmethod
    def from_file(cls, path: str | Path) -> "SpecialTokens":
        return cls.from_lines(read_resource_lines(path))


class Vocabulary:
    """
    Token string to id mapping with resolved special-token ids.

    Read-only after construction. `size` is `max(id) + 1`, which is the
    exclusive upper bound for ids the classifier accepts.
    """

    def __init__(self, token_to_id: Mapping[str, int], special_tokens: SpecialTokens):
        if not token_to_id:
            raise VocabularyError("Vocabulary is empty")

        self._token_to_id: dict[str, int] = dict(token_to_id)
        self.special_tokens = special_tokens

        missing = [
            f"{key}={token}"
            for key, token in special_tokens.as_dict().items()
            if token not in self._token_to_id
        ]
        if missing:
            raise MissingSpecialTokensError(
                f"Special tokens not found in vocabulary: {', '.join(missing)}",
                missing=missing,
            )

        self.size = max(self._token_to_id.values()) + 1
        self.cls_id = self._token_to_id[special_tokens.cls_token]
        self.sep_id = self._token_to_id[special_tokens.sep_token]
        self.pad_id = self._token_to_id[special_tokens.pad_token]
        self.unk_id = self._token_to_id[special_tokens.unk_token]
        self.mask_id = self._token_to_id[special_tokens.mask_token]

    def __contains__(self, token: object) -> bool:
        return token in self._token_to_id

    def __len__(self) -> int:
        return len(self._token_to_id)

    def get(self, token: str) -> Optional[int]:
        return self._token_to_id.get(token)

    def is_valid_id(self, token_id: int) -> bool:
        return 0 <= token_id < self.size

    @classmethod
    def from_lines(cls, lines: Iterable[str], special_tokens: SpecialTokens) -> "Vocabulary":
        """Build from vocabulary lines; empty lines are skipped, duplicates keep the last id."""
        tokens = [line for line in lines if line]
        token_to_id = {token: index for index, token in enumerate(tokens)}
        return cls(token_to_id, special_tokens)

    @classmethod
    def from_files(
        cls, vocab_path: str | Path, special_tokens_path: str | Path
    ) -> "Vocabulary":
        """
        Load vocabulary and special tokens from disk.

        Raises:
            ResourceLoadError: Either file missing or unreadable
            MissingSpecialTokensError: Required special token undeclared or absent
            VocabularyError: Vocabulary file has no tokens
        """
        special_tokens = SpecialTokens.from_file(special_tokens_path)
        vocabulary = cls.from_lines(read_resource_lines(vocab_path), special_tokens)
        logger.info(
            "Vocabulary loaded",
            path=str(vocab_path),
            token_count=len(vocabulary),
            vocabulary_size=vocabulary.size,
        )
        return vocabulary
