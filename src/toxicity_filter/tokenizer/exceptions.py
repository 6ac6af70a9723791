"""
Tokenizer construction errors.

Tokenization itself never fails; these are only raised while loading the
vocabulary and special tokens.
"""

from toxicity_filter.exceptions import ToxicityFilterError


class TokenizerError(ToxicityFilterError):
    """Base exception for tokenizer construction failures."""


class MissingSpecialTokensError(TokenizerError):
    """
    Raised when a required special token is not declared in the
    special-tokens file or does not exist in the vocabulary.
    """

    def __init__(self, message: str, missing: list[str] | None = None):
        details = {"missing": missing} if missing else None
        super().__init__(message, details)


class VocabularyError(TokenizerError):
    """Raised when the vocabulary is empty or otherwise unusable."""
