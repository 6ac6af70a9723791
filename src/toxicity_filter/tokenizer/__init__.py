"""
WordPiece tokenization for the toxicity classifier.

Components:
- Vocabulary / SpecialTokens: token-to-id mapping loaded from exported files
- WordPieceTokenizer: text -> fixed-length EncodedInput
- exceptions: construction-time tokenizer errors
"""

from toxicity_filter.tokenizer.exceptions import (
    MissingSpecialTokensError,
    TokenizerError,
    VocabularyError,
)
from toxicity_filter.tokenizer.vocabulary import SpecialTokens, Vocabulary
from toxicity_filter.tokenizer.wordpiece import WordPieceTokenizer

__all__ = [
    "SpecialTokens",
    "Vocabulary",
    "WordPieceTokenizer",
    "TokenizerError",
    "MissingSpecialTokensError",
    "VocabularyError",
]
