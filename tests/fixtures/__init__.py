"""
Test fixtures for the Toxicity Filter.

Contains small resource files for testing:
- vocab.txt: Tiny WordPiece vocabulary (special tokens at ids 0-4)
- special_tokens.txt: key=value special token declarations
- keywords_critical.txt: Critical keyword list with [hate] section
- keywords_moderate.txt: Moderate keyword list (with a case-folded duplicate)
"""
