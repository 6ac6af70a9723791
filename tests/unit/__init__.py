"""
Unit tests for the Toxicity Filter.

Test individual components in isolation:
- Data models (enums totality, result properties, presets)
- Tokenizer (vocabulary loading, WordPiece splitting, padding/truncation)
- LRU cache (eviction order, promotion, thread safety)
- Keyword filter (tiers, section markers)
- Classifier boundary (probability parsing, HTTP client error mapping)
- Aggregation and ContentModerator (modes, caching, fail-open)
"""
