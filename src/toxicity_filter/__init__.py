"""
Toxicity Filter: layered content moderation for short user texts.

Pipeline per text:
- LRU result cache keyed by normalized text
- Two-tier keyword filter (critical / moderate lists)
- Neural toxicity classifier over WordPiece-tokenized input (fail-open)
- Aggregation into severity score, moderation level and user message

Architecture: ContentModerator core + FastAPI service + pluggable classifier backend
"""

__version__ = "0.1.0"
