"""
Integration tests for the Toxicity Filter.

Test components together:
- API endpoints (FastAPI TestClient with dependency overrides)
- Moderator over the fixture resources with a fake classifier
"""
