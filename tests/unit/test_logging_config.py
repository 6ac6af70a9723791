"""
Unit tests for logging processors.
"""

import logging

from toxicity_filter.logging_config import (
    APP_NAME,
    add_app_context,
    configure_logging,
    redact_user_text,
)


def test_app_context():
    assert add_app_context(None, "info", {"event": "x"}) == {"event": "x", "app": APP_NAME}


def test_user_text_replaced_by_length():
    event = redact_user_text(
        None,
        "info",
        {"event": "Content moderated", "text": "some insult", "texts": ["a", "b"], "level": "ok"},
    )

    assert event == {
        "event": "Content moderated",
        "text_length": 11,
        "texts_count": 2,
        "level": "ok",
    }


def test_events_without_text_untouched():
    event = {"event": "Health check", "status": "healthy"}

    assert redact_user_text(None, "info", dict(event)) == event


def test_configure_logging_sets_levels():
    configure_logging("debug", "production")

    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING

    configure_logging("not-a-level", "development")

    assert logging.getLogger().level == logging.INFO
