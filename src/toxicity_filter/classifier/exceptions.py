"""
Custom exceptions for the classifier layer.

The ContentModerator catches all of these and fails open (the classifier
contributes no issues); they surface to callers only through direct use of a
classifier, e.g. health checks or the HTTP client's own tests.
"""

from toxicity_filter.exceptions import ToxicityFilterError


class ClassifierError(ToxicityFilterError):
    """
    Base exception for all classifier errors.

    Also raised for HTTP errors from the inference server that have no more
    specific mapping.
    """


class ClassifierUnavailableError(ClassifierError):
    """
    Raised when no model is loaded or the inference server reports the
    model as unavailable (404/503).
    """


class ClassifierInvalidOutputError(ClassifierError):
    """
    Raised when the classifier returns a malformed probability vector
    (empty, non-numeric, NaN or outside [0, 1]) or an unparseable body.
    """


class ClassifierConnectionError(ClassifierError):
    """
    Raised when the inference server cannot be reached.

    Network errors are retried with backoff by the HTTP client before this
    is raised.
    """


class ClassifierTimeoutError(ClassifierConnectionError):
    """Raised when inference exceeds the configured timeout."""
