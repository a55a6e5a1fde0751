"""Execution module for document fetching.

Provides the per-reservation fetcher and its retry machinery.
"""

from reszip.core.execution.attempt import AttemptResult, AttemptStatus
from reszip.core.execution.document_fetcher import DocumentFetcher, is_login_redirect, is_pdf
from reszip.core.execution.error_classifier import ErrorClassifier
from reszip.core.execution.error_handler import ErrorHandler

__all__ = [
    "AttemptResult",
    "AttemptStatus",
    "DocumentFetcher",
    "ErrorClassifier",
    "ErrorHandler",
    "is_login_redirect",
    "is_pdf",
]
