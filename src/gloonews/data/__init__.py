"""Data models for gloonews."""

from gloonews.data.models import (
    AnswerResult,
    APICallUsage,
    Article,
    BiasRating,
    Citation,
    Err,
    FeedFilters,
    FeedMode,
    FeedWindow,
    Ok,
    SourceRecord,
    Usage,
    VerificationState,
    ViewParams,
)

__all__ = [
    "APICallUsage",
    "AnswerResult",
    "Article",
    "BiasRating",
    "Citation",
    "Err",
    "FeedFilters",
    "FeedMode",
    "FeedWindow",
    "Ok",
    "SourceRecord",
    "Usage",
    "VerificationState",
    "ViewParams",
]
