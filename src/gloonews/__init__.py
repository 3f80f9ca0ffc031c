"""gloonews: faith-aligned news feed with on-demand mainstream cross-checking."""

from gloonews.answer import (
    AnswerClient,
    PerigonAnswerClient,
    format_answer,
    format_citations,
    render_markup,
)
from gloonews.config import GloonewsConfig, create_from_config, load_config
from gloonews.data import (
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
from gloonews.display import ArticleCard, build_card, date_range_label
from gloonews.feed import FeedError, FeedQuery, NewsFeed, PerigonFeed, build_feed_query
from gloonews.pipeline import Verification, VerificationPipeline, Verifier
from gloonews.query import (
    ClaudeQuestionGenerator,
    NoOpQuestionGenerator,
    OpenAIQuestionGenerator,
    QuestionGenerator,
)
from gloonews.run_logger import RunLogger
from gloonews.session import FeedState, FeedStatus, NewsSession
from gloonews.sources import SourceMetadataResolver, load_source_table
from gloonews.verify import VerificationCache

__all__ = [
    # Models
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
    # Protocols
    "AnswerClient",
    "NewsFeed",
    "QuestionGenerator",
    "Verifier",
    # Feed
    "FeedError",
    "FeedQuery",
    "PerigonFeed",
    "build_feed_query",
    # Sources
    "SourceMetadataResolver",
    "load_source_table",
    # Question Generators
    "ClaudeQuestionGenerator",
    "NoOpQuestionGenerator",
    "OpenAIQuestionGenerator",
    # Answers
    "PerigonAnswerClient",
    "format_answer",
    "format_citations",
    "render_markup",
    # Verification
    "Verification",
    "VerificationCache",
    "VerificationPipeline",
    # Session / Display
    "ArticleCard",
    "FeedState",
    "FeedStatus",
    "NewsSession",
    "build_card",
    "date_range_label",
    # Logging
    "RunLogger",
    # Config
    "GloonewsConfig",
    "create_from_config",
    "load_config",
]
