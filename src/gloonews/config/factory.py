"""Factory functions to create components from configuration."""

from pathlib import Path

from gloonews.answer.perigon import PerigonAnswerClient
from gloonews.config.models import (
    AnswerConfig,
    ClaudeQuestionGeneratorConfig,
    FeedConfig,
    GloonewsConfig,
    NoOpQuestionGeneratorConfig,
    OpenAIQuestionGeneratorConfig,
    QuestionGeneratorConfig,
    SourcesConfig,
)
from gloonews.data import FeedFilters, ViewParams
from gloonews.feed.perigon import PerigonFeed
from gloonews.pipeline.verification import VerificationPipeline
from gloonews.query.base import QuestionGenerator
from gloonews.query.claude import ClaudeQuestionGenerator
from gloonews.query.noop import NoOpQuestionGenerator
from gloonews.query.openai import OpenAIQuestionGenerator
from gloonews.run_logger import RunLogger
from gloonews.session import NewsSession
from gloonews.sources import SourceMetadataResolver, load_source_table


def create_generator(config: QuestionGeneratorConfig) -> QuestionGenerator:
    """Create a question generator from config.

    Uses explicit type matching rather than getattr.
    """
    if isinstance(config, OpenAIQuestionGeneratorConfig):
        return OpenAIQuestionGenerator(
            model=config.model,
            temperature=config.temperature,
            api_url=config.api_url,
            timeout=config.timeout,
        )
    if isinstance(config, ClaudeQuestionGeneratorConfig):
        return ClaudeQuestionGenerator(
            model=config.model,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
        )
    if isinstance(config, NoOpQuestionGeneratorConfig):
        return NoOpQuestionGenerator()
    msg = f"Unknown generator config type: {type(config)}"
    raise ValueError(msg)


def create_feed(config: FeedConfig) -> PerigonFeed:
    return PerigonFeed(
        base_url=config.base_url,
        page_size=config.page_size,
        source_group=config.source_group,
        timeout=config.timeout,
    )


def create_answer_client(config: AnswerConfig) -> PerigonAnswerClient:
    return PerigonAnswerClient(
        api_url=config.api_url,
        thread_id=config.thread_id,
        connect_timeout=config.connect_timeout,
        stream_timeout=config.stream_timeout,
    )


def create_resolver(config: SourcesConfig) -> SourceMetadataResolver:
    if config.table_path is None:
        return SourceMetadataResolver.empty()
    return load_source_table(config.table_path)


def create_pipeline(
    config: GloonewsConfig,
    run_logger: RunLogger | None = None,
) -> VerificationPipeline:
    return VerificationPipeline(
        generator=create_generator(config.generator),
        answer_client=create_answer_client(config.answer),
        run_logger=run_logger,
    )


def create_from_config(
    config: GloonewsConfig,
    *,
    log_override: bool | None = None,
    log_dir_override: str | None = None,
) -> tuple[NewsSession, RunLogger | None]:
    """Create a ready-to-load news session from root config.

    The session starts in faith mode with every configured faith source
    selected and no category filter.

    Args:
        config: Root configuration.
        log_override: Override the config's logging.enabled setting.
        log_dir_override: Override the config's logging.log_dir setting.

    Returns:
        Tuple of (session, run_logger).
        run_logger is None if run logging is disabled.
    """
    log_enabled = log_override if log_override is not None else config.logging.enabled
    log_dir = Path(log_dir_override if log_dir_override is not None else config.logging.log_dir)

    run_logger: RunLogger | None = None
    if log_enabled:
        run_logger = RunLogger(log_dir=log_dir, enabled=True)

    params = ViewParams(filters=FeedFilters(sources=tuple(config.feed.faith_sources)))
    session = NewsSession(
        feed=create_feed(config.feed),
        verifier=create_pipeline(config, run_logger=run_logger),
        resolver=create_resolver(config.sources),
        params=params,
    )
    return (session, run_logger)
