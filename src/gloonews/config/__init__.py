"""Configuration module for gloonews."""

from gloonews.config.factory import create_from_config
from gloonews.config.loader import get_default_config_path, load_config
from gloonews.config.models import (
    AnswerConfig,
    ClaudeQuestionGeneratorConfig,
    FeedConfig,
    GloonewsConfig,
    LoggingConfig,
    NoOpQuestionGeneratorConfig,
    OpenAIQuestionGeneratorConfig,
    QuestionGeneratorConfig,
    SourcesConfig,
)

__all__ = [
    "AnswerConfig",
    "ClaudeQuestionGeneratorConfig",
    "FeedConfig",
    "GloonewsConfig",
    "LoggingConfig",
    "NoOpQuestionGeneratorConfig",
    "OpenAIQuestionGeneratorConfig",
    "QuestionGeneratorConfig",
    "SourcesConfig",
    "create_from_config",
    "get_default_config_path",
    "load_config",
]
