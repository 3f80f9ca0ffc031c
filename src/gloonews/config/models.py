"""Pydantic configuration models for gloonews components."""

from typing import Annotated, Literal

from pydantic import BaseModel, Field

FAITH_SOURCES = [
    "christianpost.com",
    "christianitytoday.com",
    "relevantmagazine.com",
    "wng.org",
    "cbn.com",
    "churchleaders.com",
    "washingtoninformer.com",
    "religionunplugged.com",
    "premierchristian.news",
    "news.ag.org",
    "baptistpress.com",
]
CATEGORIES = ["Politics", "Tech", "Finance", "Business", "Health", "General"]

# ============================================================
# Feed Config
# ============================================================


class FeedConfig(BaseModel):
    """Configuration for the Perigon feed."""

    base_url: str = "https://api.goperigon.com/v1"
    page_size: int = Field(default=18, gt=0)
    source_group: str = "top10"
    timeout: float = 30.0
    faith_sources: list[str] = Field(default_factory=lambda: list(FAITH_SOURCES))
    categories: list[str] = Field(default_factory=lambda: list(CATEGORIES))

    model_config = {"frozen": True}


# ============================================================
# Question Generator Configs
# ============================================================


class OpenAIQuestionGeneratorConfig(BaseModel):
    """Configuration for OpenAIQuestionGenerator."""

    type: Literal["openai"] = "openai"
    model: str = "gpt-3.5-turbo"
    temperature: float = 0.7
    api_url: str = "https://api.openai.com/v1/chat/completions"
    timeout: float = 30.0

    model_config = {"frozen": True}


class ClaudeQuestionGeneratorConfig(BaseModel):
    """Configuration for ClaudeQuestionGenerator."""

    type: Literal["claude"] = "claude"
    model: str = "claude-haiku-4-5-20251001"
    temperature: float = 0.7
    max_tokens: int = 256

    model_config = {"frozen": True}


class NoOpQuestionGeneratorConfig(BaseModel):
    """Use the article title as the question (no API call)."""

    type: Literal["noop"] = "noop"

    model_config = {"frozen": True}


QuestionGeneratorConfig = Annotated[
    OpenAIQuestionGeneratorConfig | ClaudeQuestionGeneratorConfig | NoOpQuestionGeneratorConfig,
    Field(discriminator="type"),
]


# ============================================================
# Answer Config
# ============================================================


class AnswerConfig(BaseModel):
    """Configuration for the Perigon answer stream."""

    api_url: str = "https://api.goperigon.com/v1/answers/chatbot/threads/chat"
    thread_id: int = 1
    connect_timeout: float = 10.0
    stream_timeout: float = Field(default=120.0, gt=0)

    model_config = {"frozen": True}


# ============================================================
# Sources / Logging Config
# ============================================================


class SourcesConfig(BaseModel):
    """Location of the static source metadata table."""

    table_path: str | None = None

    model_config = {"frozen": True}


class LoggingConfig(BaseModel):
    """Configuration for log output and per-verification JSON run logs."""

    level: str = "INFO"
    enabled: bool = False
    log_dir: str = "logs"

    model_config = {"frozen": True}


# ============================================================
# Root Config
# ============================================================


class GloonewsConfig(BaseModel):
    """Root configuration for gloonews."""

    feed: FeedConfig = Field(default_factory=FeedConfig)
    generator: QuestionGeneratorConfig = Field(default_factory=OpenAIQuestionGeneratorConfig)
    answer: AnswerConfig = Field(default_factory=AnswerConfig)
    sources: SourcesConfig = Field(default_factory=SourcesConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"frozen": True}
