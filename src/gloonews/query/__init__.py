from gloonews.query.base import LENGTH_CONSTRAINT, QuestionGenerator, build_prompt
from gloonews.query.claude import ClaudeQuestionGenerator
from gloonews.query.noop import NoOpQuestionGenerator
from gloonews.query.openai import OpenAIQuestionGenerator

__all__ = [
    "ClaudeQuestionGenerator",
    "LENGTH_CONSTRAINT",
    "NoOpQuestionGenerator",
    "OpenAIQuestionGenerator",
    "QuestionGenerator",
    "build_prompt",
]
