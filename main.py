#!/usr/bin/env python
"""CLI for the gloonews feed and article verification."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from gloonews.answer import render_text
from gloonews.config import create_from_config, get_default_config_path, load_config
from gloonews.data import Err, FeedFilters, FeedMode, ViewParams
from gloonews.display import date_range_label
from gloonews.session import FeedStatus

logger = logging.getLogger(__name__)


class CLIArgs(BaseModel):
    """Validated CLI arguments."""

    mode: FeedMode = FeedMode.FAITH
    offset: int = Field(default=0, ge=0)
    sources: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)
    verify: str | None = None
    config: Path
    log: bool = False
    log_dir: str = "logs"

    @field_validator("config")
    @classmethod
    def config_must_exist(cls, v: Path) -> Path:
        if not v.exists():
            raise ValueError(f"Config file not found: {v}")
        return v


async def run(args: CLIArgs) -> int:
    """Load one view, print it, and optionally verify an article.

    Args:
        args: Validated CLI arguments.

    Returns:
        Process exit code.
    """
    config = load_config(args.config)
    logging.getLogger().setLevel(config.logging.level.upper())
    session, run_logger = create_from_config(
        config,
        log_override=args.log if args.log else None,
        log_dir_override=args.log_dir if args.log_dir != "logs" else None,
    )

    sources = tuple(args.sources) if args.sources else session.params.filters.sources
    params = ViewParams(
        mode=args.mode,
        offset=args.offset,
        filters=FeedFilters(sources=sources, categories=tuple(args.categories)),
    )
    state = await session.load(params)

    print(f"\n{args.mode.value.title()} news, {date_range_label(state.window)}\n")
    if state.status == FeedStatus.ERROR:
        logger.error(state.error)
        return 1
    if not state.articles:
        print("No news articles found.")

    for card in session.cards():
        print(f"- [{card.article.article_id}] {card.article.title}")
        print(f"    {card.source_label} - {card.published_label} ({card.bias_label})")

    if args.verify is None:
        return 0

    article = next((a for a in state.articles if a.article_id == args.verify), None)
    if article is None:
        logger.error(f"Article {args.verify} is not in the current feed")
        return 1

    result = await session.verify(article)
    if isinstance(result, Err):
        logger.error(f"Verification failed ({result.stage}): {result.reason}")
        return 1

    verification = result.value
    print(f"\nQuestion: {verification.question}\n")
    print(render_text(verification.spans))

    if run_logger and run_logger.last_log_path:
        logger.info(f"\nRun log written to: {run_logger.last_log_path}")
    return 0


def main() -> None:
    """Entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Browse faith-aligned and mainstream news.")
    parser.add_argument(
        "--mode",
        "-m",
        choices=[m.value for m in FeedMode],
        default=FeedMode.FAITH.value,
        help="Feed to show (default: faith)",
    )
    parser.add_argument(
        "--offset",
        "-o",
        type=int,
        default=0,
        help="Days back from today (default: 0)",
    )
    parser.add_argument(
        "--source",
        action="append",
        default=[],
        help="Faith source domain to include (repeatable; default: all configured)",
    )
    parser.add_argument(
        "--category",
        action="append",
        default=[],
        help="Category to filter by (repeatable)",
    )
    parser.add_argument(
        "--verify",
        metavar="ARTICLE_ID",
        help="Cross-check this article against mainstream sources",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to YAML config file (default: configs/default.yaml)",
    )
    parser.add_argument(
        "--log",
        action="store_true",
        default=False,
        help="Write a JSON run log for each verification",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default="logs",
        help="Directory for log files (default: logs/)",
    )

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    ns = parser.parse_args()
    config_path: Path = ns.config if ns.config else get_default_config_path()

    try:
        args = CLIArgs(
            mode=FeedMode(ns.mode),
            offset=ns.offset,
            sources=ns.source,
            categories=ns.category,
            verify=ns.verify,
            config=config_path,
            log=ns.log,
            log_dir=ns.log_dir,
        )
    except Exception as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        sys.exit(asyncio.run(run(args)))
    except KeyboardInterrupt:
        sys.exit(130)
    except ValueError as e:
        # Missing API keys surface here.
        logger.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
