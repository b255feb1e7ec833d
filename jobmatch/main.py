"""Main entry point for the job match pipeline."""

from dotenv import load_dotenv
load_dotenv()

import argparse
import sys
import time
from pathlib import Path
from typing import Optional, Sequence, TextIO, Tuple

from jobmatch.config.environment import EnvironmentConfig
from jobmatch.config.exceptions import ConfigurationError
from jobmatch.config.loader import load_config, validate_config_file
from jobmatch.config.models import AppConfig, ScoringMode, VerdictStrategy
from jobmatch.extraction.service import FieldExtractor
from jobmatch.llm.openai_client import OpenAIChatModel, OpenAIEmbedder, build_openai_client
from jobmatch.logging import get_logger
from jobmatch.logging.config import configure_logging
from jobmatch.matching.embeddings import ReferenceEmbeddingCache
from jobmatch.matching.models import ReferenceTechSet
from jobmatch.matching.scorer import OverlapScorer
from jobmatch.matching.verdict import VerdictAssembler
from jobmatch.normalization.service import FieldNormalizer
from jobmatch.notifications.sinks import NotificationSink, build_sink
from jobmatch.pipeline import MatchPipeline, PipelineError
from jobmatch.retrieval.index import ResumeRetriever
from jobmatch.sources.base import PostSource
from jobmatch.sources.factory import get_post_source

logger = get_logger(__name__, component="cli")


def load_runtime_config(
    config_path: Optional[Path], log_level_override: Optional[str]
) -> Tuple[AppConfig, EnvironmentConfig]:
    """
    Load and prepare runtime configuration.

    Args:
        config_path: Path to configuration file (None to search the defaults)
        log_level_override: Log level from CLI (takes precedence)

    Returns:
        Tuple of (AppConfig, EnvironmentConfig) with the effective log level
        stored on the environment config

    Raises:
        ConfigurationError: If configuration is invalid
    """
    app_config, env_config = load_config(config_path)

    # Log level priority: CLI > Environment > Config
    if log_level_override:
        env_config.log_level = log_level_override
    elif env_config.log_level:
        pass
    else:
        env_config.log_level = app_config.logging.level

    return app_config, env_config


def build_pipeline(
    app_config: AppConfig,
    env_config: EnvironmentConfig,
    source: Optional[PostSource] = None,
    sink: Optional[NotificationSink] = None,
) -> MatchPipeline:
    """
    Wire collaborators and stages into a MatchPipeline.

    The embedding client is only used when similarity scoring or a resume
    needs it; no request is made until a run does.

    Raises:
        ConfigurationError: If the configured resume file cannot be read
    """
    client = build_openai_client(env_config, app_config.llm)
    chat_model = OpenAIChatModel.from_config(client, app_config.llm)
    embedder = OpenAIEmbedder.from_config(client, app_config.llm)

    reference = ReferenceTechSet.from_names(app_config.reference_technologies)
    matching = app_config.matching

    reference_cache = None
    if matching.scoring_mode == ScoringMode.SIMILARITY:
        reference_cache = ReferenceEmbeddingCache(reference, embedder)

    retriever = None
    uses_context = (
        matching.scoring_mode == ScoringMode.CONTEXT
        or matching.verdict_strategy == VerdictStrategy.MODEL
    )
    if uses_context and app_config.resume.configured:
        try:
            resume_text = app_config.resume.load_text()
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(
                f"Failed to read resume file: {e}",
                suggestions=[f"Ensure {app_config.resume.path} exists and is UTF-8 text"],
            ) from e
        retriever = ResumeRetriever(resume_text, embedder, top_k=app_config.resume.top_k)

    return MatchPipeline(
        extractor=FieldExtractor(chat_model),
        normalizer=FieldNormalizer.from_config(app_config.normalization),
        scorer=OverlapScorer.from_config(reference, matching, embedder, reference_cache),
        assembler=VerdictAssembler.from_config(
            matching,
            language_model=chat_model if matching.verdict_strategy == VerdictStrategy.MODEL else None,
            reference_names=reference.names,
        ),
        threshold=matching.threshold,
        source=source,
        retriever=retriever,
        sink=sink or build_sink(app_config.output.format),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jobmatch",
        description="Job match - extract, normalize and score a job post against your skills",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: config.yaml, then config/config.yaml)",
    )
    post_group = parser.add_mutually_exclusive_group()
    post_group.add_argument("--post-text", default=None, help="Job post text")
    post_group.add_argument("--post-file", type=Path, default=None, help="File containing the job post")
    post_group.add_argument("--post-url", default=None, help="URL of the job post page")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log level (overrides config and environment)",
    )
    parser.add_argument(
        "--output",
        default=None,
        choices=["text", "json"],
        help="Report format (overrides config)",
    )
    parser.add_argument(
        "--validate-config",
        action="store_true",
        help="Validate the configuration file and exit",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None, stream: Optional[TextIO] = None) -> int:
    """
    Main entry point for the job match pipeline.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])
        stream: Report destination (defaults to stdout)

    Returns:
        Exit code: 0 when the run completed (match or not), 1 on a
        configuration error or a failed run.
    """
    start_time = time.time()
    args = build_parser().parse_args(argv)

    if args.validate_config:
        config_path = args.config or Path("config.yaml")
        return 0 if validate_config_file(config_path) else 1

    try:
        # Step 1: Load configuration (before logging for format detection)
        app_config, env_config = load_runtime_config(args.config, args.log_level)

        # Step 2: Configure logging
        configure_logging(
            level=env_config.log_level,
            format_type=app_config.logging.format,
            environment=env_config.environment,
        )

        output_format = args.output or app_config.output.format
        logger.info(
            "Configuration loaded",
            extra={
                "event": "config.loaded",
                "config_path": str(args.config) if args.config else None,
                "log_level": env_config.log_level,
                "scoring_mode": app_config.matching.scoring_mode.value,
                "verdict_strategy": app_config.matching.verdict_strategy.value,
                "threshold": app_config.matching.threshold,
                "reference_count": len(app_config.reference_technologies),
                "resume_configured": app_config.resume.configured,
                "output_format": output_format,
            },
        )

        # Step 3: Wire the pipeline
        source = get_post_source(
            text=args.post_text,
            path=args.post_file,
            url=args.post_url,
            config=app_config.post,
        )
        pipeline = build_pipeline(
            app_config, env_config, source=source, sink=build_sink(output_format, stream)
        )

        # Step 4: Run once
        state = pipeline.run()

        logger.info(
            f"Run completed: {'match' if state.verdict.match else 'no match'} "
            f"({state.verdict.match_percentage}%)",
            extra={
                "event": "service.run.completed",
                "duration_seconds": round(time.time() - start_time, 2),
                "match": state.verdict.match,
            },
        )
        return 0

    except ConfigurationError as e:
        print(f"Configuration Error: {e}", file=sys.stderr)
        logger.error(
            f"Configuration error: {e}",
            extra={"event": "config.error", "error_type": "ConfigurationError"},
        )
        return 1
    except PipelineError as e:
        print(f"Run failed at stage '{e.stage}': {e.__cause__ or e}", file=sys.stderr)
        logger.error(
            f"Run failed at stage {e.stage}",
            extra={
                "event": "service.run.failed",
                "stage": e.stage,
                "error_type": type(e.__cause__).__name__ if e.__cause__ else "PipelineError",
            },
        )
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        logger.critical(
            "Fatal error",
            extra={
                "event": "service.failed",
                "error_type": type(e).__name__,
                "error": str(e),
            },
            exc_info=True,
        )
        return 1


if __name__ == "__main__":
    sys.exit(main())
