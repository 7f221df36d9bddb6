# src/ctxgate/cli.py
import sys
import argparse
import logging
from typing import List, Optional

from ctxgate.client import LLMClient, create_client
from ctxgate.config import (
    DEFAULT_EXCLUDE_NAMES,
    DEFAULT_EXCLUDES,
    DEFAULT_FORMAT,
    DEFAULT_MODEL,
    LOG_FORMAT,
    LOG_LEVELS,
)
from ctxgate.core.confirm import AnswerLineReader, LineReader, prompt_for_confirmation
from ctxgate.core.gatherer import ContextGatherer
from ctxgate.core.report import display_dry_run_info
from ctxgate.core.tokens import TokenManager
from ctxgate.errors import CtxGateError, find_api_error
from ctxgate.models import GatherConfig

logger = logging.getLogger("ctxgate")


def create_arg_parser():
    parser = argparse.ArgumentParser(
        description="Gather project files into an LLM context and check it against the model's token budget."
    )
    parser.add_argument("paths", nargs="*", default=["."], help="Files or directories to gather (default: .)")
    parser.add_argument("--include", type=str, default="", help="Comma-separated extensions to include (default: all)")
    parser.add_argument("--exclude", type=str, default=DEFAULT_EXCLUDES, help="Comma-separated extensions to exclude")
    parser.add_argument("--exclude-names", type=str, default=DEFAULT_EXCLUDE_NAMES, help="Comma-separated file or directory names to exclude")
    parser.add_argument("--format", type=str, default=DEFAULT_FORMAT, help="Format string for each file. Use {path} and {content}.")
    parser.add_argument("--model", type=str, default=DEFAULT_MODEL, help="Model whose token limit is checked")
    parser.add_argument("--confirm-tokens", type=int, default=0, help="Ask for confirmation above this many tokens (0 = never)")
    parser.add_argument("--dry-run", action="store_true", help="Show files and token statistics only")
    parser.add_argument("-y", "--yes", action="store_true", help="Skip confirmation")
    parser.add_argument("-o", "--output", type=str, default=None, help="Write the context to this file (default: stdout)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every filtering decision")
    parser.add_argument("--log-level", choices=LOG_LEVELS, default="info", help="Logging level (default: info)")
    return parser


def resolve_log_level(args) -> int:
    if args.verbose:
        return logging.DEBUG
    return {"debug": logging.DEBUG, "info": logging.INFO, "warn": logging.WARNING, "error": logging.ERROR}[args.log_level]


def write_context(context: str, output: Optional[str]) -> None:
    if output is None:
        sys.stdout.write(context)
        return
    with open(output, "w", encoding="utf-8") as f:
        f.write(context)
    logger.info("Context written to: %s", output)


def run(args, client: LLMClient, reader: Optional[LineReader] = None) -> int:
    """Runs the pipeline with an explicit client; returns the exit code."""
    config = GatherConfig(
        paths=args.paths,
        include=args.include,
        exclude=args.exclude,
        exclude_names=args.exclude_names,
        format=args.format,
        verbose=args.verbose,
        log_level=resolve_log_level(args),
    )

    gatherer = ContextGatherer(client=client, dry_run=args.dry_run, logger=logger)
    _, context, stats = gatherer.gather_context(config)

    if args.dry_run:
        display_dry_run_info(stats, client, logger=logger)
        return 0

    token_info = TokenManager(logger=logger).check_token_limit(client, context)
    logger.info(
        "Token usage: %d / %d (%.1f%% of model's limit)",
        token_info.token_count, token_info.input_limit, token_info.percentage,
    )

    if args.yes:
        reader = AnswerLineReader("y")
    if not prompt_for_confirmation(token_info.token_count, args.confirm_tokens, reader=reader, log=logger):
        logger.error("Operation aborted by user.")
        return 1

    write_context(context, args.output)
    return 0


def main(argv: Optional[List[str]] = None):
    parser = create_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=resolve_log_level(args), format=LOG_FORMAT, stream=sys.stderr)

    client = create_client(args.model)
    try:
        code = run(args, client)
    except KeyboardInterrupt:
        print("\nCancelled.", file=sys.stderr)
        sys.exit(1)
    except CtxGateError as e:
        api_err = find_api_error(e)
        if api_err is not None:
            logger.error("%s", api_err.user_facing_error())
        else:
            logger.error("%s", e)
        sys.exit(1)
    except Exception as e:
        logger.error("An unexpected error occurred: %s", e)
        sys.exit(1)
    finally:
        client.close()

    if code != 0:
        sys.exit(code)


if __name__ == "__main__":
    main()
