# src/ctxgate/core/gatherer.py
import re
import time
import logging
from typing import List, Optional, Tuple

from ctxgate.client import LLMClient
from ctxgate.core.scanner import FileCollector
from ctxgate.models import ContextStats, FileRecord, GatherConfig
from ctxgate.utils import tokenizer

_PLACEHOLDER = re.compile(r"\{(path|content)\}")


def format_file(fmt: str, record: FileRecord) -> str:
    """Substitutes {path} and {content}; file content itself is never re-scanned."""
    values = {"path": record.path, "content": record.content}
    return _PLACEHOLDER.sub(lambda m: values[m.group(1)], fmt)


def build_context(records: List[FileRecord], fmt: str) -> str:
    return "".join(format_file(fmt, record) + "\n" for record in records)


class ContextGatherer:
    """Collects files, builds the formatted context and measures it."""

    def __init__(self, client: Optional[LLMClient] = None, dry_run: bool = False, logger: Optional[logging.Logger] = None):
        self.client = client
        self.dry_run = dry_run
        self.logger = logger or logging.getLogger(__name__)

    def _count_tokens(self, context: str) -> int:
        if self.client is None:
            estimate = tokenizer.estimate(context)
            self.logger.debug("Using estimated token count: ~%d tokens", estimate)
            return estimate

        try:
            result = self.client.count_tokens(context)
        except Exception as e:
            self.logger.warning("Failed to count tokens accurately: %s. Using estimation instead.", e)
            estimate = tokenizer.estimate(context)
            self.logger.info("Estimated token count: ~%d tokens (approximate)", estimate)
            return estimate

        self.logger.debug("Accurate token count: %d tokens", result.total)
        return result.total

    def gather_context(self, config: GatherConfig) -> Tuple[List[FileRecord], str, ContextStats]:
        if self.dry_run:
            self.logger.info("Dry run mode: gathering files that would be included in context...")
        else:
            self.logger.info("Gathering project context from %d paths...", len(config.paths))
        self.logger.debug("Include filters: %s", config.include)
        self.logger.debug("Exclude filters: %s", config.exclude)
        self.logger.debug("Exclude names: %s", config.exclude_names)
        self.logger.debug("Paths being processed: %s", config.paths)

        stats = ContextStats()
        collector = FileCollector(
            include=config.include,
            exclude=config.exclude,
            exclude_names=config.exclude_names,
            verbose=config.verbose,
            on_file=stats.processed_files.append if self.dry_run else None,
            logger=self.logger,
        )
        records, processed = collector.collect(config.paths)
        stats.processed_files_count = processed

        if processed == 0:
            self.logger.warning("No files were processed for context. Check paths and filters.")
            return records, "", stats

        context = build_context(records, config.format)

        self.logger.info("Calculating token statistics for %d processed files...", processed)
        start = time.monotonic()
        stats.char_count = len(context)
        stats.line_count = context.count("\n") + 1
        stats.token_count = self._count_tokens(context)
        self.logger.debug("Token calculation completed in %.3fs", time.monotonic() - start)

        self.logger.info(
            "Context gathered: %d files, %d lines, %d chars, %d tokens",
            processed, stats.line_count, stats.char_count, stats.token_count,
        )
        if config.log_level <= logging.DEBUG and not self.dry_run:
            self.logger.debug(
                "Context details: files=%d, lines=%d, chars=%d, tokens=%d",
                processed, stats.line_count, stats.char_count, stats.token_count,
            )

        return records, context, stats
