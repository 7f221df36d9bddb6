# src/ctxgate/core/report.py
import logging
from typing import Optional

from ctxgate.client import LLMClient
from ctxgate.core.tokens import usage_percentage
from ctxgate.errors import find_api_error
from ctxgate.models import ContextStats


def display_dry_run_info(stats: ContextStats, client: Optional[LLMClient], logger: Optional[logging.Logger] = None) -> None:
    """Reports what would be sent. Never raises because of the model client."""
    logger = logger or logging.getLogger(__name__)

    logger.info("Files that would be included in context:")
    if stats.processed_files_count == 0:
        logger.info("  No files matched the current filters.")
    else:
        for i, path in enumerate(stats.processed_files, start=1):
            logger.info("  %d. %s", i, path)

    logger.info("Context statistics:")
    logger.info("  Files: %d", stats.processed_files_count)
    logger.info("  Lines: %d", stats.line_count)
    logger.info("  Characters: %d", stats.char_count)
    logger.info("  Tokens: %d", stats.token_count)

    input_limit = 0
    model_name = ""
    if client is None:
        logger.warning("Could not get model information: no model client configured")
    else:
        model_name = client.get_model_name()
        try:
            input_limit = client.get_model_info().input_limit
        except Exception as e:
            api_err = find_api_error(e)
            if api_err is not None:
                logger.warning("Could not get model information for %s: %s (category: %s)", model_name, e, api_err.category.value)
            else:
                logger.warning("Could not get model information for %s: %s", model_name, e)

    if input_limit > 0:
        logger.info("Model: %s (input limit: %d tokens)", model_name, input_limit)
        percentage = usage_percentage(stats.token_count, input_limit)
        logger.info(
            "Token usage: %d / %d (%.1f%% of model's limit)", stats.token_count, input_limit, percentage
        )
        if stats.token_count > input_limit:
            logger.error("WARNING: Token count exceeds model's limit by %d tokens", stats.token_count - input_limit)
            logger.error("Try reducing context by using --include, --exclude, or --exclude-names flags")
        else:
            logger.info("Context size is within the model's token limit")

    logger.info("Dry run completed successfully.")
    logger.info("To run for real, run without the --dry-run flag.")
