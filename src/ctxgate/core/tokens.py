# src/ctxgate/core/tokens.py
import math
import logging
from typing import Optional

from ctxgate.client import LLMClient
from ctxgate.errors import (
    ConfigurationError,
    TokenCheckError,
    TokenLimitExceededError,
    find_api_error,
)
from ctxgate.models import TokenResult


def usage_percentage(token_count: int, input_limit: int) -> float:
    if input_limit == 0:
        return math.inf if token_count > 0 else 0.0
    return float(token_count) / float(input_limit) * 100


class TokenManager:
    """Checks a prompt's token count against the model's input limit."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def get_token_info(self, client: Optional[LLMClient], prompt: str) -> TokenResult:
        if client is None:
            raise ConfigurationError("no model client configured for token limit check")

        result = TokenResult()

        try:
            model_info = client.get_model_info()
        except Exception as e:
            api_err = find_api_error(e)
            if api_err is not None:
                raise api_err
            raise TokenCheckError(f"failed to get model info for token limit check: {e}") from e
        result.input_limit = model_info.input_limit

        try:
            token_count = client.count_tokens(prompt)
        except Exception as e:
            api_err = find_api_error(e)
            if api_err is not None:
                raise api_err
            raise TokenCheckError(f"failed to count tokens for token limit check: {e}") from e
        result.token_count = token_count.total

        result.percentage = usage_percentage(result.token_count, result.input_limit)
        self.logger.debug(
            "Token usage: %d / %d (%.1f%%)", result.token_count, result.input_limit, result.percentage
        )

        if result.token_count > result.input_limit:
            result.exceeds_limit = True
            result.limit_error = (
                f"prompt exceeds token limit ({result.token_count} tokens > "
                f"{result.input_limit} token limit)"
            )

        return result

    def check_token_limit(self, client: Optional[LLMClient], prompt: str) -> TokenResult:
        """Like get_token_info, but an exceeded limit is raised as TokenLimitExceededError."""
        info = self.get_token_info(client, prompt)
        if info.exceeds_limit:
            raise TokenLimitExceededError(info.limit_error)
        return info
