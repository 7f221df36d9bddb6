# src/ctxgate/client.py
import logging
from abc import ABC, abstractmethod

from ctxgate.config import MODEL_REGISTRY
from ctxgate.errors import APIError, ErrorCategory
from ctxgate.models import ModelInfo, TokenCount
from ctxgate.utils import tokenizer

logger = logging.getLogger(__name__)


class LLMClient(ABC):
    """Model client used by the token budget pipeline."""

    @abstractmethod
    def count_tokens(self, text: str) -> TokenCount:
        pass

    @abstractmethod
    def get_model_info(self) -> ModelInfo:
        pass

    @abstractmethod
    def generate_content(self, prompt: str) -> str:
        pass

    @abstractmethod
    def get_model_name(self) -> str:
        pass

    def close(self) -> None:
        pass


class TiktokenClient(LLMClient):
    """
    Counts tokens locally with tiktoken and resolves model limits from the
    built-in registry.
    """

    def __init__(self, model_name: str):
        self.model_name = model_name

    def _lookup(self) -> dict:
        entry = MODEL_REGISTRY.get(self.model_name)
        if entry is None:
            raise APIError(
                f"Model '{self.model_name}' not found in the model registry",
                category=ErrorCategory.NOT_FOUND,
                suggestion=f"Use one of: {', '.join(sorted(MODEL_REGISTRY))}",
            )
        return entry

    def count_tokens(self, text: str) -> TokenCount:
        entry = self._lookup()
        total = tokenizer.count(text, entry["encoding"])
        logger.debug("Counted %d tokens with %s", total, entry["encoding"])
        return TokenCount(total=total)

    def get_model_info(self) -> ModelInfo:
        entry = self._lookup()
        return ModelInfo(
            name=self.model_name,
            input_limit=entry["input_limit"],
            output_limit=entry["output_limit"],
        )

    def generate_content(self, prompt: str) -> str:
        raise APIError(
            "Content generation is not available with the local tokenizer client",
            category=ErrorCategory.INVALID_REQUEST,
        )

    def get_model_name(self) -> str:
        return self.model_name


def create_client(model_name: str) -> LLMClient:
    return TiktokenClient(model_name)
