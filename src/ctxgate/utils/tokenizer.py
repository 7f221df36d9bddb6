# src/ctxgate/utils/tokenizer.py
import math
import logging
from functools import lru_cache

import tiktoken

from ctxgate.config import DEFAULT_ENCODING

logger = logging.getLogger(__name__)


@lru_cache(maxsize=None)
def get_encoding(name: str) -> "tiktoken.Encoding":
    """Loads a tiktoken encoding, falling back to the default one."""
    try:
        return tiktoken.get_encoding(name)
    except ValueError:
        logger.debug("Unknown encoding %s, falling back to %s", name, DEFAULT_ENCODING)
        return tiktoken.get_encoding(DEFAULT_ENCODING)


def count(text: str, encoding_name: str = DEFAULT_ENCODING) -> int:
    """Exact token count for the given encoding."""
    encoding = get_encoding(encoding_name)
    return len(encoding.encode(text, disallowed_special=()))


def estimate(text: str) -> int:
    """Rough token estimate (~4 characters per token)."""
    return math.ceil(len(text) / 4)
