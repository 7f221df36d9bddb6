# src/ctxgate/models.py
import logging
from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class FileRecord:
    """Immutable record of a collected file."""
    path: str
    content: str


@dataclass(frozen=True)
class GatherConfig:
    """Parameters for a single context-gathering run."""
    paths: List[str]
    include: str = ""
    exclude: str = ""
    exclude_names: str = ""
    format: str = "{content}"
    verbose: bool = False
    log_level: int = logging.INFO


@dataclass
class ContextStats:
    processed_files_count: int = 0
    char_count: int = 0
    line_count: int = 0
    token_count: int = 0
    # Only filled in dry-run mode
    processed_files: List[str] = field(default_factory=list)


@dataclass
class TokenResult:
    token_count: int = 0
    input_limit: int = 0
    exceeds_limit: bool = False
    limit_error: str = ""
    percentage: float = 0.0


@dataclass(frozen=True)
class ModelInfo:
    name: str
    input_limit: int
    output_limit: int


@dataclass(frozen=True)
class TokenCount:
    total: int
