# src/ctxgate/core/scanner.py
import os
import logging
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Set, Tuple

from ctxgate.core.ignore import IgnoreRules
from ctxgate.models import FileRecord

BINARY_SAMPLE_SIZE = 512
BINARY_NON_PRINTABLE_THRESHOLD = 0.3
_WHITESPACE_BYTES = frozenset(b"\n\r\t ")


def parse_extensions(raw: str) -> Set[str]:
    """'go, .PY' -> {'.go', '.py'}"""
    exts = set()
    for ext in raw.split(","):
        ext = ext.strip().lower()
        if not ext:
            continue
        if not ext.startswith("."):
            ext = "." + ext
        exts.add(ext)
    return exts


def parse_names(raw: str) -> Set[str]:
    return {name.strip() for name in raw.split(",") if name.strip()}


def is_hidden(name: str) -> bool:
    return name.startswith(".") and name not in (".", "..")


def is_binary(content: bytes) -> bool:
    """
    A file is binary if it contains a NUL byte or if more than 30% of its
    first 512 bytes are control characters other than whitespace.
    """
    if b"\0" in content:
        return True
    sample = content[:BINARY_SAMPLE_SIZE]
    non_printable = sum(1 for b in sample if b < 32 and b not in _WHITESPACE_BYTES)
    return non_printable > len(sample) * BINARY_NON_PRINTABLE_THRESHOLD


class FileCollector:
    def __init__(
        self,
        include: str = "",
        exclude: str = "",
        exclude_names: str = "",
        verbose: bool = False,
        on_file: Optional[Callable[[str], None]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.include_exts = parse_extensions(include)
        self.exclude_exts = parse_extensions(exclude)
        self.exclude_names = parse_names(exclude_names)
        self.verbose = verbose
        self.on_file = on_file
        self.logger = logger or logging.getLogger(__name__)

    def _verbose(self, msg: str, *args) -> None:
        if self.verbose:
            self.logger.debug(msg, *args)

    def _skip_dir(self, name: str) -> bool:
        return name in self.exclude_names or is_hidden(name)

    def should_process(self, path: Path) -> bool:
        """Applies name, hidden, include and exclude filters to a file path."""
        name = path.name
        ext = path.suffix.lower()

        if name in self.exclude_names:
            self._verbose("Skipping excluded name: %s", path)
            return False

        # Dotfiles only survive when the include list names them, e.g. ".env"
        if is_hidden(name) and name.lower() not in self.include_exts:
            self._verbose("Skipping hidden file: %s", path)
            return False

        if self.include_exts and ext not in self.include_exts and name.lower() not in self.include_exts:
            self._verbose("Skipping non-included extension: %s (%s)", path, ext)
            return False

        if ext in self.exclude_exts:
            self._verbose("Skipping excluded extension: %s (%s)", path, ext)
            return False

        return True

    def _read(self, path: Path) -> Optional[FileRecord]:
        try:
            raw = path.read_bytes()
        except OSError as e:
            self.logger.warning("Cannot read file %s: %s", path, e)
            return None

        if is_binary(raw):
            self._verbose("Skipping binary file: %s", path)
            return None

        try:
            content = raw.decode("utf-8")
        except UnicodeDecodeError:
            self._verbose("Skipping non UTF-8 file: %s", path)
            return None

        return FileRecord(path=str(path), content=content)

    def _walk(self, root: Path) -> Iterator[Path]:
        """Yields candidate files under root in name order, pruning skipped directories."""
        ignore_rules = IgnoreRules(root)

        def on_error(err: OSError) -> None:
            self.logger.warning("Error accessing path %s during walk: %s", err.filename, err)

        for current, dirs, files in os.walk(root, onerror=on_error):
            current_path = Path(current)
            ignore_rules.load(current_path)

            kept = []
            for d in sorted(dirs):
                dir_path = current_path / d
                if self._skip_dir(d) or ignore_rules.is_ignored(dir_path, is_directory=True):
                    self._verbose("Skipping directory: %s", dir_path)
                    continue
                kept.append(d)
            # os.walk only descends into what is left in dirs
            dirs[:] = kept

            for f in sorted(files):
                file_path = current_path / f
                if ignore_rules.is_ignored(file_path):
                    self._verbose("Git ignored: %s", file_path)
                    continue
                yield file_path

    def collect(self, paths: List[str]) -> Tuple[List[FileRecord], int]:
        """
        Walks every path and returns the collected records, in traversal order,
        along with the number of files processed.
        """
        records: List[FileRecord] = []
        total = 0

        for p in paths:
            root = Path(p)
            if not root.exists():
                # Missing roots yield nothing; the remaining paths are still scanned
                self.logger.warning("Cannot stat path %s: no such file or directory. Skipping.", p)
                continue

            if root.is_dir():
                if self._skip_dir(root.name):
                    self._verbose("Skipping directory: %s", root)
                    continue
                candidates: Iterator[Path] = self._walk(root)
            elif IgnoreRules(root.parent).is_ignored(root):
                self._verbose("Git ignored: %s", root)
                continue
            else:
                candidates = iter([root])

            for candidate in candidates:
                total += 1
                if not self.should_process(candidate):
                    continue
                record = self._read(candidate)
                if record is None:
                    continue
                records.append(record)
                self._verbose("Processing file (%d/%d): %s", len(records), total, candidate)
                if self.on_file is not None:
                    self.on_file(record.path)

        return records, len(records)
