# src/ctxgate/core/ignore.py
import os
import logging
from pathlib import Path
from typing import Dict, Optional

import pathspec

logger = logging.getLogger(__name__)


def find_repo_root(path: Path) -> Optional[Path]:
    """Walks up from path to the directory holding .git, if any."""
    current = Path(os.path.abspath(path))
    for candidate in (current, *current.parents):
        if (candidate / ".git").exists():
            return candidate
    return None


def load_ignore_spec(directory: Path) -> Optional[pathspec.GitIgnoreSpec]:
    """
    Loads .gitignore rules from directory.
    Returns None when there is no .gitignore or it cannot be parsed.
    """
    gitignore_file = directory / ".gitignore"
    if not gitignore_file.is_file():
        return None

    try:
        with open(gitignore_file, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Could not read %s: %s", gitignore_file, e)
        return None

    try:
        spec = pathspec.GitIgnoreSpec.from_lines(lines)
    except Exception as e:
        logger.warning("Error parsing ignore rules in %s: %s", gitignore_file, e)
        return None

    logger.debug("Loaded %d ignore patterns from %s", len(spec.patterns), gitignore_file)
    return spec


class IgnoreRules:
    """
    The .gitignore files that apply to one scan. Each file's rules apply to
    its own directory and everything below it; deeper files win, so a nested
    "!pattern" can re-include what a parent ignored.
    """

    def __init__(self, start: Path):
        start = Path(os.path.abspath(start))
        self.specs: Dict[Path, pathspec.GitIgnoreSpec] = {}
        self.loaded = set()

        top = find_repo_root(start)
        if top is None:
            self.load(start)
            return
        # Everything between the work-tree top and the scan root
        for directory in reversed((start, *start.parents)):
            if directory == top or top in directory.parents:
                self.load(directory)

    def load(self, directory: Path) -> None:
        directory = Path(os.path.abspath(directory))
        if directory in self.loaded:
            return
        self.loaded.add(directory)
        spec = load_ignore_spec(directory)
        if spec is not None:
            self.specs[directory] = spec

    def is_ignored(self, path: Path, is_directory: bool = False) -> bool:
        if not self.specs:
            return False

        path = Path(os.path.abspath(path))
        ignored = False
        for directory in reversed(path.parents):
            spec = self.specs.get(directory)
            if spec is None:
                continue
            candidate = path.relative_to(directory).as_posix()
            # "build/" style patterns only match when the path ends with a slash
            if is_directory:
                candidate += "/"
            result = spec.check_file(candidate)
            if result.include is not None:
                ignored = result.include
        return ignored
