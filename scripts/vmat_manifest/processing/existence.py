"""
Existence filter for derived companion paths.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class FilterResult:
    """Outcome of an existence check run."""
    candidates: List[str] = field(default_factory=list)
    valid: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.candidates)

    @property
    def retained(self) -> int:
        return len(self.valid)

    @property
    def missing(self) -> int:
        return self.total - self.retained


class ExistenceFilter:
    """Keeps only the paths that point at regular files."""

    def __init__(self, max_workers: int = 8):
        self.max_workers = max(1, max_workers)

    @staticmethod
    def _exists(path: str) -> bool:
        """True for regular files; any stat failure counts as missing."""
        try:
            return Path(path).is_file()
        except (OSError, ValueError) as e:
            logger.debug(f"Cannot stat {path}: {e}")
            return False

    def filter(self, paths: List[str]) -> FilterResult:
        """
        Check every path and keep the existing ones.

        Checks are independent, so with more than one worker they run on a
        thread pool. ``Executor.map`` yields in submission order, which keeps
        the output aligned with the input.

        Args:
            paths: Candidate companion paths

        Returns:
            FilterResult with the input order preserved
        """
        candidates = list(paths)

        if self.max_workers > 1 and len(candidates) > 1:
            workers = min(self.max_workers, len(candidates))
            with ThreadPoolExecutor(max_workers=workers) as executor:
                flags = list(executor.map(self._exists, candidates))
        else:
            flags = [self._exists(path) for path in candidates]

        valid = []
        for path, exists in zip(candidates, flags):
            if exists:
                valid.append(path)
            else:
                logger.debug(f"Companion missing: {path}")

        result = FilterResult(candidates=candidates, valid=valid)
        logger.info(f"Found {result.retained} valid companion files out of {result.total}")
        return result
