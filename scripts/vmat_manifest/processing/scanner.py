"""
Descriptor scanner: recursive search for material descriptor files.
"""

import os
import logging
from typing import List, Union
from pathlib import Path

from ..errors import ScanError

logger = logging.getLogger(__name__)


class DescriptorScanner:
    """Collects descriptor files (``*.vmat`` by default) under a root directory."""

    def __init__(self, extension: str = ".vmat"):
        self.extension = extension

    def scan(self, root: Union[str, Path]) -> List[str]:
        """
        Recursively find descriptor files under ``root``.

        Symlinked directories are not followed. Entries are sorted per
        directory so repeated runs over the same tree produce the same order.

        Args:
            root: Directory to search

        Returns:
            Absolute paths of matching files; empty when nothing matches

        Raises:
            ScanError: If any part of the tree cannot be read
        """
        root_path = os.path.abspath(str(root))
        if not os.path.isdir(root_path):
            raise ScanError(f"Root directory does not exist: {root_path}", root_path)

        def on_error(error: OSError):
            raise ScanError(f"Failed to read directory {error.filename}: {error.strerror}",
                            error.filename) from error

        matches = []
        for dirpath, dirnames, filenames in os.walk(root_path, onerror=on_error):
            dirnames.sort()
            for filename in sorted(filenames):
                if filename.endswith(self.extension):
                    matches.append(os.path.join(dirpath, filename))

        logger.info(f"Found {len(matches)} {self.extension} files under {root_path}")
        return matches
