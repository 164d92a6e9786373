"""
String-level path helpers.

Paths are handled as plain strings so that Windows-style paths behave the same
on every platform; both ``/`` and ``\\`` count as separators.
"""

import re
from typing import List, Optional, Tuple


SEPARATORS = ("/", "\\")
_SEPARATOR_RE = re.compile("[" + re.escape("".join(SEPARATORS)) + "]")


class PathUtils:
    """Utility class for suffix and segment operations on path strings."""

    @staticmethod
    def replace_suffix(path: str, old: str, new: str) -> str:
        """
        Replace a trailing ``old`` token with ``new``.

        Only the final occurrence is affected, and only when the path actually
        ends with ``old``; otherwise the path is returned unchanged.

        Args:
            path: Path string
            old: Trailing token to replace
            new: Replacement token

        Returns:
            Path with the suffix replaced
        """
        if not old or not path.endswith(old):
            return path
        return path[:-len(old)] + new

    @staticmethod
    def segments(path: str) -> List[Tuple[int, str]]:
        """
        Split a path on separators.

        Returns:
            List of ``(start_index, segment)`` pairs in path order
        """
        result = []
        start = 0
        for match in _SEPARATOR_RE.finditer(path):
            result.append((start, path[start:match.start()]))
            start = match.end()
        result.append((start, path[start:]))
        return result

    @staticmethod
    def find_directory_segment(path: str, name: str) -> Optional[int]:
        """
        Find the first directory segment equal to ``name``, ignoring case.

        A segment only counts as a directory when a separator follows it, so
        the file name itself never matches.

        Returns:
            Start index of the segment, or None when absent
        """
        wanted = name.casefold()
        parts = PathUtils.segments(path)
        # The last part is the file name.
        for start, segment in parts[:-1]:
            if start > 0 and segment.casefold() == wanted:
                return start
        return None
