"""
Identifier normalization: turns validated companion paths into
``materials/...`` descriptor identifiers.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .deriver import CompanionPathDeriver
from ..utils.paths import PathUtils

logger = logging.getLogger(__name__)


@dataclass
class NormalizeResult:
    """Identifiers produced by the normalizer plus the entries it dropped."""
    identifiers: List[str] = field(default_factory=list)
    dropped: List[str] = field(default_factory=list)


class IdentifierNormalizer:
    """
    Derives content-relative descriptor identifiers.

    For every valid companion path the descriptor path is reconstructed and
    cut at the first directory segment named like the marker (``materials``,
    any casing). The marker segment is kept and the separator in front of it
    is dropped, so::

        C:\\game\\content\\Materials\\wood\\oak.vmat -> Materials\\wood\\oak.vmat

    Matching is done per path segment rather than by substring, which means
    names such as ``rawmaterials`` or ``nonmaterialsfile.vmat`` never anchor
    an identifier. Paths without the marker are dropped without raising.
    """

    def __init__(self, deriver: CompanionPathDeriver, marker: str = "materials"):
        self.deriver = deriver
        self.marker = marker

    def identifier_for(self, descriptor_path: str) -> Optional[str]:
        """Return the identifier for one descriptor path, or None if the marker is absent."""
        start = PathUtils.find_directory_segment(descriptor_path, self.marker)
        if start is None:
            return None
        return descriptor_path[start:]

    def normalize(self, valid_companions: List[str]) -> NormalizeResult:
        """
        Build identifiers for all valid companion paths.

        Args:
            valid_companions: Companion paths that passed the existence filter

        Returns:
            NormalizeResult with identifiers in input order
        """
        result = NormalizeResult()

        for companion in valid_companions:
            descriptor = self.deriver.to_descriptor(companion)
            identifier = self.identifier_for(descriptor)
            if identifier is None:
                logger.debug(f"No '{self.marker}' segment in {descriptor}, skipping")
                result.dropped.append(descriptor)
                continue
            result.identifiers.append(identifier)

        if result.dropped:
            logger.info(f"Skipped {len(result.dropped)} entries without a '{self.marker}' directory")

        return result
