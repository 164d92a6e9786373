"""
Companion path derivation by file name convention.
"""

from typing import List

from ..config import PipelineConfig
from ..utils.paths import PathUtils


class CompanionPathDeriver:
    """
    Maps descriptor paths to companion image paths and back.

    ``C:\\mats\\wood.vmat`` becomes ``C:\\mats\\wood_color.png``. All
    replacements are anchored at the end of the string, so directory names
    that happen to contain ``.vmat`` or ``.png`` are never rewritten.
    """

    def __init__(self, config: PipelineConfig):
        self.descriptor_extension = config.descriptor_extension
        self.companion_token = config.companion_token
        self.image_extension = config.image_extension
        self.alternate_extension = config.alternate_extension

    def to_companion(self, descriptor_path: str) -> str:
        """Descriptor path -> expected companion image path."""
        return PathUtils.replace_suffix(descriptor_path, self.descriptor_extension, self.companion_token)

    def to_companions(self, descriptor_paths: List[str]) -> List[str]:
        """Derive one companion path per descriptor, preserving order."""
        return [self.to_companion(path) for path in descriptor_paths]

    def to_descriptor(self, companion_path: str) -> str:
        """Inverse of ``to_companion``."""
        return PathUtils.replace_suffix(companion_path, self.companion_token, self.descriptor_extension)

    def to_alternate(self, companion_path: str) -> str:
        """Swap the trailing image extension for the alternate one (``.png`` -> ``.jpg``)."""
        return PathUtils.replace_suffix(companion_path, self.image_extension, self.alternate_extension)
