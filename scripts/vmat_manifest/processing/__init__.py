"""
Pipeline stages: descriptor scanning, companion derivation, existence filtering,
identifier normalization and manifest writing.
"""

from .scanner import DescriptorScanner
from .deriver import CompanionPathDeriver
from .existence import ExistenceFilter, FilterResult
from .normalizer import IdentifierNormalizer, NormalizeResult
from .manifest import ManifestWriter, ManifestPaths

__all__ = [
    "DescriptorScanner",
    "CompanionPathDeriver",
    "ExistenceFilter",
    "FilterResult",
    "IdentifierNormalizer",
    "NormalizeResult",
    "ManifestWriter",
    "ManifestPaths",
]
