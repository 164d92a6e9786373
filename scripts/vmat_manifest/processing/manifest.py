"""
Manifest writer: persists the pipeline output as line-delimited text files.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Union
from pathlib import Path

from .deriver import CompanionPathDeriver
from ..config import PipelineConfig
from ..errors import ManifestWriteError

logger = logging.getLogger(__name__)


@dataclass
class ManifestPaths:
    """Locations of the three manifests written by a run."""
    png_manifest: Path
    jpg_manifest: Path
    identifier_manifest: Path

    def as_list(self) -> List[Path]:
        return [self.png_manifest, self.jpg_manifest, self.identifier_manifest]


class ManifestWriter:
    """Writes the PNG, JPG and identifier manifests into the scanned root."""

    def __init__(self, config: PipelineConfig, deriver: CompanionPathDeriver):
        self.config = config
        self.deriver = deriver

    def manifest_paths(self, root: Union[str, Path]) -> ManifestPaths:
        root = Path(root)
        return ManifestPaths(
            png_manifest=root / self.config.png_manifest_name,
            jpg_manifest=root / self.config.jpg_manifest_name,
            identifier_manifest=root / self.config.identifier_manifest_name,
        )

    def write(self, root: Union[str, Path], valid_companions: List[str],
              identifiers: List[str]) -> ManifestPaths:
        """
        Write all three manifests, overwriting existing files.

        The files are written one after another; if a later write fails the
        earlier files stay on disk.

        Args:
            root: Directory that receives the manifests
            valid_companions: Existing companion image paths
            identifiers: Normalized descriptor identifiers

        Returns:
            ManifestPaths of the written files

        Raises:
            ManifestWriteError: If any file cannot be written
        """
        paths = self.manifest_paths(root)
        alternates = [self.deriver.to_alternate(path) for path in valid_companions]

        self._write_lines(paths.png_manifest, valid_companions)
        self._write_lines(paths.jpg_manifest, alternates)
        self._write_lines(paths.identifier_manifest, identifiers)

        return paths

    def _write_lines(self, path: Path, lines: Iterable[str]) -> None:
        """Write one entry per line, UTF-8, each line newline-terminated."""
        try:
            with open(path, 'w', encoding='utf-8', newline='\n') as f:
                for line in lines:
                    f.write(line + "\n")
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")
            raise ManifestWriteError(f"Failed to write manifest {path}: {e}", str(path)) from e

        logger.info(f"Saved: {path}")
