"""
Configuration management for the VMAT manifest pipeline.
Supports TOML and JSON configuration files with validation.
"""

import os
import json
from dataclasses import dataclass, fields

# Handle tomllib import for different Python versions
try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # Python < 3.11 with tomli package
from typing import Dict, List, Any, Union
from pathlib import Path


ENV_PREFIX = "VMAT_PIPELINE_"


@dataclass
class PipelineConfig:
    """Main configuration class for the manifest pipeline."""

    # Extensions
    descriptor_extension: str = ".vmat"
    image_extension: str = ".png"
    alternate_extension: str = ".jpg"

    # Naming conventions
    companion_suffix: str = "color"
    marker_segment: str = "materials"

    # Manifest file names (written into the scanned root)
    png_manifest_name: str = "valid_png_paths.txt"
    jpg_manifest_name: str = "valid_jpg_paths.txt"
    identifier_manifest_name: str = "final_vmat_list.txt"

    # Processing settings
    existence_workers: int = 8

    # Logging
    log_level: str = "INFO"

    @property
    def companion_token(self) -> str:
        """Token that replaces the descriptor extension, e.g. ``_color.png``."""
        return f"_{self.companion_suffix}{self.image_extension}"

    @property
    def manifest_names(self) -> List[str]:
        return [self.png_manifest_name, self.jpg_manifest_name, self.identifier_manifest_name]

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "PipelineConfig":
        """Load configuration from TOML or JSON file."""
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        if config_path.suffix.lower() == '.toml':
            return cls._from_toml(config_path)
        elif config_path.suffix.lower() == '.json':
            return cls._from_json(config_path)
        else:
            raise ValueError(f"Unsupported configuration format: {config_path.suffix}")

    @classmethod
    def _from_toml(cls, config_path: Path) -> "PipelineConfig":
        """Load configuration from TOML file."""
        with open(config_path, 'rb') as f:
            data = tomllib.load(f)
        return cls._from_dict(data)

    @classmethod
    def _from_json(cls, config_path: Path) -> "PipelineConfig":
        """Load configuration from JSON file."""
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "PipelineConfig":
        """Create configuration from dictionary."""
        config_data = {}

        # Handle extensions
        if 'extensions' in data:
            extensions = data['extensions']
            config_data['descriptor_extension'] = extensions.get('descriptor', '.vmat')
            config_data['image_extension'] = extensions.get('image', '.png')
            config_data['alternate_extension'] = extensions.get('alternate', '.jpg')

        # Handle naming conventions
        if 'naming' in data:
            naming = data['naming']
            config_data['companion_suffix'] = naming.get('companion_suffix', 'color')
            config_data['marker_segment'] = naming.get('marker_segment', 'materials')

        # Handle manifest names
        if 'manifests' in data:
            manifests = data['manifests']
            config_data['png_manifest_name'] = manifests.get('png', 'valid_png_paths.txt')
            config_data['jpg_manifest_name'] = manifests.get('jpg', 'valid_jpg_paths.txt')
            config_data['identifier_manifest_name'] = manifests.get('identifiers', 'final_vmat_list.txt')

        # Handle processing settings
        if 'processing' in data:
            processing = data['processing']
            config_data['existence_workers'] = int(processing.get('existence_workers', 8))

        # Handle logging
        if 'logging' in data:
            config_data['log_level'] = str(data['logging'].get('level', 'INFO')).upper()

        return cls(**config_data)

    @classmethod
    def default(cls) -> "PipelineConfig":
        """Create default configuration with environment variable overrides."""
        return cls._apply_env_overrides(cls())

    @classmethod
    def _apply_env_overrides(cls, config: "PipelineConfig") -> "PipelineConfig":
        """Apply ``VMAT_PIPELINE_<FIELD>`` environment variable overrides."""
        for config_field in fields(cls):
            var_name = ENV_PREFIX + config_field.name.upper()
            value = os.getenv(var_name)
            if not value:
                continue

            if config_field.type in (int, 'int'):
                try:
                    setattr(config, config_field.name, int(value))
                except ValueError:
                    raise ValueError(f"{var_name} must be an integer, got {value!r}") from None
            elif config_field.name == 'log_level':
                config.log_level = value.upper()
            else:
                setattr(config, config_field.name, value)

        return config

    @classmethod
    def env_var_names(cls) -> List[str]:
        """Names of all environment variables understood by the pipeline."""
        return [ENV_PREFIX + f.name.upper() for f in fields(cls)]

    def validate(self) -> List[str]:
        """Validate configuration and return list of errors."""
        errors = []

        # Validate extensions
        for name in ('descriptor_extension', 'image_extension', 'alternate_extension'):
            value = getattr(self, name)
            if not value.startswith('.') or len(value) < 2:
                errors.append(f"{name} must start with '.' and be non-empty")

        # Validate naming tokens
        for name in ('companion_suffix', 'marker_segment'):
            value = getattr(self, name)
            if not value:
                errors.append(f"{name} must not be empty")
            elif '/' in value or '\\' in value:
                errors.append(f"{name} must not contain path separators")

        # Validate manifest names
        for name in self.manifest_names:
            if not name or '/' in name or '\\' in name:
                errors.append(f"Invalid manifest file name: {name!r}")
        if len(set(self.manifest_names)) != len(self.manifest_names):
            errors.append("Manifest file names must be distinct")

        # Validate workers
        if self.existence_workers < 1:
            errors.append("existence_workers must be at least 1")

        if self.log_level not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            errors.append("log_level must be DEBUG, INFO, WARNING, ERROR or CRITICAL")

        return errors
