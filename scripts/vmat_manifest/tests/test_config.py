"""
Tests for pipeline configuration loading and validation.
"""

import json
import pytest

from ..config import PipelineConfig


class TestPipelineConfig:
    """Test configuration defaults, file loading and overrides."""

    def test_defaults(self):
        config = PipelineConfig()
        assert config.descriptor_extension == ".vmat"
        assert config.companion_token == "_color.png"
        assert config.alternate_extension == ".jpg"
        assert config.marker_segment == "materials"
        assert config.manifest_names == [
            "valid_png_paths.txt",
            "valid_jpg_paths.txt",
            "final_vmat_list.txt",
        ]
        assert config.validate() == []

    def test_from_toml(self, tmp_path):
        config_path = tmp_path / "vmat_manifest.toml"
        config_path.write_text(
            '[naming]\n'
            'companion_suffix = "albedo"\n'
            '[processing]\n'
            'existence_workers = 2\n'
            '[logging]\n'
            'level = "debug"\n'
        )

        config = PipelineConfig.from_file(config_path)

        assert config.companion_token == "_albedo.png"
        assert config.marker_segment == "materials"
        assert config.existence_workers == 2
        assert config.log_level == "DEBUG"

    def test_from_json(self, tmp_path):
        config_path = tmp_path / "vmat_manifest.json"
        config_path.write_text(json.dumps({
            "extensions": {"alternate": ".tga"},
            "manifests": {"identifiers": "materials.txt"},
        }))

        config = PipelineConfig.from_file(config_path)

        assert config.alternate_extension == ".tga"
        assert config.image_extension == ".png"
        assert config.identifier_manifest_name == "materials.txt"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            PipelineConfig.from_file(tmp_path / "missing.toml")

    def test_unsupported_format(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("a: 1")
        with pytest.raises(ValueError, match="Unsupported configuration format"):
            PipelineConfig.from_file(config_path)

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("VMAT_PIPELINE_EXISTENCE_WORKERS", "3")
        monkeypatch.setenv("VMAT_PIPELINE_MARKER_SEGMENT", "Textures")
        monkeypatch.setenv("VMAT_PIPELINE_LOG_LEVEL", "warning")

        config = PipelineConfig.default()

        assert config.existence_workers == 3
        assert config.marker_segment == "Textures"
        assert config.log_level == "WARNING"

    def test_env_var_names(self):
        names = PipelineConfig.env_var_names()
        assert "VMAT_PIPELINE_DESCRIPTOR_EXTENSION" in names
        assert "VMAT_PIPELINE_EXISTENCE_WORKERS" in names

    def test_validate_reports_errors(self):
        config = PipelineConfig(
            descriptor_extension="vmat",
            marker_segment="a/b",
            jpg_manifest_name="valid_png_paths.txt",
            existence_workers=0,
            log_level="LOUD",
        )

        errors = config.validate()

        assert any("descriptor_extension" in e for e in errors)
        assert any("marker_segment" in e for e in errors)
        assert any("distinct" in e for e in errors)
        assert any("existence_workers" in e for e in errors)
        assert any("log_level" in e for e in errors)

    def test_non_integer_env_override_names_variable(self, monkeypatch):
        monkeypatch.setenv("VMAT_PIPELINE_EXISTENCE_WORKERS", "many")

        with pytest.raises(ValueError, match="VMAT_PIPELINE_EXISTENCE_WORKERS"):
            PipelineConfig.default()
