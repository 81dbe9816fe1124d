"""Unit tests for configuration management."""

import json
from pathlib import Path
from tempfile import TemporaryDirectory

import pytest

from refviz.config import (
    Direction,
    DrawConfig,
    OutputFormat,
    RefvizConfig,
    create_default_config,
    find_config_file,
    load_config,
)


class TestDrawConfig:
    """Test DrawConfig model."""

    def test_defaults(self):
        config = DrawConfig()
        assert config.direction == Direction.TB
        assert config.treat_as_primitive == []
        assert config.show_field_names_in_labels is True
        assert config.ignore_private_fields is False
        assert config.ignore_null_valued_fields is False

    def test_aliases_and_names(self):
        by_alias = DrawConfig(showFieldNamesInLabels=False, ignoreFields=["hash"])
        by_name = DrawConfig(show_field_names_in_labels=False, ignore_fields=["hash"])
        assert by_alias == by_name

    def test_invalid_class_name(self):
        with pytest.raises(ValueError):
            DrawConfig(treatAsPrimitive=["decimal."])

    def test_invalid_direction(self):
        with pytest.raises(ValueError):
            DrawConfig(direction="UP")


class TestRefvizConfig:
    """Test complete RefvizConfig model."""

    def test_default_config(self):
        config = create_default_config()
        assert config.draw.direction == Direction.TB
        assert config.output.format == OutputFormat.DOT.value
        assert config.styling.highlight_new_objects is False

    def test_config_from_dict(self):
        config_data = {
            "draw": {
                "direction": "LR",
                "treatAsPrimitive": ["builtins.str"],
                "ignoreNullValuedFields": True
            },
            "styling": {
                "fieldAttributes": {"next": "color=red"},
                "highlightChangingArrayElements": True
            },
            "output": {"format": "svg"}
        }

        config = RefvizConfig(**config_data)
        assert config.draw.direction == Direction.LR
        assert config.draw.treat_as_primitive == ["builtins.str"]
        assert config.draw.ignore_null_valued_fields is True
        assert config.styling.field_attributes == {"next": "color=red"}
        assert config.styling.highlight_changing_array_elements is True
        assert config.output.format == "svg"

    def test_unknown_section_rejected(self):
        with pytest.raises(ValueError):
            RefvizConfig(project={"name": "x"})


class TestConfigLoading:
    """Test configuration file discovery and loading."""

    def test_find_config_file_in_parent(self):
        with TemporaryDirectory() as temp_dir:
            root = Path(temp_dir)
            (root / ".refviz.json").write_text("{}")
            nested = root / "a" / "b"
            nested.mkdir(parents=True)

            assert find_config_file(nested) == (root / ".refviz.json").resolve()

    def test_load_config_from_file(self):
        with TemporaryDirectory() as temp_dir:
            config_file = Path(temp_dir) / ".refviz.json"
            config_file.write_text(json.dumps({"draw": {"direction": "BT"}}))

            config = load_config(config_file)
            assert config.draw.direction == Direction.BT

    def test_missing_file_falls_back_to_defaults(self):
        with TemporaryDirectory() as temp_dir:
            config = load_config(Path(temp_dir) / "missing.json")
            assert config == create_default_config()

    def test_invalid_json(self):
        with TemporaryDirectory() as temp_dir:
            config_file = Path(temp_dir) / ".refviz.json"
            config_file.write_text("{not json")

            with pytest.raises(ValueError, match="Invalid JSON"):
                load_config(config_file)

    def test_invalid_values(self):
        with TemporaryDirectory() as temp_dir:
            config_file = Path(temp_dir) / ".refviz.json"
            config_file.write_text(json.dumps({"draw": {"direction": "UP"}}))

            with pytest.raises(ValueError, match="Failed to load config"):
                load_config(config_file)
