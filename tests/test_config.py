from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from artiformat.config import (
    ArtiformatConfig,
    _parse_section,
    _pyproject_has_section,
    _read_toml,
    discover_config_file,
    load_config,
)
from artiformat.exceptions import ConfigError


@pytest.mark.unit
class TestArtiformatConfig:
    """Tests for ArtiformatConfig dataclass."""

    def test_defaults(self) -> None:
        """Test default values match the documented behaviour."""
        config = ArtiformatConfig()

        assert config.include_prefix is True
        assert config.default_format is None
        assert config.source_path is None

    def test_to_log_dict_excludes_metadata(self) -> None:
        """Test to_log_dict omits source_path."""
        config = ArtiformatConfig(
            include_prefix=False,
            default_format="X.YY.Z-rc",
            source_path=Path("/tmp/artiformat.toml"),
        )

        assert config.to_log_dict() == {
            "include_prefix": False,
            "default_format": "X.YY.Z-rc",
        }


@pytest.mark.unit
class TestDiscoverConfigFile:
    """Tests for discover_config_file."""

    def test_explicit_path(self, tmp_path: Path) -> None:
        """Test an explicit existing path is returned resolved."""
        config_file = tmp_path / "custom.toml"
        config_file.write_text("[artiformat]\n", encoding="utf-8")

        assert discover_config_file(config_file) == config_file.resolve()

    def test_explicit_path_missing(self, tmp_path: Path) -> None:
        """Test a missing explicit path raises ConfigError."""
        with pytest.raises(ConfigError) as exc_info:
            discover_config_file(tmp_path / "missing.toml")

        assert "Configuration file not found" in str(exc_info.value)

    def test_finds_artiformat_toml(self, tmp_path: Path) -> None:
        """Test artiformat.toml in the working directory is found."""
        config_file = tmp_path / "artiformat.toml"
        config_file.write_text("[artiformat]\n", encoding="utf-8")

        with patch("artiformat.config.Path.cwd", return_value=tmp_path):
            assert discover_config_file() == config_file

    def test_pyproject_requires_section(self, tmp_path: Path) -> None:
        """Test pyproject.toml without [tool.artiformat] is ignored."""
        (tmp_path / "pyproject.toml").write_text("[tool.other]\nkey = 1\n", encoding="utf-8")

        with patch("artiformat.config.Path.cwd", return_value=tmp_path):
            assert discover_config_file() is None

    def test_precedence_order(self, tmp_path: Path) -> None:
        """Test artiformat.toml wins over pyproject.toml."""
        own = tmp_path / "artiformat.toml"
        own.write_text("[artiformat]\n", encoding="utf-8")
        (tmp_path / "pyproject.toml").write_text("[tool.artiformat]\n", encoding="utf-8")

        with patch("artiformat.config.Path.cwd", return_value=tmp_path):
            assert discover_config_file() == own

    def test_returns_none_when_no_config_found(self, tmp_path: Path) -> None:
        """Test None when nothing is present."""
        with patch("artiformat.config.Path.cwd", return_value=tmp_path):
            assert discover_config_file() is None


@pytest.mark.unit
class TestPyprojectHasSection:
    """Tests for _pyproject_has_section."""

    def test_section_present(self, tmp_path: Path) -> None:
        """Test True when [tool.artiformat] exists."""
        config_file = tmp_path / "pyproject.toml"
        config_file.write_text("[tool.artiformat]\ninclude_prefix = false\n", encoding="utf-8")

        assert _pyproject_has_section(config_file) is True

    def test_broken_file_counts_as_missing(self, tmp_path: Path) -> None:
        """Test unreadable or invalid files report no section."""
        config_file = tmp_path / "pyproject.toml"
        config_file.write_text("invalid ][[", encoding="utf-8")

        assert _pyproject_has_section(config_file) is False
        assert _pyproject_has_section(tmp_path / "nonexistent.toml") is False


@pytest.mark.unit
class TestReadToml:
    """Tests for _read_toml."""

    def test_reads_valid_toml(self, tmp_path: Path) -> None:
        """Test a valid file is parsed into a dict."""
        toml_file = tmp_path / "test.toml"
        toml_file.write_text('[artiformat]\ndefault_format = "vX.YY.Z"\n', encoding="utf-8")

        assert _read_toml(toml_file) == {"artiformat": {"default_format": "vX.YY.Z"}}

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Test invalid TOML raises ConfigError."""
        toml_file = tmp_path / "invalid.toml"
        toml_file.write_text("invalid ][[ toml", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            _read_toml(toml_file)

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file raises ConfigError."""
        with pytest.raises(ConfigError, match="Cannot read"):
            _read_toml(tmp_path / "nonexistent.toml")


@pytest.mark.unit
class TestParseSection:
    """Tests for _parse_section."""

    def test_empty_section(self) -> None:
        """Test an empty section yields defaults."""
        result = _parse_section({}, config_path="test.toml")

        assert result.include_prefix is True
        assert result.default_format is None

    def test_all_options(self) -> None:
        """Test every option is applied."""
        result = _parse_section(
            {"include_prefix": False, "default_format": "vX.YY.Z-rc-HASH"},
            config_path="test.toml",
        )

        assert result.include_prefix is False
        assert result.default_format == "vX.YY.Z-rc-HASH"

    def test_unknown_keys(self) -> None:
        """Test unknown keys are rejected."""
        with pytest.raises(ConfigError) as exc_info:
            _parse_section({"prefix": "v", "colour": True}, config_path="test.toml")

        message = str(exc_info.value)
        assert "Unknown configuration keys" in message
        assert "colour, prefix" in message

    def test_include_prefix_must_be_bool(self) -> None:
        """Test a string include_prefix is rejected."""
        with pytest.raises(ConfigError) as exc_info:
            _parse_section({"include_prefix": "false"}, config_path="test.toml")

        assert "include_prefix must be a boolean" in str(exc_info.value)
        assert exc_info.value.option == "include_prefix"

    def test_default_format_must_be_string(self) -> None:
        """Test a non-string default_format is rejected."""
        with pytest.raises(ConfigError, match="default_format must be a string"):
            _parse_section({"default_format": 3}, config_path="test.toml")

    def test_default_format_must_be_known(self) -> None:
        """Test an unknown template name is rejected."""
        with pytest.raises(ConfigError) as exc_info:
            _parse_section({"default_format": "X.Y.Z"}, config_path="test.toml")

        assert "default_format must be one of" in str(exc_info.value)
        assert exc_info.value.config_path == "test.toml"


@pytest.mark.unit
class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults_when_no_config(self, tmp_path: Path) -> None:
        """Test defaults when no file exists."""
        with patch("artiformat.config.Path.cwd", return_value=tmp_path):
            result = load_config()

        assert result == ArtiformatConfig()

    def test_loads_artiformat_toml(self, tmp_path: Path) -> None:
        """Test loading from artiformat.toml."""
        config_file = tmp_path / "artiformat.toml"
        config_file.write_text("[artiformat]\ninclude_prefix = false\n", encoding="utf-8")

        with patch("artiformat.config.Path.cwd", return_value=tmp_path):
            result = load_config()

        assert result.include_prefix is False
        assert result.source_path == config_file

    def test_loads_pyproject_toml(self, tmp_path: Path) -> None:
        """Test loading from [tool.artiformat] in pyproject.toml."""
        config_file = tmp_path / "pyproject.toml"
        config_file.write_text('[tool.artiformat]\ndefault_format = "X.YY.Z-HASH"\n', encoding="utf-8")

        with patch("artiformat.config.Path.cwd", return_value=tmp_path):
            result = load_config()

        assert result.default_format == "X.YY.Z-HASH"
        assert result.source_path == config_file

    def test_explicit_path(self, tmp_path: Path) -> None:
        """Test an explicit path is loaded and resolved."""
        config_file = tmp_path / "custom.toml"
        config_file.write_text("[artiformat]\ninclude_prefix = false\n", encoding="utf-8")

        result = load_config(config_file)

        assert result.include_prefix is False
        assert result.source_path == config_file.resolve()

    def test_file_without_section(self, tmp_path: Path) -> None:
        """Test a file lacking the section gives defaults with a source path."""
        config_file = tmp_path / "custom.toml"
        config_file.write_text("[other]\nkey = 1\n", encoding="utf-8")

        result = load_config(config_file)

        assert result.include_prefix is True
        assert result.source_path == config_file.resolve()

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Test invalid TOML propagates ConfigError."""
        (tmp_path / "artiformat.toml").write_text("invalid ][[ toml", encoding="utf-8")

        with patch("artiformat.config.Path.cwd", return_value=tmp_path):
            with pytest.raises(ConfigError):
                load_config()
