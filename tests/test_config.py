"""Tests for configuration loading and validation."""

from pathlib import Path

import yaml

from ocrstruct.utils.config import (
    DEFAULT_HEADER_KEYWORDS,
    ApiConfig,
    AppConfig,
    ParsingConfig,
    ValidationConfig,
    load_config,
)


class TestParsingConfig:
    """Tests for ParsingConfig defaults and overrides."""

    def test_defaults(self) -> None:
        cfg = ParsingConfig()
        assert cfg.max_table_rows == 2000
        assert cfg.min_tabular_ratio == 0.4
        assert cfg.vendor_scan_lines == 8
        assert cfg.table_preview_rows == 5
        assert "qualification" in cfg.header_keywords
        assert "USD" in cfg.currency_codes

    def test_override(self) -> None:
        cfg = ParsingConfig(max_table_rows=10, currency_codes=["CHF"])
        assert cfg.max_table_rows == 10
        assert cfg.currency_codes == ["CHF"]

    def test_keyword_lists_are_not_shared(self) -> None:
        first = ParsingConfig()
        first.header_keywords.append("extra")
        assert "extra" not in ParsingConfig().header_keywords
        assert "extra" not in DEFAULT_HEADER_KEYWORDS


class TestValidationConfig:
    """Tests for ValidationConfig defaults."""

    def test_defaults(self) -> None:
        cfg = ValidationConfig()
        assert cfg.cgpa_min == 0.0
        assert cfg.cgpa_max == 10.0


class TestAppConfig:
    """Tests for the top-level AppConfig."""

    def test_defaults(self) -> None:
        cfg = AppConfig()
        assert isinstance(cfg.parsing, ParsingConfig)
        assert isinstance(cfg.validation, ValidationConfig)
        assert isinstance(cfg.api, ApiConfig)
        assert cfg.api.port == 8000
        assert cfg.log_level == "INFO"

    def test_nested_override(self) -> None:
        cfg = AppConfig(
            validation=ValidationConfig(cgpa_max=4.0),
            log_level="DEBUG",
        )
        assert cfg.validation.cgpa_max == 4.0
        assert cfg.log_level == "DEBUG"


class TestLoadConfig:
    """Tests for the load_config function."""

    def test_load_default_config(self, config_dir: Path) -> None:
        cfg = load_config(config_dir / "config.yaml")
        assert isinstance(cfg, AppConfig)
        assert cfg.parsing.max_table_rows == 2000
        assert cfg.api.host == "0.0.0.0"

    def test_load_missing_file_returns_defaults(self) -> None:
        cfg = load_config(Path("/nonexistent/path/config.yaml"))
        assert isinstance(cfg, AppConfig)
        assert cfg.parsing.min_tabular_ratio == 0.4

    def test_load_custom_yaml(self, tmp_path: Path) -> None:
        config_data = {
            "parsing": {"min_tabular_ratio": 0.8, "table_preview_rows": 2},
            "validation": {"cgpa_max": 4.0},
            "log_level": "DEBUG",
        }
        config_file = tmp_path / "config.yaml"
        with open(config_file, "w") as f:
            yaml.dump(config_data, f)

        cfg = load_config(config_file)
        assert cfg.parsing.min_tabular_ratio == 0.8
        assert cfg.parsing.table_preview_rows == 2
        assert cfg.validation.cgpa_max == 4.0
        assert cfg.log_level == "DEBUG"

    def test_load_empty_yaml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")
        cfg = load_config(config_file)
        assert isinstance(cfg, AppConfig)

    def test_load_none_defaults_to_standard_path(self) -> None:
        cfg = load_config()
        assert isinstance(cfg, AppConfig)
