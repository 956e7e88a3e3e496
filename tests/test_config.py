"""Tests for AppConfig loading (YAML, env vars, CLI overrides)."""

import pytest

from block_separator.config import load_config


class TestDefaults:
    def test_default_config(self):
        config = load_config()
        assert config.parser.delimiters == ["{}"]
        assert config.parser.strict is False
        assert config.parser.max_depth is None
        assert config.source.encoding == "utf-8"
        assert config.output.format == "debug"
        assert config.server.mode == "stdio"
        assert config.server.port == 8080
        assert config.server.verbose is False

    def test_defaults_are_not_shared(self):
        first = load_config()
        first.parser.delimiters.append("()")
        assert load_config().parser.delimiters == ["{}"]


class TestYamlLoading:
    def test_load_from_yaml(self, tmp_path):
        config_file = tmp_path / "config.yml"
        config_file.write_text(
            "parser:\n"
            "  delimiters: ['{}', '()']\n"
            "  strict: true\n"
            "  max_depth: 64\n"
            "output:\n"
            "  format: tree\n"
            "server:\n"
            "  port: 9090\n",
            encoding="utf-8",
        )

        config = load_config(config_path=str(config_file))
        assert config.parser.delimiters == ["{}", "()"]
        assert config.parser.strict is True
        assert config.parser.max_depth == 64
        assert config.output.format == "tree"
        assert config.server.port == 9090

    def test_delimiters_as_yaml_string(self, tmp_path):
        config_file = tmp_path / "config.yml"
        config_file.write_text('parser:\n  delimiters: "{} []"\n', encoding="utf-8")

        config = load_config(config_path=str(config_file))
        assert config.parser.delimiters == ["{}", "[]"]

    def test_missing_yaml_uses_defaults(self):
        config = load_config(config_path="/nonexistent/config.yml")
        assert config.parser.delimiters == ["{}"]

    def test_partial_yaml_preserves_defaults(self, tmp_path):
        config_file = tmp_path / "config.yml"
        config_file.write_text("parser:\n  strict: yes\n", encoding="utf-8")

        config = load_config(config_path=str(config_file))
        assert config.parser.strict is True
        assert config.parser.delimiters == ["{}"]  # default preserved

    def test_unknown_section_ignored(self, tmp_path):
        config_file = tmp_path / "config.yml"
        config_file.write_text(
            "unknown_section:\n  foo: bar\nserver:\n  port: 3000\n",
            encoding="utf-8",
        )

        config = load_config(config_path=str(config_file))
        assert config.server.port == 3000

    def test_non_mapping_yaml_ignored(self, tmp_path):
        config_file = tmp_path / "config.yml"
        config_file.write_text("- just\n- a list\n", encoding="utf-8")

        config = load_config(config_path=str(config_file))
        assert config.output.format == "debug"


class TestEnvVars:
    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        config_file = tmp_path / "config.yml"
        config_file.write_text("output:\n  format: tree\n", encoding="utf-8")

        monkeypatch.setenv("BLOCKSEP_FORMAT", "json")
        config = load_config(config_path=str(config_file))
        assert config.output.format == "json"

    def test_env_delimiters(self, monkeypatch):
        monkeypatch.setenv("BLOCKSEP_DELIMITERS", "{} () []")
        config = load_config()
        assert config.parser.delimiters == ["{}", "()", "[]"]

    def test_env_max_depth(self, monkeypatch):
        monkeypatch.setenv("BLOCKSEP_MAX_DEPTH", "10")
        assert load_config().parser.max_depth == 10

    def test_env_invalid_max_depth_is_unbounded(self, monkeypatch):
        monkeypatch.setenv("BLOCKSEP_MAX_DEPTH", "deep")
        assert load_config().parser.max_depth is None

    def test_env_strict_true(self, monkeypatch):
        monkeypatch.setenv("BLOCKSEP_STRICT", "true")
        assert load_config().parser.strict is True

    def test_env_strict_accepts_on_and_one(self, monkeypatch):
        for raw in ("on", "1", " YES "):
            monkeypatch.setenv("BLOCKSEP_STRICT", raw)
            assert load_config().parser.strict is True

    def test_env_invalid_port_raises(self, monkeypatch):
        monkeypatch.setenv("BLOCKSEP_PORT", "http")
        with pytest.raises(ValueError):
            load_config()

    def test_env_verbose_false(self, monkeypatch):
        monkeypatch.setenv("BLOCKSEP_VERBOSE", "false")
        assert load_config().server.verbose is False


class TestCliOverrides:
    def test_cli_overrides_env(self, monkeypatch):
        monkeypatch.setenv("BLOCKSEP_PORT", "5000")
        config = load_config(cli_overrides={"server.port": 7000})
        assert config.server.port == 7000

    def test_cli_delimiters_string(self):
        config = load_config(cli_overrides={"parser.delimiters": "()"})
        assert config.parser.delimiters == ["()"]

    def test_none_cli_values_are_skipped(self):
        config = load_config(cli_overrides={"parser.strict": None, "server.port": None})
        assert config.parser.strict is False
        assert config.server.port == 8080

    def test_malformed_keys_ignored(self):
        config = load_config(cli_overrides={"strict": True, "nosection.field": 1})
        assert config.parser.strict is False

    def test_unknown_field_and_class_attributes_ignored(self):
        config = load_config(
            cli_overrides={"parser.colour": "red", "__class__.parser": "x", "parser.": 1}
        )
        assert not hasattr(config.parser, "colour")
        assert type(config).__name__ == "AppConfig"


class TestPriority:
    def test_full_priority_chain(self, tmp_path, monkeypatch):
        """YAML < env < CLI."""
        config_file = tmp_path / "config.yml"
        config_file.write_text("parser:\n  max_depth: 1\n", encoding="utf-8")

        monkeypatch.setenv("BLOCKSEP_MAX_DEPTH", "2")

        config = load_config(
            config_path=str(config_file),
            cli_overrides={"parser.max_depth": 3},
        )
        assert config.parser.max_depth == 3
