"""Tests for configuration loading."""

from pathlib import Path

import pytest

from ctx_chat.config import ChatConfig, default_config_path, load_config


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults_when_nothing_configured(self, tmp_path: Path) -> None:
        """A missing file and empty environment give the defaults."""
        config = load_config(tmp_path / "missing.toml", environ={})

        assert config == ChatConfig()
        assert config.executable_path == "ctx"
        assert config.timeout_seconds == 30.0
        assert config.max_buffer_bytes == 1024 * 1024

    def test_reads_file(self, tmp_path: Path) -> None:
        config_path = tmp_path / "config.toml"
        config_path.write_text(
            'executable_path = "/usr/local/bin/ctx"\n'
            "timeout_seconds = 5\n"
            "max_buffer_bytes = 2048\n"
            'workspace = "/srv/project"\n'
            "port = 9000\n"
            "debug = true\n",
            encoding="utf-8",
        )

        config = load_config(config_path, environ={})

        assert config.executable_path == "/usr/local/bin/ctx"
        assert config.timeout_seconds == 5.0
        assert config.max_buffer_bytes == 2048
        assert config.workspace == Path("/srv/project")
        assert config.port == 9000
        assert config.debug is True

    def test_environment_overrides_file(self, tmp_path: Path) -> None:
        config_path = tmp_path / "config.toml"
        config_path.write_text('executable_path = "/from/file"\n', encoding="utf-8")

        config = load_config(
            config_path,
            environ={
                "CTX_CHAT_EXECUTABLE_PATH": "/from/env",
                "CTX_CHAT_TIMEOUT_SECONDS": "2.5",
                "CTX_CHAT_DEBUG": "yes",
            },
        )

        assert config.executable_path == "/from/env"
        assert config.timeout_seconds == 2.5
        assert config.debug is True

    def test_empty_executable_falls_back_to_default(self, tmp_path: Path) -> None:
        """An empty setting means "not configured"."""
        config = load_config(
            tmp_path / "missing.toml", environ={"CTX_CHAT_EXECUTABLE_PATH": "  "}
        )

        assert config.executable_path == "ctx"

    def test_workspace_expands_user(self, tmp_path: Path) -> None:
        config = load_config(tmp_path / "missing.toml", environ={"CTX_CHAT_WORKSPACE": "~/proj"})

        assert config.workspace == Path.home() / "proj"

    def test_invalid_number_names_key(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="timeout_seconds"):
            load_config(tmp_path / "missing.toml", environ={"CTX_CHAT_TIMEOUT_SECONDS": "soon"})

    def test_non_positive_bound_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="max_buffer_bytes"):
            load_config(tmp_path / "missing.toml", environ={"CTX_CHAT_MAX_BUFFER_BYTES": "0"})

    def test_invalid_bool_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="debug"):
            load_config(tmp_path / "missing.toml", environ={"CTX_CHAT_DEBUG": "maybe"})

    def test_malformed_file(self, tmp_path: Path) -> None:
        config_path = tmp_path / "config.toml"
        config_path.write_text("executable_path = \n", encoding="utf-8")

        with pytest.raises(ValueError, match="Malformed config file"):
            load_config(config_path, environ={})


def test_default_config_path_is_under_home() -> None:
    assert default_config_path() == Path.home() / ".ctx-chat" / "config.toml"


class TestIntegerSettings:
    """Integer settings reject fractional values instead of truncating them."""

    def test_fractional_buffer_size_in_file(self, tmp_path: Path) -> None:
        config_path = tmp_path / "config.toml"
        config_path.write_text("max_buffer_bytes = 30.5\n", encoding="utf-8")

        with pytest.raises(ValueError, match="max_buffer_bytes"):
            load_config(config_path, environ={})

    def test_fractional_port_in_environment(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="port"):
            load_config(tmp_path / "missing.toml", environ={"CTX_CHAT_PORT": "8000.5"})

    def test_whole_float_is_accepted(self, tmp_path: Path) -> None:
        config_path = tmp_path / "config.toml"
        config_path.write_text("port = 9000.0\n", encoding="utf-8")

        config = load_config(config_path, environ={})

        assert config.port == 9000
        assert isinstance(config.port, int)
