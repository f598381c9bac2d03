"""Configuration from ~/.ctx-chat/config.toml and environment variables.

Environment variables win over the file; the file wins over defaults.
"""

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

DEFAULT_EXECUTABLE = "ctx"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_MAX_BUFFER_BYTES = 1024 * 1024

_ENV_PREFIX = "CTX_CHAT_"


@dataclass(frozen=True)
class ChatConfig:
    """Immutable configuration data.

    Loaded once at the entry point and stored in ChatContext.
    """

    executable_path: str = DEFAULT_EXECUTABLE
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    max_buffer_bytes: int = DEFAULT_MAX_BUFFER_BYTES
    workspace: Path | None = None
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False


def default_config_path() -> Path:
    """Location of the optional config file."""
    return Path.home() / ".ctx-chat" / "config.toml"


def _parse_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("1", "true", "yes", "on"):
        return True
    if text in ("0", "false", "no", "off", ""):
        return False
    raise ValueError(f"Invalid boolean for '{key}': {value!r}")


def _parse_number(key: str, value: Any, kind: type[int] | type[float]) -> Any:
    if kind is int and isinstance(value, float) and not value.is_integer():
        raise ValueError(f"Invalid int for '{key}': {value!r}")
    try:
        number = kind(value)
    except (TypeError, ValueError) as err:
        raise ValueError(f"Invalid {kind.__name__} for '{key}': {value!r}") from err
    if number <= 0:
        raise ValueError(f"'{key}' must be positive, got {value!r}")
    return number


def _read_file(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        return {}
    try:
        return tomllib.loads(config_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as err:
        raise ValueError(f"Malformed config file {config_path}: {err}") from err


def load_config(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> ChatConfig:
    """Load configuration.

    Args:
        config_path: TOML file to read (defaults to ~/.ctx-chat/config.toml;
            a missing file is not an error)
        environ: Environment mapping (defaults to os.environ)

    Returns:
        ChatConfig with file values overridden by CTX_CHAT_* variables

    Raises:
        ValueError: If the file is malformed or a value has the wrong type
    """
    env = os.environ if environ is None else environ
    values = _read_file(config_path or default_config_path())

    for key in ChatConfig.__dataclass_fields__:
        env_value = env.get(_ENV_PREFIX + key.upper())
        if env_value is not None:
            values[key] = env_value

    # An empty executable_path means "not configured", as in editor settings
    executable = str(values.get("executable_path") or "").strip() or DEFAULT_EXECUTABLE
    workspace_value = str(values.get("workspace") or "").strip()

    return ChatConfig(
        executable_path=executable,
        timeout_seconds=_parse_number(
            "timeout_seconds", values.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS), float
        ),
        max_buffer_bytes=_parse_number(
            "max_buffer_bytes", values.get("max_buffer_bytes", DEFAULT_MAX_BUFFER_BYTES), int
        ),
        workspace=Path(workspace_value).expanduser() if workspace_value else None,
        host=str(values.get("host", "127.0.0.1")),
        port=_parse_number("port", values.get("port", 8000), int),
        debug=_parse_bool("debug", values.get("debug", False)),
    )
