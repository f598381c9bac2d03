"""Working directory resolution for chat sessions."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def safe_cwd() -> tuple[Path | None, str | None]:
    """Get current working directory, detecting if it no longer exists.

    Returns:
        tuple[Path | None, str | None]: (path, error_message)
        - If successful: (Path, None)
        - If directory deleted: (None, error_message)
    """
    try:
        return (Path.cwd(), None)
    except (FileNotFoundError, OSError):
        return (None, "Current working directory no longer exists")


def resolve_workspace(explicit: Path | None, configured: Path | None) -> Path | None:
    """Pick the directory ctx runs in.

    An explicit directory (CLI option, request body) wins over the configured
    one, which wins over the current directory. Anything that is not an
    existing directory resolves to None, which the router reports to the user.

    Args:
        explicit: Directory chosen for this request, if any
        configured: Directory from ChatConfig.workspace, if any

    Returns:
        Absolute workspace path, or None when no folder is open
    """
    if explicit is not None:
        candidate: Path | None = explicit
    elif configured is not None:
        candidate = configured
    else:
        candidate, error = safe_cwd()
        if error is not None:
            logger.warning(error)

    if candidate is None:
        return None
    candidate = candidate.expanduser()
    if not candidate.is_dir():
        return None
    return candidate.resolve()
