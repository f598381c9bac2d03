"""Tests for workspace resolution."""

from pathlib import Path

import pytest

from ctx_chat.workspace import resolve_workspace, safe_cwd


class TestResolveWorkspace:
    """Tests for resolve_workspace."""

    def test_explicit_wins(self, tmp_path: Path) -> None:
        explicit = tmp_path / "explicit"
        configured = tmp_path / "configured"
        explicit.mkdir()
        configured.mkdir()

        assert resolve_workspace(explicit, configured) == explicit.resolve()

    def test_configured_when_no_explicit(self, tmp_path: Path) -> None:
        assert resolve_workspace(None, tmp_path) == tmp_path.resolve()

    def test_current_directory_by_default(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)

        assert resolve_workspace(None, None) == tmp_path.resolve()

    def test_missing_directory_is_none(self, tmp_path: Path) -> None:
        """A folder that does not exist means no workspace is open."""
        assert resolve_workspace(tmp_path / "gone", None) is None

    def test_file_is_none(self, tmp_path: Path) -> None:
        some_file = tmp_path / "file.txt"
        some_file.write_text("x", encoding="utf-8")

        assert resolve_workspace(some_file, None) is None


def test_safe_cwd_returns_current_directory(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)

    path, error = safe_cwd()

    assert path is not None
    assert path.resolve() == tmp_path.resolve()
    assert error is None
