"""Application context for dependency injection."""

from dataclasses import dataclass, replace
from pathlib import Path

from ctx_chat.config import ChatConfig
from ctx_chat.integrations.process_runner.abc import ProcessRunner
from ctx_chat.integrations.process_runner.fake import FakeProcessRunner, FakeProcessScript
from ctx_chat.integrations.process_runner.real import RealProcessRunner
from ctx_chat.workspace import resolve_workspace


@dataclass(frozen=True)
class ChatContext:
    """Immutable context holding all dependencies for routing chat requests.

    Created at the entry point (CLI or HTTP lifespan) and threaded through
    the router. Use for_test() for testing scenarios.

    Attributes:
        process_runner: Runs the ctx executable
        config: Loaded configuration
        workspace_root: Directory ctx runs in, None when no folder is open
    """

    process_runner: ProcessRunner
    config: ChatConfig
    workspace_root: Path | None

    def with_workspace(self, workspace_root: Path | None) -> "ChatContext":
        """Return a copy bound to a different workspace."""
        return replace(self, workspace_root=workspace_root)

    @classmethod
    def for_test(
        cls,
        *,
        scripts: dict[tuple[str, ...], FakeProcessScript] | None = None,
        default_script: FakeProcessScript | None = None,
        process_runner: ProcessRunner | None = None,
        config: ChatConfig | None = None,
        workspace_root: Path | None = Path("/proj"),
    ) -> "ChatContext":
        """Create a test context with fake implementations.

        Args:
            scripts: Pre-configured processes for FakeProcessRunner
            default_script: Fallback process for FakeProcessRunner
            process_runner: Runner to use instead of a new FakeProcessRunner
            config: Configuration (defaults to ChatConfig())
            workspace_root: Workspace directory; pass None for "no folder open"

        Returns:
            ChatContext with fake implementations
        """
        runner = process_runner or FakeProcessRunner(
            scripts=scripts, default_script=default_script
        )
        return cls(
            process_runner=runner,
            config=config or ChatConfig(),
            workspace_root=workspace_root,
        )


def create_context(config: ChatConfig, *, workspace: Path | None = None) -> ChatContext:
    """Create production context with real implementations.

    Args:
        config: Loaded configuration
        workspace: Explicit workspace directory overriding the configured one

    Returns:
        ChatContext backed by RealProcessRunner
    """
    runner = RealProcessRunner(
        timeout_seconds=config.timeout_seconds,
        max_buffer_bytes=config.max_buffer_bytes,
    )
    return ChatContext(
        process_runner=runner,
        config=config,
        workspace_root=resolve_workspace(workspace, config.workspace),
    )
