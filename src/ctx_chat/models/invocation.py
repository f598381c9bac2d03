"""Invocation request, outcome and failure-cause models."""

import signal
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from ctx_chat.integrations.cancellation.abc import CancellationToken


class InvocationError(Exception):
    """Base class for every reason an invocation can fail."""


class InvocationCancelledError(InvocationError):
    """Raised when cancellation was requested before the process started."""

    def __init__(self) -> None:
        super().__init__("Cancelled")


class ProcessStartError(InvocationError):
    """Raised when the executable cannot be started at all.

    Covers both OS-level spawn errors (missing or non-executable file) and
    arguments the OS cannot accept, such as strings with embedded NUL bytes.
    """

    def __init__(self, executable: str, reason: Exception) -> None:
        self.executable = executable
        detail = getattr(reason, "strerror", None) or str(reason)
        super().__init__(f"Could not start {executable}: {detail}")


class ProcessExitError(InvocationError):
    """Raised when the process exits with a nonzero status."""

    def __init__(self, command: Sequence[str], returncode: int) -> None:
        self.command = tuple(command)
        self.returncode = returncode
        super().__init__(self._describe())

    def _describe(self) -> str:
        return f"Command failed: {format_command(self.command)}\nExit code: {self.returncode}"


class ProcessTerminatedError(ProcessExitError):
    """Raised when the process was ended by a signal."""

    def _describe(self) -> str:
        signum = -self.returncode
        try:
            name = signal.Signals(signum).name
        except ValueError:
            name = f"signal {signum}"
        return f"Command terminated by {name}: {format_command(self.command)}"


class ProcessTimeoutError(InvocationError):
    """Raised when the process outlives the wall-clock bound."""

    def __init__(self, command: Sequence[str], timeout_seconds: float) -> None:
        self.command = tuple(command)
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"Command timed out after {timeout_seconds:g} seconds: {format_command(command)}"
        )


class OutputLimitExceededError(InvocationError):
    """Raised when combined stdout and stderr outgrow the capture bound."""

    def __init__(self, command: Sequence[str], max_buffer_bytes: int) -> None:
        self.command = tuple(command)
        self.max_buffer_bytes = max_buffer_bytes
        super().__init__(
            f"Command output exceeded {max_buffer_bytes} bytes: {format_command(command)}"
        )


def format_command(command: Sequence[str]) -> str:
    """Render an argument vector for error messages."""
    return " ".join(str(arg) for arg in command)


@dataclass(frozen=True)
class InvocationRequest:
    """One external command to run.

    Attributes:
        executable: Path to the executable, or a bare name looked up on PATH
        arguments: Argument vector, not including the executable
        working_directory: Directory to run in (inherits ours when None)
        cancellation: Optional host cancellation token
    """

    executable: str
    arguments: tuple[str, ...]
    working_directory: Path | None = None
    cancellation: CancellationToken | None = None

    @property
    def command(self) -> tuple[str, ...]:
        """Executable followed by its arguments."""
        return (self.executable, *self.arguments)


@dataclass(frozen=True)
class ProcessCompletion:
    """Raw terminal event of a spawned process, before normalization.

    error is None when the process exited with status 0.
    """

    error: InvocationError | None
    stdout: str
    stderr: str


@dataclass(frozen=True)
class InvocationSuccess:
    """Captured output of an invocation treated as successful."""

    stdout: str
    stderr: str

    @property
    def output(self) -> str:
        """Both streams concatenated and trimmed."""
        return (self.stdout + self.stderr).strip()


@dataclass(frozen=True)
class InvocationFailure:
    """An invocation that produced no output and carries a failure cause."""

    cause: InvocationError
    stdout: str
    stderr: str


InvocationOutcome = InvocationSuccess | InvocationFailure


def normalize_completion(completion: ProcessCompletion) -> InvocationOutcome:
    """Decide success or failure for a finished process.

    The ctx tool uses nonzero exits to report conditions it detected (drift
    exits 1 when it finds stale context), so any output at all counts as a
    result. Only an error with both streams empty is surfaced as a failure.
    """
    if completion.error is None or completion.stdout or completion.stderr:
        return InvocationSuccess(stdout=completion.stdout, stderr=completion.stderr)
    return InvocationFailure(cause=completion.error, stdout="", stderr="")
