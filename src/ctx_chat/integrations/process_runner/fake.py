"""In-memory fake implementation of ProcessRunner for testing."""

import asyncio
import signal
from dataclasses import dataclass

from ctx_chat.integrations.process_runner.abc import ProcessRunner, RunningProcess
from ctx_chat.models.invocation import (
    InvocationError,
    InvocationRequest,
    ProcessCompletion,
    ProcessExitError,
    ProcessTerminatedError,
)


@dataclass(frozen=True)
class FakeProcessScript:
    """Scripted behavior of one fake process.

    Attributes:
        stdout: Captured standard output
        stderr: Captured standard error
        returncode: Exit status reported on normal completion
        error: Explicit failure cause, overriding returncode (e.g. a timeout)
        delay_seconds: Time before normal completion
        wait_for_termination: Never complete normally; finish only after terminate()
        termination_delay_seconds: Time between terminate() and completion
    """

    stdout: str = ""
    stderr: str = ""
    returncode: int = 0
    error: InvocationError | None = None
    delay_seconds: float = 0.0
    wait_for_termination: bool = False
    termination_delay_seconds: float = 0.0


class FakeRunningProcess(RunningProcess):
    """Fake process driven by a FakeProcessScript."""

    def __init__(self, request: InvocationRequest, script: FakeProcessScript) -> None:
        self._request = request
        self._script = script
        self._terminate_count = 0
        self._terminated = asyncio.Event()
        self._finished = False

    @property
    def request(self) -> InvocationRequest:
        """The request this process was spawned for."""
        return self._request

    @property
    def terminate_count(self) -> int:
        """Number of terminate() calls received."""
        return self._terminate_count

    @property
    def finished(self) -> bool:
        """Whether wait() has returned."""
        return self._finished

    def terminate(self) -> None:
        self._terminate_count += 1
        self._terminated.set()

    async def wait(self) -> ProcessCompletion:
        script = self._script
        if script.wait_for_termination:
            await self._terminated.wait()
            await asyncio.sleep(script.termination_delay_seconds)
            self._finished = True
            return ProcessCompletion(
                error=ProcessTerminatedError(self._request.command, -signal.SIGTERM),
                stdout=script.stdout,
                stderr=script.stderr,
            )

        await asyncio.sleep(script.delay_seconds)
        self._finished = True
        error = script.error
        if error is None and script.returncode != 0:
            error = ProcessExitError(self._request.command, script.returncode)
        return ProcessCompletion(error=error, stdout=script.stdout, stderr=script.stderr)


class FakeProcessRunner(ProcessRunner):
    """In-memory fake implementation for testing.

    All state is provided via constructor using keyword arguments.
    This class has NO public setup methods.

    Examples:
        >>> runner = FakeProcessRunner(
        ...     scripts={("status", "--no-color"): FakeProcessScript(stdout="3 tasks pending")}
        ... )
        >>> outcome = await runner.invoke(InvocationRequest("ctx", ("status", "--no-color")))
        >>> assert runner.spawned_arguments == [("status", "--no-color")]
    """

    def __init__(
        self,
        *,
        scripts: dict[tuple[str, ...], FakeProcessScript] | None = None,
        default_script: FakeProcessScript | None = None,
        start_error: OSError | ValueError | None = None,
    ) -> None:
        """Create FakeProcessRunner with pre-configured processes.

        Args:
            scripts: Mapping of argument vector -> script for that invocation
            default_script: Script used when the arguments are not in scripts
            start_error: If set, every spawn raises this error
        """
        self._scripts = scripts or {}
        self._default_script = default_script or FakeProcessScript()
        self._start_error = start_error
        self._processes: list[FakeRunningProcess] = []

    @property
    def processes(self) -> list[FakeRunningProcess]:
        """Processes spawned so far, in order."""
        return self._processes.copy()

    @property
    def spawned_requests(self) -> list[InvocationRequest]:
        """Requests that reached spawn, in order."""
        return [process.request for process in self._processes]

    @property
    def spawned_arguments(self) -> list[tuple[str, ...]]:
        """Argument vectors that reached spawn, in order."""
        return [process.request.arguments for process in self._processes]

    async def spawn(self, request: InvocationRequest) -> RunningProcess:
        if self._start_error is not None:
            raise self._start_error
        script = self._scripts.get(request.arguments, self._default_script)
        process = FakeRunningProcess(request, script)
        self._processes.append(process)
        return process
