"""Real ctx runner using asyncio subprocesses."""

import asyncio
import logging

from ctx_chat.config import DEFAULT_MAX_BUFFER_BYTES, DEFAULT_TIMEOUT_SECONDS
from ctx_chat.integrations.process_runner.abc import ProcessRunner, RunningProcess
from ctx_chat.models.invocation import (
    InvocationError,
    InvocationRequest,
    OutputLimitExceededError,
    ProcessCompletion,
    ProcessExitError,
    ProcessTerminatedError,
    ProcessTimeoutError,
)

logger = logging.getLogger(__name__)

_READ_CHUNK_BYTES = 64 * 1024


class _AsyncioProcess(RunningProcess):
    """Wraps asyncio.subprocess.Process with capture and time bounds."""

    def __init__(
        self,
        process: asyncio.subprocess.Process,
        command: tuple[str, ...],
        timeout_seconds: float,
        max_buffer_bytes: int,
    ) -> None:
        self._process = process
        self._command = command
        self._timeout_seconds = timeout_seconds
        self._max_buffer_bytes = max_buffer_bytes
        self._captured = 0
        self._overflowed = False

    def terminate(self) -> None:
        if self._process.returncode is not None:
            return
        try:
            self._process.terminate()
        except ProcessLookupError:
            pass

    def _kill(self) -> None:
        if self._process.returncode is not None:
            return
        try:
            self._process.kill()
        except ProcessLookupError:
            pass

    async def _pump(self, reader: asyncio.StreamReader | None, buffer: bytearray) -> None:
        if reader is None:
            return
        while True:
            chunk = await reader.read(_READ_CHUNK_BYTES)
            if not chunk:
                return
            if self._overflowed:
                continue
            room = self._max_buffer_bytes - self._captured
            if len(chunk) > room:
                buffer.extend(chunk[:room])
                self._captured = self._max_buffer_bytes
                self._overflowed = True
                self._kill()
                continue
            buffer.extend(chunk)
            self._captured += len(chunk)

    async def _collect(self, stdout: bytearray, stderr: bytearray) -> int:
        await asyncio.gather(
            self._pump(self._process.stdout, stdout),
            self._pump(self._process.stderr, stderr),
        )
        return await self._process.wait()

    async def wait(self) -> ProcessCompletion:
        stdout = bytearray()
        stderr = bytearray()
        error: InvocationError | None = None
        try:
            returncode = await asyncio.wait_for(
                self._collect(stdout, stderr), timeout=self._timeout_seconds
            )
        except TimeoutError:
            self._kill()
            await self._process.wait()
            error = ProcessTimeoutError(self._command, self._timeout_seconds)
        else:
            if self._overflowed:
                error = OutputLimitExceededError(self._command, self._max_buffer_bytes)
            elif returncode < 0:
                error = ProcessTerminatedError(self._command, returncode)
            elif returncode != 0:
                error = ProcessExitError(self._command, returncode)

        return ProcessCompletion(
            error=error,
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=stderr.decode("utf-8", errors="replace"),
        )


class RealProcessRunner(ProcessRunner):
    """Production implementation using asyncio.create_subprocess_exec.

    Attributes:
        timeout_seconds: Wall-clock bound per invocation
        max_buffer_bytes: Bound on stdout and stderr combined
    """

    def __init__(
        self,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        max_buffer_bytes: int = DEFAULT_MAX_BUFFER_BYTES,
    ) -> None:
        self.timeout_seconds = timeout_seconds
        self.max_buffer_bytes = max_buffer_bytes

    async def spawn(self, request: InvocationRequest) -> RunningProcess:
        process = await asyncio.create_subprocess_exec(
            request.executable,
            *request.arguments,
            cwd=request.working_directory,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
        logger.debug("Spawned pid %s", process.pid)
        return _AsyncioProcess(
            process,
            request.command,
            timeout_seconds=self.timeout_seconds,
            max_buffer_bytes=self.max_buffer_bytes,
        )
