"""Abstract interface for running the ctx executable.

This module provides abstraction over external process execution, enabling
dependency injection for testing without mock.patch. Subclasses only know how
to start a process; the cancellation race and the outcome normalization live
here so every implementation shares them.
"""

import asyncio
import logging
from abc import ABC, abstractmethod

from ctx_chat.integrations.cancellation.registration import CancellationRegistration
from ctx_chat.models.invocation import (
    InvocationCancelledError,
    InvocationFailure,
    InvocationOutcome,
    InvocationRequest,
    InvocationSuccess,
    ProcessCompletion,
    ProcessStartError,
    format_command,
    normalize_completion,
)

logger = logging.getLogger(__name__)


class RunningProcess(ABC):
    """Handle on a spawned process."""

    @abstractmethod
    def terminate(self) -> None:
        """Ask the process to stop. Best effort; must not raise."""
        ...

    @abstractmethod
    async def wait(self) -> ProcessCompletion:
        """Wait for the process to finish and return its captured output.

        Implementations enforce their own time and output bounds and report
        them through ProcessCompletion.error rather than raising.
        """
        ...


class ProcessRunner(ABC):
    """Abstract interface for executing one external command per call.

    All implementations must implement spawn(); invoke() and run() are shared.
    """

    @abstractmethod
    async def spawn(self, request: InvocationRequest) -> RunningProcess:
        """Start the process described by the request.

        Args:
            request: Command, working directory and cancellation token

        Returns:
            RunningProcess handle

        Raises:
            OSError: If the executable cannot be started
            ValueError: If an argument cannot be passed to the OS (embedded NUL)
        """
        ...

    async def invoke(self, request: InvocationRequest) -> InvocationOutcome:
        """Run the command once and return a normalized outcome.

        Never raises for process problems. If the caller's task is cancelled
        while waiting, the process is asked to terminate and CancelledError
        propagates.

        Args:
            request: Command to run

        Returns:
            InvocationSuccess when there is any output or a zero exit,
            InvocationFailure otherwise

        Example:
            >>> outcome = await runner.invoke(
            ...     InvocationRequest("ctx", ("status", "--no-color"), Path("/repo"))
            ... )
            >>> if isinstance(outcome, InvocationSuccess):
            ...     print(outcome.output)
        """
        token = request.cancellation
        if token is not None and token.is_cancellation_requested:
            logger.debug("Skipping %s: already cancelled", format_command(request.command))
            return InvocationFailure(cause=InvocationCancelledError(), stdout="", stderr="")

        logger.debug("Running %s in %s", format_command(request.command), request.working_directory)
        try:
            process = await self.spawn(request)
        except (OSError, ValueError) as err:
            logger.debug("Failed to start %s: %s", request.executable, err)
            return InvocationFailure(
                cause=ProcessStartError(request.executable, err), stdout="", stderr=""
            )

        registration: CancellationRegistration | None = None
        if token is not None:
            registration = CancellationRegistration(token, process.terminate)

        try:
            completion = await process.wait()
        except asyncio.CancelledError:
            process.terminate()
            raise
        finally:
            if registration is not None:
                registration.dispose()

        outcome = normalize_completion(completion)
        if completion.error is not None:
            logger.debug(
                "%s finished with %s (%s)",
                format_command(request.command),
                type(completion.error).__name__,
                "normalized to success" if isinstance(outcome, InvocationSuccess) else "failure",
            )
        return outcome

    async def run(self, request: InvocationRequest) -> InvocationSuccess:
        """Run the command and return its output, raising on failure.

        This is a convenience wrapper over invoke() for callers that render
        failures through exception handling.

        Raises:
            InvocationError: The failure cause when the outcome is a failure
        """
        outcome = await self.invoke(request)
        if isinstance(outcome, InvocationFailure):
            raise outcome.cause
        return outcome
