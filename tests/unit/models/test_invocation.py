"""Tests for invocation models and outcome normalization."""

import signal

from ctx_chat.models.invocation import (
    InvocationCancelledError,
    InvocationFailure,
    InvocationRequest,
    InvocationSuccess,
    OutputLimitExceededError,
    ProcessCompletion,
    ProcessExitError,
    ProcessStartError,
    ProcessTerminatedError,
    ProcessTimeoutError,
    normalize_completion,
)
from ctx_chat.models.operation import CommandTag


class TestNormalizeCompletion:
    """Tests for the output-presence success heuristic."""

    def test_clean_exit_is_success(self) -> None:
        """A zero exit is a success even with no output."""
        outcome = normalize_completion(ProcessCompletion(error=None, stdout="", stderr=""))

        assert outcome == InvocationSuccess(stdout="", stderr="")
        assert outcome.output == ""

    def test_nonzero_exit_with_stdout_is_success(self) -> None:
        """Output on a nonzero exit is returned verbatim as a success."""
        error = ProcessExitError(("ctx", "drift"), 1)

        outcome = normalize_completion(
            ProcessCompletion(error=error, stdout="2 files drifted\n", stderr="")
        )

        assert isinstance(outcome, InvocationSuccess)
        assert outcome.stdout == "2 files drifted\n"
        assert outcome.output == "2 files drifted"

    def test_nonzero_exit_with_only_stderr_is_success(self) -> None:
        """stderr alone also counts as output."""
        error = ProcessExitError(("ctx", "drift"), 1)

        outcome = normalize_completion(ProcessCompletion(error=error, stdout="", stderr="warn"))

        assert isinstance(outcome, InvocationSuccess)
        assert outcome.stderr == "warn"

    def test_error_with_no_output_is_failure_with_original_cause(self) -> None:
        """The cause survives untouched when both streams are empty."""
        error = ProcessTimeoutError(("ctx", "status"), 30.0)

        outcome = normalize_completion(ProcessCompletion(error=error, stdout="", stderr=""))

        assert isinstance(outcome, InvocationFailure)
        assert outcome.cause is error
        assert outcome.stdout == ""
        assert outcome.stderr == ""

    def test_output_concatenates_stdout_then_stderr(self) -> None:
        """output joins both streams in order and trims the ends."""
        outcome = InvocationSuccess(stdout="  one\n", stderr="two  \n")

        assert outcome.output == "one\ntwo"


class TestFailureCauses:
    """Tests for failure cause messages."""

    def test_cancelled(self) -> None:
        """The cancellation cause has a fixed message."""
        assert str(InvocationCancelledError()) == "Cancelled"

    def test_start_error_accepts_argument_errors(self) -> None:
        """Arguments the OS rejects are reported as start errors."""
        err = ProcessStartError("ctx", ValueError("embedded null byte"))

        assert str(err) == "Could not start ctx: embedded null byte"

    def test_start_error_uses_os_reason(self) -> None:
        """Start errors name the executable and the OS reason."""
        err = ProcessStartError("ctx", FileNotFoundError(2, "No such file or directory"))

        assert str(err) == "Could not start ctx: No such file or directory"

    def test_exit_error_message(self) -> None:
        """Exit errors show the command and the status."""
        err = ProcessExitError(("ctx", "status", "--no-color"), 2)

        assert str(err) == "Command failed: ctx status --no-color\nExit code: 2"
        assert err.returncode == 2

    def test_terminated_error_names_signal(self) -> None:
        """Signal exits name the signal."""
        err = ProcessTerminatedError(("ctx", "sync"), -signal.SIGTERM)

        assert str(err) == "Command terminated by SIGTERM: ctx sync"
        assert isinstance(err, ProcessExitError)

    def test_timeout_message(self) -> None:
        """Timeouts state the bound."""
        err = ProcessTimeoutError(("ctx", "load"), 30.0)

        assert str(err) == "Command timed out after 30 seconds: ctx load"

    def test_output_limit_message(self) -> None:
        """Overflow states the bound."""
        err = OutputLimitExceededError(("ctx", "agent"), 1024)

        assert "1024 bytes" in str(err)


class TestInvocationRequest:
    """Tests for InvocationRequest."""

    def test_command_prepends_executable(self) -> None:
        """command is the executable followed by the arguments."""
        request = InvocationRequest("ctx", ("status", "--no-color"))

        assert request.command == ("ctx", "status", "--no-color")


class TestCommandTagParse:
    """Tests for CommandTag.parse."""

    def test_parses_plain_value(self) -> None:
        assert CommandTag.parse("status") is CommandTag.STATUS

    def test_ignores_slash_and_case(self) -> None:
        """Hosts may forward the command as typed."""
        assert CommandTag.parse(" /Drift ") is CommandTag.DRIFT

    def test_unknown_is_none(self) -> None:
        assert CommandTag.parse("deploy") is None

    def test_missing_is_none(self) -> None:
        assert CommandTag.parse(None) is None
        assert CommandTag.parse("") is None
