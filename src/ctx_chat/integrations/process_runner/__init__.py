"""ctx executable runner integration."""

from ctx_chat.integrations.process_runner.abc import ProcessRunner, RunningProcess
from ctx_chat.integrations.process_runner.fake import FakeProcessRunner, FakeProcessScript

__all__ = ["FakeProcessRunner", "FakeProcessScript", "ProcessRunner", "RunningProcess"]
