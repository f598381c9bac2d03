"""Pytest configuration and fixtures."""

import pytest

from ctx_chat.context import ChatContext
from ctx_chat.integrations.process_runner.fake import FakeProcessRunner
from ctx_chat.integrations.response_stream.fake import RecordingResponseStream
from ctx_chat.services.router import CommandRouter


@pytest.fixture
def stream() -> RecordingResponseStream:
    """Create a fresh RecordingResponseStream."""
    return RecordingResponseStream()


@pytest.fixture
def fake_runner() -> FakeProcessRunner:
    """Create a FakeProcessRunner where every invocation succeeds silently."""
    return FakeProcessRunner()


@pytest.fixture
def chat_context(fake_runner: FakeProcessRunner) -> ChatContext:
    """Create a ChatContext with fake implementations."""
    return ChatContext.for_test(process_runner=fake_runner)


@pytest.fixture
def command_router(chat_context: ChatContext) -> CommandRouter:
    """Create a CommandRouter over the fake context."""
    return CommandRouter(chat_context)
