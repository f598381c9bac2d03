"""Cancellation signal integration."""

from ctx_chat.integrations.cancellation.abc import CancellationToken, Disposable
from ctx_chat.integrations.cancellation.fake import FakeCancellationToken
from ctx_chat.integrations.cancellation.real import CancellationTokenSource
from ctx_chat.integrations.cancellation.registration import CancellationRegistration

__all__ = [
    "CancellationRegistration",
    "CancellationToken",
    "CancellationTokenSource",
    "Disposable",
    "FakeCancellationToken",
]
