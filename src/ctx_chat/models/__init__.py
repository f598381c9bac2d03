"""Data models for ctx-chat."""

from ctx_chat.models.invocation import (
    InvocationError,
    InvocationFailure,
    InvocationOutcome,
    InvocationRequest,
    InvocationSuccess,
)
from ctx_chat.models.operation import ChatRequest, CommandTag, Followup, OperationResult

__all__ = [
    "ChatRequest",
    "CommandTag",
    "Followup",
    "InvocationError",
    "InvocationFailure",
    "InvocationOutcome",
    "InvocationRequest",
    "InvocationSuccess",
    "OperationResult",
]
