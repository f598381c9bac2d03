"""Chat response surface integration."""

from ctx_chat.integrations.response_stream.abc import ResponseStream
from ctx_chat.integrations.response_stream.fake import RecordingResponseStream

__all__ = ["RecordingResponseStream", "ResponseStream"]
