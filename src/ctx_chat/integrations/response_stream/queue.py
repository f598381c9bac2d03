"""Response stream that feeds an asyncio queue, for streaming HTTP responses."""

import asyncio
from dataclasses import dataclass
from typing import Any

from ctx_chat.integrations.response_stream.abc import ResponseStream


@dataclass(frozen=True)
class ChatEvent:
    """One event destined for the HTTP client.

    event_type is "progress", "markdown", "followups" or "done".
    """

    event_type: str
    data: Any


class QueueResponseStream(ResponseStream):
    """Pushes every write onto a queue read by the route's generator.

    A None item on the queue marks the end of the response.
    """

    def __init__(self, queue: "asyncio.Queue[ChatEvent | None]") -> None:
        self._queue = queue

    def progress(self, message: str) -> None:
        self._queue.put_nowait(ChatEvent("progress", {"message": message}))

    def markdown(self, text: str) -> None:
        self._queue.put_nowait(ChatEvent("markdown", {"text": text}))
