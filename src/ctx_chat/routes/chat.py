"""HTTP route handlers for chat requests."""

import asyncio
import json
import logging
from collections.abc import AsyncGenerator
from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse
from pydantic import BaseModel

from ctx_chat.context import ChatContext
from ctx_chat.integrations.cancellation.real import CancellationTokenSource
from ctx_chat.integrations.response_stream.queue import ChatEvent, QueueResponseStream
from ctx_chat.models.operation import ChatRequest
from ctx_chat.services.followups import provide_followups
from ctx_chat.services.router import CommandRouter
from ctx_chat.workspace import resolve_workspace

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])


class ChatRequestBody(BaseModel):
    """Request body for a chat turn."""

    command: str | None = None
    prompt: str = ""
    working_directory: str | None = None


def get_context(request: Request) -> ChatContext:
    """Get ChatContext from app state."""
    return request.app.state.context


def format_sse(event: ChatEvent) -> str:
    """Encode one event in Server-Sent Events framing."""
    return f"event: {event.event_type}\ndata: {json.dumps(event.data)}\n\n"


def _log_abandoned_route(task: "asyncio.Task[None]") -> None:
    if task.cancelled():
        return
    err = task.exception()
    if err is not None:
        logger.error("Chat request failed after the client went away", exc_info=err)


async def stream_chat_events(
    command_router: CommandRouter, chat_request: ChatRequest
) -> AsyncGenerator[str, None]:
    """Route one request and yield its SSE frames.

    Closing the generator early (client disconnect) cancels the ctx process.
    The routing task is then left to finish on its own; its result is only
    logged.

    Args:
        command_router: Router bound to the request's context
        chat_request: Request to route

    Yields:
        progress and markdown frames as they happen, then followups and done
    """
    queue: asyncio.Queue[ChatEvent | None] = asyncio.Queue()
    stream = QueueResponseStream(queue)
    source = CancellationTokenSource()

    async def run() -> None:
        try:
            result = await command_router.route(chat_request, stream, source.token)
            followups = [
                {"prompt": followup.prompt, "command": followup.command.value}
                for followup in provide_followups(result)
            ]
            queue.put_nowait(ChatEvent("followups", followups))
            queue.put_nowait(ChatEvent("done", {"command": result.command.value}))
        finally:
            queue.put_nowait(None)

    task = asyncio.create_task(run())
    try:
        while True:
            event = await queue.get()
            if event is None:
                break
            yield format_sse(event)
    finally:
        source.cancel()
        if task.done():
            task.result()
        else:
            logger.info("Client went away; cancelling chat request")
            task.add_done_callback(_log_abandoned_route)


@router.post("/chat")
async def chat(request: Request, body: ChatRequestBody) -> StreamingResponse:
    """Route a chat turn and stream the response via SSE.

    The ctx process is cancelled if the client disconnects mid-stream.
    """
    ctx = get_context(request)
    if body.working_directory is not None:
        ctx = ctx.with_workspace(resolve_workspace(Path(body.working_directory), None))

    chat_request = ChatRequest(command=body.command, prompt=body.prompt)

    return StreamingResponse(
        stream_chat_events(CommandRouter(ctx), chat_request),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
        },
    )
