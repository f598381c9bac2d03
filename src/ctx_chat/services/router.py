"""Routing of chat requests to ctx operations.

Each operation follows the same template: announce progress, run ctx,
render the trimmed output, and turn any failure into an error block. No
handler lets an exception escape to the caller of route().
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from pathlib import Path

from ctx_chat.context import ChatContext
from ctx_chat.integrations.cancellation.abc import CancellationToken
from ctx_chat.integrations.response_stream.abc import ResponseStream
from ctx_chat.models.invocation import (
    InvocationCancelledError,
    InvocationError,
    InvocationRequest,
    InvocationSuccess,
)
from ctx_chat.models.operation import ChatRequest, CommandTag, OperationResult
from ctx_chat.services.formatting import (
    ADD_USAGE_MESSAGE,
    CANCELLED_MESSAGE,
    HELP_MESSAGE,
    HOOK_FALLBACK_NOTE,
    NO_WORKSPACE_MESSAGE,
    code_block,
    error_block,
)

logger = logging.getLogger(__name__)

DEFAULT_HOOK_TOOL = "copilot"

# Checked in order; the first family with a keyword in the prompt wins.
INTENT_KEYWORDS: tuple[tuple[tuple[str, ...], CommandTag], ...] = (
    (("init",), CommandTag.INIT),
    (("status",), CommandTag.STATUS),
    (("drift",), CommandTag.DRIFT),
    (("recall", "session", "history"), CommandTag.RECALL),
)


def infer_command(prompt: str) -> CommandTag | None:
    """Guess the operation a free-form prompt asks for.

    Args:
        prompt: Free text typed by the user

    Returns:
        Matching tag, or None when no keyword is present
    """
    text = prompt.strip().lower()
    for keywords, tag in INTENT_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return tag
    return None


@dataclass(frozen=True)
class _Scope:
    """Per-request state shared by the handlers."""

    stream: ResponseStream
    cwd: Path
    cancellation: CancellationToken | None


@dataclass(frozen=True)
class _SimpleOperation:
    """An operation that runs ctx once with a fixed argument vector.

    Attributes:
        tag: Operation identity
        progress: Progress line shown while ctx runs
        arguments: ctx argument vector
        action: Completes "Failed to ..." in the error block
        fenced: Wrap output in a code block (False for preformatted markdown)
        empty_message: Shown instead of the output when ctx prints nothing
    """

    tag: CommandTag
    progress: str
    arguments: tuple[str, ...]
    action: str
    fenced: bool = True
    empty_message: str | None = None


_SIMPLE_OPERATIONS: dict[CommandTag, _SimpleOperation] = {
    op.tag: op
    for op in (
        _SimpleOperation(
            CommandTag.STATUS,
            "Checking context status...",
            ("status", "--no-color"),
            "get status",
        ),
        _SimpleOperation(
            CommandTag.AGENT,
            "Generating AI-ready context packet...",
            ("agent",),
            "generate agent context",
            fenced=False,
        ),
        _SimpleOperation(
            CommandTag.DRIFT,
            "Detecting context drift...",
            ("drift", "--no-color"),
            "detect drift",
        ),
        _SimpleOperation(
            CommandTag.LOAD,
            "Loading assembled context...",
            ("load",),
            "load context",
            fenced=False,
        ),
        _SimpleOperation(
            CommandTag.COMPACT,
            "Compacting context...",
            ("compact", "--no-color"),
            "compact context",
            empty_message="Context compacted successfully.",
        ),
        _SimpleOperation(
            CommandTag.SYNC,
            "Syncing context with codebase...",
            ("sync", "--no-color"),
            "sync context",
            empty_message="Context synced with codebase.",
        ),
    )
}

_Handler = Callable[[_Scope, str], Awaitable[OperationResult]]


class CommandRouter:
    """Dispatches chat requests to ctx operation handlers.

    Example:
        >>> router = CommandRouter(ctx)
        >>> result = await router.route(ChatRequest(command="status"), stream, token)
        >>> followups = provide_followups(result)
    """

    def __init__(self, ctx: ChatContext) -> None:
        """Create CommandRouter with chat context.

        Args:
            ctx: Chat context with injected dependencies
        """
        self._ctx = ctx
        self._handlers: dict[CommandTag, _Handler] = {
            CommandTag.INIT: self._handle_init,
            CommandTag.RECALL: self._handle_recall,
            CommandTag.HOOK: self._handle_hook,
            CommandTag.ADD: self._handle_add,
        }
        for tag, operation in _SIMPLE_OPERATIONS.items():
            self._handlers[tag] = self._simple_handler(operation)

    @property
    def recognized_commands(self) -> frozenset[CommandTag]:
        """Tags that dispatch straight to a handler."""
        return frozenset(self._handlers)

    async def route(
        self,
        request: ChatRequest,
        stream: ResponseStream,
        cancellation: CancellationToken | None = None,
    ) -> OperationResult:
        """Route one request and render its response.

        Args:
            request: Explicit command and/or free text
            stream: Host response surface
            cancellation: Host cancellation token for the request

        Returns:
            OperationResult naming the operation that handled the request
        """
        tag = CommandTag.parse(request.command)
        cwd = self._ctx.workspace_root
        if cwd is None:
            stream.markdown(NO_WORKSPACE_MESSAGE)
            return OperationResult(tag or CommandTag.NONE)

        scope = _Scope(stream=stream, cwd=cwd, cancellation=cancellation)
        if tag is not None and tag in self._handlers:
            logger.debug("Dispatching explicit command %s", tag.value)
            return await self._handlers[tag](scope, request.prompt)
        return await self._handle_freeform(scope, request.prompt)

    async def _handle_freeform(self, scope: _Scope, prompt: str) -> OperationResult:
        tag = infer_command(prompt)
        if tag is None:
            logger.debug("No intent keyword in prompt; showing help")
            scope.stream.markdown(HELP_MESSAGE)
            return OperationResult(CommandTag.HELP)
        logger.debug("Inferred command %s from prompt", tag.value)
        return await self._handlers[tag](scope, prompt)

    async def _run(self, scope: _Scope, *arguments: str) -> InvocationSuccess:
        request = InvocationRequest(
            executable=self._ctx.config.executable_path,
            arguments=arguments,
            working_directory=scope.cwd,
            cancellation=scope.cancellation,
        )
        return await self._ctx.process_runner.run(request)

    def _report_failure(self, scope: _Scope, action: str, err: InvocationError) -> None:
        # Only a pre-start cancellation is silent; a process terminated after
        # a cancel request still reports its failure message
        if isinstance(err, InvocationCancelledError):
            logger.info("Cancelled while trying to %s", action)
            scope.stream.markdown(CANCELLED_MESSAGE)
            return
        logger.warning("Failed to %s: %s", action, err)
        scope.stream.markdown(error_block(action, str(err)))

    def _simple_handler(self, operation: _SimpleOperation) -> _Handler:
        async def handle(scope: _Scope, prompt: str) -> OperationResult:
            scope.stream.progress(operation.progress)
            try:
                result = await self._run(scope, *operation.arguments)
            except InvocationError as err:
                self._report_failure(scope, operation.action, err)
                return OperationResult(operation.tag)

            output = result.output
            if not output and operation.empty_message is not None:
                scope.stream.markdown(operation.empty_message)
            elif operation.fenced:
                scope.stream.markdown(code_block(output))
            else:
                scope.stream.markdown(output)
            return OperationResult(operation.tag)

        return handle

    async def _handle_init(self, scope: _Scope, prompt: str) -> OperationResult:
        scope.stream.progress("Initializing .context/ directory...")
        try:
            result = await self._run(scope, "init", "--no-color")
        except InvocationError as err:
            self._report_failure(scope, "initialize context", err)
            return OperationResult(CommandTag.INIT)

        output = result.output
        if output:
            scope.stream.markdown(code_block(output))

        # Instructions file for Copilot; init already succeeded without it
        scope.stream.progress("Generating Copilot instructions...")
        try:
            hook = await self._run(scope, "hook", DEFAULT_HOOK_TOOL, "--write", "--no-color")
        except InvocationError as err:
            logger.info("Copilot instructions not generated: %s", err)
            scope.stream.markdown(HOOK_FALLBACK_NOTE)
        else:
            if hook.output:
                scope.stream.markdown("\n**Copilot integration:**\n" + code_block(hook.output))
            else:
                scope.stream.markdown(
                    "\n`.github/copilot-instructions.md` generated for Copilot context loading."
                )

        if not output:
            scope.stream.markdown(
                "`.context/` directory initialized. Run `/status` to see your project context."
            )
        return OperationResult(CommandTag.INIT)

    async def _handle_recall(self, scope: _Scope, prompt: str) -> OperationResult:
        scope.stream.progress("Searching session history...")
        arguments = ["recall", "list", "--no-color"]
        query = prompt.strip()
        if query:
            arguments.extend(["--query", query])
        try:
            result = await self._run(scope, *arguments)
        except InvocationError as err:
            self._report_failure(scope, "recall sessions", err)
            return OperationResult(CommandTag.RECALL)

        if result.output:
            scope.stream.markdown(code_block(result.output))
        else:
            scope.stream.markdown("No session history found.")
        return OperationResult(CommandTag.RECALL)

    async def _handle_hook(self, scope: _Scope, prompt: str) -> OperationResult:
        tool = prompt.strip() or DEFAULT_HOOK_TOOL
        scope.stream.progress(f"Generating {tool} integration config...")
        try:
            result = await self._run(scope, "hook", tool, "--write", "--no-color")
        except InvocationError as err:
            self._report_failure(scope, "generate hook", err)
            return OperationResult(CommandTag.HOOK)

        if result.output:
            scope.stream.markdown(code_block(result.output))
        else:
            scope.stream.markdown(f"Integration config for **{tool}** generated.")
        return OperationResult(CommandTag.HOOK)

    async def _handle_add(self, scope: _Scope, prompt: str) -> OperationResult:
        parts = prompt.split()
        if not parts:
            scope.stream.markdown(ADD_USAGE_MESSAGE)
            return OperationResult(CommandTag.ADD)

        entry_type = parts[0]
        content = " ".join(parts[1:])
        scope.stream.progress(f"Adding {entry_type}...")
        arguments = ["add", entry_type]
        if content:
            arguments.append(content)
        try:
            result = await self._run(scope, *arguments)
        except InvocationError as err:
            self._report_failure(scope, f"add {entry_type}", err)
            return OperationResult(CommandTag.ADD)

        if result.output:
            scope.stream.markdown(code_block(result.output))
        else:
            scope.stream.markdown(f"Added **{entry_type}**: {content}")
        return OperationResult(CommandTag.ADD)
