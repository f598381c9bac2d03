"""Command-line host: route one chat request from the terminal, or serve HTTP."""

import asyncio
import logging
import signal
from pathlib import Path

import click

from ctx_chat.config import load_config
from ctx_chat.context import ChatContext, create_context
from ctx_chat.integrations.cancellation.real import CancellationTokenSource
from ctx_chat.integrations.response_stream.abc import ResponseStream
from ctx_chat.integrations.response_stream.console import ConsoleResponseStream
from ctx_chat.main import run
from ctx_chat.models.operation import ChatRequest, OperationResult
from ctx_chat.services.followups import provide_followups
from ctx_chat.services.router import CommandRouter
from ctx_chat.workspace import resolve_workspace

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


def configure_logging(debug: bool) -> None:
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="[DEBUG %(name)s:%(lineno)d] %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)


async def route_interruptibly(
    ctx: ChatContext, request: ChatRequest, stream: ResponseStream
) -> OperationResult:
    """Route a request, cancelling the ctx invocation on Ctrl-C.

    Args:
        ctx: Chat context
        request: Request to route
        stream: Where the response is rendered

    Returns:
        OperationResult from the router
    """
    source = CancellationTokenSource()
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, source.cancel)
        handler_installed = True
    except (NotImplementedError, RuntimeError):
        logger.debug("SIGINT handler unavailable; Ctrl-C will not cancel ctx")
        handler_installed = False

    try:
        return await CommandRouter(ctx).route(request, stream, source.token)
    finally:
        if handler_installed:
            loop.remove_signal_handler(signal.SIGINT)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="ctx-chat")
@click.option(
    "--workspace",
    type=click.Path(path_type=Path),
    default=None,
    help="Project directory ctx runs in (defaults to the current directory).",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file (defaults to ~/.ctx-chat/config.toml).",
)
@click.option("--debug", is_flag=True, help="Log debug output to stderr.")
@click.pass_context
def cli(ctx: click.Context, workspace: Path | None, config_path: Path | None, debug: bool) -> None:
    """Chat with your project's persistent context through the ctx CLI."""
    # Only create context if not already provided (e.g., by tests)
    if ctx.obj is None:
        try:
            config = load_config(config_path)
        except ValueError as err:
            raise click.ClickException(str(err)) from err
        configure_logging(debug or config.debug)
        ctx.obj = create_context(config, workspace=workspace)
    elif workspace is not None:
        ctx.obj = ctx.obj.with_workspace(resolve_workspace(workspace, None))


@cli.command("ask")
@click.option(
    "-c",
    "--command",
    "command",
    default=None,
    help="Explicit command: init, status, agent, drift, recall, hook, add, load, compact, sync.",
)
@click.argument("text", nargs=-1)
@click.pass_obj
def ask_cmd(ctx: ChatContext, command: str | None, text: tuple[str, ...]) -> None:
    """Send one chat request.

    Without -c, the text is matched against intent keywords; text with no
    keyword shows the help overview.
    """
    request = ChatRequest(command=command, prompt=" ".join(text))
    stream = ConsoleResponseStream()
    result = asyncio.run(route_interruptibly(ctx, request, stream))
    stream.flush()

    followups = provide_followups(result)
    if not followups:
        return
    click.echo("")
    click.echo(click.style("Suggested next:", dim=True))
    for followup in followups:
        click.echo(f'  ctx-chat ask -c {followup.command.value} "{followup.prompt}"')


@cli.command("serve")
@click.pass_obj
def serve_cmd(ctx: ChatContext) -> None:
    """Serve the chat HTTP API with uvicorn."""
    run(context=ctx, config=ctx.config)


def main() -> None:
    """CLI entry point used by the `ctx-chat` console script."""
    cli()
