"""Terminal response stream rendered with rich."""

from rich.console import Console
from rich.markdown import Markdown

from ctx_chat.integrations.response_stream.abc import ResponseStream


class ConsoleResponseStream(ResponseStream):
    """Renders markdown to stdout and progress lines to stderr.

    Markdown fragments are buffered and rendered together by flush(), since
    handlers may split one code block across several calls.
    """

    def __init__(self, console: Console | None = None, progress_console: Console | None = None) -> None:
        self._console = console or Console()
        self._progress_console = progress_console or Console(stderr=True)
        self._pending: list[str] = []

    def progress(self, message: str) -> None:
        self._progress_console.print(message, style="dim")

    def markdown(self, text: str) -> None:
        self._pending.append(text)

    def flush(self) -> None:
        """Render buffered markdown."""
        if not self._pending:
            return
        self._console.print(Markdown("".join(self._pending)))
        self._pending.clear()
