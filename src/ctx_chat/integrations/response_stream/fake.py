"""Recording response stream for testing."""

from ctx_chat.integrations.response_stream.abc import ResponseStream


class RecordingResponseStream(ResponseStream):
    """Captures everything written for test assertions."""

    def __init__(self) -> None:
        self._progress: list[str] = []
        self._markdown: list[str] = []

    @property
    def progress_messages(self) -> list[str]:
        """Progress lines, in order."""
        return self._progress.copy()

    @property
    def markdown_parts(self) -> list[str]:
        """Markdown fragments, in order."""
        return self._markdown.copy()

    @property
    def text(self) -> str:
        """All markdown fragments joined as the host would render them."""
        return "".join(self._markdown)

    def progress(self, message: str) -> None:
        self._progress.append(message)

    def markdown(self, text: str) -> None:
        self._markdown.append(text)
