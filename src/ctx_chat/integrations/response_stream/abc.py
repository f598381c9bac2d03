"""Abstract interface for the host's chat response surface."""

from abc import ABC, abstractmethod


class ResponseStream(ABC):
    """Where operation handlers write what the user sees.

    Both methods are fire-and-forget: the host acknowledges nothing.
    """

    @abstractmethod
    def progress(self, message: str) -> None:
        """Show a transient status line (e.g. "Checking context status...")."""
        ...

    @abstractmethod
    def markdown(self, text: str) -> None:
        """Append markdown to the rendered response."""
        ...
