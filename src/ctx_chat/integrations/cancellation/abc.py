"""Abstract interface for cancellation sources supplied by the host."""

from abc import ABC, abstractmethod
from collections.abc import Callable


class Disposable(ABC):
    """Handle returned by a subscription; disposing it unsubscribes."""

    @abstractmethod
    def dispose(self) -> None:
        """Release the subscription."""
        ...


class CancellationToken(ABC):
    """Read side of a cancellation signal owned by the host.

    The host decides when to cancel (user pressed stop, client went away,
    Ctrl-C). Consumers only observe the flag and subscribe to the event.
    """

    @property
    @abstractmethod
    def is_cancellation_requested(self) -> bool:
        """Whether cancellation has already been requested."""
        ...

    @abstractmethod
    def on_cancellation_requested(self, callback: Callable[[], None]) -> Disposable:
        """Register a callback run when cancellation is requested.

        Args:
            callback: Zero-argument callable invoked on cancellation

        Returns:
            Disposable that unsubscribes the callback
        """
        ...
