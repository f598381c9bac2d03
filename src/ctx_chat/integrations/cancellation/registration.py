"""Exactly-once pairing of a cancellation subscription with its disposal."""

import logging
from collections.abc import Callable

from ctx_chat.integrations.cancellation.abc import CancellationToken, Disposable

logger = logging.getLogger(__name__)


class CancellationRegistration:
    """Listens on a token for the lifetime of one running process.

    Two callback sources race here: the token firing and the process
    completing. Both are funnelled through explicit flags so that the
    termination request runs at most once and the subscription is disposed
    exactly once, whichever order they arrive in and however often the
    token fires.

    Attributes:
        disposed: True once dispose() has released the subscription
        terminate_requested: True once on_cancel has been invoked
    """

    def __init__(self, token: CancellationToken, on_cancel: Callable[[], None]) -> None:
        """Subscribe to the token.

        If the token was cancelled before the subscription existed (for
        example while the process was being spawned), on_cancel runs
        immediately so the request is not lost.

        Args:
            token: Host cancellation token
            on_cancel: Termination request for the running process
        """
        self._on_cancel = on_cancel
        self.disposed = False
        self.terminate_requested = False
        self._handle: Disposable = token.on_cancellation_requested(self._handle_cancel)
        if token.is_cancellation_requested:
            self._handle_cancel()

    def _handle_cancel(self) -> None:
        if self.disposed or self.terminate_requested:
            return
        self.terminate_requested = True
        logger.debug("Cancellation requested; asking process to terminate")
        self._on_cancel()

    def dispose(self) -> None:
        """Unsubscribe from the token. Safe to call more than once."""
        if self.disposed:
            return
        self.disposed = True
        self._handle.dispose()
