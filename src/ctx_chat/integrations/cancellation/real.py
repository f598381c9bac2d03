"""In-process cancellation source used by the CLI and HTTP hosts."""

import logging
from collections.abc import Callable

from ctx_chat.integrations.cancellation.abc import CancellationToken, Disposable

logger = logging.getLogger(__name__)


class _Subscription(Disposable):
    def __init__(self, listeners: list[Callable[[], None]], callback: Callable[[], None]) -> None:
        self._listeners = listeners
        self._callback = callback

    def dispose(self) -> None:
        if self._callback in self._listeners:
            self._listeners.remove(self._callback)


class _SourceToken(CancellationToken):
    def __init__(self, source: "CancellationTokenSource") -> None:
        self._source = source

    @property
    def is_cancellation_requested(self) -> bool:
        return self._source.cancelled

    def on_cancellation_requested(self, callback: Callable[[], None]) -> Disposable:
        return self._source._subscribe(callback)


class CancellationTokenSource:
    """Owner side of a cancellation signal.

    Hosts keep the source and hand out `source.token`. Calling `cancel()` sets
    the flag and runs every registered callback once; later calls are no-ops.

    Example:
        >>> source = CancellationTokenSource()
        >>> outcome_task = asyncio.create_task(runner.invoke(request_with(source.token)))
        >>> source.cancel()
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._listeners: list[Callable[[], None]] = []
        self.token: CancellationToken = _SourceToken(self)

    @property
    def cancelled(self) -> bool:
        """Whether cancel() has been called."""
        return self._cancelled

    def _subscribe(self, callback: Callable[[], None]) -> Disposable:
        self._listeners.append(callback)
        return _Subscription(self._listeners, callback)

    def cancel(self) -> None:
        """Request cancellation and notify current subscribers."""
        if self._cancelled:
            return
        self._cancelled = True
        # Callbacks may dispose their own subscription while we iterate
        for callback in list(self._listeners):
            try:
                callback()
            except Exception:
                logger.exception("Cancellation callback failed")
