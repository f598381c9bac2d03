"""Fake cancellation token for testing."""

from collections.abc import Callable

from ctx_chat.integrations.cancellation.abc import CancellationToken, Disposable


class FakeDisposable(Disposable):
    """Disposable that counts how many times it was disposed."""

    def __init__(self) -> None:
        self._dispose_count = 0

    @property
    def dispose_count(self) -> int:
        """Number of dispose() calls, for test assertions."""
        return self._dispose_count

    def dispose(self) -> None:
        self._dispose_count += 1


class FakeCancellationToken(CancellationToken):
    """In-memory fake token.

    State is provided via constructor. Unlike a real source, `fire()` may be
    called repeatedly and invokes every callback that was ever registered,
    disposed or not, so tests can check that consumers guard their own state.

    Examples:
        >>> token = FakeCancellationToken()
        >>> outcome_task = asyncio.create_task(runner.invoke(request))
        >>> token.fire()
        >>> assert token.disposables[0].dispose_count == 1
    """

    def __init__(self, *, cancelled: bool = False) -> None:
        """Create FakeCancellationToken.

        Args:
            cancelled: Initial value of is_cancellation_requested
        """
        self._cancelled = cancelled
        self._callbacks: list[Callable[[], None]] = []
        self._disposables: list[FakeDisposable] = []

    @property
    def is_cancellation_requested(self) -> bool:
        return self._cancelled

    @property
    def subscribe_count(self) -> int:
        """Number of on_cancellation_requested() calls."""
        return len(self._callbacks)

    @property
    def disposables(self) -> list[FakeDisposable]:
        """Disposables handed out, in subscription order."""
        return self._disposables.copy()

    def on_cancellation_requested(self, callback: Callable[[], None]) -> Disposable:
        self._callbacks.append(callback)
        disposable = FakeDisposable()
        self._disposables.append(disposable)
        return disposable

    def fire(self) -> None:
        """Mark cancelled and invoke all registered callbacks."""
        self._cancelled = True
        for callback in list(self._callbacks):
            callback()
