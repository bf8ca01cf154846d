import asyncio
from typing import Awaitable, TypeVar

from meili_client.errors import MeiliCancelledError

T = TypeVar("T")


class CancellationToken:
    """Shared cancellation signal.

    Every awaitable run through :meth:`run` is aborted with
    :class:`MeiliCancelledError` once :meth:`cancel` is called, as long as it has
    not completed yet. A cancelled token stays cancelled; callers that need a
    fresh cancellation domain create a new token.
    """

    def __init__(self):
        self._event = asyncio.Event()
        self.reason: str | None = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self, reason: str | None = None) -> None:
        """
        Triggers the token. Idempotent: the first reason wins.

        Args:
            reason (str | None): Optional message attached to the raised MeiliCancelledError.
        """
        if self._event.is_set():
            return
        self.reason = reason
        self._event.set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise MeiliCancelledError(self.reason)

    async def run(self, awaitable: Awaitable[T]) -> T:
        """Await ``awaitable`` unless the token fires first.

        Args:
            awaitable (Awaitable[T]): The operation to bind to this token.

        Returns:
            T: The result of the operation.

        Raises:
            MeiliCancelledError: If the token is or becomes cancelled before the operation completes.
        """
        task = asyncio.ensure_future(awaitable)
        if self._event.is_set():
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
            raise MeiliCancelledError(self.reason)

        waiter = asyncio.ensure_future(self._event.wait())
        try:
            done, _ = await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            task.cancel()
            waiter.cancel()
            raise

        if task in done:
            waiter.cancel()
            return task.result()

        # token fired first: abort the in-flight request
        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        raise MeiliCancelledError(self.reason)
