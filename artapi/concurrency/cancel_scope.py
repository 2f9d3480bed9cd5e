"""Cooperative cancellation shared between a request and the work it fans out."""

import threading


class OperationCancelledError(Exception):
    """Raised by raise_if_cancelled() once the scope (or an ancestor) is cancelled."""


class CancelScope:
    """A cancellation flag that can be checked from any thread.

    Scopes form a tree: a child reports cancelled when it or any ancestor is
    cancelled, while cancelling a child leaves its parent untouched. Remote
    calls already in flight are not interrupted; collaborators check the
    scope before starting work.
    """

    def __init__(self, parent: "CancelScope | None" = None) -> None:
        self._parent = parent
        self._event = threading.Event()

    def child(self) -> "CancelScope":
        return CancelScope(parent=self)

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._parent is not None and self._parent.cancelled

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise OperationCancelledError("Operation was cancelled")
