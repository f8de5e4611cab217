"""Connection interface.

This is the (small) contract the transport must satisfy for the channel
layer. The channel layer reads the connection state and socket id, sends
messages, and observes state changes; it never changes the state itself.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional

from . import listeners
from .protocol.message import Message
from .states import ConnectionState, ConnectionStateChange


class Connection(ABC):
    """Minimal contract for the connection collaborator."""

    def __init__(self) -> None:
        self.state = ConnectionState.DISCONNECTED
        self.socket_id: Optional[str] = None
        self.observers = listeners.Registry()

    @abstractmethod
    def send(self, message: Message) -> None:
        """Hand a protocol Message to the transport."""

    def bind(self, state: Optional[str], callback: Callable) -> listeners.Subscription:
        """Invoke *callback* with a ConnectionStateChange whenever the
        connection enters *state*; None means every state change. The
        callback is held by weak reference. Release the returned handle,
        or pass it to :func:`unbind`, to stop receiving notifications.
        """

        if state is not None and state not in ConnectionState.valid:
            raise ValueError('invalid connection state: ' + repr(state))

        return self.observers.register(callback, state)

    def unbind(self, subscription: listeners.Subscription) -> bool:
        return subscription.release()

    def update_state(self, state: str) -> None:
        """Record a new connection state and notify observers. Called by
        the transport, on the dispatch sequence.
        """

        if state not in ConnectionState.valid:
            raise ValueError('invalid connection state: ' + repr(state))

        previous = self.state
        if previous == state:
            return

        self.state = state
        change = ConnectionStateChange(previous, state)
        self.observers.propagate(state, change)

    @property
    def is_connected(self) -> bool:
        return self.state == ConnectionState.CONNECTED
