"""Host messaging channel used by debug message displays.

The display itself is not part of this package. What lives here is the
message-passing seam it consumes (:class:`MessageChannel`), an in-process
implementation, and :class:`MessageBox`, the bounded message store a display
renders from.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Protocol, runtime_checkable

Message = Dict[str, Any]
Listener = Callable[[Message], Any]

UPDATE_MESSAGE_ACTION = "updateWebpageMessage"
MAX_MESSAGES = 50


@runtime_checkable
class MessageChannel(Protocol):
    def subscribe(self, listener: Listener) -> Callable[[], None]: ...

    def publish(self, message: Message) -> List[Any]: ...


class InMemoryChannel:
    """Synchronous fan-out channel.

    Listeners run in subscription order; a listener exception propagates to
    the publisher.
    """

    def __init__(self) -> None:
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def publish(self, message: Message) -> List[Any]:
        return [listener(message) for listener in list(self._listeners)]

    def __len__(self) -> int:
        return len(self._listeners)


@dataclass(frozen=True)
class BoxMessage:
    content: str
    time: str


class MessageBox:
    """Keeps the most recent ``max_messages`` update messages."""

    def __init__(self, *, max_messages: int = MAX_MESSAGES) -> None:
        if int(max_messages) <= 0:
            raise ValueError("max_messages must be positive")
        self._messages: deque[BoxMessage] = deque(maxlen=int(max_messages))
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def messages(self) -> list[BoxMessage]:
        return list(self._messages)

    def attach(self, channel: MessageChannel) -> None:
        self.detach()
        self._unsubscribe = channel.subscribe(self.handle)

    def detach(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def handle(self, message: Message) -> Optional[Dict[str, Any]]:
        if not isinstance(message, dict) or message.get("action") != UPDATE_MESSAGE_ACTION:
            return None
        data = message.get("data")
        if not isinstance(data, dict):
            data = {}
        self.add_message(str(data.get("content", "")), str(data.get("time", "")))
        return {"success": True}

    def add_message(self, content: str, time: str) -> None:
        self._messages.append(BoxMessage(content=content, time=time))
