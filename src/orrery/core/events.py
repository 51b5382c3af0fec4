"""Input events delivered by the host surface and the queue that buffers them."""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Iterator, Union


@dataclass(frozen=True)
class PointerDown:
    x: float
    y: float


@dataclass(frozen=True)
class PointerMove:
    x: float
    y: float


@dataclass(frozen=True)
class PointerUp:
    x: float
    y: float


@dataclass(frozen=True)
class PointerLeave:
    pass


@dataclass(frozen=True)
class Wheel:
    # Positive values scroll away from the user (zoom out).
    delta_y: float


@dataclass(frozen=True)
class Click:
    x: float
    y: float


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


InputEvent = Union[PointerDown, PointerMove, PointerUp, PointerLeave, Wheel, Click, Resize]


class InputQueue:
    """FIFO of input events drained once per tick. Closed queues drop events."""

    def __init__(self) -> None:
        self._events: deque[InputEvent] = deque()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def push(self, event: InputEvent) -> bool:
        if self._closed:
            return False
        self._events.append(event)
        return True

    def drain(self) -> Iterator[InputEvent]:
        while self._events:
            yield self._events.popleft()

    def close(self) -> None:
        self._closed = True
        self._events.clear()

    def __len__(self) -> int:
        return len(self._events)


__all__ = [
    "Click",
    "InputEvent",
    "InputQueue",
    "PointerDown",
    "PointerLeave",
    "PointerMove",
    "PointerUp",
    "Resize",
    "Wheel",
]
