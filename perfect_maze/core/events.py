import queue
from dataclasses import dataclass
from typing import Iterator, List, Optional, Union


@dataclass(frozen=True)
class ProgressEvent:
    percent: int


@dataclass(frozen=True)
class CompletedEvent:
    success: bool
    error: Optional[BaseException] = None


Event = Union[ProgressEvent, CompletedEvent]


class EventChannel:
    """
    One-way message channel from the generation thread to its caller.

    Unbounded: a slow consumer makes messages queue up, none are dropped
    or merged. Exactly one CompletedEvent is published per run and it is
    always the last message.
    """

    def __init__(self):
        self._queue: "queue.Queue[Event]" = queue.Queue()
        self.completed: Optional[CompletedEvent] = None

    def publish(self, event: Event):
        self._queue.put(event)

    def publish_progress(self, percent: int):
        self.publish(ProgressEvent(percent))

    def publish_completed(self, success: bool, error: Optional[BaseException] = None):
        self.publish(CompletedEvent(success, error))

    def stream_events(self, timeout: float = None) -> Iterator[Event]:
        """
        Blocks and yields every event up to and including the completion.
        Raises queue.Empty if nothing arrives within `timeout` seconds.
        """
        if self.completed is not None:
            return
        while True:
            event = self._queue.get(timeout=timeout)
            if isinstance(event, CompletedEvent):
                self.completed = event
                yield event
                return
            yield event

    def wait(self, timeout: float = None) -> CompletedEvent:
        """Consumes the remaining events and returns the completion."""
        for _ in self.stream_events(timeout=timeout):
            pass
        return self.completed

    def poll(self) -> List[Event]:
        """Non-blocking drain, for callers running their own loop (GUI)."""
        events = []
        while True:
            try:
                event = self._queue.get_nowait()
            except queue.Empty:
                break
            if isinstance(event, CompletedEvent):
                self.completed = event
            events.append(event)
        return events
