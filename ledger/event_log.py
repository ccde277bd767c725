from dataclasses import dataclass, field
from typing import Iterator, Optional

from .models import Event, EventStatus


@dataclass(frozen=True)
class LoggedEvent:
    position: int
    event: Event


@dataclass
class EventLog:
    """Append-only verdict history for one batch.

    Events are tied to the transaction's position in the batch rather than
    its id, since ids are not guaranteed unique. The most recent event for a
    position is that transaction's verdict.
    """

    history: list[LoggedEvent] = field(default_factory=list)
    _latest: dict[int, Event] = field(default_factory=dict, repr=False)

    def record(self, position: int, event: Event) -> None:
        self.history.append(LoggedEvent(position=position, event=event))
        self._latest[position] = event

    def verdict(self, position: int) -> Optional[Event]:
        return self._latest.get(position)

    def is_approved(self, position: int) -> bool:
        event = self._latest.get(position)
        return event is not None and event.approved

    def final_events(self) -> list[Event]:
        """One event per transaction, in batch order."""
        return [self._latest[position] for position in sorted(self._latest)]

    def count(self, status: EventStatus) -> int:
        return sum(1 for event in self._latest.values() if event.status == status)

    def __len__(self) -> int:
        return len(self._latest)

    def __iter__(self) -> Iterator[LoggedEvent]:
        return iter(self.history)
