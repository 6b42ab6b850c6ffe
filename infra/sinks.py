from __future__ import annotations
from datetime import datetime, timezone

from domain.events import StatusEvent
from domain.ports import EventSink


def _fmt_ms(epoch_ms: int) -> str:
    dt = datetime.fromtimestamp(epoch_ms / 1000.0, tz=timezone.utc)
    return dt.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]


class PrintSink(EventSink):
    def publish(self, event: StatusEvent) -> None:
        print(
            f"[{_fmt_ms(event.timestamp)}] event={event.type.value} "
            f"{event.title}: {event.message}",
            flush=True,
        )
