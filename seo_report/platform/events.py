"""
Observability hook for the report pipeline.

The assembler and renderer call ``emit`` at fixed checkpoints instead of
writing to the console. Callers may pass their own sink (metrics, tracing,
test recorders); the default forwards every event to the platform logger.
"""
from typing import Any, List, Optional, Protocol, Tuple

from seo_report.platform.logger import get_logger


class EventSink(Protocol):
    def emit(self, event: str, **fields: Any) -> None: ...


class LoggingEventSink:
    def __init__(self, logger_name: str = "report_events"):
        self.logger = get_logger(logger_name)

    def emit(self, event: str, **fields: Any) -> None:
        details = " ".join(f"{key}={value}" for key, value in sorted(fields.items()))
        self.logger.info(f"{event} {details}".rstrip())


class NullEventSink:
    def emit(self, event: str, **fields: Any) -> None:
        return None


class RecordingEventSink:
    """Keeps emitted events in memory, in order."""

    def __init__(self):
        self.events: List[Tuple[str, dict]] = []

    def emit(self, event: str, **fields: Any) -> None:
        self.events.append((event, fields))

    @property
    def names(self) -> List[str]:
        return [name for name, _ in self.events]


_default_sink: Optional[LoggingEventSink] = None


def default_sink() -> EventSink:
    global _default_sink
    if _default_sink is None:
        _default_sink = LoggingEventSink()
    return _default_sink
