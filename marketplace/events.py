import logging
from collections import deque
from typing import Optional, Union

from marketplace.config import EVENT_LOG_SIZE
from marketplace.models import Listed, Sold

logger = logging.getLogger(__name__)

Event = Union[Listed, Sold]


class EventLog:
    """Ordered, in-memory notification sink holding the most recent ``maxlen`` events."""

    def __init__(self, maxlen: Optional[int] = None) -> None:
        self.events: deque[Event] = deque(maxlen=EVENT_LOG_SIZE if maxlen is None else maxlen)

    def notify(self, event: Event) -> None:
        self.events.append(event)
        logger.info("%s %s", event.event, event.model_dump(exclude={"event"}))

    def clear(self) -> None:
        self.events.clear()
