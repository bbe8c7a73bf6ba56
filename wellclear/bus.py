# A tiny pub/sub event bus standing in for the message transport.
from typing import Callable, Dict, List

STATE_TOPIC = "state"            # payload: StateReport
VIOLATIONS_TOPIC = "violations"  # payload: CycleOutcome


class EventBus:
    def __init__(self) -> None:
        self._subs: Dict[str, List[Callable]] = {}

    def on(self, topic: str, fn: Callable):
        self._subs.setdefault(topic, []).append(fn)

    def emit(self, topic: str, *args, **kwargs):
        for fn in self._subs.get(topic, []):
            fn(*args, **kwargs)
