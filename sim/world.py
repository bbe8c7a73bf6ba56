from __future__ import annotations
from typing import Dict, List, Optional

from sim.scenarios import SimAircraft
from wellclear.bus import EventBus, STATE_TOPIC, VIOLATIONS_TOPIC
from wellclear.io import ViolationLog
from wellclear.models import CycleOutcome
from wellclear.monitor import WellClearMonitor
from wellclear.notify import log_outcome
import config


class World:
    """
    Drives simulated aircraft and publishes one StateReport per aircraft
    per step on the bus. The monitor answers each report with a
    CycleOutcome, which is logged to CSV and kept for the caller.
    """

    def __init__(self, aircraft: Dict[int, SimAircraft],
                 monitor: Optional[WellClearMonitor] = None,
                 log_path: str | None = config.LOG_PATH) -> None:
        self.ac: Dict[int, SimAircraft] = aircraft
        self.monitor = monitor if monitor is not None else WellClearMonitor()
        self.bus = EventBus()
        self.monitor.attach(self.bus)
        self.bus.on(VIOLATIONS_TOPIC, self._on_outcome)
        self.bus.on(VIOLATIONS_TOPIC, log_outcome)

        self.time_s: float = 0.0
        self.paused: bool = False
        self.outcomes: List[CycleOutcome] = []

        self.log = ViolationLog(log_path)

    def _on_outcome(self, outcome: CycleOutcome) -> None:
        self.outcomes.append(outcome)
        self.log.record(self.time_s, self.monitor.ownship_id, outcome)

    def publish(self) -> None:
        """Send the current state of every aircraft."""
        for ac in self.ac.values():
            self.bus.emit(STATE_TOPIC, ac.to_report(self.time_s))

    def step(self, dt: float) -> None:
        if self.paused:
            return
        for ac in self.ac.values():
            ac.step(dt)
        self.time_s += dt
        self.publish()

    def close(self) -> None:
        """Call this when the simulation ends to flush/close the log file."""
        self.log.close()
