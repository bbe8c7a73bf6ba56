from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional
import logging
import threading

import config
from .adapter import ConflictEngineAdapter
from .bus import EventBus, STATE_TOPIC, VIOLATIONS_TOPIC
from .engine import WellClearDetector
from .exceptions import IdentifierRoundTripError
from .frames import body_velocity_to_engine
from .math_utils import norm3
from .models import (
    AircraftId, CycleOutcome, ErrorKind, GeoPosition, KinematicSample,
    StateReport, SuppressReason,
)
from .report import ViolationReportBuilder
from .store import VehicleStateStore

_logger = logging.getLogger(__name__)


@dataclass
class CycleStats:
    """Aggregated counters over the monitor's lifetime."""
    reports_in: int = 0
    cycles_run: int = 0
    cycles_suppressed: int = 0
    cycles_failed: int = 0
    airspeed_warnings: int = 0
    violations_reported: int = 0
    min_time_to_violation_s: float = field(default=float("inf"))

    def record(self, outcome: CycleOutcome) -> None:
        if outcome.ran:
            self.cycles_run += 1
            for _, ttv in outcome.report.items():
                self.violations_reported += 1
                if ttv < self.min_time_to_violation_s:
                    self.min_time_to_violation_s = ttv
        elif outcome.error is not None:
            self.cycles_failed += 1
        else:
            self.cycles_suppressed += 1


def sample_from_report(report: StateReport) -> KinematicSample:
    """Convert an inbound report into the stored, engine-ready sample."""
    velocity = body_velocity_to_engine(
        report.u, report.v, report.w,
        report.roll_deg, report.pitch_deg, report.heading_deg,
    )
    return KinematicSample(
        position=GeoPosition(report.latitude_deg, report.longitude_deg, report.altitude_m),
        velocity=velocity,
        time_s=report.time_ms / 1000.0,
    )


def body_speed(report: StateReport) -> float:
    return norm3((report.u, report.v, report.w))


class WellClearMonitor:
    """
    Aggregates per-aircraft state and recomputes well-clear predictions
    for the configured ownship on every inbound report.

    handle() runs upsert -> recompute -> report build under one lock, so
    concurrent callers are serialized and every cycle sees a consistent
    store.
    """

    def __init__(
        self,
        ownship_id: AircraftId = config.OWNSHIP_ID,
        engine: Optional[WellClearDetector] = None,
        max_state_age_s: Optional[float] = config.MAX_STATE_AGE_S,
        airspeed_tolerance_mps: float = config.AIRSPEED_TOLERANCE_MPS,
    ) -> None:
        self.ownship_id = ownship_id
        self.store = VehicleStateStore()
        self.adapter = ConflictEngineAdapter(engine)
        self.builder = ViolationReportBuilder()
        self.max_state_age_s = max_state_age_s
        self.airspeed_tolerance_mps = airspeed_tolerance_mps
        self.stats = CycleStats()
        self._lock = threading.Lock()

    def attach(self, bus: EventBus) -> None:
        """Consume reports from `state` and publish outcomes on `violations`."""
        def _on_state(report: StateReport) -> None:
            bus.emit(VIOLATIONS_TOPIC, self.handle(report))

        bus.on(STATE_TOPIC, _on_state)

    def handle(self, report: StateReport) -> CycleOutcome:
        with self._lock:
            self.stats.reports_in += 1
            self._check_airspeed(report)
            self.store.upsert(report.aircraft_id, sample_from_report(report))
            outcome = self._recompute()
            self.stats.record(outcome)
            return outcome

    def recompute(self) -> CycleOutcome:
        """Run a cycle on the current store without ingesting anything."""
        with self._lock:
            outcome = self._recompute()
            self.stats.record(outcome)
            return outcome

    # ------------------------------------------------------------------
    def _check_airspeed(self, report: StateReport) -> None:
        computed = body_speed(report)
        if abs(report.airspeed_mps - computed) > self.airspeed_tolerance_mps:
            self.stats.airspeed_warnings += 1
            _logger.warning(
                "Aircraft %s: computed velocity differs from broadcast airspeed "
                "(broadcast=%.6f m/s, computed=%.6f m/s)",
                report.aircraft_id, report.airspeed_mps, computed,
            )

    def _evict_stale(self) -> None:
        if self.max_state_age_s is None:
            return
        latest = self.store.latest_time_s()
        if latest is None:
            return
        evicted = self.store.evict_older_than(latest - self.max_state_age_s,
                                              keep=self.ownship_id)
        for ac_id in evicted:
            _logger.info("Evicted stale state for aircraft %s", ac_id)

    def _recompute(self) -> CycleOutcome:
        self._evict_stale()

        if self.ownship_id not in self.store:
            return CycleOutcome.suppressed(SuppressReason.OWNSHIP_MISSING)
        if len(self.store) < 2:
            return CycleOutcome.suppressed(SuppressReason.NO_TRAFFIC)

        try:
            results = self.adapter.recompute(self.ownship_id, self.store)
        except IdentifierRoundTripError as exc:
            _logger.error("Well-clear cycle failed: %s", exc)
            return CycleOutcome.failed(ErrorKind.IDENTIFIER_ROUND_TRIP, str(exc))

        return CycleOutcome.of_report(self.builder.build(self.ownship_id, results))
