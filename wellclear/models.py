from dataclasses import dataclass, field
from typing import Optional, Dict, Mapping, Tuple
from types import MappingProxyType
from enum import Enum, auto

AircraftId = int


class CycleStatus(Enum):
    REPORT = auto()        # recompute ran (report may be empty)
    SUPPRESSED = auto()    # recompute did not run
    ERROR = auto()         # recompute failed


class SuppressReason(Enum):
    OWNSHIP_MISSING = auto()
    NO_TRAFFIC = auto()


class ErrorKind(Enum):
    IDENTIFIER_ROUND_TRIP = auto()


@dataclass(frozen=True)
class GeoPosition:
    lat_deg: float
    lon_deg: float
    alt_m: float


@dataclass(frozen=True)
class KinematicSample:
    position: GeoPosition
    velocity: Tuple[float, float, float]   # (east, north, up) m/s
    time_s: float


@dataclass(frozen=True)
class StateReport:
    """One inbound kinematic report, as delivered by the transport."""
    aircraft_id: AircraftId
    latitude_deg: float
    longitude_deg: float
    altitude_m: float

    # body-frame velocity (m/s)
    u: float
    v: float
    w: float

    # attitude (deg)
    roll_deg: float
    pitch_deg: float
    heading_deg: float

    airspeed_mps: float
    time_ms: float


@dataclass(frozen=True)
class ViolationReport:
    """Intruder id -> predicted seconds to well-clear violation."""
    ownship_id: AircraftId
    violations: Mapping[AircraftId, float] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __len__(self) -> int:
        return len(self.violations)

    def __contains__(self, aircraft_id) -> bool:
        return aircraft_id in self.violations

    def __getitem__(self, aircraft_id: AircraftId) -> float:
        return self.violations[aircraft_id]

    def items(self):
        return self.violations.items()

    def is_empty(self) -> bool:
        return not self.violations

    def as_dict(self) -> Dict[AircraftId, float]:
        return dict(self.violations)


@dataclass(frozen=True)
class CycleOutcome:
    status: CycleStatus
    report: Optional[ViolationReport] = None
    reason: Optional[SuppressReason] = None
    error: Optional[ErrorKind] = None
    detail: str = ""

    @property
    def ran(self) -> bool:
        return self.status is CycleStatus.REPORT

    @classmethod
    def of_report(cls, report: ViolationReport) -> "CycleOutcome":
        return cls(status=CycleStatus.REPORT, report=report)

    @classmethod
    def suppressed(cls, reason: SuppressReason) -> "CycleOutcome":
        return cls(status=CycleStatus.SUPPRESSED, reason=reason)

    @classmethod
    def failed(cls, error: ErrorKind, detail: str = "") -> "CycleOutcome":
        return cls(status=CycleStatus.ERROR, error=error, detail=detail)
