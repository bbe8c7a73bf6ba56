from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
import math

import config
from .exceptions import WellClearError
from .math_utils import Vec3, add3, mul3, sub3, dot, norm
from .models import GeoPosition

Interval = Tuple[float, float]

_EPS = 1e-9


@dataclass(frozen=True)
class EngineAircraftState:
    """Aircraft as the detector sees it: local frame, ownship time."""
    id: str
    pos_m: Vec3     # (east, north, up) relative to the ownship reference point
    vel_mps: Vec3   # (east, north, up)
    time_s: float


def project_local(pos: GeoPosition, ref: GeoPosition) -> Vec3:
    """Flat-earth projection of `pos` onto an east/north/up plane at `ref`."""
    dlat = math.radians(pos.lat_deg - ref.lat_deg)
    # wrap across the antimeridian
    dlon = math.radians((pos.lon_deg - ref.lon_deg + 180.0) % 360.0 - 180.0)
    east = dlon * config.EARTH_RADIUS_M * math.cos(math.radians(ref.lat_deg))
    north = dlat * config.EARTH_RADIUS_M
    return east, north, pos.alt_m


# ---------------------------------------------------------------------
# Interval helpers: every condition is turned into the set of times t
# at which it holds, as a closed interval (or None when empty).
# ---------------------------------------------------------------------

def _quadratic_le_zero(a: float, b: float, c: float) -> Optional[Interval]:
    """Times where a*t^2 + b*t + c <= 0, for a > 0."""
    disc = b * b - 4.0 * a * c
    if disc < 0.0:
        return None
    root = math.sqrt(disc)
    return (-b - root) / (2.0 * a), (-b + root) / (2.0 * a)


def _intersect(a: Optional[Interval], b: Optional[Interval]) -> Optional[Interval]:
    if a is None or b is None:
        return None
    lo, hi = max(a[0], b[0]), min(a[1], b[1])
    if lo > hi:
        return None
    return lo, hi


def horizontal_wcv_intervals(s: Tuple[float, float], v: Tuple[float, float],
                             dthr: float, tthr: float) -> List[Interval]:
    """
    Times at which the horizontal WCV_TAUMOD condition holds:
      |s(t)| <= DTHR, or d_cpa <= DTHR and closing with
      tau_mod(t) = (DTHR² - |s(t)|²) / (s(t)·v) <= TTHR
    """
    v2 = dot(v, v)
    if v2 <= _EPS:
        # No relative motion: in or out forever
        return [(-math.inf, math.inf)] if norm(s) <= dthr else []

    sv = dot(s, v)
    s2 = dot(s, s)
    intervals: List[Interval] = []

    inside = _quadratic_le_zero(v2, 2.0 * sv, s2 - dthr * dthr)
    if inside is not None:
        intervals.append(inside)

    # tau_mod only counts when the horizontal miss distance is inside DTHR
    t_cpa = -sv / v2
    d_cpa = norm((s[0] + v[0] * t_cpa, s[1] + v[1] * t_cpa))

    if tthr > 0.0 and d_cpa <= dthr:
        # closing (s(t)·v < 0) <=> t < t_cpa
        taumod = _quadratic_le_zero(v2, 2.0 * sv + tthr * v2, s2 - dthr * dthr + tthr * sv)
        taumod = _intersect(taumod, (-math.inf, t_cpa))
        if taumod is not None:
            intervals.append(taumod)

    return intervals


def vertical_wcv_interval(sz: float, vz: float,
                          zthr: float, tcoa: float) -> Optional[Interval]:
    """Times at which |sz(t)| <= ZTHR or time to co-altitude is within [0, TCOA]."""
    if abs(vz) <= _EPS:
        return (-math.inf, math.inf) if abs(sz) <= zthr else None

    lo, hi = sorted(((-zthr - sz) / vz, (zthr - sz) / vz))
    t_coalt = -sz / vz
    return min(lo, t_coalt - tcoa), hi


class WellClearDetector:
    """
    Well-clear volume detector with a DAIDALUS-like surface.

    set_ownship_state() starts a new working set (index 0); every
    add_traffic_state() appends one intruder (index 1..N-1). Traffic is
    projected linearly to the ownship time before any query.
    """

    def __init__(self, thresholds: Optional[Dict[str, float]] = None) -> None:
        th = config.get_wcv_thresholds()
        if thresholds:
            th.update(thresholds)
        self.dthr_m = th["dthr_m"]
        self.zthr_m = th["zthr_m"]
        self.tthr_s = th["tthr_s"]
        self.tcoa_s = th["tcoa_s"]
        self.lookahead_s = th["lookahead_s"]

        self._ref: Optional[GeoPosition] = None
        self._aircraft: List[EngineAircraftState] = []

    # ------------------------------------------------------------------
    # Working set
    # ------------------------------------------------------------------
    def set_ownship_state(self, ac_id: str, position: GeoPosition,
                          velocity: Vec3, time_s: float) -> None:
        self._ref = position
        self._aircraft = [
            EngineAircraftState(
                id=ac_id,
                pos_m=project_local(position, position),
                vel_mps=tuple(velocity),
                time_s=time_s,
            )
        ]

    def add_traffic_state(self, ac_id: str, position: GeoPosition,
                          velocity: Vec3, time_s: float) -> int:
        if self._ref is None:
            raise WellClearError("ownship state must be set before traffic")

        own_time = self._aircraft[0].time_s
        pos = project_local(position, self._ref)
        pos = add3(pos, mul3(tuple(velocity), own_time - time_s))

        self._aircraft.append(
            EngineAircraftState(id=ac_id, pos_m=pos, vel_mps=tuple(velocity), time_s=own_time)
        )
        return len(self._aircraft) - 1

    def number_of_aircraft(self) -> int:
        return len(self._aircraft)

    def get_aircraft_state(self, index: int) -> EngineAircraftState:
        return self._aircraft[index]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def time_to_violation(self, index: int) -> float:
        """
        Seconds until traffic `index` enters the well-clear volume.

        0.0 when already in violation, inf when no violation is predicted
        within the lookahead, nan when the geometry is undefined.
        """
        if not 1 <= index < len(self._aircraft):
            return math.nan

        own = self._aircraft[0]
        intr = self._aircraft[index]
        s = sub3(intr.pos_m, own.pos_m)
        v = sub3(intr.vel_mps, own.vel_mps)
        if not all(math.isfinite(x) for x in s + v):
            return math.nan

        vertical = vertical_wcv_interval(s[2], v[2], self.zthr_m, self.tcoa_s)
        window = (0.0, self.lookahead_s)

        best = math.inf
        for horiz in horizontal_wcv_intervals(s[:2], v[:2], self.dthr_m, self.tthr_s):
            hit = _intersect(_intersect(horiz, vertical), window)
            if hit is not None and hit[0] < best:
                best = hit[0]
        return best
