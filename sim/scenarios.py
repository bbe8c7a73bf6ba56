from dataclasses import dataclass
from typing import Dict
import math

import config
from wellclear.models import StateReport

# Reference point for all scenarios
REF_LAT, REF_LON = 45.3, -121.0


def _offset(east_m: float, north_m: float):
    lat = REF_LAT + math.degrees(north_m / config.EARTH_RADIUS_M)
    lon = REF_LON + math.degrees(
        east_m / (config.EARTH_RADIUS_M * math.cos(math.radians(REF_LAT)))
    )
    return lat, lon


@dataclass
class SimAircraft:
    aircraft_id: int
    lat_deg: float
    lon_deg: float
    alt_m: float
    heading_deg: float      # 0 = north, 90 = east
    speed_mps: float        # horizontal speed
    climb_mps: float = 0.0

    def step(self, dt: float):
        """Integrate straight-line motion over the local flat earth."""
        hdg = math.radians(self.heading_deg)
        north = self.speed_mps * math.cos(hdg) * dt
        east = self.speed_mps * math.sin(hdg) * dt
        self.lat_deg += math.degrees(north / config.EARTH_RADIUS_M)
        self.lon_deg += math.degrees(
            east / (config.EARTH_RADIUS_M * math.cos(math.radians(self.lat_deg)))
        )
        self.alt_m += self.climb_mps * dt

    def to_report(self, time_s: float) -> StateReport:
        # wings level, nose along the flight path: all speed on the body x axis
        u = math.hypot(self.speed_mps, self.climb_mps)
        pitch = math.degrees(math.atan2(self.climb_mps, self.speed_mps)) if u > 0 else 0.0
        return StateReport(
            aircraft_id=self.aircraft_id,
            latitude_deg=self.lat_deg,
            longitude_deg=self.lon_deg,
            altitude_m=self.alt_m,
            u=u, v=0.0, w=0.0,
            roll_deg=0.0,
            pitch_deg=pitch,
            heading_deg=self.heading_deg,
            airspeed_mps=u,
            time_ms=time_s * 1000.0,
        )


def _at(ac_id, east_m, north_m, alt_m, heading_deg, speed_mps, climb_mps=0.0):
    lat, lon = _offset(east_m, north_m)
    return SimAircraft(ac_id, lat, lon, alt_m, heading_deg, speed_mps, climb_mps)


def head_on() -> Dict[int, SimAircraft]:
    # ~250 kt each, 150 ft vertical offset
    return {
        1: _at(1, 0, -12000, 3000, 0, 130),
        2: _at(2, 0,  12000, 3045, 180, 130),
    }

def crossing() -> Dict[int, SimAircraft]:
    return {
        1: _at(1, -8000, 0, 3600, 90, 150, 1.5),
        2: _at(2, 0, -8000, 3660, 0, 150, -1.5),
    }

def overtake_three() -> Dict[int, SimAircraft]:
    return {
        1: _at(1, 0, -10000, 3350, 0, 170),
        2: _at(2, 0, -2000, 3340, 0, 150),
        3: _at(3, 0, 7000, 3380, 0, 130),
    }

def closing_at_rest() -> Dict[int, SimAircraft]:
    # Ownship stationary, intruder 2 km north closing at 100 m/s
    return {
        1: _at(1, 0, 0, 1000, 0, 0),
        2: _at(2, 0, 2000, 1000, 180, 100),
    }

SCENARIOS = {
    "1": head_on,
    "2": crossing,
    "3": overtake_three,
    "4": closing_at_rest,
}
