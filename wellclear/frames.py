import math
from typing import Tuple

Vec3 = Tuple[float, float, float]


def body_to_local(u: float, v: float, w: float,
                  roll: float, pitch: float, yaw: float) -> Vec3:
    """
    Rotate a body-frame velocity (forward, right, down) into the local
    north/east/down frame. Attitude angles are in radians.

    Standard aerospace direction cosine matrix (yaw-pitch-roll order).
    Near pitch = ±90° the result loses precision (gimbal lock); no error
    is raised.
    """
    cr, sr = math.cos(roll), math.sin(roll)
    cp, sp = math.cos(pitch), math.sin(pitch)
    cy, sy = math.cos(yaw), math.sin(yaw)

    n = cp*cy*u + (sr*sp*cy - cr*sy)*v + (cr*sp*cy + sr*sy)*w
    e = cp*sy*u + (sr*sp*sy + cr*cy)*v + (cr*sp*sy - sr*cy)*w
    d = -sp*u + sr*cp*v + cr*cp*w
    return n, e, d


def to_engine_axes(n: float, e: float, d: float) -> Vec3:
    """NED -> engine axes (x=east, y=north, z=up)."""
    return e, n, -d


def body_velocity_to_engine(u: float, v: float, w: float,
                            roll_deg: float, pitch_deg: float,
                            heading_deg: float) -> Vec3:
    n, e, d = body_to_local(
        u, v, w,
        math.radians(roll_deg),
        math.radians(pitch_deg),
        math.radians(heading_deg),
    )
    return to_engine_axes(n, e, d)
