import csv, os
from typing import List, Optional

from .exceptions import ReportFormatError
from .models import CycleOutcome, StateReport

# CSV columns (one row per inbound report):
# time_ms,aircraft_id,lat_deg,lon_deg,alt_m,u_mps,v_mps,w_mps,
# roll_deg,pitch_deg,heading_deg,airspeed_mps
# Example:
# 1000,1,45.3,-121.0,700,30,0,0,0,0,90,30

REPORT_FIELDS = [
    "time_ms", "aircraft_id", "lat_deg", "lon_deg", "alt_m",
    "u_mps", "v_mps", "w_mps",
    "roll_deg", "pitch_deg", "heading_deg", "airspeed_mps",
]

LOG_FIELDS = ["time_s", "own_id", "intr_id", "status", "time_to_violation_s"]


def _float(row: dict, key: str, lineno: int) -> float:
    value = row.get(key)
    if value is None or value.strip() == "":
        raise ReportFormatError(f"line {lineno}: missing column {key!r}")
    try:
        return float(value)
    except ValueError:
        raise ReportFormatError(f"line {lineno}: bad value for {key!r}: {value!r}") from None


def parse_report_row(row: dict, lineno: int = 0) -> StateReport:
    try:
        aircraft_id = int((row.get("aircraft_id") or "").strip())
    except ValueError:
        raise ReportFormatError(
            f"line {lineno}: aircraft_id must be an integer, got {row.get('aircraft_id')!r}"
        ) from None

    u = _float(row, "u_mps", lineno)
    v = _float(row, "v_mps", lineno)
    w = _float(row, "w_mps", lineno)
    airspeed = row.get("airspeed_mps")
    if airspeed is None or airspeed.strip() == "":
        # no independent airspeed: trust the body velocity
        airspeed_mps = (u * u + v * v + w * w) ** 0.5
    else:
        airspeed_mps = _float(row, "airspeed_mps", lineno)

    return StateReport(
        aircraft_id=aircraft_id,
        latitude_deg=_float(row, "lat_deg", lineno),
        longitude_deg=_float(row, "lon_deg", lineno),
        altitude_m=_float(row, "alt_m", lineno),
        u=u, v=v, w=w,
        roll_deg=_float(row, "roll_deg", lineno),
        pitch_deg=_float(row, "pitch_deg", lineno),
        heading_deg=_float(row, "heading_deg", lineno),
        airspeed_mps=airspeed_mps,
        time_ms=_float(row, "time_ms", lineno),
    )


def load_state_reports(path: str) -> List[StateReport]:
    """Load state reports from CSV, ordered by time_ms (stable for ties)."""
    reports: List[StateReport] = []
    with open(path, newline="") as f:
        reader = csv.DictReader(f)
        if reader.fieldnames is None:
            raise ReportFormatError(f"No header in report file: {path}")
        # header is line 1
        for lineno, row in enumerate(reader, start=2):
            reports.append(parse_report_row(row, lineno))

    reports.sort(key=lambda r: r.time_ms)
    return reports


def save_state_reports(path: str, reports: List[StateReport]):
    with open(path, "w", newline="") as f:
        w = csv.DictWriter(f, fieldnames=REPORT_FIELDS)
        w.writeheader()
        for r in reports:
            w.writerow({
                "time_ms": r.time_ms,
                "aircraft_id": r.aircraft_id,
                "lat_deg": r.latitude_deg,
                "lon_deg": r.longitude_deg,
                "alt_m": r.altitude_m,
                "u_mps": r.u,
                "v_mps": r.v,
                "w_mps": r.w,
                "roll_deg": r.roll_deg,
                "pitch_deg": r.pitch_deg,
                "heading_deg": r.heading_deg,
                "airspeed_mps": r.airspeed_mps,
            })


class ViolationLog:
    """
    Per-cycle CSV log: one row per ownship/intruder pair with a predicted
    violation, or a single row with an empty intruder when the cycle is
    clear, suppressed or failed.
    """

    def __init__(self, path: Optional[str]) -> None:
        self.path = path
        self._file = None
        self._writer = None

        if path is not None:
            log_dir = os.path.dirname(path)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            self._file = open(path, "w", newline="", encoding="utf-8")
            self._writer = csv.writer(self._file)
            self._writer.writerow(LOG_FIELDS)

    def record(self, time_s: float, own_id, outcome: CycleOutcome) -> None:
        if self._writer is None:
            return

        if not outcome.ran:
            status = outcome.status.name
            if outcome.reason is not None:
                status += f":{outcome.reason.name}"
            if outcome.error is not None:
                status += f":{outcome.error.name}"
            self._writer.writerow([f"{time_s:.3f}", own_id, "", status, ""])
            return

        if outcome.report.is_empty():
            self._writer.writerow([f"{time_s:.3f}", own_id, "", "CLEAR", ""])
            return

        for intr_id, ttv in sorted(outcome.report.items()):
            self._writer.writerow([f"{time_s:.3f}", own_id, intr_id, "VIOLATION", f"{ttv:.3f}"])

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None
            self._writer = None
