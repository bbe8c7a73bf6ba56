import csv
import math
import pytest

from wellclear.exceptions import ReportFormatError
from wellclear.io import REPORT_FIELDS, ViolationLog, load_state_reports, save_state_reports
from wellclear.models import CycleOutcome, SuppressReason, ViolationReport


def write_rows(path, rows, header=REPORT_FIELDS):
    with path.open("w", newline="") as f:
        w = csv.writer(f)
        w.writerow(header)
        for row in rows:
            w.writerow(row)


def test_load_state_reports(tmp_path):
    path = tmp_path / "reports.csv"
    write_rows(path, [
        [2000, 2, 45.31, -121.0, 1000, 100, 0, 0, 0, 0, 180, 100],
        [1000, 1, 45.30, -121.0, 1000, 30, 0, 0, 0, 0, 90, 30],
    ])

    reports = load_state_reports(str(path))

    # sorted by time
    assert [r.aircraft_id for r in reports] == [1, 2]
    own = reports[0]
    assert own.time_ms == 1000
    assert own.heading_deg == 90
    assert own.airspeed_mps == 30


def test_missing_airspeed_defaults_to_body_speed(tmp_path):
    path = tmp_path / "reports.csv"
    write_rows(path, [[0, 1, 45.3, -121.0, 1000, 3, 4, 0, 0, 0, 0, ""]])
    (report,) = load_state_reports(str(path))
    assert report.airspeed_mps == pytest.approx(5.0)


def test_bad_aircraft_id_raises(tmp_path):
    path = tmp_path / "reports.csv"
    write_rows(path, [[0, "OWN1", 45.3, -121.0, 1000, 30, 0, 0, 0, 0, 0, 30]])
    with pytest.raises(ReportFormatError, match="aircraft_id"):
        load_state_reports(str(path))


def test_bad_number_reports_line(tmp_path):
    path = tmp_path / "reports.csv"
    write_rows(path, [[0, 1, "north", -121.0, 1000, 30, 0, 0, 0, 0, 0, 30]])
    with pytest.raises(ReportFormatError, match="line 2"):
        load_state_reports(str(path))


def test_save_then_load(tmp_path):
    path = tmp_path / "reports.csv"
    write_rows(path, [[500, 7, 45.3, -121.0, 900, 50, 1, 2, 3, 4, 5, 50.05]])
    original = load_state_reports(str(path))

    out = tmp_path / "copy.csv"
    save_state_reports(str(out), original)
    assert load_state_reports(str(out)) == original


def test_violation_log_rows(tmp_path):
    path = tmp_path / "logs" / "wcv.csv"
    log = ViolationLog(str(path))
    log.record(1.0, 1, CycleOutcome.suppressed(SuppressReason.NO_TRAFFIC))
    log.record(2.0, 1, CycleOutcome.of_report(ViolationReport(ownship_id=1)))
    log.record(3.0, 1, CycleOutcome.of_report(
        ViolationReport(ownship_id=1, violations={3: 4.5, 2: math.pi})
    ))
    log.close()

    with path.open(newline="") as f:
        rows = list(csv.reader(f))

    assert rows[0] == ["time_s", "own_id", "intr_id", "status", "time_to_violation_s"]
    assert rows[1][3] == "SUPPRESSED:NO_TRAFFIC"
    assert rows[2][3] == "CLEAR"
    assert rows[3] == ["3.000", "1", "2", "VIOLATION", "3.142"]
    assert rows[4] == ["3.000", "1", "3", "VIOLATION", "4.500"]


def test_violation_log_disabled():
    log = ViolationLog(None)
    log.record(0.0, 1, CycleOutcome.suppressed(SuppressReason.OWNSHIP_MISSING))
    log.close()
