import math

from wellclear.report import ViolationReportBuilder


def test_filters_infinite_and_undefined():
    report = ViolationReportBuilder().build(
        1, [(2, 12.5), (3, math.inf), (4, math.nan), (5, 0.0)]
    )
    assert report.as_dict() == {2: 12.5, 5: 0.0}
    assert 3 not in report
    assert report.ownship_id == 1


def test_negative_prediction_clamped_to_zero():
    report = ViolationReportBuilder().build(1, [(2, -0.5)])
    assert report[2] == 0.0


def test_empty_report_is_valid():
    report = ViolationReportBuilder().build(1, [(2, math.inf)])
    assert report.is_empty()
    assert len(report) == 0


def test_each_build_is_fresh():
    builder = ViolationReportBuilder()
    first = builder.build(1, [(2, 10.0)])
    second = builder.build(1, [(3, 20.0)])

    assert first.as_dict() == {2: 10.0}
    assert second.as_dict() == {3: 20.0}
