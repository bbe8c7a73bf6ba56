from typing import List
import logging

from .models import CycleOutcome

_logger = logging.getLogger(__name__)

NO_VIOLATION_MSG = "No violation of well clear volume detected"


def outcome_lines(outcome: CycleOutcome) -> List[str]:
    """Human-readable lines for one cycle; empty when the cycle did not run."""
    if not outcome.ran:
        return []
    report = outcome.report
    if report.is_empty():
        return [NO_VIOLATION_MSG]
    return [
        f"Entity {report.ownship_id} will violate the well clear volume "
        f"with Entity {intr_id} in {ttv:.2f} seconds"
        for intr_id, ttv in sorted(report.items())
    ]


def log_outcome(outcome: CycleOutcome) -> None:
    """Bus subscriber: emit the per-cycle outcome as log lines."""
    if not outcome.ran:
        _logger.debug("Cycle skipped: %s %s", outcome.status.name,
                      outcome.reason.name if outcome.reason else outcome.detail)
        return
    level = logging.INFO if outcome.report.is_empty() else logging.WARNING
    for line in outcome_lines(outcome):
        _logger.log(level, line)
