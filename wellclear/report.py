from types import MappingProxyType
from typing import Iterable, Tuple
import math

from .models import AircraftId, ViolationReport


class ViolationReportBuilder:
    """Turns raw per-intruder predictions into a fresh ViolationReport."""

    def build(self, ownship_id: AircraftId,
              results: Iterable[Tuple[AircraftId, float]]) -> ViolationReport:
        violations = {}
        for ac_id, ttv in results:
            # inf / nan -> no predicted violation
            if not math.isfinite(ttv):
                continue
            violations[ac_id] = max(ttv, 0.0)
        return ViolationReport(
            ownship_id=ownship_id,
            violations=MappingProxyType(violations),
        )
