from typing import List, Optional, Tuple
import logging

from .engine import WellClearDetector
from .exceptions import IdentifierRoundTripError
from .models import AircraftId, KinematicSample
from .store import VehicleStateStore

_logger = logging.getLogger(__name__)


class ConflictEngineAdapter:
    """
    Feeds one cycle's working set (ownship + every other stored aircraft)
    into the WCV detector and reads back time-to-violation per intruder.
    """

    def __init__(self, engine: Optional[WellClearDetector] = None) -> None:
        self.engine = engine if engine is not None else WellClearDetector()

    def set_ownship(self, aircraft_id: AircraftId, sample: KinematicSample) -> None:
        self.engine.set_ownship_state(
            str(aircraft_id), sample.position, sample.velocity, sample.time_s
        )

    def add_traffic(self, aircraft_id: AircraftId, sample: KinematicSample) -> int:
        return self.engine.add_traffic_state(
            str(aircraft_id), sample.position, sample.velocity, sample.time_s
        )

    def traffic_count(self) -> int:
        return max(self.engine.number_of_aircraft() - 1, 0)

    def time_to_violation(self, index: int) -> float:
        return self.engine.time_to_violation(index)

    def intruder_id(self, index: int) -> AircraftId:
        engine_id = self.engine.get_aircraft_state(index).id
        try:
            return int(engine_id, 10)
        except ValueError:
            raise IdentifierRoundTripError(engine_id, "not an integer") from None

    def recompute(self, ownship_id: AircraftId,
                  store: VehicleStateStore) -> List[Tuple[AircraftId, float]]:
        """
        Run one detection cycle. Returns raw (intruder id, seconds) pairs,
        including inf/nan predictions; filtering is the report builder's job.
        """
        own = store.get(ownship_id)
        if own is None:
            raise KeyError(ownship_id)

        self.set_ownship(ownship_id, own)
        for ac_id, sample in store.all():
            if ac_id == ownship_id:
                continue
            self.add_traffic(ac_id, sample)

        results = []
        for index in range(1, self.traffic_count() + 1):
            ac_id = self.intruder_id(index)
            if ac_id not in store or ac_id == ownship_id:
                raise IdentifierRoundTripError(
                    self.engine.get_aircraft_state(index).id, "unknown aircraft"
                )
            ttv = self.time_to_violation(index)
            _logger.debug("own=%s intr=%s ttv=%s", ownship_id, ac_id, ttv)
            results.append((ac_id, ttv))
        return results
