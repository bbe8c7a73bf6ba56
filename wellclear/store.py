from typing import Dict, Iterator, List, Optional, Tuple
from .models import AircraftId, KinematicSample


class VehicleStateStore:
    """
    Latest kinematic sample per aircraft.

    Last write wins; no history is kept and nothing expires unless
    evict_older_than() is called explicitly.
    """

    def __init__(self) -> None:
        self._samples: Dict[AircraftId, KinematicSample] = {}

    def upsert(self, aircraft_id: AircraftId, sample: KinematicSample) -> None:
        self._samples[aircraft_id] = sample

    def get(self, aircraft_id: AircraftId) -> Optional[KinematicSample]:
        return self._samples.get(aircraft_id)

    def all(self) -> Iterator[Tuple[AircraftId, KinematicSample]]:
        return iter(list(self._samples.items()))

    def latest_time_s(self) -> Optional[float]:
        if not self._samples:
            return None
        return max(s.time_s for s in self._samples.values())

    def evict_older_than(self, cutoff_s: float,
                         keep: Optional[AircraftId] = None) -> List[AircraftId]:
        """Drop samples with time_s < cutoff_s (except `keep`). Returns evicted ids."""
        stale = [
            ac_id for ac_id, s in self._samples.items()
            if s.time_s < cutoff_s and ac_id != keep
        ]
        for ac_id in stale:
            del self._samples[ac_id]
        return stale

    def __len__(self) -> int:
        return len(self._samples)

    def __contains__(self, aircraft_id) -> bool:
        return aircraft_id in self._samples
