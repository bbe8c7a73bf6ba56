import math
import pytest

import config
from wellclear.adapter import ConflictEngineAdapter
from wellclear.engine import WellClearDetector
from wellclear.exceptions import IdentifierRoundTripError
from wellclear.models import GeoPosition, KinematicSample
from wellclear.store import VehicleStateStore


def sample_north(north_m, vel_north=0.0, time_s=0.0):
    return KinematicSample(
        position=GeoPosition(math.degrees(north_m / config.EARTH_RADIUS_M), 0.0, 1000.0),
        velocity=(0.0, vel_north, 0.0),
        time_s=time_s,
    )


class PrefixedIdDetector(WellClearDetector):
    """Breaks the id round trip by decorating traffic ids."""

    def add_traffic_state(self, ac_id, position, velocity, time_s):
        return super().add_traffic_state("AC" + ac_id, position, velocity, time_s)


class ShiftedIdDetector(WellClearDetector):
    def add_traffic_state(self, ac_id, position, velocity, time_s):
        return super().add_traffic_state(str(int(ac_id) + 100), position, velocity, time_s)


def make_store():
    store = VehicleStateStore()
    store.upsert(1, sample_north(0.0))
    store.upsert(2, sample_north(2000.0, vel_north=-100.0))   # closing
    store.upsert(3, sample_north(-8000.0, vel_north=-100.0))  # diverging
    return store


def test_recompute_returns_every_intruder():
    adapter = ConflictEngineAdapter(WellClearDetector({"tthr_s": 0.0}))
    results = dict(adapter.recompute(1, make_store()))

    assert set(results) == {2, 3}
    assert results[2] == pytest.approx((2000.0 - config.DTHR_M) / 100.0, rel=1e-6)
    assert results[3] == math.inf
    assert adapter.traffic_count() == 2


def test_working_set_rebuilt_each_cycle():
    adapter = ConflictEngineAdapter()
    store = make_store()
    adapter.recompute(1, store)
    adapter.recompute(1, store)
    assert adapter.engine.number_of_aircraft() == 3


def test_set_ownship_and_add_traffic_directly():
    adapter = ConflictEngineAdapter()
    adapter.set_ownship(1, sample_north(0.0))
    index = adapter.add_traffic(42, sample_north(500.0))

    assert index == 1
    assert adapter.intruder_id(index) == 42
    assert adapter.time_to_violation(index) == 0.0


def test_non_integer_engine_id_is_an_error():
    adapter = ConflictEngineAdapter(PrefixedIdDetector())
    with pytest.raises(IdentifierRoundTripError) as exc:
        adapter.recompute(1, make_store())
    assert exc.value.engine_id.startswith("AC")


def test_unknown_engine_id_is_an_error():
    adapter = ConflictEngineAdapter(ShiftedIdDetector())
    with pytest.raises(IdentifierRoundTripError):
        adapter.recompute(1, make_store())


def test_missing_ownship_raises_key_error():
    store = VehicleStateStore()
    store.upsert(2, sample_north(0.0))
    with pytest.raises(KeyError):
        ConflictEngineAdapter().recompute(1, store)
