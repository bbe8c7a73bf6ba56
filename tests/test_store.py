from wellclear.models import GeoPosition, KinematicSample
from wellclear.store import VehicleStateStore


def make_sample(time_s, lat=0.0):
    return KinematicSample(
        position=GeoPosition(lat, 0.0, 1000.0),
        velocity=(0.0, 50.0, 0.0),
        time_s=time_s,
    )


def test_upsert_last_write_wins():
    store = VehicleStateStore()
    store.upsert(7, make_sample(1.0))
    store.upsert(7, make_sample(2.0, lat=0.1))

    assert len(store) == 1
    assert store.get(7).time_s == 2.0
    assert store.get(7).position.lat_deg == 0.1


def test_get_missing_returns_none():
    store = VehicleStateStore()
    assert store.get(99) is None
    assert 99 not in store
    assert store.latest_time_s() is None


def test_all_lists_every_aircraft():
    store = VehicleStateStore()
    for ac_id in (3, 1, 2):
        store.upsert(ac_id, make_sample(float(ac_id)))

    assert dict(store.all()).keys() == {1, 2, 3}
    assert store.latest_time_s() == 3.0


def test_evict_older_than_keeps_protected_id():
    store = VehicleStateStore()
    store.upsert(1, make_sample(0.0))
    store.upsert(2, make_sample(0.0))
    store.upsert(3, make_sample(10.0))

    evicted = store.evict_older_than(5.0, keep=1)

    assert evicted == [2]
    assert 1 in store
    assert 2 not in store
    assert 3 in store
