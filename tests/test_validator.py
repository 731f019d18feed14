"""Tests for per-record entity validation."""

import logging

from metlink_cot.models.feed import FeedEnvelope
from metlink_cot.services.validator import has_vehicle_position, validate_entities


def _entity(entity_id: str, vehicle_id: str = "1001") -> dict:
    return {
        "id": entity_id,
        "vehicle": {
            "trip": {"trip_id": "83__0__100__MNM", "route_id": 830},
            "position": {"latitude": -41.2, "longitude": 174.8, "bearing": 10},
            "timestamp": 1735700000,
            "vehicle": {"id": vehicle_id},
        },
    }


def test_has_vehicle_position():
    assert has_vehicle_position(_entity("1")) is True
    assert has_vehicle_position({"id": "2"}) is False
    assert has_vehicle_position({"id": "3", "vehicle": {"trip": {}}}) is False
    assert has_vehicle_position({"id": "4", "vehicle": None}) is False
    assert has_vehicle_position("not a dict") is False


def test_skips_entities_without_vehicle_or_position():
    no_position = _entity("2")
    del no_position["vehicle"]["position"]
    envelope = FeedEnvelope(entity=[_entity("1"), {"id": "x"}, no_position, _entity("3", "1003")])

    entities = list(validate_entities(envelope))

    assert [e.id for e in entities] == ["1", "3"]


def test_skips_malformed_entity_without_aborting_batch():
    """A record missing its trip is dropped, the rest still come through."""
    broken = _entity("2")
    del broken["vehicle"]["trip"]
    envelope = FeedEnvelope(entity=[broken, 42, _entity("3")])

    entities = list(validate_entities(envelope))

    assert [e.id for e in entities] == ["3"]


def test_keeps_raw_entity():
    raw = _entity("1")
    raw["vehicle"]["congestion_level"] = 0

    entity = next(validate_entities(FeedEnvelope(entity=[raw])))

    assert entity.raw == raw
    assert entity.vehicle.vehicle.id == "1001"
    assert entity.vehicle.trip.route_id == 830


def test_empty_envelope():
    assert list(validate_entities(FeedEnvelope(entity=[]))) == []


def test_skips_out_of_range_timestamp():
    """Epoch milliseconds or corrupt timestamps drop only that record."""
    bad = _entity("1")
    bad["vehicle"]["timestamp"] = 10**15
    envelope = FeedEnvelope(entity=[bad, _entity("2", "9")])

    entities = list(validate_entities(envelope))

    assert [e.id for e in entities] == ["2"]


def test_numeric_vehicle_id_is_accepted():
    raw = _entity("1")
    raw["vehicle"]["vehicle"]["id"] = 5512

    entity = next(validate_entities(FeedEnvelope(entity=[raw])))

    assert entity.vehicle.vehicle.id == "5512"


def test_skipped_entities_logged_once_as_summary(caplog):
    envelope = FeedEnvelope(entity=[{"id": "a"}, {"id": "b"}, 7, _entity("1")])

    with caplog.at_level(logging.DEBUG, logger="metlink_cot.services.validator"):
        entities = list(validate_entities(envelope))

    assert len(entities) == 1
    assert [r.message for r in caplog.records] == ["Skipped 3 of 4 entities"]
