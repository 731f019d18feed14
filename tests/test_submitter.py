"""Tests for FeatureCollection submitters."""

import io
import json
from datetime import UTC, datetime

import pytest

from metlink_cot.models.features import (
    UNKNOWN,
    Feature,
    FeatureCollection,
    FeatureProperties,
    PointGeometry,
)
from metlink_cot.services.submitter import FileSubmitter, MemorySubmitter, StdoutSubmitter


def create_collection() -> FeatureCollection:
    observed = datetime(2025, 1, 1, 3, 0, tzinfo=UTC)
    return FeatureCollection(
        features=[
            Feature(
                id="WLG-MetlinkBus-3450",
                properties=FeatureProperties(
                    type="a-f-G-E-V-C",
                    callsign="Route 83 - Bus 3450",
                    time=observed,
                    start=observed,
                    speed=UNKNOWN,
                    course=270.0,
                    marker_color="#4e801f",
                    metadata={"vehicleId": "3450"},
                    remarks="Vehicle Type: Bus",
                    icon="bus.png",
                ),
                geometry=PointGeometry(coordinates=(174.78, -41.29)),
            )
        ]
    )


def test_to_json_uses_geojson_names():
    data = json.loads(create_collection().to_json())

    assert data["type"] == "FeatureCollection"
    feature = data["features"][0]
    assert feature["type"] == "Feature"
    assert feature["geometry"] == {"type": "Point", "coordinates": [174.78, -41.29]}
    assert feature["properties"]["marker-color"] == "#4e801f"
    assert "marker_color" not in feature["properties"]
    assert feature["properties"]["time"].startswith("2025-01-01T03:00:00")


def test_to_json_keeps_unknown_sentinel():
    """Unknown kinematics serialise as NaN, not null or zero."""
    text = create_collection().to_json()
    assert '"speed":NaN' in text


@pytest.mark.asyncio
async def test_stdout_submitter_writes_json():
    stream = io.StringIO()

    await StdoutSubmitter(stream=stream).submit(create_collection())

    output = stream.getvalue()
    assert output.endswith("\n")
    assert json.loads(output)["features"][0]["id"] == "WLG-MetlinkBus-3450"


@pytest.mark.asyncio
async def test_file_submitter_writes_file(tmp_path):
    path = tmp_path / "out" / "vehicles.geojson"

    await FileSubmitter(path).submit(create_collection())

    data = json.loads(path.read_text(encoding="utf-8"))
    assert len(data["features"]) == 1


@pytest.mark.asyncio
async def test_memory_submitter_records_submissions():
    submitter = MemorySubmitter()
    assert submitter.last is None

    empty = FeatureCollection()
    await submitter.submit(empty)

    assert submitter.submissions == [empty]
    assert submitter.last is empty
