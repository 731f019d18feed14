"""Tests for the MCP server, health tool and CLI."""

import json
import sys
from unittest.mock import AsyncMock, patch

from metlink_cot import __version__
from metlink_cot.data.metlink_client import UpstreamError
from metlink_cot.models.features import FeatureCollection
from metlink_cot.server import health, main


def test_health_returns_ok_status():
    """Health check should return status ok."""
    response = health()
    assert response.status == "ok"


def test_health_returns_version():
    """Health check should return the current version."""
    response = health()
    assert response.version == __version__


def test_health_returns_timestamp():
    """Health check should return a valid ISO timestamp."""
    response = health()
    assert response.timestamp is not None
    # Should be parseable as ISO format
    assert "T" in response.timestamp


def test_run_command_writes_output_file(tmp_path, monkeypatch):
    """`run -o` should submit exactly one collection to the given file."""
    output = tmp_path / "vehicles.geojson"
    monkeypatch.setattr(sys, "argv", ["metlink-cot", "run", "-o", str(output)])

    with patch(
        "metlink_cot.services.pipeline.fetch_envelope",
        AsyncMock(side_effect=UpstreamError("down")),
    ):
        main()

    data = json.loads(output.read_text(encoding="utf-8"))
    assert data == json.loads(FeatureCollection().to_json())
