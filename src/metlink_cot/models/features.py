"""Output models: GeoJSON features carrying Cursor-on-Target (CoT) properties.

The host map backend consumes a FeatureCollection where each feature's
properties describe a CoT event (type, callsign, kinematics, remarks).
"""

from datetime import datetime
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

# CoT convention for "value not known": NaN, never zero or null
UNKNOWN = float("nan")

_SERIALIZATION = ConfigDict(ser_json_inf_nan="constants", populate_by_name=True)


class VehicleCategory(str, Enum):
    """Semantic class of a transit vehicle."""

    BUS = "Bus"
    TRAIN = "Train"
    SHIP = "Ship"


class CategoryStyle(BaseModel):
    """Presentation attributes shared by every vehicle of a category."""

    model_config = ConfigDict(frozen=True)

    icon: str
    cot_type: str = Field(description="CoT symbol code (affiliation, dimension, type)")
    marker_color: str
    id_prefix: str = Field(description="Middle part of the feature id, e.g. 'MetlinkBus'")


class PointGeometry(BaseModel):
    """GeoJSON point. Coordinates are (longitude, latitude)."""

    model_config = _SERIALIZATION

    type: Literal["Point"] = "Point"
    coordinates: tuple[float, float]


class FeatureProperties(BaseModel):
    """CoT properties for a single vehicle marker."""

    model_config = _SERIALIZATION

    type: str = Field(description="CoT symbol code")
    callsign: str
    time: datetime
    start: datetime
    speed: float = Field(description="m/s, NaN when unknown")
    course: float = Field(description="Degrees, NaN when unknown")
    marker_color: str = Field(alias="marker-color")
    metadata: dict[str, Any] = {}
    remarks: str = ""
    icon: str


class Feature(BaseModel):
    """A single vehicle as a GeoJSON feature."""

    model_config = _SERIALIZATION

    id: str
    type: Literal["Feature"] = "Feature"
    properties: FeatureProperties
    geometry: PointGeometry


class FeatureCollection(BaseModel):
    """Complete output of one conversion run."""

    model_config = _SERIALIZATION

    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: list[Feature] = []

    def to_json(self, indent: int | None = None) -> str:
        """Serialise as GeoJSON, using wire names like `marker-color`."""
        return self.model_dump_json(by_alias=True, indent=indent)
