"""Vehicle classification: which category a feed record belongs to.

Two policies are supported and selected by configuration:

- ROUTE_ID: Metlink rail lines use route ids 2, 5 and 6; everything else
  is a bus. There is no ferry category.
- TRIP_PREFIX: trip ids look like "KPL__1__..." or "2001__20"; the operator
  code before the first "__" identifies rail lines and the harbour ferry.
  The route shown to users is that prefix rather than the numeric route id.
"""

import re
from dataclasses import dataclass

from metlink_cot.data.config import ClassificationPolicy
from metlink_cot.models.features import CategoryStyle, VehicleCategory
from metlink_cot.models.feed import FeedEntity

TRAIN_ROUTE_IDS = frozenset({2, 5, 6})

# Rail line codes: Hutt Valley, Johnsonville, Kapiti, Melling, Wairarapa, Waikanae-Upper Hutt
TRAIN_LINE_CODES = frozenset({"HVL", "JVL", "KPL", "MEL", "WRL", "MUL"})
FERRY_LINE_CODES = frozenset({"QDF"})

TRIP_SEPARATOR = "__"

LEADING_CODE = re.compile(r"^[A-Za-z]+")

CATEGORY_STYLES: dict[VehicleCategory, CategoryStyle] = {
    VehicleCategory.BUS: CategoryStyle(
        icon="ad78aafb-83a6-4c07-b2b9-a897a8b6a38f/Shapes/bus.png",
        cot_type="a-f-G-E-V-C",
        marker_color="#4e801f",
        id_prefix="MetlinkBus",
    ),
    VehicleCategory.TRAIN: CategoryStyle(
        icon="34ae1613-9645-4222-a9d2-e5f243dea2865/Transportation/Train4.png",
        cot_type="a-u-G-E-V",
        marker_color="#784e90",
        id_prefix="MetlinkTrain",
    ),
    VehicleCategory.SHIP: CategoryStyle(
        icon="34ae1613-9645-4222-a9d2-e5f243dea2865/Transportation/Ferry.png",
        cot_type="a-f-S-X",
        marker_color="#008080",
        id_prefix="MetlinkShip",
    ),
}


@dataclass(frozen=True)
class Classification:
    """Result of classifying one record."""

    category: VehicleCategory
    route_label: int | str

    @property
    def style(self) -> CategoryStyle:
        return CATEGORY_STYLES[self.category]


def _numeric_route_id(route_id: int | str) -> int | None:
    if isinstance(route_id, int):
        return route_id
    try:
        return int(route_id)
    except ValueError:
        return None


def trip_line_code(trip_id: str) -> str:
    """Extract the operator/line code from a trip id.

    Example: "KPL__1__104__RAIL" -> "KPL", "QDF__0__3" -> "QDF", "2001__20" -> ""
    """
    prefix = trip_id.split(TRIP_SEPARATOR, 1)[0]
    match = LEADING_CODE.match(prefix)
    return match.group(0).upper() if match else ""


def classify_by_route_id(entity: FeedEntity) -> Classification:
    """Classify using the numeric route id (buses and trains only)."""
    route_id = entity.vehicle.trip.route_id
    if _numeric_route_id(route_id) in TRAIN_ROUTE_IDS:
        category = VehicleCategory.TRAIN
    else:
        category = VehicleCategory.BUS
    return Classification(category=category, route_label=route_id)


def classify_by_trip_prefix(entity: FeedEntity) -> Classification:
    """Classify using the line code at the start of the trip id."""
    trip = entity.vehicle.trip
    code = trip_line_code(trip.trip_id)

    if code in FERRY_LINE_CODES:
        category = VehicleCategory.SHIP
    elif code in TRAIN_LINE_CODES:
        category = VehicleCategory.TRAIN
    else:
        category = VehicleCategory.BUS

    if TRIP_SEPARATOR in trip.trip_id:
        route_label = trip.trip_id.split(TRIP_SEPARATOR, 1)[0]
    else:
        route_label = trip.route_id
    return Classification(category=category, route_label=route_label)


_CLASSIFIERS = {
    ClassificationPolicy.ROUTE_ID: classify_by_route_id,
    ClassificationPolicy.TRIP_PREFIX: classify_by_trip_prefix,
}


def classify(entity: FeedEntity, policy: ClassificationPolicy) -> Classification:
    """Assign exactly one category to a record under the given policy."""
    return _CLASSIFIERS[policy](entity)
