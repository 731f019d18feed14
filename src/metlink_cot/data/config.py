from enum import Enum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from metlink_cot.models.features import VehicleCategory


class ClassificationPolicy(str, Enum):
    """How a vehicle record is assigned its category.

    ROUTE_ID looks at the numeric route id (buses and trains only).
    TRIP_PREFIX looks at the trip id's operator prefix and adds ferries.
    """

    ROUTE_ID = "route_id"
    TRIP_PREFIX = "trip_prefix"


class MetlinkConfig(BaseSettings):
    """Configuration for the Metlink OpenData feed and output filtering.

    Automatically loads from environment variables and .env file.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    api_key: str = Field(default="", alias="METLINK_API_KEY")
    debug: bool = Field(default=False, alias="DEBUG")
    show_buses: bool = Field(default=True, alias="SHOW_BUSES")
    show_trains: bool = Field(default=True, alias="SHOW_TRAINS")
    show_ships: bool = Field(default=True, alias="SHOW_SHIPS")
    classification_policy: ClassificationPolicy = Field(
        default=ClassificationPolicy.ROUTE_ID, alias="METLINK_CLASSIFICATION_POLICY"
    )
    network: str = Field(default="WLG", alias="METLINK_NETWORK")
    vehicle_positions_url: str = "https://api.opendata.metlink.org.nz/v1/gtfs-rt/vehiclepositions"

    def is_category_visible(self, category: VehicleCategory) -> bool:
        """Return whether features of the given category should be emitted."""
        return {
            VehicleCategory.BUS: self.show_buses,
            VehicleCategory.TRAIN: self.show_trains,
            VehicleCategory.SHIP: self.show_ships,
        }[category]


@lru_cache
def get_metlink_config() -> MetlinkConfig:
    """Get Metlink configuration (cached singleton).

    Returns:
        MetlinkConfig with values from .env file or environment variables.
    """
    return MetlinkConfig()
