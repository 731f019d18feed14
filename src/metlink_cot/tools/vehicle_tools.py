from metlink_cot.app import mcp
from metlink_cot.data.config import get_metlink_config
from metlink_cot.models.features import FeatureCollection
from metlink_cot.services.pipeline import run_pipeline
from metlink_cot.services.submitter import MemorySubmitter


@mcp.tool()
async def get_vehicle_features(
    include_buses: bool = True,
    include_trains: bool = True,
    include_ships: bool = True,
) -> FeatureCollection:
    """Get the current positions of Metlink vehicles as map features.

    Fetches the live Metlink vehicle positions feed once and converts every
    vehicle into a GeoJSON point feature with Cursor-on-Target properties
    (type, callsign, speed, course, remarks).

    Categories switched off in the server configuration stay hidden even
    if requested here. When the feed is unreachable or the API key is not
    configured, an empty collection is returned.

    Args:
        include_buses: Include buses. Default True.
        include_trains: Include trains. Default True.
        include_ships: Include harbour ferries (only classified when the
                       trip_prefix policy is configured). Default True.

    Returns:
        FeatureCollection with one feature per vehicle.
    """
    base = get_metlink_config()
    config = base.model_copy(
        update={
            "show_buses": base.show_buses and include_buses,
            "show_trains": base.show_trains and include_trains,
            "show_ships": base.show_ships and include_ships,
        }
    )
    return await run_pipeline(config, MemorySubmitter())
