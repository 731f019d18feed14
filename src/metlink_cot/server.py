import argparse
import asyncio
import logging
from datetime import UTC, datetime
from pathlib import Path

from pydantic import BaseModel

from metlink_cot.app import mcp


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str


@mcp.tool()
def health() -> HealthResponse:
    """Check if the Metlink CoT server is running and healthy.

    Returns the server status, version, and current timestamp.
    """
    from metlink_cot import __version__

    return HealthResponse(
        status="ok",
        version=__version__,
        timestamp=datetime.now(UTC).isoformat(),
    )


async def run_once(output: Path | None) -> None:
    """Run a single conversion and submit it to stdout or a file."""
    from metlink_cot.data.config import get_metlink_config
    from metlink_cot.services.pipeline import run_pipeline
    from metlink_cot.services.submitter import FileSubmitter, StdoutSubmitter

    config = get_metlink_config()
    submitter = FileSubmitter(output) if output else StdoutSubmitter()
    await run_pipeline(config, submitter)


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="metlink-cot",
        description="Metlink vehicle positions to Cursor-on-Target features",
    )
    subparsers = parser.add_subparsers(dest="command")

    # run command
    run_parser = subparsers.add_parser(
        "run",
        help="Fetch the feed once and emit a GeoJSON FeatureCollection",
    )
    run_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the FeatureCollection to this file (default: stdout)",
    )
    run_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    # serve command
    subparsers.add_parser(
        "serve",
        help="Run the MCP server",
    )

    args = parser.parse_args()

    if args.command == "run":
        from metlink_cot.data.config import get_metlink_config

        # Configure logging
        verbose = args.verbose or get_metlink_config().debug
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.INFO,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

        asyncio.run(run_once(args.output))
    else:
        # Default: run MCP server
        import metlink_cot.tools.vehicle_tools  # noqa: F401

        mcp.run()


if __name__ == "__main__":
    main()
