"""Route export to GPX files."""

import logging
from pathlib import Path

from motoroute.errors import ExportError
from motoroute.utils.gpx import save_gpx_file

logger = logging.getLogger(__name__)


def safe_filename(ride_name: str) -> str:
    """Turn a ride name into a file name stem."""
    safe_name = "".join(c if c.isalnum() or c in "-_" else "_" for c in ride_name.strip())
    return safe_name or "route"


def save_route_gpx(gpx_content: str, ride_name: str, output_dir: Path) -> Path:
    """
    Write a finished GPX document to the output directory.

    The file is named after the ride, so a later export of the same ride
    replaces it. Importing or sharing the file is left to the user.

    Returns:
        Path of the written file

    Raises:
        ExportError: if the directory or file cannot be written
    """
    output_dir = Path(output_dir)
    filepath = output_dir / f"{safe_filename(ride_name)}.gpx"

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        save_gpx_file(gpx_content, str(filepath))
    except OSError as e:
        raise ExportError(f"Cannot save GPX to {filepath}: {e}") from e

    logger.info("Saved GPX to %s", filepath)
    return filepath
