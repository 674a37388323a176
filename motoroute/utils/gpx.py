"""GPX text utilities."""

import logging
import re
from datetime import datetime, timezone

import gpxpy
import gpxpy.gpx
from pydantic import ValidationError

from motoroute.errors import MissingAnchor, ParseError
from motoroute.models import CoordinateRing, GeoPoint, RideMetadata

logger = logging.getLogger(__name__)

METADATA_ANCHOR = "<metadata>"

# Start tag of a track point, attributes captured
_TRKPT_TAG = re.compile(r"<trkpt\b([^>]*)>")
# lat="..." followed (anywhere later in the same tag) by lon="...";
# either quote style, optional whitespace around "="
_LAT_THEN_LON = re.compile(
    r"""(?:^|\s)lat\s*=\s*(["'])(.*?)\1.*?\slon\s*=\s*(["'])(.*?)\3""", re.DOTALL
)

METADATA_TEMPLATE = """
    <metadata>
      <name>{ride_name}</name>
      <desc>Motorcycle route for {bike_model}</desc>
      <extensions>
        <ride>
          <bike_model>{bike_model}</bike_model>
          <emergency_contact>{emergency_contact}</emergency_contact>
          <emergency_phone>{emergency_phone}</emergency_phone>
        </ride>
      </extensions>
    </metadata>"""


def _to_float(value: str, name: str, offset: int) -> float:
    try:
        return float(value)
    except ValueError:
        raise ParseError(
            f"Track point at offset {offset} has non-numeric {name}={value!r}"
        ) from None


def extract_track_points(gpx_text: str) -> list[GeoPoint]:
    """
    Pull the coordinates of every track point out of GPX text.

    This is a lenient scan, not an XML parse: it looks at each <trkpt ...>
    start tag and reads a lat attribute followed by a lon attribute. Tags
    with another attribute order, and anything that is not a track point,
    are ignored. Well-formedness and namespaces are not checked.

    Args:
        gpx_text: GPX document text

    Returns:
        Track points in document order (empty if there are none)

    Raises:
        ParseError: if a lat or lon value is not a valid coordinate
    """
    points = []
    for tag in _TRKPT_TAG.finditer(gpx_text):
        attrs = _LAT_THEN_LON.search(tag.group(1))
        if attrs is None:
            continue

        lat = _to_float(attrs.group(2), "lat", tag.start())
        lon = _to_float(attrs.group(4), "lon", tag.start())
        try:
            points.append(GeoPoint(latitude=lat, longitude=lon))
        except ValidationError as e:
            raise ParseError(
                f"Track point at offset {tag.start()} is out of range: ({lat}, {lon})"
            ) from e

    logger.debug("Extracted %d track points", len(points))
    return points


def build_metadata_fragment(metadata: RideMetadata) -> str:
    """Render the ride metadata block. Values are inserted as given."""
    return METADATA_TEMPLATE.format(
        ride_name=metadata.ride_name,
        bike_model=metadata.bike_model,
        emergency_contact=metadata.emergency_contact,
        emergency_phone=metadata.emergency_phone,
    )


def inject_metadata(gpx_text: str, metadata: RideMetadata) -> str:
    """
    Insert the ride metadata block in front of the first <metadata> tag.

    The first literal "<metadata>" is replaced by the rendered block
    followed by that same tag, so the original metadata element is kept.

    Raises:
        MissingAnchor: if the text has no "<metadata>" tag
    """
    if METADATA_ANCHOR not in gpx_text:
        raise MissingAnchor("GPX text has no <metadata> tag to attach ride details to")

    return gpx_text.replace(
        METADATA_ANCHOR, build_metadata_fragment(metadata) + METADATA_ANCHOR, 1
    )


def ring_to_gpx(
    ring: CoordinateRing,
    name: str,
    description: str | None = None,
) -> str:
    """
    Render a waypoint ring as a single-track GPX document.

    Used as a draft when no directions service is available. The output
    carries a <metadata> element, so ride details can be injected into it.

    Args:
        ring: The loop to render
        name: Name of the document and track
        description: Optional description

    Returns:
        GPX XML string
    """
    gpx = gpxpy.gpx.GPX()
    gpx.name = name
    gpx.description = description or "Draft loop (straight lines between waypoints)"
    gpx.creator = "Motorcycle Route Builder"
    gpx.time = datetime.now(timezone.utc)

    gpx_track = gpxpy.gpx.GPXTrack()
    gpx_track.name = name
    gpx.tracks.append(gpx_track)

    gpx_segment = gpxpy.gpx.GPXTrackSegment()
    gpx_track.segments.append(gpx_segment)

    for point in ring:
        gpx_segment.points.append(gpxpy.gpx.GPXTrackPoint(
            latitude=point.latitude,
            longitude=point.longitude,
        ))

    return gpx.to_xml()


def save_gpx_file(gpx_content: str, filepath: str) -> None:
    """Save GPX content to a file."""
    with open(filepath, "w", encoding="utf-8") as f:
        f.write(gpx_content)
