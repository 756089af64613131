"""Shared geodesic helpers.

Bearing and destination are solved on the WGS 84 ellipsoid with
``pyproj.Geod`` so that metre distances stay exact regardless of latitude.
Metric operations that shapely performs in planar space (offsetting) run
in the local UTM zone, never on raw degrees.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

import shapely
from pyproj import Geod, Transformer

from isoxml_guidance.core.constants import WGS84_CRS

if TYPE_CHECKING:
    from collections.abc import Sequence

    from shapely.geometry.base import BaseGeometry

GeomT = TypeVar("GeomT", bound="BaseGeometry")

GEOD = Geod(ellps="WGS84")


def bearing(start: Sequence[float], end: Sequence[float]) -> float:
    """Return the initial compass bearing in degrees from ``start`` to ``end``.

    Points are ``(lon, lat[, elevation])``; the result is in ``(-180, 180]``
    with 0 pointing north and 90 pointing east.
    """
    azimuth, _back_azimuth, _distance = GEOD.inv(start[0], start[1], end[0], end[1])
    return azimuth


def destination(
    origin: Sequence[float], distance_m: float, bearing_deg: float
) -> tuple[float, float]:
    """Return the ``(lon, lat)`` reached by travelling ``distance_m`` from ``origin``.

    A negative distance travels in the opposite direction of ``bearing_deg``.
    """
    if distance_m < 0:
        bearing_deg, distance_m = bearing_deg + 180.0, -distance_m
    lon, lat, _back_azimuth = GEOD.fwd(origin[0], origin[1], bearing_deg, distance_m)
    return (lon, lat)


def geodesic_distance_m(start: Sequence[float], end: Sequence[float]) -> float:
    """Return the geodesic distance in metres between two points."""
    _azimuth, _back_azimuth, dist = GEOD.inv(start[0], start[1], end[0], end[1])
    return dist


def get_utm_crs(lon: float, lat: float) -> str:
    """Determine the UTM CRS for a given WGS 84 coordinate.

    Returns an EPSG code like ``"EPSG:32632"`` (UTM zone 32N) or
    ``"EPSG:32732"`` (UTM zone 32S).
    """
    # UTM zone number: 1-based, 6° wide, starting at -180°
    zone_number = int((lon + 180) / 6) + 1
    zone_number = max(1, min(60, zone_number))

    if lat >= 0:
        return f"EPSG:{32600 + zone_number}"
    return f"EPSG:{32700 + zone_number}"


def local_transformers(lon: float, lat: float) -> tuple[Transformer, Transformer]:
    """Return ``(to_utm, to_wgs)`` transformers for the UTM zone containing a point."""
    utm_crs = get_utm_crs(lon, lat)
    to_utm = Transformer.from_crs(WGS84_CRS, utm_crs, always_xy=True)
    to_wgs = Transformer.from_crs(utm_crs, WGS84_CRS, always_xy=True)
    return to_utm, to_wgs


def reproject(geom: GeomT, transformer: Transformer) -> GeomT:
    """Return ``geom`` with every coordinate passed through ``transformer``."""
    return shapely.transform(geom, transformer.transform, interleaved=False)
