"""This module computes the signed distance from each centroid to the boundary of its nearest polygon."""
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import Enum
from typing import Any, List, Sequence

import geopandas as gpd
import numpy as np
import pandas as pd
from shapely.errors import GEOSException
from tqdm import tqdm

from treeline_distance.errors import NoPolygonsAvailable
from treeline_distance.validation import PreparedInputs


class Containment(Enum):
    CONTAINED = "contained"
    NOT_CONTAINED = "not_contained"
    INDETERMINATE = "indeterminate"

    @property
    def is_inside(self) -> bool:
        # Indeterminate counts as outside
        return self is Containment.CONTAINED


@dataclass(frozen=True)
class DistanceResult:
    point_id: Any
    area: float
    x: float
    y: float
    nearest_poly_id: Any
    boundary_distance: float
    is_inside: bool
    signed_distance: float
    containment: Containment = Containment.NOT_CONTAINED


def classify_containment(polygon, point) -> Containment:
    """
    Test whether a polygon contains a point.

    Any polygon that fails `is_valid` gives `Containment.INDETERMINATE`, not
    only self-intersecting ones: multipolygons whose parts share an edge are
    invalid too and their points are reported as outside. Predicates that
    GEOS cannot evaluate give `Containment.INDETERMINATE` as well.
    """
    try:
        if not polygon.is_valid:
            return Containment.INDETERMINATE
        if polygon.contains(point):
            return Containment.CONTAINED
    except GEOSException:
        return Containment.INDETERMINATE
    return Containment.NOT_CONTAINED


def nearest_polygons(points: gpd.GeoDataFrame, polygons: gpd.GeoDataFrame) -> np.ndarray:
    """
    Find the nearest polygon of every point.

    Distances are point-to-polygon, so a point inside a polygon is at zero
    distance from it. When several polygons are equally near, the one that
    comes first in `polygons` wins.

    Parameters
    ----------
    points : geopandas.GeoDataFrame
        Point layer.
    polygons : geopandas.GeoDataFrame
        Polygon layer in the same CRS as `points`.

    Returns
    -------
    numpy.ndarray
        Positional index into `polygons` for each point, in point order.
    """
    if len(polygons) == 0:
        raise NoPolygonsAvailable("The polygon layer is empty, no nearest polygon can be found.")
    if len(points) == 0:
        return np.empty(0, dtype=int)

    point_idx, poly_idx = polygons.sindex.nearest(points.geometry, return_all=True)

    # Every point gets at least one match, keep the lowest polygon position
    nearest = np.full(len(points), len(polygons), dtype=int)
    np.minimum.at(nearest, point_idx, poly_idx)
    return nearest


def measure_point(point_id, area, point, polygon_id, polygon) -> DistanceResult:
    """Signed distance from one point to the boundary of its nearest polygon."""
    boundary_distance = float(point.distance(polygon.boundary))
    containment = classify_containment(polygon, point)
    is_inside = containment.is_inside

    return DistanceResult(
        point_id=point_id,
        area=float(area),
        x=float(point.x),
        y=float(point.y),
        nearest_poly_id=polygon_id,
        boundary_distance=boundary_distance,
        is_inside=is_inside,
        signed_distance=-boundary_distance if is_inside else boundary_distance,
        containment=containment,
    )


def compute_signed_distances(
    prepared: PreparedInputs, workers: int = 1, progress: bool = False
) -> List[DistanceResult]:
    """
    Compute one DistanceResult per point, in the order of the point layer.

    Parameters
    ----------
    prepared : PreparedInputs
        Output of `prepare_inputs`.
    workers : int, optional
        Number of threads for the per-point loop (default is 1).
    progress : bool, optional
        Show a tqdm progress bar.

    Returns
    -------
    list of DistanceResult
    """
    points, polygons = prepared.points, prepared.polygons
    nearest = nearest_polygons(points, polygons)

    poly_ids = polygons[prepared.id_field].tolist()
    poly_geoms = list(polygons.geometry)
    jobs = list(
        zip(
            points[prepared.id_field].tolist(),
            points[prepared.area_field].tolist(),
            list(points.geometry),
            nearest.tolist(),
        )
    )

    def measure(job):
        point_id, area, point, j = job
        return measure_point(point_id, area, point, poly_ids[j], poly_geoms[j])

    if workers > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            mapped = executor.map(measure, jobs)
            return list(
                tqdm(mapped, total=len(jobs), desc="Measuring points", leave=False, disable=not progress)
            )

    return [
        measure(job)
        for job in tqdm(jobs, total=len(jobs), desc="Measuring points", leave=False, disable=not progress)
    ]


def results_to_frame(
    results: Sequence[DistanceResult], id_field: str = "id", area_field: str = "Area"
) -> pd.DataFrame:
    """Tabulate distance results, one row per point, keeping their order."""
    columns = [
        id_field,
        area_field,
        "x",
        "y",
        "nearest_poly_id",
        "boundary_distance",
        "is_inside",
        "signed_distance",
        "containment",
    ]
    rows = [
        (
            r.point_id,
            r.area,
            r.x,
            r.y,
            r.nearest_poly_id,
            r.boundary_distance,
            r.is_inside,
            r.signed_distance,
            r.containment.value,
        )
        for r in results
    ]
    return pd.DataFrame(rows, columns=columns)
