"""This module checks the centroid and boundary layers and brings them into a shared CRS."""
from dataclasses import dataclass
from typing import Optional

import geopandas as gpd
import numpy as np
import pandas as pd

from treeline_distance.errors import (
    DuplicateIdentifier,
    InvalidGeometryType,
    InvalidWeight,
    MissingAttribute,
    UndefinedCRS,
)

POINT_TYPES = {"Point"}
POLYGON_TYPES = {"Polygon", "MultiPolygon"}


@dataclass(frozen=True)
class PreparedInputs:
    """Validated copies of both layers, sharing one CRS and carrying identifiers."""

    points: gpd.GeoDataFrame
    polygons: gpd.GeoDataFrame
    id_field: str = "id"
    area_field: str = "Area"


def check_geometry_types(gdf: gpd.GeoDataFrame, allowed: set, name: str) -> None:
    """
    Make sure every geometry in a layer has one of the allowed types.

    Parameters
    ----------
    gdf : geopandas.GeoDataFrame
        Layer to check.
    allowed : set
        Accepted geometry type names, e.g. {"Polygon", "MultiPolygon"}.
    name : str
        Name of the layer, used in the error message.

    Raises
    ------
    InvalidGeometryType
        If a geometry is missing, empty or of another type.
    """
    geom_types = gdf.geometry.geom_type
    empty = gdf.geometry.is_empty
    bad = ~geom_types.isin(allowed) | empty
    if bad.any():
        labels = geom_types.where(~empty, "empty").fillna("missing")
        raise InvalidGeometryType(name, labels[bad].unique(), allowed)


def ensure_identifier(gdf: gpd.GeoDataFrame, id_field: str = "id") -> gpd.GeoDataFrame:
    """
    Return a copy of the layer with a unique identifier column.

    When `id_field` is absent it is filled with a 1-based running index that
    follows the row order. A supplied column is kept as is but must be unique
    and complete.
    """
    gdf = gdf.copy()
    if id_field not in gdf.columns:
        gdf[id_field] = np.arange(1, len(gdf) + 1)
        return gdf

    ids = gdf[id_field]
    if ids.isna().any():
        raise DuplicateIdentifier(f"Column '{id_field}' has missing values.")
    if ids.duplicated().any():
        duplicated = ids[ids.duplicated()].unique().tolist()
        raise DuplicateIdentifier(
            f"Column '{id_field}' has duplicated values: {duplicated[:10]}"
        )
    return gdf


def check_weights(weights: pd.Series, area_field: str = "Area") -> None:
    """Reject a weight column holding non-numeric, missing or infinite values."""
    if not pd.api.types.is_numeric_dtype(weights) or pd.api.types.is_bool_dtype(weights):
        raise InvalidWeight(f"Column '{area_field}' must be numeric, found dtype {weights.dtype}.")
    if weights.isna().any():
        raise InvalidWeight(f"Column '{area_field}' has {int(weights.isna().sum())} missing values.")
    if not np.isfinite(weights.to_numpy(dtype=float)).all():
        raise InvalidWeight(f"Column '{area_field}' has infinite values.")


def align_crs(points: gpd.GeoDataFrame, polygons: gpd.GeoDataFrame) -> gpd.GeoDataFrame:
    """
    Return the polygons expressed in the CRS of the points.

    The points are never reprojected. Two layers without any CRS are assumed
    to share the same planar coordinates.
    """
    if points.crs is None and polygons.crs is None:
        return polygons
    if points.crs is None or polygons.crs is None:
        missing = "points" if points.crs is None else "polygons"
        raise UndefinedCRS(
            f"The {missing} layer has no CRS, cannot reconcile it with the other layer."
        )
    if points.crs == polygons.crs:
        return polygons

    print(f"Reprojecting polygons from {polygons.crs.to_string()} to {points.crs.to_string()}")
    return polygons.to_crs(points.crs)


def prepare_inputs(
    points: gpd.GeoDataFrame,
    polygons: gpd.GeoDataFrame,
    id_field: str = "id",
    area_field: str = "Area",
    target_crs: Optional[str] = None,
) -> PreparedInputs:
    """
    Validate both layers and return copies ready for distance computation.

    Parameters
    ----------
    points : geopandas.GeoDataFrame
        Centroids, Point geometries only, with an `area_field` column.
    polygons : geopandas.GeoDataFrame
        Boundary layer, Polygon or MultiPolygon geometries only.
    id_field : str, optional
        Identifier column, synthesized for a layer that lacks it.
    area_field : str, optional
        Weight column of the points (default is "Area").
    target_crs : str, optional
        Projected CRS to move both layers into before measuring. When None
        the points' CRS is used.

    Returns
    -------
    PreparedInputs
        The prepared layers. The input frames are left untouched.
    """
    check_geometry_types(points, POINT_TYPES, "points")
    check_geometry_types(polygons, POLYGON_TYPES, "polygons")

    if area_field not in points.columns:
        raise MissingAttribute(f"The points layer must contain an '{area_field}' column.")
    check_weights(points[area_field], area_field)

    points = ensure_identifier(points, id_field)
    polygons = ensure_identifier(polygons, id_field)

    if target_crs is not None:
        if points.crs is None or polygons.crs is None:
            raise UndefinedCRS(f"Both layers need a CRS to be projected to {target_crs}.")
        points = points.to_crs(target_crs)
        polygons = polygons.to_crs(target_crs)

    polygons = align_crs(points, polygons)

    if points.crs is not None and points.crs.is_geographic:
        print(
            f"Warning: {points.crs.to_string()} is geographic, distances will be in degrees. "
            "Consider passing a projected target CRS."
        )

    return PreparedInputs(
        points=points,
        polygons=polygons,
        id_field=id_field,
        area_field=area_field,
    )
