"""This module reduces per-point distance results to summary statistics."""
from dataclasses import asdict, dataclass
from typing import Iterable

import numpy as np

from treeline_distance.distances import DistanceResult
from treeline_distance.errors import EmptyResultSet, InvalidWeight


@dataclass(frozen=True)
class DistanceSummary:
    mean_distance: float
    mean_sq_distance: float
    weighted_mean_distance: float
    weighted_mean_sq_distance: float
    count: int
    total_area: float

    def as_dict(self) -> dict:
        return asdict(self)


def summarize_distances(results: Iterable[DistanceResult]) -> DistanceSummary:
    """
    Compute unweighted and Area-weighted means of the boundary distances.

    The squared means use the signed distance, which squares to the same
    value as the boundary distance.

    Parameters
    ----------
    results : iterable of DistanceResult
        Output of `compute_signed_distances`, in any order.

    Returns
    -------
    DistanceSummary

    Raises
    ------
    EmptyResultSet
        If there are no results.
    InvalidWeight
        If the Area weights sum to zero or to a non-finite value.
    """
    results = list(results)
    if not results:
        raise EmptyResultSet("Cannot summarize an empty set of distance results.")

    boundary = np.array([r.boundary_distance for r in results], dtype=float)
    signed = np.array([r.signed_distance for r in results], dtype=float)
    area = np.array([r.area for r in results], dtype=float)

    total_area = float(area.sum())
    if not np.isfinite(total_area):
        raise InvalidWeight(f"Total Area is {total_area}, weighted means are undefined.")
    if total_area == 0:
        raise InvalidWeight("Total Area is zero, weighted means are undefined.")

    return DistanceSummary(
        mean_distance=float(boundary.mean()),
        mean_sq_distance=float(np.sum(signed**2) / len(results)),
        weighted_mean_distance=float(np.sum(area * boundary) / total_area),
        weighted_mean_sq_distance=float(np.sum(area * signed**2) / total_area),
        count=len(results),
        total_area=total_area,
    )
