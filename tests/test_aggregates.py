import random

import pytest

from treeline_distance.aggregates import summarize_distances
from treeline_distance.distances import DistanceResult
from treeline_distance.errors import EmptyResultSet, InvalidWeight


def result(signed_distance, area=1.0, point_id=1):
    return DistanceResult(
        point_id=point_id,
        area=area,
        x=0.0,
        y=0.0,
        nearest_poly_id=1,
        boundary_distance=abs(signed_distance),
        is_inside=signed_distance < 0,
        signed_distance=signed_distance,
    )


def test_inside_and_outside_points():
    summary = summarize_distances([result(-1.0, area=2.0), result(3.0, area=1.0)])
    assert summary.mean_distance == pytest.approx(2.0)
    assert summary.mean_sq_distance == pytest.approx(5.0)
    assert summary.weighted_mean_distance == pytest.approx(5 / 3)
    assert summary.weighted_mean_sq_distance == pytest.approx(11 / 3)
    assert summary.count == 2
    assert summary.total_area == pytest.approx(3.0)


def test_mean_square_ignores_sign():
    signed = [-2.0, 1.5, -0.5, 4.0]
    summary = summarize_distances([result(d) for d in signed])
    assert summary.mean_sq_distance == pytest.approx(sum(d * d for d in signed) / len(signed))


def test_aggregates_do_not_depend_on_order():
    rng = random.Random(7)
    results = [result(rng.uniform(-10, 10), area=rng.uniform(0.1, 5), point_id=i) for i in range(50)]
    shuffled = results[:]
    rng.shuffle(shuffled)

    a = summarize_distances(results)
    b = summarize_distances(shuffled)
    assert b.mean_distance == pytest.approx(a.mean_distance)
    assert b.mean_sq_distance == pytest.approx(a.mean_sq_distance)
    assert b.weighted_mean_distance == pytest.approx(a.weighted_mean_distance)
    assert b.weighted_mean_sq_distance == pytest.approx(a.weighted_mean_sq_distance)


def test_accepts_a_generator():
    summary = summarize_distances(result(d) for d in (1.0, 3.0))
    assert summary.mean_distance == pytest.approx(2.0)


def test_empty_results_are_rejected():
    with pytest.raises(EmptyResultSet):
        summarize_distances([])


def test_zero_total_area_is_rejected():
    with pytest.raises(InvalidWeight):
        summarize_distances([result(1.0, area=0.0), result(-2.0, area=0.0)])


def test_as_dict():
    summary = summarize_distances([result(2.0)])
    assert summary.as_dict() == {
        "mean_distance": 2.0,
        "mean_sq_distance": 4.0,
        "weighted_mean_distance": 2.0,
        "weighted_mean_sq_distance": 4.0,
        "count": 1,
        "total_area": 1.0,
    }


@pytest.mark.parametrize("bad_area", [float("nan"), float("inf")], ids=["nan", "inf"])
def test_non_finite_total_area_is_rejected(bad_area):
    with pytest.raises(InvalidWeight):
        summarize_distances([result(1.0, area=1.0), result(-2.0, area=bad_area)])
