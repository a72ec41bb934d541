import geopandas as gpd
import pytest
from shapely.geometry import MultiPolygon, Point, Polygon, box

PROJECTED_CRS = "EPSG:32633"


def make_points(coords, areas=None, crs=PROJECTED_CRS, **columns):
    areas = areas if areas is not None else [1.0] * len(coords)
    data = {"Area": areas, **columns}
    return gpd.GeoDataFrame(data, geometry=[Point(xy) for xy in coords], crs=crs)


def make_polygons(geoms, crs=PROJECTED_CRS, **columns):
    return gpd.GeoDataFrame(dict(columns), geometry=list(geoms), crs=crs)


@pytest.fixture
def unit_square():
    # Square of half-width 1 centered on the origin
    return make_polygons([box(-1, -1, 1, 1)])


@pytest.fixture
def two_squares():
    return make_polygons([box(-1, -1, 1, 1), box(10, -1, 12, 1)], id=["left", "right"])


@pytest.fixture
def square_with_hole():
    shell = [(-2, -2), (2, -2), (2, 2), (-2, 2)]
    hole = [(-1, -1), (1, -1), (1, 1), (-1, 1)]
    return make_polygons([Polygon(shell, [hole])])


@pytest.fixture
def multipolygon_layer():
    return make_polygons([MultiPolygon([box(0, 0, 1, 1), box(5, 5, 6, 6)]), box(20, 20, 21, 21)])


@pytest.fixture
def bowtie():
    # Self-intersecting ring, invalid topology
    return make_polygons([Polygon([(0, 0), (2, 2), (2, 0), (0, 2)])])
