import os

import geopandas


def load_vector_file(file_path: str) -> geopandas.GeoDataFrame:
    """
    Loads a vector file (shapefile, GeoJSON, GeoPackage...).
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"The file {file_path} does not exist.")

    return geopandas.read_file(file_path)


def load_centroids(file_path: str, area_field: str = "Area") -> geopandas.GeoDataFrame:
    """
    Loads the centroid layer and checks it carries the weight column.

    Args:
        file_path (str): The path to the vector file.
        area_field (str): Name of the column holding each centroid's area.

    Returns:
        geopandas.GeoDataFrame: The centroids, in the CRS of the file.
    """
    gdf = load_vector_file(file_path)

    if area_field not in gdf.columns:
        raise ValueError(f"Centroid file must contain an '{area_field}' column.")

    return gdf
