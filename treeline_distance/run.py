"""Command line entry point: signed distances from centroids to the nearest treeline polygon."""
import argparse
from pathlib import Path

from treeline_distance.aggregates import summarize_distances
from treeline_distance.distances import compute_signed_distances, results_to_frame
from treeline_distance.loading import load_centroids, load_vector_file
from treeline_distance.validation import prepare_inputs

ID_FIELD = "id"
AREA_FIELD = "Area"
WORKERS = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Signed distance from centroids to the boundary of the nearest polygon."
    )
    parser.add_argument("centroids", help="Point layer with an Area column")
    parser.add_argument("boundaries", help="Polygon layer (treeline or similar)")
    parser.add_argument("--output", help="CSV file for the per-point results")
    parser.add_argument("--id-field", default=ID_FIELD, help="Identifier column (default: %(default)s)")
    parser.add_argument("--area-field", default=AREA_FIELD, help="Weight column (default: %(default)s)")
    parser.add_argument("--target-crs", help="Projected CRS to measure in, e.g. EPSG:3857")
    parser.add_argument("--workers", type=int, default=WORKERS, help="Threads for the per-point loop")
    parser.add_argument("--progress", action="store_true", help="Show a progress bar")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    print("\nLoading layers...")
    centroids = load_centroids(args.centroids, area_field=args.area_field)
    boundaries = load_vector_file(args.boundaries)
    print(f"Loaded {len(centroids)} centroids ({centroids.crs})")
    print(f"Loaded {len(boundaries)} polygons ({boundaries.crs})")

    prepared = prepare_inputs(
        centroids,
        boundaries,
        id_field=args.id_field,
        area_field=args.area_field,
        target_crs=args.target_crs,
    )

    print("\nComputing signed boundary distances...")
    results = compute_signed_distances(prepared, workers=args.workers, progress=args.progress)
    summary = summarize_distances(results)

    print(f"\n{'=' * 60}")
    print(f"Points: {summary.count}  Total area: {summary.total_area:.4f}")
    print(f"Mean distance:                    {summary.mean_distance:.4f}")
    print(f"Mean squared distance:            {summary.mean_sq_distance:.4f}")
    print(f"Area-weighted mean distance:      {summary.weighted_mean_distance:.4f}")
    print(f"Area-weighted mean sq. distance:  {summary.weighted_mean_sq_distance:.4f}")
    print("=" * 60)

    output_df = results_to_frame(results, id_field=args.id_field, area_field=args.area_field)
    print("Signed distance statistics:")
    print(output_df["signed_distance"].describe())

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_df.to_csv(output_path, index=False)
        print(f"Results saved to {output_path}")

    return summary


if __name__ == "__main__":
    main()
