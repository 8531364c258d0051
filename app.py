# 9. app.py

import argparse
import logging
import os
import sys

import config
from export import export_labels
from load_data import dataset_path, load_data
from pipeline import run_pipeline
from preprocess import clean_and_preprocess
from visualize import plot_clusters, plot_consensus_heatmap

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Run four clustering algorithms and build their consensus matrix.")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--data", help="CSV file: identifier column followed by numeric columns.")
    source.add_argument("--dataset", choices=list(config.DATASETS), default=config.DEFAULT_DATASET,
                        help="Bundled dataset name.")
    parser.add_argument("-k", type=int, default=config.DEFAULT_K, help="Number of clusters.")
    parser.add_argument("--distance", choices=config.DISTANCES, default="euclidean")
    parser.add_argument("--linkage", choices=config.LINKAGES, default="average")
    parser.add_argument("--degree", type=int, choices=config.DEGREES, default=config.ALL_DEGREES,
                        help="Heatmap degree; 5 keeps every pair.")
    parser.add_argument("--output", default="cluster_labels.csv", help="Where to write the label CSV.")
    parser.add_argument("--plots-dir", help="Save the heatmap and cluster plots into this directory.")
    parser.add_argument("--log-level", default=config.LOG_LEVEL, choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    config.configure_logging(args.log_level)

    df = load_data(args.data or dataset_path(args.dataset))
    if df is None:
        logger.error("Data loading failed. Exiting.")
        return 1

    try:
        dataset = clean_and_preprocess(df)
        result = run_pipeline(dataset, args.k, args.distance, args.linkage, args.degree)
        export_labels(result, args.output)
    except (ValueError, OSError) as e:
        logger.error(str(e))
        return 1

    for name, score in result.scores.items():
        logger.info(f"{config.ALGORITHM_TITLES[name]} silhouette score: {score:.2f}")

    if args.plots_dir:
        os.makedirs(args.plots_dir, exist_ok=True)
        plot_consensus_heatmap(result.heatmap, save_path=os.path.join(args.plots_dir, "consensus_heatmap.png"))
        for name, labels in result.labels:
            plot_clusters(dataset.X_scaled, labels, title=f"{config.ALGORITHM_TITLES[name]} Clusters",
                          save_path=os.path.join(args.plots_dir, f"{name}_clusters.png"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
