# 0. config.py

import logging
import os

# Where the bundled datasets live
DATA_DIR = os.getenv("DATA_DIR", os.path.join(os.path.dirname(os.path.abspath(__file__)), "data"))

# Dashboard server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8050"))
DEBUG = os.getenv("DEBUG", "false").lower() in ("1", "true", "yes")

# Clustering parameters
RANDOM_STATE = int(os.getenv("RANDOM_STATE", "42"))
DEFAULT_K = int(os.getenv("DEFAULT_K", "3"))
K_MIN = 2
K_MAX = 25

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DISTANCES = ("euclidean", "pearson", "manhattan")
LINKAGES = ("single", "average", "complete")

# Heatmap degree: exact number of agreeing algorithms, 5 shows every pair
DEGREES = (1, 2, 3, 4, 5)
ALL_DEGREES = 5

ALGORITHMS = ("kmeans", "hierarchical", "kmedoids", "spectral")
ALGORITHM_TITLES = {
    "kmeans": "K-Means",
    "hierarchical": "Hierarchical",
    "kmedoids": "K-Medoids",
    "spectral": "Spectral",
}

# Display name -> file name under DATA_DIR
DATASETS = {
    "Sample Blobs": "sample_blobs.csv",
    "Top 50 Spotify": "top50_spotify.csv",
    "Top 100 Spotify": "top100_spotify.csv",
    "Credit Cards": "Credit_Cards.csv",
}
DEFAULT_DATASET = "Sample Blobs"


def configure_logging(level=LOG_LEVEL):
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="[%(levelname)s] %(message)s",
    )
