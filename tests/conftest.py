"""Shared fixtures for the clustering tests."""

import os

import numpy as np
import pandas as pd
import pytest

DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "data")


@pytest.fixture
def blobs_df():
    """Three well separated groups of five observations each."""
    rng = np.random.default_rng(0)
    centers = np.array([[0.0, 0.0, 0.0], [6.0, 6.0, 0.0], [0.0, 6.0, 6.0]])
    points = np.vstack([center + rng.normal(scale=0.3, size=(5, 3)) for center in centers])
    df = pd.DataFrame(points, columns=["x", "y", "z"])
    df.insert(0, "name", [f"obs{i}" for i in range(len(df))])
    return df


@pytest.fixture
def blobs_dataset(blobs_df):
    from preprocess import clean_and_preprocess

    return clean_and_preprocess(blobs_df)


@pytest.fixture
def sample_csv():
    return os.path.join(DATA_DIR, "sample_blobs.csv")
