# 2. preprocess.py

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd
from sklearn.preprocessing import StandardScaler

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Dataset:
    """Cleaned observations ready for clustering.

    ``ids``, ``features`` and ``X_scaled`` are aligned by position; every label
    vector computed downstream follows the same row order.
    """

    ids: tuple
    features: pd.DataFrame
    X_scaled: np.ndarray
    scaler: StandardScaler

    @property
    def feature_names(self):
        return list(self.features.columns)

    @property
    def n_observations(self):
        return len(self.ids)


def split_identifiers(df):
    if df.shape[1] < 2:
        raise ValueError("Expected an identifier column followed by at least one numeric column.")
    ids = df.iloc[:, 0].astype(str)
    features = df.iloc[:, 1:].apply(pd.to_numeric, errors="coerce")

    non_numeric = [col for i, col in enumerate(features.columns)
                   if features.iloc[:, i].isna().all() and df.iloc[:, i + 1].notna().any()]
    if non_numeric:
        raise ValueError(f"Non-numeric attribute columns: {non_numeric}")
    return ids, features


def clean_and_preprocess(df):
    ids, features = split_identifiers(df)

    complete = features.notna().all(axis=1)
    dropped = int((~complete).sum())
    if dropped:
        logger.info(f"Dropped {dropped} rows with missing values")
    ids = ids[complete].reset_index(drop=True)
    features = features[complete].reset_index(drop=True)

    if features.empty:
        raise ValueError("No complete observations left after removing rows with missing values.")
    if ids.duplicated().any():
        logger.warning(f"Duplicate identifiers: {sorted(ids[ids.duplicated()].unique())}")

    scaler = StandardScaler()
    X_scaled = scaler.fit_transform(features)
    X_scaled.setflags(write=False)

    return Dataset(ids=tuple(ids), features=features, X_scaled=X_scaled, scaler=scaler)
