# 4. consensus.py

import logging

import numpy as np
import pandas as pd
from sklearn.cluster import SpectralClustering

import config

logger = logging.getLogger(__name__)


def build_consensus_matrix(label_vectors, k=None, ids=None):
    """
    Count, for every pair of observations, how many clusterings grouped them together.

    Parameters:
        label_vectors (iterable of array-like): One label vector per algorithm, all of length N.
        k (int): Optional cluster count. When given, every label must lie in 1..k.
        ids (sequence): Optional observation identifiers used as row/column labels.
            Defaults to 1..N.

    Returns:
        pd.DataFrame: N x N symmetric integer matrix with a zero diagonal. Entry (i, j)
        is the number of label vectors with label[i] == label[j].
    """
    vectors = [np.asarray(labels) for labels in label_vectors]
    lengths = {len(labels) for labels in vectors}
    if len(lengths) > 1:
        raise ValueError(f"Label vectors have different lengths: {sorted(lengths)}")
    n = lengths.pop() if lengths else 0

    if ids is None:
        ids = range(1, n + 1)
    ids = list(ids)
    if len(ids) != n:
        raise ValueError(f"Got {len(ids)} identifiers for {n} observations")

    matrix = np.zeros((n, n), dtype=int)
    for labels in vectors:
        if k is not None and n and (labels.min() < 1 or labels.max() > k):
            raise ValueError(f"Labels must lie in 1..{k}, got range {labels.min()}..{labels.max()}")
        for cluster_id in np.unique(labels):
            members = np.flatnonzero(labels == cluster_id)
            # singletons have no pairs
            if len(members) > 1:
                matrix[np.ix_(members, members)] += 1
    # a pair needs two distinct observations
    np.fill_diagonal(matrix, 0)

    return pd.DataFrame(matrix, index=ids, columns=ids)


def filter_by_degree(matrix, degree=config.ALL_DEGREES):
    """
    Keep only the observation pairs that exactly ``degree`` algorithms agree on.

    ``degree == 5`` returns ``matrix`` itself. Otherwise a new matrix is built over
    every observation touching at least one qualifying pair, in their original
    order, holding ``degree`` for those pairs and 0 elsewhere. When nothing
    qualifies the result has zero rows.
    """
    if degree not in config.DEGREES:
        raise ValueError(f"Degree must be one of {config.DEGREES}, got {degree}")
    if degree == config.ALL_DEGREES:
        return matrix

    values = matrix.to_numpy()
    rows, cols = np.nonzero(values == degree)
    keep = np.union1d(rows, cols)
    if not len(keep):
        logger.info(f"No observation pairs with degree {degree}")

    position = {old: new for new, old in enumerate(keep)}
    filtered = np.zeros((len(keep), len(keep)), dtype=values.dtype)
    for i, j in zip(rows, cols):
        filtered[position[i], position[j]] = degree
        filtered[position[j], position[i]] = degree

    labels = matrix.index[keep]
    return pd.DataFrame(filtered, index=labels, columns=labels)


def reorder_consensus(matrix, k, random_state=config.RANDOM_STATE):
    """
    Permute rows and columns so observations in the same spectral cluster are adjacent.

    The matrix itself is the affinity. Observations are stable-sorted by their
    spectral label, so ties keep their current order. Only the order changes.
    """
    n = matrix.shape[0]
    k = min(k, n)
    if n < 2 or k < 2 or not (matrix.to_numpy() > 0).any():
        return matrix.copy()

    model = SpectralClustering(
        n_clusters=k,
        affinity="precomputed",
        assign_labels="kmeans",
        random_state=random_state,
    )
    labels = model.fit_predict(matrix.to_numpy().astype(float))
    order = np.argsort(labels, kind="stable")
    return matrix.iloc[order, order]
