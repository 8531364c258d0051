# 3. cluster.py

import logging
from dataclasses import dataclass

import gower
import numpy as np
from scipy.spatial.distance import cdist, pdist, squareform
from sklearn.cluster import AgglomerativeClustering, KMeans, SpectralClustering
from sklearn.metrics import silhouette_score

import config

logger = logging.getLogger(__name__)

N_INIT = 25
MAX_ITER = 100


@dataclass(frozen=True, eq=False)
class ClusterLabels:
    """One 1-based label vector per algorithm, all over the same rows."""

    kmeans: np.ndarray
    hierarchical: np.ndarray
    kmedoids: np.ndarray
    spectral: np.ndarray

    def __iter__(self):
        for name in config.ALGORITHMS:
            yield name, getattr(self, name)

    def as_dict(self):
        return dict(self)


def check_params(X, k, distance="euclidean", linkage="average"):
    if distance not in config.DISTANCES:
        raise ValueError(f"Unknown distance '{distance}'. Choose one of: {config.DISTANCES}")
    if linkage not in config.LINKAGES:
        raise ValueError(f"Unknown linkage '{linkage}'. Choose one of: {config.LINKAGES}")
    if k < 2:
        raise ValueError(f"Cluster count must be at least 2, got {k}")
    if k > X.shape[0]:
        raise ValueError(f"Cluster count {k} exceeds the number of observations ({X.shape[0]})")


def _kmedians(X, k, n_init=N_INIT, max_iter=MAX_ITER, random_state=config.RANDOM_STATE):
    rng = np.random.default_rng(random_state)
    best_labels, best_cost = None, np.inf
    for _ in range(n_init):
        centers = X[rng.choice(X.shape[0], size=k, replace=False)].copy()
        labels = None
        for _ in range(max_iter):
            new_labels = cdist(X, centers, metric="cityblock").argmin(axis=1)
            if labels is not None and np.array_equal(new_labels, labels):
                break
            labels = new_labels
            for c in range(k):
                members = X[labels == c]
                # empty clusters keep their previous center
                if len(members):
                    centers[c] = np.median(members, axis=0)
        cost = cdist(X, centers, metric="cityblock")[np.arange(X.shape[0]), labels].sum()
        if cost < best_cost:
            best_labels, best_cost = labels, cost
    return best_labels


def train_kmeans(X, k, distance="euclidean", random_state=config.RANDOM_STATE):
    # pearson is approximated by euclidean here
    if distance == "manhattan":
        labels = _kmedians(X, k, random_state=random_state)
    else:
        model = KMeans(n_clusters=k, n_init=N_INIT, max_iter=MAX_ITER, random_state=random_state)
        labels = model.fit_predict(X)
    return labels + 1


def train_hierarchical(X, k, distance="euclidean", linkage="average"):
    # pearson is approximated by euclidean here as well
    metric = "manhattan" if distance == "manhattan" else "euclidean"
    model = AgglomerativeClustering(n_clusters=k, metric=metric, linkage=linkage)
    return model.fit_predict(X) + 1


def gower_distances(X):
    """Gower dissimilarity for all-numeric data: range-normalized Manhattan."""
    return gower.gower_matrix(np.asarray(X, dtype=float)).astype(float)


def medoid_distances(X, distance="euclidean"):
    if distance == "pearson":
        return gower_distances(X)
    metric = "cityblock" if distance == "manhattan" else "euclidean"
    return squareform(pdist(X, metric=metric))


def _build_medoids(D, k):
    # greedy BUILD step: start from the most central point, then add whichever
    # point lowers the total distance to the nearest medoid the most
    medoids = [int(D.sum(axis=1).argmin())]
    nearest = D[:, medoids[0]].copy()
    while len(medoids) < k:
        gains = np.maximum(nearest[:, None] - D, 0).sum(axis=0)
        gains[medoids] = -1
        m = int(gains.argmax())
        medoids.append(m)
        nearest = np.minimum(nearest, D[:, m])
    return np.array(medoids)


def train_kmedoids(X, k, distance="euclidean", max_iter=MAX_ITER):
    D = medoid_distances(X, distance)
    medoids = _build_medoids(D, k)
    for _ in range(max_iter):
        labels = D[:, medoids].argmin(axis=1)
        new_medoids = medoids.copy()
        for c in range(k):
            idx = np.flatnonzero(labels == c)
            if len(idx):
                new_medoids[c] = idx[D[np.ix_(idx, idx)].sum(axis=1).argmin()]
        if np.array_equal(new_medoids, medoids):
            break
        medoids = new_medoids
    return D[:, medoids].argmin(axis=1) + 1


def train_spectral(X, k, random_state=config.RANDOM_STATE):
    model = SpectralClustering(
        n_clusters=k,
        affinity="rbf",
        gamma=1.0 / X.shape[1],
        assign_labels="kmeans",
        n_init=N_INIT,
        random_state=random_state,
    )
    return model.fit_predict(X) + 1


def silhouette(X, labels):
    n_labels = len(set(labels))
    if n_labels < 2 or n_labels > len(labels) - 1:
        return -1
    return silhouette_score(X, labels)


def run_all(X, k, distance="euclidean", linkage="average", random_state=config.RANDOM_STATE):
    """Run the four clustering algorithms on the same standardized matrix."""
    X = np.asarray(X, dtype=float)
    check_params(X, k, distance, linkage)
    logger.info(f"Clustering {X.shape[0]} observations: k={k}, distance={distance}, linkage={linkage}")

    return ClusterLabels(
        kmeans=train_kmeans(X, k, distance, random_state=random_state),
        hierarchical=train_hierarchical(X, k, distance, linkage),
        kmedoids=train_kmedoids(X, k, distance),
        spectral=train_spectral(X, k, random_state=random_state),
    )
