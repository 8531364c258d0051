# 5. pipeline.py

import logging
from dataclasses import dataclass

import pandas as pd

import config
from cluster import ClusterLabels, run_all, silhouette
from consensus import build_consensus_matrix, filter_by_degree, reorder_consensus
from preprocess import Dataset

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ConsensusResult:
    """Everything one dashboard request computes, from labels to the heatmap matrix."""

    dataset: Dataset
    labels: ClusterLabels
    consensus: pd.DataFrame
    heatmap: pd.DataFrame
    scores: dict
    k: int
    distance: str
    linkage: str
    degree: int


def run_pipeline(dataset, k=config.DEFAULT_K, distance="euclidean", linkage="average",
                 degree=config.ALL_DEGREES, random_state=config.RANDOM_STATE):
    labels = run_all(dataset.X_scaled, k, distance, linkage, random_state=random_state)
    consensus = build_consensus_matrix(
        [vector for _, vector in labels], k=k, ids=dataset.ids)
    heatmap = reorder_consensus(filter_by_degree(consensus, degree), k, random_state=random_state)
    scores = {name: silhouette(dataset.X_scaled, vector) for name, vector in labels}

    logger.info(f"Heatmap has {heatmap.shape[0]} of {consensus.shape[0]} observations (degree={degree})")
    return ConsensusResult(
        dataset=dataset,
        labels=labels,
        consensus=consensus,
        heatmap=heatmap,
        scores=scores,
        k=k,
        distance=distance,
        linkage=linkage,
        degree=degree,
    )


def labels_frame(result, include_ids=True):
    frame = pd.DataFrame(result.labels.as_dict())
    if include_ids:
        frame.insert(0, "id", list(result.dataset.ids))
    return frame
