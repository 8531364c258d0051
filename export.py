# 6. export.py

import logging

from pipeline import labels_frame

logger = logging.getLogger(__name__)


def export_labels(result, output_path="cluster_labels.csv", include_ids=True):
    """
    Write each algorithm's cluster assignments to CSV, one row per observation.

    Parameters:
        result (ConsensusResult): Output of pipeline.run_pipeline.
        output_path (str): Destination file. Default is 'cluster_labels.csv'.
        include_ids (bool): Prepend the observation identifier column.

    Returns:
        pd.DataFrame: The table that was written.
    """
    frame = labels_frame(result, include_ids=include_ids)
    try:
        frame.to_csv(output_path, index=False)
    except OSError as e:
        logger.error(f"Could not write cluster labels to {output_path}: {e}")
        raise
    logger.info(f"Cluster labels saved to: {output_path}")
    return frame
