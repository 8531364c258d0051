# 1. load_data.py

import logging
import os

import pandas as pd

import config

logger = logging.getLogger(__name__)


def load_data(filepath):
    try:
        try:
            df = pd.read_csv(filepath)
        except UnicodeDecodeError:
            df = pd.read_csv(filepath, encoding="ISO-8859-1")
        logger.info(f"Loaded {os.path.basename(str(filepath))} with shape: {df.shape}")
        return df
    except FileNotFoundError:
        logger.error(f"File not found: {filepath}. Please check the path.")
        return None
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        logger.error(f"An error occurred while loading {filepath}: {e}")
        return None


def dataset_path(name):
    """Resolve a dataset display name (see config.DATASETS) to a file path."""
    if name not in config.DATASETS:
        raise ValueError(f"Unknown dataset '{name}'. Choose one of: {list(config.DATASETS)}")
    return os.path.join(config.DATA_DIR, config.DATASETS[name])


def available_datasets():
    return [name for name in config.DATASETS if os.path.exists(dataset_path(name))]
