# 10. prepare_data.py
# Builds the bundled datasets from the raw Spotify top-100 and credit card downloads.

import argparse
import logging
import os

import pandas as pd

import config
from load_data import load_data

logger = logging.getLogger(__name__)

AUDIO_FEATURES = ['energy', 'liveliness', 'tempo', 'speechiness', 'acousticness',
                  'instrumentalness', 'duration', 'loudness', 'valence', 'danceability']


def prepare_spotify(music):
    missing = [col for col in ['name'] + AUDIO_FEATURES if col not in music.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")

    table = music[['name'] + AUDIO_FEATURES].copy()
    table['speechiness'] = pd.to_numeric(table['speechiness'], errors='coerce')
    table['instrumentalness'] = pd.to_numeric(table['instrumentalness'], errors='coerce')
    return table.dropna().reset_index(drop=True)


def top_n(table, n):
    return table.head(n).reset_index(drop=True)


def stratified_sample(df, group, size=10, random_state=config.RANDOM_STATE):
    """Sample ``size`` rows per value of ``group`` (all rows of smaller groups), then drop ``group``."""
    complete = df.dropna()
    parts = [g.sample(n=min(size, len(g)), random_state=random_state) for _, g in complete.groupby(group)]
    sampled = pd.concat(parts)
    return sampled.drop(columns=[group]).reset_index(drop=True)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Prepare the bundled clustering datasets.")
    parser.add_argument("--spotify", default="top100.csv", help="Raw Spotify top-100 CSV.")
    parser.add_argument("--credit-cards", default="Credit_Cards_All.csv", help="Raw credit card CSV.")
    parser.add_argument("--out-dir", default=config.DATA_DIR)
    args = parser.parse_args(argv)
    config.configure_logging()
    os.makedirs(args.out_dir, exist_ok=True)

    music = load_data(args.spotify)
    if music is not None:
        spotify = prepare_spotify(music)
        top_n(spotify, 100).to_csv(os.path.join(args.out_dir, config.DATASETS["Top 100 Spotify"]), index=False)
        top_n(spotify, 50).to_csv(os.path.join(args.out_dir, config.DATASETS["Top 50 Spotify"]), index=False)
        logger.info(f"Spotify datasets written to: {args.out_dir}")

    cards = load_data(args.credit_cards)
    if cards is not None:
        sample = stratified_sample(cards, 'TENURE', size=10)
        sample.to_csv(os.path.join(args.out_dir, config.DATASETS["Credit Cards"]), index=False)
        logger.info(f"Credit card sample ({len(sample)} rows) written to: {args.out_dir}")


if __name__ == "__main__":
    main()
