# 7. visualize.py

import logging

import matplotlib.pyplot as plt
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import seaborn as sns
from sklearn.decomposition import PCA

import config

logger = logging.getLogger(__name__)

MAX_DEGREE = len(config.ALGORITHMS)


def pca_components(X_scaled, n_components=4):
    n_components = min(n_components, X_scaled.shape[1], X_scaled.shape[0])
    pca = PCA(n_components=n_components)
    components = pca.fit_transform(X_scaled)
    return pd.DataFrame(components, columns=[f"PC{i + 1}" for i in range(n_components)])


def empty_figure(message):
    fig = go.Figure()
    fig.add_annotation(text=message, showarrow=False, xref="paper", yref="paper", x=0.5, y=0.5)
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    return fig


def heatmap_figure(matrix, title="Consensus Matrix"):
    if matrix.empty:
        return empty_figure("No observation pairs match the selected degree")
    labels = [str(label) for label in matrix.index]
    return px.imshow(
        matrix.to_numpy(),
        x=labels,
        y=labels,
        zmin=0,
        zmax=MAX_DEGREE,
        color_continuous_scale="Blues",
        labels={"color": "Agreeing algorithms"},
        title=title,
    )


def scatter_matrix_figure(X_scaled, labels, title="Clusters", ids=None):
    df_plot = pca_components(X_scaled)
    dimensions = list(df_plot.columns)
    df_plot["Cluster"] = pd.Series(labels).astype(str)
    if ids is not None:
        df_plot["id"] = list(ids)
    fig = px.scatter_matrix(
        df_plot,
        dimensions=dimensions,
        color="Cluster",
        hover_name="id" if ids is not None else None,
        title=title,
    )
    fig.update_traces(diagonal_visible=False)
    return fig


def plot_clusters(X_scaled, labels, title="Clusters", save_path=None):
    """
    Plot clusters using PCA-reduced 2D representation.

    Parameters:
        X_scaled (np.ndarray): Scaled feature array.
        labels (list or np.ndarray): Cluster labels.
        title (str): Plot title.
        save_path (str): Optional path to save the plot. If None, displays the plot.
    """
    df_plot = pca_components(X_scaled, n_components=2)
    if df_plot.shape[1] < 2:
        df_plot["PC2"] = 0.0
    df_plot["Cluster"] = pd.Series(labels).astype(str)

    fig = plt.figure(figsize=(8, 6))
    sns.scatterplot(x="PC1", y="PC2", hue="Cluster", data=df_plot, palette="Set2", s=50)
    plt.title(title)
    plt.xlabel("Principal Component 1")
    plt.ylabel("Principal Component 2")
    plt.tight_layout()
    _finish(fig, save_path)


def plot_consensus_heatmap(matrix, title="Consensus Matrix", save_path=None):
    fig = plt.figure(figsize=(9, 8))
    if matrix.empty:
        plt.text(0.5, 0.5, "No observation pairs match the selected degree", ha="center", va="center")
        plt.axis("off")
    else:
        sns.heatmap(matrix, vmin=0, vmax=MAX_DEGREE, cmap="Blues", square=True)
    plt.title(title)
    plt.tight_layout()
    _finish(fig, save_path)


def _finish(fig, save_path):
    if save_path:
        fig.savefig(save_path, dpi=300)
        plt.close(fig)
        logger.info(f"Plot saved to: {save_path}")
    else:
        plt.show()
