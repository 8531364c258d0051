# 8. dash_app.py
import functools
import logging

import dash
from dash import Dash, Input, Output, State, dcc, html

import config
from load_data import available_datasets, dataset_path, load_data
from pipeline import labels_frame, run_pipeline
from preprocess import clean_and_preprocess
from visualize import empty_figure, heatmap_figure, scatter_matrix_figure

logger = logging.getLogger(__name__)

app = Dash(__name__, external_stylesheets=["https://cdn.jsdelivr.net/npm/bootstrap@5.1.3/dist/css/bootstrap.min.css"])
app.title = 'Consensus Clustering Explorer'

server = app.server


@functools.lru_cache(maxsize=8)
def load_dataset(name):
    df = load_data(dataset_path(name))
    if df is None:
        raise ValueError(f"Dataset '{name}' could not be loaded")
    return clean_and_preprocess(df)


def compute(dataset_name, k, distance, linkage, degree):
    return run_pipeline(load_dataset(dataset_name), int(k), distance, linkage, int(degree))


def get_chart_figure(result, chart_type):
    if chart_type == 'heatmap':
        return heatmap_figure(
            result.heatmap,
            title=f"Consensus Matrix (k={result.k}, degree={'all' if result.degree == config.ALL_DEGREES else result.degree})")
    if chart_type in config.ALGORITHMS:
        return scatter_matrix_figure(
            result.dataset.X_scaled,
            getattr(result.labels, chart_type),
            title=f"{config.ALGORITHM_TITLES[chart_type]} Clusters on Top Principal Components",
            ids=result.dataset.ids)
    return {}


def format_scores(result):
    parts = [f"{config.ALGORITHM_TITLES[name]}: {score:.2f}" for name, score in result.scores.items()]
    return f"{result.dataset.n_observations} observations | Silhouette Scores: " + " | ".join(parts)


def _dropdown(id_, options, value):
    return dcc.Dropdown(id=id_, options=options, value=value, clearable=False)


datasets = available_datasets() or list(config.DATASETS)

app.layout = html.Div([
    dcc.Download(id="download-labels"),

    html.Div([
        html.H1("Consensus Clustering Explorer", className="text-center text-primary mb-4"),

        html.H3("1. Choose Data and Parameters", className="text-secondary"),
        html.Div([
            html.Label("Dataset"),
            _dropdown('dataset-dropdown', datasets,
                      config.DEFAULT_DATASET if config.DEFAULT_DATASET in datasets else datasets[0]),
            html.Label("Number of Clusters (k)", className="mt-2"),
            dcc.Slider(id='k-slider', min=config.K_MIN, max=config.K_MAX, step=1, value=config.DEFAULT_K,
                       marks={k: str(k) for k in range(config.K_MIN, config.K_MAX + 1, 2)}),
            html.Label("Distance", className="mt-2"),
            _dropdown('distance-dropdown', [{'label': d.title(), 'value': d} for d in config.DISTANCES], 'euclidean'),
            html.Label("Linkage (Hierarchical only)", className="mt-2"),
            _dropdown('linkage-dropdown', [{'label': l.title(), 'value': l} for l in config.LINKAGES], 'average'),
            html.Label("Heatmap Degree", className="mt-2"),
            _dropdown('degree-dropdown',
                      [{'label': 'All' if d == config.ALL_DEGREES else str(d), 'value': d} for d in config.DEGREES],
                      config.ALL_DEGREES),
        ], className="mb-4"),

        html.Div(id='model-metrics', className="text-muted mb-2"),

        html.H3("2. Visualizations", className="text-secondary"),
        dcc.Tabs(id='charts-tabs', value='heatmap', children=[
            dcc.Tab(label='Consensus Heatmap', value='heatmap'),
        ] + [dcc.Tab(label=config.ALGORITHM_TITLES[name], value=name) for name in config.ALGORITHMS]),
        dcc.Graph(id='cluster-plot', style={'height': '80vh'}),

        html.H3("3. Export Cluster Labels", className="text-secondary mt-4"),
        html.Div([
            dcc.Input(id='export-filename', type='text', value='cluster_labels.csv', className="form-control"),
            html.Button('Download Labels CSV', id='download-labels-btn', className="btn btn-outline-success mt-2"),
            html.Div(id='download-message', className="text-muted mt-1"),
        ], className="mb-5"),
    ], className="container")
])


@app.callback(
    Output('cluster-plot', 'figure'),
    Output('model-metrics', 'children'),
    Input('dataset-dropdown', 'value'),
    Input('k-slider', 'value'),
    Input('distance-dropdown', 'value'),
    Input('linkage-dropdown', 'value'),
    Input('degree-dropdown', 'value'),
    Input('charts-tabs', 'value'),
)
def update_chart(dataset_name, k, distance, linkage, degree, chart_type):
    try:
        result = compute(dataset_name, k, distance, linkage, degree)
    except ValueError as e:
        logger.error(f"Computation failed: {e}")
        return empty_figure(str(e)), f"Computation error: {e}"
    return get_chart_figure(result, chart_type), format_scores(result)


@app.callback(
    Output("download-labels", "data"),
    Output("download-message", "children"),
    Input("download-labels-btn", "n_clicks"),
    State('export-filename', 'value'),
    State('dataset-dropdown', 'value'),
    State('k-slider', 'value'),
    State('distance-dropdown', 'value'),
    State('linkage-dropdown', 'value'),
    prevent_initial_call=True
)
def trigger_csv_download(n_clicks, filename, dataset_name, k, distance, linkage):
    if not filename:
        return dash.no_update, "Please enter a file name."
    try:
        result = compute(dataset_name, k, distance, linkage, config.ALL_DEGREES)
    except ValueError as e:
        logger.error(f"Export failed: {e}")
        return dash.no_update, f"Export error: {e}"
    frame = labels_frame(result)
    return dcc.send_data_frame(frame.to_csv, filename, index=False), f"Exported {len(frame)} rows to '{filename}'"


def main():
    config.configure_logging()
    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)


# Run Server: Render
if __name__ == "__main__":
    main()
