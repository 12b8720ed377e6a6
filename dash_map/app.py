"""Track ray dashboard: upload lines and keywords, toggle tracks, inspect rays."""

import dash
from dash import ALL, Input, Output, State, dcc, html

from trackrays.utils.logging_utils import get_logger, setup_logger
from . import config
from .figures import create_figure
from .state import (
    apply_legend_state,
    compute_view,
    handle_keywords_upload,
    handle_lines_upload,
    registry_from_store,
)

logger = get_logger(__name__)

app = dash.Dash(__name__, suppress_callback_exceptions=True)
app.title = config.APP_TITLE


def upload_control(upload_id: str, label: str) -> html.Div:
    return html.Div([
        dcc.Upload(
            id=upload_id,
            children=html.Button("Choose file"),
            multiple=False,
            style={"display": "inline-block"},
        ),
        html.Span(label, style={"margin-left": "10px"}),
    ], style={"display": "block", "margin-bottom": "6px"})


def swatch(color: str) -> html.Td:
    return html.Td(style={"width": config.SWATCH_WIDTH_PX, "backgroundColor": color})


def legend_rows(registry_data) -> list:
    """One legend row per track: checkbox, swatch, keywords, extra input, count."""
    registry = registry_from_store(registry_data)

    rows = []
    for i, entity in enumerate(registry.entities):
        rows.append(html.Tr([
            html.Td(dcc.Checklist(
                id={"type": "track-visible", "index": i},
                options=[{"label": "", "value": "shown"}],
                value=["shown"] if entity.visible else [],
            )),
            swatch(entity.display_color),
            html.Td(entity.base_keywords),
            html.Td(dcc.Input(
                id={"type": "track-extra", "index": i},
                type="text",
                value=entity.extra_keywords,
                placeholder=config.EXTRA_KEYWORDS_PLACEHOLDER,
            )),
            html.Td(id={"type": "track-count", "index": i}),
        ]))
    return rows


app.layout = html.Div([
    # Session state
    dcc.Store(id="store-lines", data=[]),
    dcc.Store(id="store-registry", data={}),

    upload_control("upload-lines", config.LINES_UPLOAD_LABEL),
    upload_control("upload-keywords", config.KEYWORDS_UPLOAD_LABEL),
    html.Div(id="import-status", style={"color": "#555", "margin": "4px 0"}),

    dcc.Graph(
        id="track-map",
        figure=create_figure(compute_view([], {})[0]),
        config={"displayModeBar": True, "scrollZoom": True},
        style={"height": config.MAP_HEIGHT_PX},
    ),

    html.Div([
        html.Span("Clicked: "),
        html.Span(id="click-coords"),
        dcc.Clipboard(target_id="click-coords", style={"display": "inline-block", "margin-left": "6px"}),
    ], style={"margin": "6px 0"}),

    html.Table([
        html.Tbody([
            html.Tr([
                html.Td(dcc.Checklist(
                    id="show-unmatched",
                    options=[{"label": "", "value": "shown"}],
                    value=["shown"],
                )),
                swatch(config.UNMATCHED_COLOR),
                html.Td(config.UNMATCHED_NAME),
                html.Td(),
                html.Td(id="unmatched-count"),
            ]),
        ]),
        html.Tbody(id="legend-rows"),
    ]),
])


@app.callback(
    Output("store-lines", "data"),
    Output("import-status", "children"),
    Input("upload-lines", "contents"),
    State("upload-lines", "filename"),
    State("store-lines", "data"),
    prevent_initial_call=True,
)
def on_lines_upload(contents, filename, current):
    """Replace the imported lines."""
    if contents is None:
        raise dash.exceptions.PreventUpdate
    return handle_lines_upload(contents, filename, current)


@app.callback(
    Output("store-registry", "data", allow_duplicate=True),
    Output("legend-rows", "children"),
    Output("import-status", "children", allow_duplicate=True),
    Input("upload-keywords", "contents"),
    State("upload-keywords", "filename"),
    State("store-registry", "data"),
    prevent_initial_call=True,
)
def on_keywords_upload(contents, filename, current):
    """Replace the track registry and rebuild the legend rows."""
    if contents is None:
        raise dash.exceptions.PreventUpdate
    registry_data, status = handle_keywords_upload(contents, filename, current)
    return registry_data, legend_rows(registry_data), status


@app.callback(
    Output("store-registry", "data"),
    Input("show-unmatched", "value"),
    Input({"type": "track-visible", "index": ALL}, "value"),
    Input({"type": "track-extra", "index": ALL}, "value"),
    State({"type": "track-visible", "index": ALL}, "id"),
    State({"type": "track-extra", "index": ALL}, "id"),
    State("store-registry", "data"),
    prevent_initial_call=True,
)
def on_legend_change(show_unmatched, visible_values, extra_values, visible_ids, extra_ids, current):
    """Apply checkbox and extra-keyword edits to the registry."""
    return apply_legend_state(
        current,
        show_unmatched=bool(show_unmatched),
        visible=[(cid["index"], bool(value)) for cid, value in zip(visible_ids, visible_values)],
        extra_keywords=[(cid["index"], value) for cid, value in zip(extra_ids, extra_values)],
    )


@app.callback(
    Output("track-map", "figure"),
    Output({"type": "track-count", "index": ALL}, "children"),
    Output("unmatched-count", "children"),
    Input("store-lines", "data"),
    Input("store-registry", "data"),
    State({"type": "track-count", "index": ALL}, "id"),
)
def update_map(lines_data, registry_data, count_ids):
    """Recompute every ray and refresh the legend counts."""
    collection, counts = compute_view(lines_data, registry_data)
    track_counts = [counts.get(cid["index"], 0) for cid in count_ids]
    return create_figure(collection), track_counts, counts.get(-1, 0)


@app.callback(
    Output("click-coords", "children"),
    Input("track-map", "clickData"),
    prevent_initial_call=True,
)
def on_map_click(click_data):
    """Show the clicked point as "lat, lng" for the copy button."""
    if not click_data or not click_data.get("points"):
        raise dash.exceptions.PreventUpdate
    point = click_data["points"][0]
    return f"{point['lat']}, {point['lon']}"


def main():
    setup_logger()
    logger.info("=" * 60)
    logger.info(f"Starting dashboard on http://{config.APP_HOST}:{config.APP_PORT}")
    logger.info("=" * 60)

    app.run(host=config.APP_HOST, port=config.APP_PORT, debug=config.DEBUG)


if __name__ == "__main__":
    main()
