"""Plotly map figure for projected track rays."""

from collections import OrderedDict
from typing import Dict, Optional

import plotly.graph_objs as go

from trackrays.schemas.features import ProjectedCollection
from . import config


def create_figure(
    collection: ProjectedCollection,
    center: Optional[Dict[str, float]] = None,
    zoom: Optional[float] = None,
) -> go.Figure:
    """Create the map figure: one line trace per color plus a label trace.

    Rays sharing a color are drawn in a single trace, separated by None
    gaps. Labels sit on each ray's origin (the first point of the source
    line).
    """
    fig = go.Figure()

    groups: "OrderedDict[str, Dict[str, list]]" = OrderedDict()
    for feature in collection.features:
        group = groups.setdefault(feature.color, {"lon": [], "lat": [], "text": []})
        (fwd_lon, fwd_lat), (back_lon, back_lat) = feature.coordinates
        group["lon"].extend([fwd_lon, back_lon, None])
        group["lat"].extend([fwd_lat, back_lat, None])
        group["text"].extend([feature.label, feature.label, None])

    for color, group in groups.items():
        fig.add_trace(go.Scattermap(
            lon=group["lon"],
            lat=group["lat"],
            mode="lines",
            line=dict(width=config.LINE_WIDTH, color=color),
            text=group["text"],
            hoverinfo="text",
            showlegend=False,
            name=color,
        ))

    if collection.features:
        fig.add_trace(go.Scattermap(
            lon=[f.origin[0] for f in collection.features],
            lat=[f.origin[1] for f in collection.features],
            mode="markers+text",
            marker=dict(size=4, color=[f.color for f in collection.features]),
            text=[f.label for f in collection.features],
            textposition="bottom center",
            textfont=dict(size=config.LABEL_SIZE),
            hoverinfo="text",
            showlegend=False,
            name="labels",
        ))

    fig.update_layout(
        map=dict(
            style=config.MAP_STYLE,
            center=center or config.MAP_CENTER,
            zoom=config.MAP_ZOOM if zoom is None else zoom,
        ),
        margin=dict(l=0, r=0, t=0, b=0),
        height=config.MAP_HEIGHT_PX,
        uirevision="constant",  # Preserve zoom/pan state across recomputes
    )

    return fig
