"""Tests for GeoJSON line import."""

import orjson
import pytest

from trackrays.exceptions import GeoJSONImportError
from trackrays.ingestion import load_line_features, parse_line_features


def feature(geometry_type="LineString", coordinates=None, properties=None):
    return {
        "type": "Feature",
        "geometry": {
            "type": geometry_type,
            "coordinates": coordinates if coordinates is not None else [[0, 0], [1, 1]],
        },
        "properties": properties,
    }


def test_loads_line_strings_in_order():
    text = orjson.dumps({
        "type": "FeatureCollection",
        "features": [
            feature(properties={"name": "first"}),
            feature(properties={"name": "second"}),
        ],
    })
    lines = load_line_features(text)

    assert [line.properties["name"] for line in lines] == ["first", "second"]
    assert lines[0].coordinates == [[0, 0], [1, 1]]


def test_property_key_order_is_preserved():
    text = '{"type":"FeatureCollection","features":[{"type":"Feature",' \
        '"geometry":{"type":"LineString","coordinates":[[0,0],[1,1]]},' \
        '"properties":{"zeta":"1","alpha":"2","mid":"3"}}]}'
    lines = load_line_features(text)

    assert list(lines[0].properties) == ["zeta", "alpha", "mid"]


def test_non_line_features_are_skipped():
    data = {
        "type": "FeatureCollection",
        "features": [
            feature("Point", coordinates=[0, 0]),
            {"type": "Feature", "geometry": None, "properties": {}},
            feature(properties={"name": "kept"}),
        ],
    }
    lines = parse_line_features(data)

    assert len(lines) == 1
    assert lines[0].properties == {"name": "kept"}


def test_single_feature_is_accepted():
    lines = parse_line_features(feature(properties={"name": "solo"}))
    assert len(lines) == 1


def test_degenerate_coordinates_are_kept_for_recompute():
    lines = parse_line_features({
        "type": "FeatureCollection",
        "features": [feature(coordinates=[[0, 0]]), feature(coordinates="bad")],
    })

    assert [line.coordinates for line in lines] == [[[0, 0]], []]


def test_null_properties():
    lines = parse_line_features({"type": "FeatureCollection", "features": [feature()]})
    assert lines[0].properties is None


def test_empty_collection():
    assert load_line_features('{"type":"FeatureCollection","features":[]}') == []


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        "[1, 2, 3]",
        '{"type": "Topology"}',
        '{"type": "FeatureCollection"}',
    ],
)
def test_unreadable_input_raises(text):
    with pytest.raises(GeoJSONImportError):
        load_line_features(text)
