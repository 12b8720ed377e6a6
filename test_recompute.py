"""Tests for the full recompute pass."""

import math

import pytest

from trackrays.ingestion import import_from_text, load_line_features
from trackrays.schemas import UNMATCHED
from trackrays.transform import METERS_PER_MILE, project_ray, recompute


def test_barn_owl_example(owl_registry, make_line):
    collection = recompute([make_line({"name": "Barn Owl nest 3"})], owl_registry)

    assert len(collection.features) == 1
    feature = collection.features[0]
    assert feature.entity_index == 1
    assert feature.color == owl_registry.entities[1].display_color
    assert feature.label == "Barn Owl nest 3"
    expected = project_ray([[-118.0, 37.0], [-118.01, 37.01]])
    assert [c for point in feature.coordinates for c in point] == pytest.approx(
        [c for point in expected for c in point]
    )
    assert feature.origin == (-118.0, 37.0)


def test_unmatched_dropped_when_hidden(palette, make_line):
    registry = import_from_text("hawk", palette=palette).set_show_unmatched(False)
    collection = recompute([make_line({"name": "Eagle sighting"})], registry)

    assert collection.features == []
    assert collection.stats.dropped_unmatched == 1


def test_unmatched_shown_in_default_color(palette, make_line):
    registry = import_from_text("hawk", palette=palette)
    collection = recompute(
        [make_line({"name": "Eagle sighting"})], registry, unmatched_color="#000000"
    )

    assert len(collection.features) == 1
    assert collection.features[0].entity_index == UNMATCHED
    assert collection.features[0].color == "#000000"
    assert not collection.features[0].matched


def test_hidden_track_removed_regardless_of_unmatched_toggle(owl_registry, make_line):
    lines = [make_line({"name": "Barn Owl nest 3"}), make_line({"name": "hawk perch"})]

    for show_unmatched in (True, False):
        registry = owl_registry.set_visible(1, False).set_show_unmatched(show_unmatched)
        collection = recompute(lines, registry)
        assert [f.entity_index for f in collection.features] == [0]
        assert collection.stats.dropped_hidden == 1


def test_no_unmatched_output_when_toggle_off(owl_registry, make_line):
    lines = [make_line({"name": n}) for n in ("hawk", "crow", "owl", "jay")]
    collection = recompute(lines, owl_registry.set_show_unmatched(False))

    assert all(f.entity_index != UNMATCHED for f in collection.features)
    assert len(collection.features) <= len(lines)


def test_invalid_geometry_is_skipped(owl_registry, make_line):
    lines = [
        make_line({"name": "hawk"}, coordinates=[[0.0, 0.0]]),
        make_line({"name": "owl"}),
        make_line({"name": "owl"}, coordinates=[[0.0, 0.0], ["x", 1.0]]),
    ]
    collection = recompute(lines, owl_registry)

    assert [f.entity_index for f in collection.features] == [1]
    assert collection.stats.skipped_invalid == 2


def test_filtered_invalid_lines_are_not_counted_as_invalid(palette, make_line):
    registry = import_from_text("hawk", palette=palette).set_show_unmatched(False)
    collection = recompute([make_line({"name": "crow"}, coordinates=[[0.0, 0.0]])], registry)

    assert collection.stats.dropped_unmatched == 1
    assert collection.stats.skipped_invalid == 0


def test_empty_inputs(owl_registry, palette, make_line):
    assert recompute([], owl_registry).features == []

    empty = import_from_text("", palette=palette)
    collection = recompute([make_line({"name": "hawk"})], empty)
    assert [f.entity_index for f in collection.features] == [UNMATCHED]


def test_output_preserves_input_order(owl_registry, make_line):
    lines = [make_line({"name": n}) for n in ("owl 1", "hawk 2", "crow 3", "owl 4")]
    collection = recompute(lines, owl_registry)

    assert [f.label for f in collection.features] == ["owl 1", "hawk 2", "crow 3", "owl 4"]
    assert collection.stats.total == 4
    assert collection.stats.matched == 3
    assert collection.stats.unmatched == 1


def test_custom_distance(owl_registry, make_line):
    line = make_line({"name": "owl"}, coordinates=[[0.0, 0.0], [0.0, 1.0]])
    collection = recompute([line], owl_registry, distance_m=1000.0)

    forward, backward = collection.features[0].coordinates
    assert forward[1] == pytest.approx(math.degrees(1000.0 / 6371008.8))
    assert backward[1] == pytest.approx(-math.degrees(1000.0 / 6371008.8))


def test_default_distance_is_100_miles(owl_registry, make_line):
    line = make_line({"name": "owl"}, coordinates=[[0.0, 0.0], [0.0, 1.0]])
    forward, _ = recompute([line], owl_registry).features[0].coordinates

    assert forward[1] == pytest.approx(math.degrees(100 * METERS_PER_MILE / 6371008.8))


def test_geojson_render_contract(owl_registry, make_line):
    geojson = recompute([make_line({"name": "Barn Owl nest 3"})], owl_registry).to_geojson()

    assert geojson["type"] == "FeatureCollection"
    feature = geojson["features"][0]
    assert feature["geometry"]["type"] == "LineString"
    assert len(feature["geometry"]["coordinates"]) == 2
    assert feature["properties"] == {
        "entityIndex": 1,
        "color": owl_registry.entities[1].display_color,
        "label": "Barn Owl nest 3",
    }


def nested(depth):
    value = 1
    for _ in range(depth):
        value = {"a": value}
    return value


def test_unserializable_properties_skip_only_that_line(owl_registry, make_line):
    lines = [
        make_line({"name": "hawk", "deep": nested(300)}),
        make_line({"id": 2**70, "name": "hawk"}),
        make_line({"name": "owl"}),
    ]
    collection = recompute(lines, owl_registry)

    assert [f.entity_index for f in collection.features] == [1]
    assert collection.stats.skipped_invalid == 2


def test_deeply_nested_file_recomputes(owl_registry):
    deep = '{"a":' * 300 + "1" + "}" * 300
    text = (
        '{"type":"FeatureCollection","features":['
        '{"type":"Feature","geometry":{"type":"LineString",'
        '"coordinates":[[-118.0,37.0],[-118.01,37.01]]},'
        '"properties":{"name":"hawk","deep":' + deep + "}},"
        '{"type":"Feature","geometry":{"type":"LineString",'
        '"coordinates":[[-118.0,37.0],[-118.01,37.01]]},'
        '"properties":{"name":"barn owl"}}]}'
    )
    lines = load_line_features(text)
    collection = recompute(lines, owl_registry)

    assert len(lines) == 2
    assert [f.entity_index for f in collection.features] == [1]
    assert collection.stats.skipped_invalid == 1


def test_string_coordinates_are_skipped(owl_registry, make_line):
    line = make_line({"name": "owl"}, coordinates=[["-118.0", "37.0"], ["-118.01", "37.01"]])
    collection = recompute([line], owl_registry)

    assert collection.features == []
    assert collection.stats.skipped_invalid == 1
