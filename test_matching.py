"""Tests for keyword classification and label formatting."""

import pytest

from trackrays.ingestion import import_from_text
from trackrays.schemas import UNMATCHED
from trackrays.transform import (
    PropertySerializationError,
    classify,
    format_label,
    serialize_properties,
)


def test_barn_owl_matches_second_track(owl_registry):
    assert classify({"name": "Barn Owl nest 3"}, owl_registry) == 1


def test_no_keyword_hit_is_unmatched(owl_registry):
    assert classify({"name": "Eagle sighting"}, owl_registry) == UNMATCHED


def test_first_matching_track_wins(palette):
    registry = import_from_text("nest\nowl", palette=palette)
    assert classify({"name": "owl nest"}, registry) == 0

    registry = import_from_text("owl\nnest", palette=palette)
    assert classify({"name": "owl nest"}, registry) == 0


def test_matching_is_case_insensitive(palette):
    registry = import_from_text("HAWK", palette=palette)
    assert classify({"title": "red-tailed hawk"}, registry) == 0


def test_extra_keywords_participate(owl_registry):
    registry = owl_registry.set_extra_keywords(0, "eagle")
    assert classify({"name": "Eagle sighting"}, registry) == 0


def test_blank_tokens_never_match(palette):
    registry = import_from_text(" , ,", palette=palette).set_extra_keywords(0, ",,")
    assert classify({"name": "anything"}, registry) == UNMATCHED


def test_tokens_are_trimmed(palette):
    registry = import_from_text("  barn owl  ,", palette=palette)
    assert classify({"name": "Barn Owl nest 3"}, registry) == 0


def test_property_keys_are_part_of_matched_text(palette):
    registry = import_from_text("notes", palette=palette)
    assert classify({"notes": "x"}, registry) == 0


def test_missing_properties_serialize_as_null(palette):
    assert serialize_properties(None) == "null"
    registry = import_from_text("hawk", palette=palette)
    assert classify(None, registry) == UNMATCHED


def test_serialization_is_compact_lowercase_and_ordered():
    text = serialize_properties({"Name": "Café", "id": 3})
    assert text == '{"name":"café","id":3}'


def test_empty_registry_matches_nothing(palette):
    registry = import_from_text("", palette=palette)
    assert classify({"name": "hawk"}, registry) == UNMATCHED


def test_label_joins_values_in_input_order():
    assert format_label({"name": "Barn Owl nest 3"}) == "Barn Owl nest 3"
    assert format_label({"z": "last", "a": "first"}) == "last, first"


def test_label_value_formatting():
    props = {"a": None, "b": 3.0, "c": 2.5, "d": True, "e": [1, None, "x"], "f": {"k": 1}}
    assert format_label(props) == ', 3, 2.5, true, 1,,x, {"k":1}'


def test_label_for_missing_properties():
    assert format_label(None) == ""
    assert format_label({}) == ""


def test_whole_floats_serialize_like_labels(palette):
    assert serialize_properties({"nest": 3.0, "depth": 2.5}) == '{"nest":3,"depth":2.5}'
    assert format_label({"nest": 3.0}) == "3"

    registry = import_from_text("nest 3.0\nnest\":3", palette=palette)
    assert classify({"nest": 3.0}, registry) == 1


def test_large_and_non_finite_floats_serialize():
    text = serialize_properties({"big": 1e300, "nan": float("nan")})
    assert text.startswith('{"big":1')
    assert text.endswith('"nan":null}')


def test_unserializable_properties_raise(owl_registry):
    deep = 1
    for _ in range(300):
        deep = {"a": deep}

    for properties in ({"id": 2**70}, {"deep": deep}):
        with pytest.raises(PropertySerializationError):
            serialize_properties(properties)
        with pytest.raises(PropertySerializationError):
            classify(properties, owl_registry)
