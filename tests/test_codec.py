from __future__ import annotations

import json

import pytest

from conftest import RATINGS, VIEWING
from flixmigrate.netflix.codec import build_bundle, decode_bundle, encode_bundle
from flixmigrate.netflix.errors import InvalidBundleSchema

# figé volontairement : un changement de sérialisation doit casser ce test
RATINGS_JSON = (
    '[{"ratingType":"star","title":"Some movie","movieID":12345678,"yourRating":5,"intRating":50,'
    '"date":"01/02/2016","timestamp":1234567890123,"comparableDate":1234567890},'
    '{"ratingType":"thumb","title":"Amazing Show","movieID":87654321,"yourRating":2,'
    '"date":"02/02/2018","timestamp":2234567890123,"comparableDate":2234567890}]'
)


def test_round_trip_with_indent() -> None:
    bundle = build_bundle("1.2.3", RATINGS, VIEWING)

    text = encode_bundle(bundle, 4)

    assert decode_bundle(text) == bundle
    assert '\n    "version": "1.2.3"' in text


def test_compact_encoding() -> None:
    bundle = build_bundle("1.0.0", RATINGS, [])

    text = encode_bundle(bundle)

    assert text == '{"version":"1.0.0","ratingHistory":' + RATINGS_JSON + ',"viewingHistory":[]}'
    assert encode_bundle(bundle, 0) == text


def test_passthrough_fields_survive() -> None:
    rating = {"ratingType": "star", "movieID": 1, "yourRating": 5, "custom": {"nested": [1, 2]}, "é": "ü"}
    bundle = build_bundle("2.0.0-beta.1", [rating], [{"anything": None}])

    assert decode_bundle(encode_bundle(bundle, 2)) == bundle


def test_legacy_array() -> None:
    bundle = decode_bundle('[{"movieID": 1, "yourRating": 5, "ratingType": "star"}]')

    assert bundle == {
        "version": None,
        "ratingHistory": [{"movieID": 1, "yourRating": 5, "ratingType": "star"}],
        "viewingHistory": None,
    }


def test_legacy_export_of_ratings_only() -> None:
    assert decode_bundle(RATINGS_JSON)["ratingHistory"] == RATINGS


@pytest.mark.parametrize(
    ("payload", "field"),
    [
        ({"ratingHistory": 1, "version": "1.2.3", "viewingHistory": []}, "ratingHistory"),
        ({"ratingHistory": [], "version": "1.2.3", "viewingHistory": {}}, "viewingHistory"),
        ({"version": "1.2.3", "viewingHistory": []}, "ratingHistory"),
        ({"ratingHistory": [], "version": "1.2.3"}, "viewingHistory"),
        ({"ratingHistory": [], "viewingHistory": []}, "version"),
        ({"ratingHistory": [], "version": None, "viewingHistory": []}, "version"),
        ({"ratingHistory": [], "version": "1.2.3.4", "viewingHistory": []}, "version"),
        ({"ratingHistory": [], "version": "1.2", "viewingHistory": []}, "version"),
        ({"ratingHistory": [], "version": "1.2.3-rc.1", "viewingHistory": []}, "version"),
        ({"ratingHistory": [], "version": 123, "viewingHistory": []}, "version"),
    ],
)
def test_invalid_objects_are_rejected(payload, field) -> None:
    with pytest.raises(InvalidBundleSchema) as excinfo:
        decode_bundle(json.dumps(payload))

    assert excinfo.value.field == field


@pytest.mark.parametrize("version", ["0.0.1", "1.2.3", "10.20.30", "1.0.0-alpha.1", "2.1.0-beta.12"])
def test_valid_versions(version) -> None:
    assert decode_bundle(json.dumps(build_bundle(version, [], [])))["version"] == version


@pytest.mark.parametrize("raw", ['"ratings"', "42", "null", "true"])
def test_scalars_are_rejected(raw) -> None:
    with pytest.raises(InvalidBundleSchema):
        decode_bundle(raw)


def test_broken_json() -> None:
    with pytest.raises(InvalidBundleSchema) as excinfo:
        decode_bundle("[{")

    assert isinstance(excinfo.value.__cause__, json.JSONDecodeError)


@pytest.mark.parametrize("indent", [-1, -4])
def test_negative_indent_is_compact(indent) -> None:
    bundle = build_bundle("1.0.0", RATINGS, [])

    assert encode_bundle(bundle, indent) == encode_bundle(bundle)


def test_undecodable_bytes() -> None:
    with pytest.raises(InvalidBundleSchema) as excinfo:
        decode_bundle(b"\xff[1]")

    assert excinfo.value.field == "<root>"
    assert isinstance(excinfo.value.__cause__, UnicodeDecodeError)


def test_leading_bom_is_ignored() -> None:
    assert decode_bundle("\ufeff[]")["ratingHistory"] == []
