"""
Tests for GeoJSON parsing, ring extraction and feature selection.
"""

import json
import logging

import pytest

from gerryaway.exceptions import (
    GeoJSONError,
    GeoJSONParseError,
    UnsupportedGeometryError,
)
from gerryaway.geojson import (
    Feature,
    FeatureCollection,
    Geometry,
    district_id,
    exterior_ring,
    feature_matches,
    load_feature_collection,
    parse_feature_collection,
)


class TestParsing:
    """Test FeatureCollection parsing."""

    @pytest.mark.unit
    def test_parse_collection(self, district_collection) -> None:
        collection = parse_feature_collection(district_collection)

        assert isinstance(collection, FeatureCollection)
        assert len(collection.features) == 5
        assert collection.features[0].properties["OFFICE_ID"] == "TX-03"
        assert collection.features[0].geometry.type == "Polygon"

    @pytest.mark.unit
    def test_unknown_members_ignored(self) -> None:
        collection = parse_feature_collection(
            {
                "type": "FeatureCollection",
                "crs": {"type": "name"},
                "bbox": [0, 0, 1, 1],
                "features": [],
            }
        )
        assert collection.features == []

    @pytest.mark.unit
    def test_wrong_type_raises(self) -> None:
        with pytest.raises(GeoJSONParseError):
            parse_feature_collection({"type": "Feature", "geometry": None})

    @pytest.mark.unit
    def test_feature_without_geometry(self) -> None:
        collection = parse_feature_collection(
            {
                "type": "FeatureCollection",
                "features": [{"type": "Feature", "properties": None}],
            }
        )
        assert collection.features[0].geometry is None
        assert collection.features[0].properties is None

    @pytest.mark.unit
    def test_load_from_file(self, district_file) -> None:
        collection = load_feature_collection(district_file)
        assert len(collection.features) == 5

    @pytest.mark.unit
    def test_load_accepts_str_path(self, district_file) -> None:
        collection = load_feature_collection(str(district_file))
        assert len(collection.features) == 5

    @pytest.mark.unit
    def test_load_invalid_json(self, tmp_path) -> None:
        path = tmp_path / "broken.geojson"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(GeoJSONParseError) as exc_info:
            load_feature_collection(path)
        assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)

    @pytest.mark.unit
    def test_load_missing_file(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            load_feature_collection(tmp_path / "missing.geojson")


class TestExteriorRing:
    """Test Polygon ring extraction."""

    @pytest.mark.unit
    def test_closing_point_removed(self) -> None:
        geometry = Geometry(
            type="Polygon",
            coordinates=[[[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]]],
        )
        assert exterior_ring(geometry) == [
            (0.0, 0.0),
            (1.0, 0.0),
            (1.0, 1.0),
            (0.0, 1.0),
        ]

    @pytest.mark.unit
    def test_altitude_ignored_and_short_positions_dropped(self) -> None:
        geometry = Geometry(
            type="Polygon",
            coordinates=[[[0, 0, 12.5], [3], [2, 0, 7], [2, 2]]],
        )
        assert exterior_ring(geometry) == [(0.0, 0.0), (2.0, 0.0), (2.0, 2.0)]

    @pytest.mark.unit
    def test_holes_not_read(self) -> None:
        geometry = Geometry(
            type="Polygon",
            coordinates=[
                [[0, 0], [10, 0], [10, 10], [0, 10], [0, 0]],
                [[4, 4], [6, 4], [6, 6], [4, 6], [4, 4]],
            ],
        )
        assert len(exterior_ring(geometry)) == 4

    @pytest.mark.unit
    def test_empty_coordinates(self) -> None:
        assert exterior_ring(Geometry(type="Polygon", coordinates=[])) == []

    @pytest.mark.unit
    def test_multipolygon_unsupported(self) -> None:
        geometry = Geometry(
            type="MultiPolygon",
            coordinates=[[[[0, 0], [1, 0], [1, 1], [0, 0]]]],
        )
        with pytest.raises(UnsupportedGeometryError):
            exterior_ring(geometry)

    @pytest.mark.unit
    def test_malformed_coordinates(self) -> None:
        geometry = Geometry(type="Polygon", coordinates=[[["x", "y"]]])
        with pytest.raises(GeoJSONParseError):
            exterior_ring(geometry)

    @pytest.mark.unit
    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_coordinates(self, bad) -> None:
        geometry = Geometry(
            type="Polygon",
            coordinates=[[[0, 0], [1, bad], [1, 1], [0, 0]]],
        )
        with pytest.raises(GeoJSONParseError):
            exterior_ring(geometry)

    @pytest.mark.unit
    def test_non_finite_json_rejected(self, tmp_path) -> None:
        path = tmp_path / "infinite.geojson"
        path.write_text(
            '{"type": "FeatureCollection", "features": [{"type": "Feature",'
            ' "properties": {}, "geometry": {"type": "Polygon",'
            ' "coordinates": [[[0, 0], [Infinity, 0], [1, 1]]]}}]}',
            encoding="utf-8",
        )
        collection = load_feature_collection(path)
        with pytest.raises(GeoJSONParseError):
            exterior_ring(collection.features[0].geometry)

    @pytest.mark.unit
    def test_errors_share_base_class(self) -> None:
        with pytest.raises(GeoJSONError):
            exterior_ring(Geometry(type="Point", coordinates=[0, 0]))


class TestSelection:
    """Test property filtering and district naming."""

    @pytest.mark.unit
    def test_select_by_property(self, district_collection) -> None:
        collection = parse_feature_collection(district_collection)
        selected = [
            f for f in collection.features if feature_matches(f, "STATE", "TX")
        ]

        assert [f.properties["OFFICE_ID"] for f in selected] == [
            "TX-03",
            "TX-01",
            "TX-02",
            "TX-04",
        ]

    @pytest.mark.unit
    def test_select_missing_property(self, district_collection) -> None:
        collection = parse_feature_collection(district_collection)
        assert not any(
            feature_matches(f, "COUNTY", "TX") for f in collection.features
        )

    @pytest.mark.unit
    def test_select_requires_equal_type(self) -> None:
        """A numeric property does not match its string form."""
        feature = Feature(properties={"DISTRICT": 5})
        assert not feature_matches(feature, "DISTRICT", "5")
        assert feature_matches(feature, "DISTRICT", 5)

    @pytest.mark.unit
    def test_feature_without_properties_never_matches(self) -> None:
        assert not feature_matches(Feature(), "STATE", "TX")

    @pytest.mark.unit
    def test_district_id_from_property(self) -> None:
        feature = Feature(properties={"OFFICE_ID": 12}, id="ignored")
        assert district_id(feature, "OFFICE_ID", 0) == "12"

    @pytest.mark.unit
    def test_district_id_falls_back_to_feature_id(self) -> None:
        feature = Feature(properties={"NAME": "North"}, id=7)
        assert district_id(feature, "OFFICE_ID", 0) == "7"

    @pytest.mark.unit
    def test_district_id_falls_back_to_index(self, caplog) -> None:
        feature = Feature(properties={})
        with caplog.at_level(logging.WARNING, logger="gerryaway.geojson"):
            assert district_id(feature, "OFFICE_ID", 3) == "feature-3"
        assert "using its index" in caplog.text
