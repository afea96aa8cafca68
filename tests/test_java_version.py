"""Tests for Java version parsing, translation and ordering."""

import json

import pytest

from javameta.common.errors import VersionFormatError
from javameta.model.java import JavaVersion, MajorVersionRule


class TestJavaVersionParsing:
    """Both Java version notations parse into one comparable shape."""

    def test_legacy_version(self):
        """Pre-9 versions translate to {major}.{minor}.{patch}+{build}."""
        v = JavaVersion.parse("1.8.0_152-b16")
        assert (v.major, v.minor, v.patch, v.build) == (8, 0, 152, 16)
        assert v.legacy is True
        assert v.to_semver_string() == "8.0.152+16"

    def test_legacy_version_round_trip(self):
        """Formatting a legacy version gives back the original string."""
        assert str(JavaVersion.parse("1.8.0_152-b16")) == "1.8.0_152-b16"
        assert JavaVersion.parse("1.8.0_152-b16").to_legacy_string() == "1.8.0_152-b16"
        assert str(JavaVersion.parse("1.7.0_80")) == "1.7.0_80"

    def test_modern_version_is_canonical(self):
        """JDK 9+ versions are already semver and map to themselves."""
        v = JavaVersion.parse("11.0.12+7")
        assert (v.major, v.minor, v.patch, v.build) == (11, 0, 12, 7)
        assert v.legacy is False
        assert str(v) == "11.0.12+7"
        assert v.to_semver_string() == "11.0.12+7"

    def test_partial_modern_version(self):
        """Minor, patch and build may be omitted in the JDK 9+ notation."""
        v = JavaVersion.parse("17")
        assert v.to_tuple() == (17, 0, 0, 0)
        assert v.to_semver_string() == "17.0.0"

    @pytest.mark.parametrize("value", ["17", "17.0", "21+35", "17.0.1", "1.8", "1.8.0", "1.8.0_152"])
    def test_partial_version_round_trip(self, value):
        """Short forms format back exactly as written."""
        assert str(JavaVersion.parse(value)) == value

    def test_partial_legacy_translation(self):
        """A short legacy version still translates to full semver."""
        assert JavaVersion.parse("1.8").to_semver_string() == "8.0.0"
        assert JavaVersion.parse("1.8").minor is None

    @pytest.mark.parametrize("value", ["", "abc", "1.8.0_x", "17.0.1-ea", "v17", "17..1"])
    def test_unparseable_version(self, value):
        """Strings matching neither notation raise VersionFormatError."""
        with pytest.raises(VersionFormatError):
            JavaVersion.parse(value)

    def test_error_keeps_value(self):
        """The offending string is available on the error."""
        with pytest.raises(VersionFormatError) as exc:
            JavaVersion.parse("seventeen")
        assert exc.value.value == "seventeen"


class TestJavaVersionOrdering:
    """Versions of either notation are totally ordered once translated."""

    def test_legacy_equals_translation(self):
        """A legacy version equals its translated form."""
        assert JavaVersion.parse("1.8.0_152-b16") == JavaVersion.parse("8.0.152+16")
        assert hash(JavaVersion.parse("1.8.0_152-b16")) == hash(JavaVersion.parse("8.0.152+16"))

    def test_ordering_across_notations(self):
        """Legacy and modern versions sort together."""
        versions = [
            JavaVersion.parse(v)
            for v in ["17.0.1+12", "1.8.0_152-b16", "11.0.12+7", "1.8.0_51-b16", "11.0.12+9"]
        ]
        assert [str(v) for v in sorted(versions)] == [
            "1.8.0_51-b16",
            "1.8.0_152-b16",
            "11.0.12+7",
            "11.0.12+9",
            "17.0.1+12",
        ]

    def test_missing_build_sorts_as_zero(self):
        """A version without a build precedes the same version with one."""
        assert JavaVersion.parse("17.0.1") < JavaVersion.parse("17.0.1+1")
        assert JavaVersion.parse("17.0.1") == JavaVersion.parse("17.0.1+0")


class TestJavaVersionFields:
    """Java versions embedded in models accept and emit strings."""

    def test_model_field_from_string(self):
        """String input is parsed into a JavaVersion."""
        rule = MajorVersionRule(minimum="1.8.0_152-b16", blacklist=["11.0.12+7"])
        assert rule.minimum == JavaVersion.parse("8.0.152+16")
        assert rule.blacklist == [JavaVersion.parse("11.0.12+7")]

    def test_model_field_serializes_to_string(self):
        """Versions dump in the notation they were written in."""
        rule = MajorVersionRule(minimum="1.8.0_152-b16", maximum="11.0.12+7")
        data = json.loads(rule.model_dump_json())
        assert data["minimum"] == "1.8.0_152-b16"
        assert data["maximum"] == "11.0.12+7"
