"""
Tests for unitychangeset.versioning module.

Tests version parsing and ordering including:
- Release, beta and alpha parsing
- Canonical formatting
- Malformed and out-of-range input
- Total ordering and hashing
"""

from __future__ import annotations

import itertools

import pytest

from unitychangeset.exceptions import VersionFormatError, VersionRangeError
from unitychangeset.versioning import Channel, UnityVersion, coerce_version


class TestParse:
    """Tests for UnityVersion.parse."""

    def test_parse_release(self):
        """Test that a plain three-part version is a release with revision 1."""
        v = UnityVersion.parse("2020.3.34")
        assert (v.major, v.minor, v.patch) == (2020, 3, 34)
        assert v.channel is Channel.RELEASE
        assert v.revision == 1
        assert v.format() == "2020.3.34"

    def test_parse_beta(self):
        """Test beta suffix parsing."""
        v = UnityVersion.parse("2022.2.0b9")
        assert v.channel is Channel.BETA
        assert v.revision == 9
        assert v.patch == 0
        assert str(v) == "2022.2.0b9"

    def test_parse_alpha(self):
        """Test alpha suffix parsing."""
        v = UnityVersion.parse("2023.1.0a15")
        assert v.channel is Channel.ALPHA
        assert v.revision == 15
        assert str(v) == "2023.1.0a15"

    def test_parse_final_suffix_is_release(self):
        """Test that an 'f' suffix parses as a release."""
        v = UnityVersion.parse("2021.3.5f1")
        assert v == UnityVersion(2021, 3, 5)
        assert str(v) == "2021.3.5"

    def test_release_revision_folds_to_one(self):
        """Test that any 'f' revision names the same release."""
        v = UnityVersion.parse("2021.3.5f2")
        assert v.revision == 1
        assert v == UnityVersion(2021, 3, 5)
        assert UnityVersion.parse(str(v)) == v
        assert hash(v) == hash(UnityVersion.parse("2021.3.5"))

    def test_constructor_folds_release_revision(self):
        assert UnityVersion(2021, 3, 5, Channel.RELEASE, 7) == UnityVersion(2021, 3, 5)

    def test_extra_segments_ignored(self):
        """Test that segments after the patch are ignored."""
        assert UnityVersion.parse("2021.3.5.7") == UnityVersion(2021, 3, 5)

    def test_surrounding_whitespace_ignored(self):
        """Test that surrounding whitespace is stripped."""
        assert UnityVersion.parse("  2022.1.0\n") == UnityVersion(2022, 1, 0)

    @pytest.mark.parametrize("text", ["abc", "1.2", "", "   "])
    def test_too_few_segments_raises(self, text):
        """Test that text without three segments raises VersionFormatError."""
        with pytest.raises(VersionFormatError):
            UnityVersion.parse(text)

    @pytest.mark.parametrize(
        "text",
        ["x.1.2", "1.y.2", "1.2.3c4", "1.2.xyz", "1.2.3ab4", "1.2.b4", "1.2.3b", "1.2.3bx"],
    )
    def test_malformed_raises_format_error(self, text):
        """Test that non-numeric or badly lettered parts raise VersionFormatError."""
        with pytest.raises(VersionFormatError):
            UnityVersion.parse(text)

    @pytest.mark.parametrize("text", ["-1.2.3", "1.-2.3", "1.2.-3", "1.2.3b-1", "1.2.3b0"])
    def test_negative_or_zero_revision_raises_range_error(self, text):
        """Test that negative numbers and a zero revision raise VersionRangeError."""
        with pytest.raises(VersionRangeError):
            UnityVersion.parse(text)

    def test_errors_are_value_errors(self):
        """Test that parse errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            UnityVersion.parse("1.2")

    def test_constructor_rejects_negative(self):
        """Test that direct construction validates ranges too."""
        with pytest.raises(VersionRangeError):
            UnityVersion(1, -1, 0)
        with pytest.raises(VersionRangeError):
            UnityVersion(1, 0, 0, Channel.BETA, 0)


class TestRoundTrip:
    """Tests for format/parse round-trips."""

    @pytest.mark.parametrize(
        "version",
        [
            UnityVersion(2020, 3, 34),
            UnityVersion(2022, 2, 0, Channel.BETA, 9),
            UnityVersion(2023, 1, 0, Channel.ALPHA, 5),
            UnityVersion(0, 0, 0),
            UnityVersion.parse("2021.3.5f2"),
        ],
    )
    def test_parse_of_format_is_identity(self, version):
        """Test that parsing the canonical text gives back an equal version."""
        assert UnityVersion.parse(version.format()) == version


class TestOrdering:
    """Tests for comparison, equality and hashing."""

    def test_numeric_ordering(self):
        """Test major/minor/patch ordering."""
        assert UnityVersion.parse("2021.1.0") > UnityVersion.parse("2020.3.34")
        assert UnityVersion.parse("2020.10.0") > UnityVersion.parse("2020.9.0")
        assert UnityVersion.parse("2020.3.34") > UnityVersion.parse("2020.3.9")

    def test_channel_ranks_below_release(self):
        """Test that for equal numbers alpha < beta < release."""
        alpha = UnityVersion.parse("2022.2.0a20")
        beta = UnityVersion.parse("2022.2.0b1")
        release = UnityVersion.parse("2022.2.0")
        assert alpha < beta < release

    def test_revision_is_last_key(self):
        """Test that revision only decides within the same channel."""
        assert UnityVersion.parse("2022.2.0b10") > UnityVersion.parse("2022.2.0b9")
        assert UnityVersion.parse("2022.2.1a1") > UnityVersion.parse("2022.2.0b30")

    def test_compare_to(self):
        """Test compare_to returns -1, 0 and 1."""
        a = UnityVersion.parse("2022.1.0")
        b = UnityVersion.parse("2022.1.1")
        assert a.compare_to(b) == -1
        assert b.compare_to(a) == 1
        assert a.compare_to(UnityVersion(2022, 1, 0)) == 0

    def test_compare_to_rejects_other_types(self):
        """Test compare_to with a non-version raises TypeError."""
        with pytest.raises(TypeError):
            UnityVersion(1, 0, 0).compare_to("1.0.0")

    def test_total_order_properties(self):
        """Test antisymmetry, transitivity and consistency with equality."""
        versions = [
            UnityVersion.parse(t)
            for t in ["2020.3.34", "2022.2.0b9", "2022.2.0b8", "2022.2.0a1", "2022.2.0", "2023.1.0a5"]
        ]
        for a, b in itertools.product(versions, repeat=2):
            assert a.compare_to(b) == -b.compare_to(a)
            assert (a.compare_to(b) == 0) == (a == b)
        for a, b, c in itertools.product(versions, repeat=3):
            if a.compare_to(b) <= 0 and b.compare_to(c) <= 0:
                assert a.compare_to(c) <= 0

    def test_hash_matches_across_construction(self):
        """Test that parsed and constructed versions are the same dict key."""
        lookup = {UnityVersion(2022, 2, 0, Channel.BETA, 9): "found"}
        assert lookup[UnityVersion.parse("2022.2.0b9")] == "found"

    def test_sorted(self):
        """Test sorting a mixed list."""
        texts = ["2022.2.0", "2022.2.0a3", "2021.3.1", "2022.2.0b2"]
        ordered = [str(v) for v in sorted(UnityVersion.parse(t) for t in texts)]
        assert ordered == ["2021.3.1", "2022.2.0a3", "2022.2.0b2", "2022.2.0"]

    def test_version_tuple(self):
        """Test version_tuple drops channel information."""
        assert UnityVersion.parse("2022.2.0b9").version_tuple == (2022, 2, 0)


class TestCoerceVersion:
    """Tests for coerce_version."""

    def test_passes_through_version(self):
        v = UnityVersion(1, 2, 3)
        assert coerce_version(v) is v

    def test_parses_text(self):
        assert coerce_version("1.2.3b4") == UnityVersion(1, 2, 3, Channel.BETA, 4)

    def test_rejects_other_types(self):
        with pytest.raises(TypeError):
            coerce_version(None)
