import pytest

from apclient.metadata import (
    Restriction,
    TopTracks,
    countrylist_contains,
    parse_restrictions,
    select_top_tracks,
)
from apclient.spotify_id import SpotifyId


def test_countrylist_contains_found():
    assert countrylist_contains("SEDEUS", "DE") is True


def test_countrylist_contains_respects_chunk_boundaries():
    assert countrylist_contains("SEDEUS", "ED") is False


def test_countrylist_contains_empty():
    assert countrylist_contains("", "SE") is False


def test_countrylist_odd_length_raises():
    with pytest.raises(ValueError):
        countrylist_contains("SED", "XX")


def test_no_restrictions_is_unavailable():
    assert parse_restrictions([], "SE", "premium") is False


def test_allowed_country():
    rs = [Restriction(("premium",), countries_allowed="SEDE")]
    assert parse_restrictions(rs, "DE", "premium") is True
    assert parse_restrictions(rs, "US", "premium") is False


def test_forbidden_country():
    rs = [Restriction(("premium",), countries_forbidden="US")]
    assert parse_restrictions(rs, "US", "premium") is False
    assert parse_restrictions(rs, "SE", "premium") is True


def test_other_catalogue_ignored():
    rs = [Restriction(("free",), countries_allowed="SE")]
    assert parse_restrictions(rs, "SE", "premium") is False


def test_restrictions_are_combined():
    rs = [
        Restriction(("premium",), countries_allowed="SE"),
        Restriction(("premium", "free"), countries_allowed="DE", countries_forbidden="DE"),
    ]
    assert parse_restrictions(rs, "SE", "premium") is True
    assert parse_restrictions(rs, "DE", "premium") is False


def test_select_top_tracks_matching_country():
    a = bytes(range(16))
    b = bytes(range(16, 32))
    entries = [
        TopTracks("USGB", (a,)),
        TopTracks("SE", (b, None)),
        TopTracks(None, (a,)),
    ]
    assert select_top_tracks(entries, "SE") == [SpotifyId.from_raw(b)]


def test_select_top_tracks_falls_to_unrestricted():
    a = bytes(range(16))
    entries = [TopTracks("US", ()), TopTracks(None, (a, None))]
    assert select_top_tracks(entries, "SE") == [SpotifyId.from_raw(a)]


def test_select_top_tracks_none_match():
    entries = [TopTracks("US", (bytes(16),))]
    assert select_top_tracks(entries, "SE") == []