"""Availability rules and top-track selection for catalogue metadata."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from .spotify_id import SpotifyId
from .util import str_chunks

TRACK_BASE_URL = "hm://metadata/3/track"
ALBUM_BASE_URL = "hm://metadata/3/album"
ARTIST_BASE_URL = "hm://metadata/3/artist"


@dataclass(frozen=True)
class Restriction:
    """Country rules that apply to the listed catalogues.

    ``countries_forbidden`` and ``countries_allowed`` are runs of two-letter
    country codes; ``None`` means the rule is absent.
    """

    catalogue_str: Sequence[str] = field(default_factory=tuple)
    countries_forbidden: str | None = None
    countries_allowed: str | None = None


@dataclass(frozen=True)
class TopTracks:
    """An artist's top tracks for a run of countries (``None`` for any country).

    ``tracks`` holds the raw 16-byte ids; ``None`` stands for a track without one.
    """

    country: str | None = None
    tracks: Sequence[bytes | None] = field(default_factory=tuple)


def countrylist_contains(countries: str, country: str) -> bool:
    """Whether ``country`` is one of the two-letter codes in ``countries``."""
    return any(code == country for code in str_chunks(countries, 2))


def parse_restrictions(
    restrictions: Iterable[Restriction], country: str, catalogue: str
) -> bool:
    """Whether the restrictions for ``catalogue`` make content available in ``country``."""
    forbidden = ""
    has_forbidden = False
    allowed = ""
    has_allowed = False

    for restriction in restrictions:
        if catalogue not in restriction.catalogue_str:
            continue
        if restriction.countries_forbidden is not None:
            forbidden += restriction.countries_forbidden
            has_forbidden = True
        if restriction.countries_allowed is not None:
            allowed += restriction.countries_allowed
            has_allowed = True

    return (
        (has_forbidden or has_allowed)
        and (not has_forbidden or not countrylist_contains(forbidden, country))
        and (not has_allowed or countrylist_contains(allowed, country))
    )


def select_top_tracks(top_tracks: Iterable[TopTracks], country: str) -> list[SpotifyId]:
    """The track ids of the first entry that applies to ``country``."""
    for entry in top_tracks:
        if entry.country is None or countrylist_contains(entry.country, country):
            return [SpotifyId.from_raw(gid) for gid in entry.tracks if gid is not None]
    return []