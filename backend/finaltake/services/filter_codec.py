"""
FinalTake — Filter Codec
Mirrors a FilterSelection into a shareable query string and back.

Query schema:
    genres=28,12&moods=Epic,Dark&rating=PG-13&year_from=2000&year_to=2020

Encoding omits empty lists and zero years. Decoding never fails: missing or
unparseable values fall back to the defaults, so "explicitly set to the
default" and "absent" are indistinguishable after a round trip.
"""

import re
from collections.abc import Mapping
from typing import Optional, Union
from urllib.parse import parse_qsl, urlencode

from finaltake.schemas import DEFAULT_YEAR_FROM, DEFAULT_YEAR_TO, FilterSelection

QUERY_KEYS = ("genres", "moods", "rating", "year_from", "year_to")

# Leading integer, the way a browser parseInt reads "2000abc" or "2010.5"
LEADING_INT = re.compile(r"^\s*[+-]?[0-9]+")

QueryInput = Union[Mapping, str, None]


def encode_filters(selection: FilterSelection) -> str:
    """Serialize a selection. Keys always appear in QUERY_KEYS order."""
    params = []
    if selection.genre_ids:
        params.append(("genres", ",".join(str(gid) for gid in selection.genre_ids)))
    if selection.moods:
        params.append(("moods", ",".join(selection.moods)))
    if selection.ratings:
        params.append(("rating", ",".join(selection.ratings)))
    if selection.year_from:
        params.append(("year_from", str(selection.year_from)))
    if selection.year_to:
        params.append(("year_to", str(selection.year_to)))
    return urlencode(params)


def decode_filters(params: QueryInput) -> FilterSelection:
    """
    Parse query params into a selection.

    Accepts a mapping (dict, Starlette QueryParams) or a raw query string.
    Genre segments that aren't integers are dropped; year_from <= year_to
    is not enforced here.
    """
    values = _as_mapping(params)
    return FilterSelection(
        genre_ids=_parse_genre_ids(values.get("genres")),
        moods=_split_list(values.get("moods")),
        ratings=_split_list(values.get("rating")),
        year_from=_parse_year(values.get("year_from"), DEFAULT_YEAR_FROM),
        year_to=_parse_year(values.get("year_to"), DEFAULT_YEAR_TO),
    )


def query_if_changed(current_query: Optional[str], selection: FilterSelection) -> Optional[str]:
    """
    Canonical query for `selection`, or None when `current_query` already matches.
    Lets callers skip redundant history updates.
    """
    encoded = encode_filters(selection)
    if encoded == canonical_query(current_query):
        return None
    return encoded


def canonical_query(query: Optional[str]) -> str:
    """Re-serialize a query string so "28,12" and "28%2C12" compare equal."""
    pairs = parse_qsl((query or "").lstrip("?"), keep_blank_values=True)
    return urlencode(pairs)


def _as_mapping(params: QueryInput) -> Mapping:
    if params is None:
        return {}
    if isinstance(params, str):
        pairs = parse_qsl(params.lstrip("?"), keep_blank_values=True)
    elif hasattr(params, "multi_items"):
        pairs = params.multi_items()
    else:
        return params

    # First occurrence of a repeated key wins, for strings and multi-dicts alike
    values: dict[str, str] = {}
    for key, value in pairs:
        values.setdefault(key, value)
    return values


def _split_list(raw: Optional[str]) -> tuple[str, ...]:
    if not raw:
        return ()
    return tuple(segment for segment in raw.split(",") if segment)


def _parse_genre_ids(raw: Optional[str]) -> tuple[int, ...]:
    ids = []
    for segment in _split_list(raw):
        try:
            ids.append(int(segment))
        except ValueError:
            continue
    return tuple(ids)


def _parse_year(raw: Optional[str], default: int) -> int:
    match = LEADING_INT.match(raw) if isinstance(raw, str) else None
    if not match:
        return default
    year = int(match.group())
    # 0 is never encoded, so it reads back as "unset"
    return year or default
