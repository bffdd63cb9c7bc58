# preview_server/projections.py
"""Projection rules for the `/public` endpoints.

Every function here is pure: it takes the raw snapshot value(s) plus query
values and returns the response payload (or None for a failed id lookup).
Snapshots that are not JSON arrays are treated as empty, and records that are
not JSON objects never match a filter.
"""
import math
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional
from pydantic import TypeAdapter, ValidationError

from .config import Settings

ALLOWED_STATUSES = frozenset({"approved", "sold", "booked"})

_DATETIME = TypeAdapter(datetime)
_DATE = TypeAdapter(date)


def as_list(data) -> List[Any]:
    return list(data) if isinstance(data, list) else []


def as_number(value) -> Optional[float]:
    """Numeric value of an id-like field or query value, None if not finite."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str) and value.strip():
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def id_text(value) -> Optional[str]:
    """Render an id the way it appears in a URL segment (`1.0` -> `"1"`)."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def timestamp_key(value) -> float:
    """Epoch seconds for a `created_at` value; 0.0 when missing or unparseable.

    Numbers are epoch milliseconds, strings are ISO-8601 dates or datetimes;
    a numeric string is not a date.
    Naive datetimes are taken as UTC.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return value / 1000.0 if math.isfinite(value) else 0.0
    if not isinstance(value, str) or not value.strip():
        return 0.0
    text = value.strip()
    if as_number(text) is not None:
        # lax datetime parsing would read "1700000000" as unix time
        return 0.0
    try:
        moment = _DATETIME.validate_python(text)
    except ValidationError:
        try:
            day = _DATE.validate_python(text)
        except ValidationError:
            return 0.0
        moment = datetime(day.year, day.month, day.day)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.timestamp()


def newest_first(records: List[Any]) -> List[Any]:
    # sorted() is stable, so equal timestamps keep snapshot order
    return sorted(
        records,
        key=lambda r: timestamp_key(r.get("created_at")) if isinstance(r, dict) else 0.0,
        reverse=True,
    )


def is_visible(listing) -> bool:
    if not isinstance(listing, dict):
        return False
    return str(listing.get("status") or "").lower() in ALLOWED_STATUSES


def is_admin_owned(listing: Dict[str, Any]) -> bool:
    """True when a listing carries no seller id under either spelling.

    Platform-created listings are stored without a seller; this is a content
    convention of the seed data, not an identity or permission check.
    """
    return listing.get("seller_id") is None and listing.get("sellerId") is None


def visible_listings(listings) -> List[Dict[str, Any]]:
    return newest_first([l for l in as_list(listings) if is_visible(l)])


def list_listings(listings) -> Dict[str, List]:
    return {"listings": visible_listings(listings)}


def _tag_matches(tag, wanted: str) -> bool:
    if not isinstance(tag, dict):
        return False
    slug = str(tag.get("slug") or "").lower()
    name = str(tag.get("name") or "").lower()
    return wanted in (slug, name)


def _find_tag_id(tags, predicate) -> Optional[float]:
    for tag in as_list(tags):
        if predicate(tag):
            return as_number(tag.get("id"))
    return None


def resolve_tag_id(tags, tag_id: Optional[str], tag: Optional[str], settings: Settings) -> float:
    """Pick the tag id to filter on.

    Order: an explicit numeric `tag_id`, then a slug/name lookup of `tag`, then
    the configured fallback tag looked up by slug or name, then its fixed id.
    """
    resolved = as_number(tag_id)
    if resolved is not None:
        return resolved
    wanted = (tag or "").strip().lower()
    if wanted:
        resolved = _find_tag_id(tags, lambda t: _tag_matches(t, wanted))
        if resolved is not None:
            return resolved
    fallback_slug = settings.fallback_tag_slug.lower()
    fallback_name = settings.fallback_tag_name.lower()
    resolved = _find_tag_id(
        tags, lambda t: _tag_matches(t, fallback_slug) or _tag_matches(t, fallback_name)
    )
    if resolved is not None:
        return resolved
    return float(settings.fallback_tag_id)


def has_tag(listing: Dict[str, Any], tag_id: float, settings: Settings) -> bool:
    """Tag match by numeric id, or by carrying the fallback tag name.

    The name branch is unconditional: fallback-tagged listings show up for
    every tag query.
    """
    if any(as_number(x) == tag_id for x in as_list(listing.get("tag_ids"))):
        return True
    names = {str(n or "").lower() for n in as_list(listing.get("tags"))}
    return bool(names & settings.fallback_tag_names)


def listings_by_tag(listings, tag_id: float, admin_only: bool, settings: Settings) -> Dict[str, List]:
    out = []
    for listing in as_list(listings):
        if not is_visible(listing):
            continue
        if admin_only and not is_admin_owned(listing):
            continue
        if has_tag(listing, tag_id, settings):
            out.append(listing)
    return {"listings": newest_first(out)}


def find_listing(listings, listing_id: str) -> Optional[Dict[str, Any]]:
    for listing in as_list(listings):
        if is_visible(listing) and id_text(listing.get("id")) == listing_id:
            return listing
    return None


def limit_reviews(reviews, limit: Optional[str]) -> List[Any]:
    items = as_list(reviews)
    count = as_number(limit)
    if count is not None and count > 0:
        return items[:int(count)]
    return items


def list_blogs(blogs) -> Dict[str, List]:
    return {"blogs": newest_first(as_list(blogs))}


def find_blog(blogs, blog_id: str) -> Optional[Dict[str, Any]]:
    wanted = as_number(blog_id)
    if wanted is None:
        return None
    for blog in as_list(blogs):
        if isinstance(blog, dict) and as_number(blog.get("id")) == wanted:
            return blog
    return None


def list_categories(categories) -> Dict[str, List]:
    return {"categories": as_list(categories)}


def list_models(models) -> List[Any]:
    return as_list(models)


def list_tags(tags) -> List[Any]:
    return as_list(tags)
